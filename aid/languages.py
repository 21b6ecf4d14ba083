"""Supported editor languages and their starter templates."""

from typing import Literal

Language = Literal["python", "cpp", "c", "java", "r"]

# Display order matches the language picker.
LANGUAGES: dict[str, dict[str, str]] = {
    "python": {
        "name": "Python",
        "extension": "py",
        "template": '# Write your Python code here\nprint("Hello World!")',
    },
    "cpp": {
        "name": "C++",
        "extension": "cpp",
        "template": (
            "// Write your C++ code here\n"
            "#include <iostream>\n"
            "int main() {\n"
            '    std::cout << "Hello World!" << std::endl;\n'
            "    return 0;\n"
            "}"
        ),
    },
    "c": {
        "name": "C",
        "extension": "c",
        "template": (
            "// Write your C code here\n"
            "#include <stdio.h>\n"
            "int main() {\n"
            '    printf("Hello World!\\n");\n'
            "    return 0;\n"
            "}"
        ),
    },
    "java": {
        "name": "Java",
        "extension": "java",
        "template": (
            "// Write your Java code here\n"
            "public class Main {\n"
            "    public static void main(String[] args) {\n"
            '        System.out.println("Hello World!");\n'
            "    }\n"
            "}"
        ),
    },
    "r": {
        "name": "R",
        "extension": "r",
        "template": '# Write your R code here\nprint("Hello World!")',
    },
}

# Ace editor modes differ from our ids for two languages.
_ACE_MODES = {"cpp": "c_cpp", "c": "c_cpp"}


def validate_language(language: str) -> str:
    """Return the language id, or raise ValueError if it is not supported."""
    if language not in LANGUAGES:
        raise ValueError(
            f"Unknown language '{language}'. Must be one of: {list(LANGUAGES)}"
        )
    return language


def default_template(language: str) -> str:
    return LANGUAGES[validate_language(language)]["template"]


def display_name(language: str) -> str:
    return LANGUAGES[validate_language(language)]["name"]


def download_filename(language: str) -> str:
    """Filename offered when the user downloads the current draft."""
    return f"code.{LANGUAGES[validate_language(language)]['extension']}"


def editor_mode(language: str) -> str:
    return _ACE_MODES.get(validate_language(language), language)
