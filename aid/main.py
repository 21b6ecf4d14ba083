"""Entry point: critiques a source file (or stdin) from the terminal."""

import sys
from pathlib import Path

from aid.config import get_api_key, get_config
from aid.graph import produce_output
from aid.languages import LANGUAGES, display_name, validate_language

_EXTENSION_TO_LANGUAGE = {entry["extension"]: lang for lang, entry in LANGUAGES.items()}


def _guess_language(path: Path) -> str:
    """Pick a language from the file extension, falling back to the configured default."""
    language = _EXTENSION_TO_LANGUAGE.get(path.suffix.lstrip(".").lower())
    return language or get_config().get("default_language", "python")


def critique(code: str, language: str) -> str:
    """Run one analysis workflow and return the output pane text."""
    validate_language(language)
    print(f"[AID] Analyzing {display_name(language)} code ({len(code)} chars)...", file=sys.stderr)
    if not get_api_key():
        print("[AID] Warning: no API key configured; the run will report it.", file=sys.stderr)
    return produce_output(code)


def main() -> None:
    """CLI entry point — accepts a file path argument or reads code from stdin."""
    args = sys.argv[1:]
    language = None

    if "--language" in args:
        idx = args.index("--language")
        try:
            language = args[idx + 1]
        except IndexError:
            print("--language requires a value.", file=sys.stderr)
            sys.exit(2)
        del args[idx:idx + 2]

    if args:
        path = Path(args[0])
        code = path.read_text(encoding="utf-8")
        language = language or _guess_language(path)
    else:
        print("Paste your code (Ctrl+D / Ctrl+Z to submit):", file=sys.stderr)
        code = sys.stdin.read()
        language = language or get_config().get("default_language", "python")

    try:
        validate_language(language)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(2)

    output = critique(code, language)
    print(output)
    if output.startswith("Error: "):
        sys.exit(1)


if __name__ == "__main__":
    main()
