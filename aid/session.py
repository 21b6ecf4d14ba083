"""Session state machine — language selection, drafts, output and run gating.

States: idle, running. A run may only begin from idle; a language switch is
only allowed from idle; edits are accepted in either state.
"""

from aid.config import get_config
from aid.languages import download_filename, validate_language
from aid.state import SessionState
from aid.storage import DebouncedSaver, DraftStore

RUNNING_PLACEHOLDER = "Running code..."
OUTPUT_POSITIONS = {"bottom", "right"}
EDITOR_SHARE_MIN = 30
EDITOR_SHARE_MAX = 70

WELCOME_TEXT = """\
Welcome to the Online Code Editor! Here's what you can do:

1. Choose Programming Language:
   - Select from Python, C++, C, Java, or R
   - Each language comes with a starter template

2. Code Editor Features:
   - Syntax highlighting
   - Auto-completion
   - Line numbers
   - Dark/Light theme toggle

3. Layout Options:
   - Toggle between vertical and horizontal split views
   - Resize editor and output panels

4. Code Analysis:
   - Run code to get AI-powered analysis
   - Get suggestions for improvements
   - Identify potential issues

5. Additional Tools:
   - Download your code
   - Copy output results
   - Auto-save feature

Start coding now and explore all these features!"""


class SessionBusyError(RuntimeError):
    """Raised when an operation that requires an idle session is attempted mid-run."""


class Session:
    """Owns one SessionState together with the draft store it persists to."""

    def __init__(self, store: DraftStore, saver: DebouncedSaver | None = None, language: str | None = None) -> None:
        config = get_config()
        self.store = store
        self.saver = saver or DebouncedSaver(
            store, interval=config.get("autosave_interval_seconds", 1.0)
        )
        language = validate_language(language or config.get("default_language", "python"))
        self.state: SessionState = {
            "language": language,
            "code": store.load(language),
            "output": "",
            "status": "idle",
            "dark_mode": bool(config.get("default_dark_mode", True)),
            "output_position": config.get("default_output_position", "bottom"),
            "editor_share": int(config.get("default_editor_share", 60)),
        }

    @property
    def is_running(self) -> bool:
        return self.state["status"] == "running"

    # --- Drafts ---

    def select_language(self, language: str) -> None:
        """Persist the outgoing draft, then load the draft for ``language``."""
        validate_language(language)
        if self.is_running:
            raise SessionBusyError("Cannot switch language while code is running.")
        if language == self.state["language"]:
            return

        self.saver.flush()
        self.store.save(self.state["language"], self.state["code"])
        self.state["language"] = language
        self.state["code"] = self.store.load(language)
        self.state["output"] = ""

    def edit(self, text: str) -> None:
        """Update the active draft and schedule a debounced save."""
        if text == self.state["code"]:
            return
        self.state["code"] = text
        self.saver.schedule(self.state["language"], text)

    def download_filename(self) -> str:
        return download_filename(self.state["language"])

    # --- Runs ---

    def begin_run(self) -> bool:
        """Enter the running state. Returns False (and changes nothing) if already running."""
        if self.is_running:
            return False
        self.state["status"] = "running"
        self.state["output"] = RUNNING_PLACEHOLDER
        return True

    def complete_run(self, output: str) -> None:
        self.state["output"] = output
        self.state["status"] = "idle"

    # --- Preferences ---

    def toggle_theme(self) -> None:
        self.state["dark_mode"] = not self.state["dark_mode"]

    def set_output_position(self, position: str | None) -> None:
        """Place the output pane below or beside the editor. Empty selections are ignored."""
        if not position:
            return
        if position not in OUTPUT_POSITIONS:
            raise ValueError(
                f"Invalid output position '{position}'. Must be one of: {OUTPUT_POSITIONS}"
            )
        self.state["output_position"] = position

    def set_editor_share(self, share: int | None) -> None:
        """Resize the split between editor and output. Empty selections are ignored."""
        if share is None:
            return
        if isinstance(share, bool) or not isinstance(share, int) or not (
            EDITOR_SHARE_MIN <= share <= EDITOR_SHARE_MAX
        ):
            raise ValueError(
                f"Invalid editor size '{share}'. Must be between "
                f"{EDITOR_SHARE_MIN} and {EDITOR_SHARE_MAX} percent."
            )
        self.state["editor_share"] = share

    # --- Onboarding ---

    def should_show_welcome(self) -> bool:
        return self.store.is_first_visit()

    def dismiss_welcome(self, show_explanation: bool) -> None:
        """Close the onboarding dialog for good, optionally explaining the features."""
        self.state["output"] = ""
        self.store.set_first_visit(False)
        if show_explanation:
            self.state["output"] = WELCOME_TEXT

    def close(self) -> None:
        """Write any pending draft."""
        self.saver.flush()
