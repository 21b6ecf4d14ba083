"""Session and run state — the single owned containers passed through the app."""

from typing import Literal, TypedDict

Status = Literal["idle", "running"]
OutputPosition = Literal["bottom", "right"]


class SessionState(TypedDict):
    language: str  # Selected language id.
    code: str  # Active draft for the selected language.
    output: str  # Output pane contents.
    status: Status  # "running" while an analysis chain is in flight.
    dark_mode: bool
    output_position: OutputPosition  # "bottom" = stacked, "right" = side-by-side.
    editor_share: int  # Percent of the split given to the editor, 30-70.


class RunState(TypedDict, total=False):
    code: str  # Draft being critiqued. Immutable during a run.
    result: dict  # AnalysisResult of the first (plain critique) call.
    explanation: dict  # AnalysisResult of the targeted follow-up call, on failure.
    output: str  # Final text for the output pane.
