"""Dashboard state helpers — kept free of Streamlit calls so they can be tested.

``ui_state`` is any mutable mapping; the page passes ``st.session_state``.
Keys used:
  aid_session       the browser session's Session
  aid_future        Future of the run in flight, or None
  aid_welcome_open  whether the onboarding dialog is showing
"""

from concurrent.futures import ThreadPoolExecutor

from aid.config import get_config
from aid.session import Session


def create_run_executor() -> ThreadPoolExecutor:
    """Worker pool shared by every browser session; one run per session at a time."""
    workers = int(get_config().get("run_workers", 4))
    return ThreadPoolExecutor(max_workers=max(1, workers), thread_name_prefix="aid-run")


def init_ui_state(ui_state, session: Session) -> None:
    ui_state["aid_session"] = session
    ui_state["aid_future"] = None
    ui_state["aid_welcome_open"] = session.should_show_welcome()


def close_welcome(ui_state, show_explanation: bool) -> None:
    """Dismiss the onboarding dialog, whichever way it was closed."""
    ui_state["aid_session"].dismiss_welcome(show_explanation=show_explanation)
    ui_state["aid_welcome_open"] = False


def panel_layout(state, total_height: int | None = None) -> dict:
    """Editor/output sizes for the current layout and editor share.

    Stacked: the editor takes ``editor_share`` percent of ``total_height``.
    Side by side: both panes are full height and the share sets the column ratio.
    """
    if total_height is None:
        total_height = int(get_config().get("panel_height_px", 720))
    share = state["editor_share"]

    if state["output_position"] == "right":
        return {
            "columns": [share, 100 - share],
            "editor_height": total_height,
            "output_height": total_height,
        }
    editor_height = round(total_height * share / 100)
    return {
        "columns": None,
        "editor_height": editor_height,
        "output_height": total_height - editor_height,
    }
