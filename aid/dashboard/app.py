"""Online Code Editor — Streamlit UI for AI-powered code critiques."""

import sys
from pathlib import Path

# Add project root to path so 'aid' package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

import streamlit as st
from streamlit_ace import st_ace

from aid.config import get_api_key, get_config, resolve_storage_path
from aid.dashboard.ui_state import close_welcome, create_run_executor, init_ui_state, panel_layout
from aid.languages import LANGUAGES, display_name, editor_mode
from aid.runner import collect_run, submit_run
from aid.session import EDITOR_SHARE_MAX, EDITOR_SHARE_MIN, Session
from aid.storage import DebouncedSaver, DraftStore

st.set_page_config(page_title="Online Code Editor", layout="wide")

# ---------------------------------------------------------------------------
# Session bootstrap — one Session per browser session, one shared run pool
# ---------------------------------------------------------------------------


def _get_session() -> Session:
    """Return this browser session's Session, creating it on first use."""
    if "aid_session" not in st.session_state:
        store = DraftStore(resolve_storage_path())
        saver = DebouncedSaver(store, interval=get_config().get("autosave_interval_seconds", 1.0))
        init_ui_state(st.session_state, Session(store, saver))
    return st.session_state["aid_session"]


run_executor = st.cache_resource(create_run_executor)

session = _get_session()


# ---------------------------------------------------------------------------
# Helper renderers
# ---------------------------------------------------------------------------


def _theme_css(dark_mode: bool) -> str:
    """Page colors for the dark/light preference."""
    if dark_mode:
        background, paper, text = "#1a1a1a", "#2d2d2d", "#f5f5f5"
    else:
        background, paper, text = "#ffffff", "#f5f5f5", "#1a1a1a"
    return f"""
<style>
    .stApp {{
        background-color: {background};
        color: {text};
    }}
    div[data-testid="stCode"] pre {{
        background-color: {paper};
        min-height: 12rem;
    }}
</style>
"""


def _on_welcome_dismissed() -> None:
    close_welcome(st.session_state, show_explanation=False)


@st.dialog("Welcome to Online Code Editor", on_dismiss=_on_welcome_dismissed)
def _welcome_dialog() -> None:
    st.write(
        "Are you new to this platform? Would you like to see an explanation of its features?"
    )
    no_col, yes_col = st.columns(2)
    if no_col.button("No, I'm Familiar", use_container_width=True):
        close_welcome(st.session_state, show_explanation=False)
        st.rerun()
    if yes_col.button("Yes, Show Me", type="primary", use_container_width=True):
        close_welcome(st.session_state, show_explanation=True)
        st.rerun()


def _render_toolbar(session: Session) -> None:
    """Title, language picker, theme toggle, layout switch and panel size."""
    state = session.state
    title_col, lang_col, theme_col, layout_col, size_col = st.columns([3, 2, 1, 2, 2])

    title_col.title("Online Code Editor")

    languages = list(LANGUAGES)
    selected = lang_col.selectbox(
        "Language",
        languages,
        index=languages.index(state["language"]),
        format_func=display_name,
        disabled=session.is_running,
    )
    if selected != state["language"]:
        session.select_language(selected)
        st.rerun()

    dark_mode = theme_col.toggle("Dark mode", value=state["dark_mode"])
    if dark_mode != state["dark_mode"]:
        session.toggle_theme()
        st.rerun()

    position = layout_col.radio(
        "Output panel",
        ["bottom", "right"],
        index=0 if state["output_position"] == "bottom" else 1,
        format_func=lambda p: "Stacked" if p == "bottom" else "Side by side",
        horizontal=True,
    )
    if position != state["output_position"]:
        session.set_output_position(position)
        st.rerun()

    share = size_col.slider(
        "Editor size (%)",
        min_value=EDITOR_SHARE_MIN,
        max_value=EDITOR_SHARE_MAX,
        value=state["editor_share"],
        step=5,
    )
    if share != state["editor_share"]:
        session.set_editor_share(share)
        st.rerun()


def _render_actions(session: Session) -> None:
    """Run and download buttons."""
    run_col, download_col, _ = st.columns([1, 1, 4])

    running = session.is_running
    if run_col.button(
        "Running..." if running else "Run Code",
        type="primary",
        disabled=running,
        use_container_width=True,
    ):
        future = submit_run(session, run_executor())
        if future is not None:
            st.session_state["aid_future"] = future
        st.rerun()

    download_col.download_button(
        label="Download Code",
        data=session.state["code"],
        file_name=session.download_filename(),
        mime="text/plain",
        use_container_width=True,
    )


def _render_editor(session: Session, height: int) -> None:
    state = session.state
    edited = st_ace(
        value=state["code"],
        language=editor_mode(state["language"]),
        theme="monokai" if state["dark_mode"] else "chrome",
        font_size=14,
        tab_size=4,
        show_gutter=True,
        wrap=True,
        auto_update=True,
        height=height,
        key=f"ace_{state['language']}",
    )
    if edited is not None:
        session.edit(edited)


def _render_output(session: Session) -> None:
    """Output pane; st.code provides the copy-to-clipboard button."""
    if collect_run(session, st.session_state.get("aid_future")):
        st.session_state["aid_future"] = None
        st.rerun()

    st.subheader("Output")
    output = session.state["output"]
    if output:
        st.code(output, language=None, wrap_lines=True)
    else:
        st.caption("Click **Run Code** to get an AI review of your code.")


# ---------------------------------------------------------------------------
# Page logic — driven by session state
# ---------------------------------------------------------------------------

st.markdown(_theme_css(session.state["dark_mode"]), unsafe_allow_html=True)

with st.sidebar:
    st.caption(f"Model: `{get_config().get('model', 'gemini-1.5-pro')}`")
    if get_api_key():
        st.success("API key configured.")
    else:
        st.error("API key missing. Add it to your .env file to enable Run.")

if st.session_state.get("aid_welcome_open"):
    _welcome_dialog()

_render_toolbar(session)
_render_actions(session)

# Poll the worker while a run is in flight; other widgets stay interactive.
if session.is_running:
    output_pane = st.fragment(run_every=0.5)(_render_output)
else:
    output_pane = _render_output

layout = panel_layout(session.state)
if layout["columns"]:
    editor_col, output_col = st.columns(layout["columns"])
    with editor_col:
        _render_editor(session, layout["editor_height"])
    with output_col:
        output_pane(session)
else:
    _render_editor(session, layout["editor_height"])
    with st.container(height=layout["output_height"], border=False):
        output_pane(session)
