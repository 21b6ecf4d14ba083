"""Tests for the Session state machine, preferences and onboarding flow."""

import pytest

from aid.languages import default_template
from aid.session import RUNNING_PLACEHOLDER, WELCOME_TEXT, Session, SessionBusyError


@pytest.fixture
def session(mock_config, store, saver):
    return Session(store, saver)


# ---------------------------------------------------------------------------
# Initial state
# ---------------------------------------------------------------------------


class TestInitialState:
    def test_defaults_from_config(self, session):
        assert session.state == {
            "language": "python",
            "code": default_template("python"),
            "output": "",
            "status": "idle",
            "dark_mode": True,
            "output_position": "bottom",
            "editor_share": 60,
        }

    def test_seeded_from_saved_draft(self, mock_config, store, saver):
        store.save("java", "class Saved {}")
        session = Session(store, saver, language="java")
        assert session.state["code"] == "class Saved {}"

    def test_unknown_language_raises(self, mock_config, store, saver):
        with pytest.raises(ValueError):
            Session(store, saver, language="cobol")

    def test_builds_its_own_saver(self, mock_config, store):
        session = Session(store)
        assert session.saver.store is store
        assert session.saver.interval == 1.0


# ---------------------------------------------------------------------------
# Drafts and language switching
# ---------------------------------------------------------------------------


class TestDrafts:
    def test_edit_updates_memory_and_schedules_save(self, session, store, saver, timers):
        session.edit("print('hi')")
        assert session.state["code"] == "print('hi')"
        assert saver.pending == ("python", "print('hi')")
        assert store.load("python") == default_template("python")

        timers[-1].fire()
        assert store.load("python") == "print('hi')"

    def test_unchanged_edit_schedules_nothing(self, session, timers):
        session.edit(session.state["code"])
        assert timers == []

    def test_switch_and_back_preserves_edits(self, session):
        session.edit("edited python")
        session.select_language("cpp")
        assert session.state["code"] == default_template("cpp")

        session.select_language("python")
        assert session.state["code"] == "edited python"

    def test_switch_persists_outgoing_draft_before_timer(self, session, store, timers):
        session.edit("unsaved")
        session.select_language("r")
        assert store.load("python") == "unsaved"
        assert timers[0].cancelled

    def test_switch_clears_output(self, session):
        session.state["output"] = "old critique"
        session.select_language("java")
        assert session.state["output"] == ""
        assert session.state["language"] == "java"
        assert session.state["status"] == "idle"

    def test_selecting_active_language_is_noop(self, session):
        session.state["output"] = "keep me"
        session.select_language("python")
        assert session.state["output"] == "keep me"

    def test_switch_while_running_raises(self, session):
        session.begin_run()
        with pytest.raises(SessionBusyError):
            session.select_language("c")
        assert session.state["language"] == "python"

    def test_unknown_language_raises(self, session):
        with pytest.raises(ValueError):
            session.select_language("cobol")

    def test_edit_allowed_while_running(self, session):
        session.begin_run()
        session.edit("typing during a run")
        assert session.state["code"] == "typing during a run"
        assert session.state["status"] == "running"

    def test_close_flushes_pending_draft(self, session, store):
        session.edit("last words")
        session.close()
        assert store.load("python") == "last words"

    def test_download_filename_follows_language(self, session):
        assert session.download_filename() == "code.py"
        session.select_language("java")
        assert session.download_filename() == "code.java"


# ---------------------------------------------------------------------------
# Run transitions
# ---------------------------------------------------------------------------


class TestRunTransitions:
    def test_begin_run_from_idle(self, session):
        assert session.begin_run() is True
        assert session.state["status"] == "running"
        assert session.state["output"] == RUNNING_PLACEHOLDER
        assert session.is_running

    def test_begin_run_while_running_is_rejected(self, session):
        session.begin_run()
        session.state["output"] = "partial"
        assert session.begin_run() is False
        assert session.state["status"] == "running"
        assert session.state["output"] == "partial"

    def test_complete_run_returns_to_idle(self, session):
        session.begin_run()
        session.complete_run("No issues found.")
        assert session.state["status"] == "idle"
        assert session.state["output"] == "No issues found."


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------


class TestPreferences:
    def test_toggle_theme(self, session):
        session.toggle_theme()
        assert session.state["dark_mode"] is False
        session.toggle_theme()
        assert session.state["dark_mode"] is True

    def test_set_output_position(self, session):
        session.set_output_position("right")
        assert session.state["output_position"] == "right"

    def test_empty_output_position_is_ignored(self, session):
        session.set_output_position(None)
        assert session.state["output_position"] == "bottom"

    def test_invalid_output_position_raises(self, session):
        with pytest.raises(ValueError):
            session.set_output_position("left")

    @pytest.mark.parametrize("share", [30, 45, 70])
    def test_set_editor_share(self, session, share):
        session.set_editor_share(share)
        assert session.state["editor_share"] == share

    def test_empty_editor_share_is_ignored(self, session):
        session.set_editor_share(None)
        assert session.state["editor_share"] == 60

    @pytest.mark.parametrize("share", [29, 71, 0, 100, "50", True])
    def test_editor_share_outside_bounds_raises(self, session, share):
        with pytest.raises(ValueError):
            session.set_editor_share(share)
        assert session.state["editor_share"] == 60

    def test_editor_share_survives_layout_switch(self, session):
        session.set_editor_share(35)
        session.set_output_position("right")
        assert session.state["editor_share"] == 35


# ---------------------------------------------------------------------------
# Onboarding dialog
# ---------------------------------------------------------------------------


class TestWelcome:
    def test_shown_on_first_visit(self, session):
        assert session.should_show_welcome() is True

    def test_dismiss_with_explanation(self, session, store):
        session.dismiss_welcome(show_explanation=True)
        assert session.state["output"] == WELCOME_TEXT
        assert "5. Additional Tools:" in session.state["output"]
        assert store.is_first_visit() is False

    def test_dismiss_without_explanation_clears_output(self, session, store):
        session.state["output"] = "stale"
        session.dismiss_welcome(show_explanation=False)
        assert session.state["output"] == ""
        assert store.is_first_visit() is False

    def test_not_shown_after_reload(self, session, mock_config, store, saver):
        session.dismiss_welcome(show_explanation=True)
        reloaded = Session(store, saver)
        assert reloaded.should_show_welcome() is False
