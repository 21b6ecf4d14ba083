"""Run Orchestrator — brackets one analysis workflow with session state transitions."""

import sys
from concurrent.futures import Executor, Future

from aid.graph import produce_output
from aid.session import Session


def _safe_output(code: str, llm=None) -> str:
    """produce_output, with any unexpected workflow fault rendered as error text."""
    try:
        return produce_output(code, llm=llm)
    except Exception as exc:
        print(f"[AID] Run workflow failed: {exc!r}", file=sys.stderr)
        return f"Error: {exc}"


def run(session: Session, llm=None) -> bool:
    """Critique the session's current draft synchronously.

    Returns False without doing anything when a run is already in flight.
    The session is always back to idle when this returns True.
    """
    if not session.begin_run():
        return False
    output = "Error: run did not complete."
    try:
        output = _safe_output(session.state["code"], llm=llm)
    finally:
        session.complete_run(output)
    return True


def submit_run(session: Session, executor: Executor, llm=None) -> Future | None:
    """Begin a run and hand the workflow to ``executor``.

    Returns None when a run is already in flight. The caller applies the
    result with ``collect_run`` from the thread that owns the session.
    """
    if not session.begin_run():
        return None
    try:
        return executor.submit(_safe_output, session.state["code"], llm)
    except Exception as exc:
        session.complete_run(f"Error: {exc}")
        raise


def collect_run(session: Session, future: Future | None) -> bool:
    """Finish a submitted run if its result is ready. Returns True once applied."""
    if future is None or not future.done():
        return False
    try:
        output = future.result()
    except Exception as exc:
        output = f"Error: {exc}"
    session.complete_run(output)
    return True
