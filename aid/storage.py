"""Draft store — per-language source text persisted to a local JSON file.

Keys mirror the browser's localStorage layout: ``code_{language}`` holds the
last saved draft for a language and ``isFirstVisit`` suppresses the
onboarding dialog once it has been dismissed.
"""

import json
import sys
import threading
from pathlib import Path

from aid.languages import default_template, validate_language

FIRST_VISIT_KEY = "isFirstVisit"


def draft_key(language: str) -> str:
    return f"code_{validate_language(language)}"


class DraftStore:
    """Key-value store backed by a single JSON file. Last write wins."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            print(
                f"[AID] Warning: draft file {self.path} is unreadable ({exc}). "
                f"Starting from an empty store.",
                file=sys.stderr,
            )
            return {}
        if not isinstance(data, dict):
            print(
                f"[AID] Warning: draft file {self.path} is not a JSON object. "
                f"Starting from an empty store.",
                file=sys.stderr,
            )
            return {}
        return data

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)

    def get(self, key: str):
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def load(self, language: str) -> str:
        """Return the saved draft for a language, or its starter template."""
        saved = self.get(draft_key(language))
        if isinstance(saved, str) and saved:
            return saved
        return default_template(language)

    def save(self, language: str, text: str) -> None:
        self.set(draft_key(language), text)

    def is_first_visit(self) -> bool:
        return self.get(FIRST_VISIT_KEY) is not False

    def set_first_visit(self, first_visit: bool) -> None:
        self.set(FIRST_VISIT_KEY, bool(first_visit))


class DebouncedSaver:
    """Coalesce bursts of edits into one write after a quiet interval.

    Every ``schedule`` call restarts the timer; only the last pending draft
    is written once edits pause for ``interval`` seconds.
    """

    def __init__(self, store: DraftStore, interval: float = 1.0, timer_factory=threading.Timer) -> None:
        self.store = store
        self.interval = interval
        self._timer_factory = timer_factory
        self._timer = None
        self._pending: tuple[str, str] | None = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> tuple[str, str] | None:
        return self._pending

    def schedule(self, language: str, text: str) -> None:
        validate_language(language)
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            # A pending draft for another language must not be dropped.
            if self._pending is not None and self._pending[0] != language:
                self.store.save(*self._pending)
            self._pending = (language, text)
            self._timer = self._timer_factory(self.interval, self._commit)
            self._timer.daemon = True
            self._timer.start()

    def _commit(self) -> None:
        # The write stays under the lock so a newer draft can't be overwritten by this one.
        with self._lock:
            pending, self._pending = self._pending, None
            self._timer = None
            if pending is not None:
                self.store.save(*pending)

    def flush(self) -> None:
        """Write any pending draft now."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
        self._commit()

    def cancel(self) -> None:
        """Drop the pending draft without writing it."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None
