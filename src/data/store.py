"""
Finalissima Goal Tracker — State Store.

The Memory pillar: the checklist, notes and reminder log persist as plain
files in DATA_DIR, surviving bot restarts and shared by the poller and the
webhook host.

    checklist.json   {"visa": false, "flight": false, "ticket": false, "savedBudget": 0}
    notes.json       ["pack passport", ...]
    log.txt          "\\n[2026-01-09 09:00] <reminder text>" per entry

Reads are forgiving: a missing file is created with defaults, a corrupt file
is left untouched on disk and the defaults are used in memory.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from src.data.models import CHECKLIST_ITEMS, Checklist

logger = logging.getLogger(__name__)

CHECKLIST_FILE = "checklist.json"
NOTES_FILE = "notes.json"
LOG_FILE = "log.txt"

_LOG_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


class LogNotFoundError(FileNotFoundError):
    """Raised when the reminder log has never been written."""


class StateStore:
    """File-backed storage for the checklist, notes and reminder log."""

    def __init__(self, data_dir: str | Path | None = None) -> None:
        if data_dir is None:
            from src.config import settings
            data_dir = settings.DATA_DIR

        self._data_dir = Path(data_dir)
        self.checklist_path = self._data_dir / CHECKLIST_FILE
        self.notes_path = self._data_dir / NOTES_FILE
        self.log_path = self._data_dir / LOG_FILE

    # -- JSON helpers -------------------------------------------------------

    def _read_json(self, path: Path, default: dict | list) -> dict | list | None:
        """Return parsed JSON, writing `default` first if the file is missing.

        Returns None when the file exists but can't be parsed.
        """
        if not path.exists():
            self._write_json(path, default)
            logger.info("Initialized %s with defaults", path.name)
            return default

        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to read or parse %s, using defaults: %s", path, exc)
            return None

    def _write_json(self, path: Path, data: dict | list) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    # -- Checklist ----------------------------------------------------------

    def load_checklist(self) -> Checklist:
        data = self._read_json(self.checklist_path, Checklist().to_dict())
        if data is None:
            return Checklist()
        try:
            return Checklist.from_dict(data)
        except ValueError as exc:
            logger.warning("Malformed checklist in %s, using defaults: %s", self.checklist_path, exc)
            return Checklist()

    def save_checklist(self, checklist: Checklist) -> None:
        """Overwrite the persisted checklist with `checklist`."""
        self._write_json(self.checklist_path, checklist.to_dict())

    # -- Notes --------------------------------------------------------------

    def load_notes(self) -> list[str]:
        data = self._read_json(self.notes_path, [])
        if data is None:
            return []
        if not isinstance(data, list) or not all(isinstance(n, str) for n in data):
            logger.warning("Malformed notes in %s, using defaults", self.notes_path)
            return []
        return list(data)

    def save_notes(self, notes: list[str]) -> None:
        self._write_json(self.notes_path, list(notes))

    # -- Log ----------------------------------------------------------------

    def append_log_entry(self, text: str, now: datetime | None = None) -> None:
        """Append one timestamped entry to the log, creating it if absent."""
        if now is None:
            now = datetime.now()
        entry = f"\n[{now.strftime(_LOG_TIMESTAMP_FORMAT)}] {text}"
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with self.log_path.open("a", encoding="utf-8") as fh:
            fh.write(entry)

    def read_last_log_lines(self, n: int) -> list[str]:
        """Return the last `n` log lines in chronological order.

        Raises LogNotFoundError if the log file doesn't exist.
        """
        try:
            content = self.log_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise LogNotFoundError(str(self.log_path)) from exc

        content = content.strip()
        if not content or n <= 0:
            return []
        return content.split("\n")[-n:]


# ---------------------------------------------------------------------------
# Pure mutators — no I/O, callers persist afterwards
# ---------------------------------------------------------------------------


def set_field(checklist: Checklist, field: str, value: bool) -> Checklist:
    """Set one checklist flag in place."""
    if field not in CHECKLIST_ITEMS:
        raise ValueError(f"Unknown checklist item: {field!r}")
    setattr(checklist, field, bool(value))
    return checklist


def set_budget(checklist: Checklist, amount: int) -> Checklist:
    """Overwrite the saved budget in place."""
    if amount < 0:
        raise ValueError(f"Budget must be non-negative, got {amount}")
    checklist.saved_budget = int(amount)
    return checklist


def append_note(notes: list[str], text: str) -> list[str]:
    return [*notes, text]


def clear_notes() -> list[str]:
    return []
