"""Reminder store - the in-memory collection plus its flat JSON file.

The store owns the canonical list of reminders. Every mutation is written
through to the persistence backend before the method returns.
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Protocol

from logger import logger
from .errors import PersistenceFailure
from .models import Reminder, Repeat


class ReminderBackend(Protocol):
    """Load-all / replace-all persistence port."""

    def load_all(self) -> list[dict]: ...

    def replace_all(self, records: list[dict]) -> None: ...


class JsonReminderFile:
    """Reminders as a JSON array in a single file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load_all(self) -> list[dict]:
        if not self.path.exists():
            logger.info(f"No saved reminders at {self.path}, starting fresh")
            return []
        try:
            records = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceFailure(f"Could not read {self.path}: {e}") from e
        if not isinstance(records, list):
            raise PersistenceFailure(f"{self.path} does not hold a list of reminders")
        return records

    def replace_all(self, records: list[dict]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise PersistenceFailure(f"Could not write {self.path}: {e}") from e


class ReminderStore:
    """Owner -> reminders mapping, single source of truth.

    `lock` serializes the inbound handler and the delivery tick. Callers
    hold it for a whole invocation; the methods below do not take it.
    """

    def __init__(self, backend: ReminderBackend):
        self._backend = backend
        self._reminders: list[Reminder] = []
        self.lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._reminders)

    def load(self) -> int:
        """Replace the in-memory list with what the backend holds."""
        try:
            self._reminders = [Reminder.from_record(r) for r in self._backend.load_all()]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceFailure(f"Malformed reminder record: {e}") from e
        logger.info(f"Loaded {len(self._reminders)} saved reminders")
        return len(self._reminders)

    def _persist(self) -> None:
        self._backend.replace_all([r.to_record() for r in self._reminders])

    # --- Handler operations ---

    def create(self, owner: str, text: str, time: str, repeat: Repeat = Repeat.ONCE) -> None:
        """Append a new pending reminder. Duplicates are allowed."""
        self._reminders.append(Reminder(owner=owner, text=text, time=time, repeat=repeat))
        self._persist()
        logger.info(f"Reminder added for {owner}: '{text}' at {time} ({repeat.value})")

    def delete_all(self, owner: str) -> int:
        """Remove every reminder of an owner. Returns the count removed."""
        before = len(self._reminders)
        self._reminders = [r for r in self._reminders if r.owner != owner]
        removed = before - len(self._reminders)
        self._persist()
        logger.info(f"Deleted all reminders for {owner}: {removed} removed")
        return removed

    def delete_by_text(self, owner: str, text: str) -> int:
        """Remove every reminder of an owner with exactly this text."""
        removed = self._remove_matching(owner, text)
        logger.info(f"Deleted reminder '{text}' for {owner}: {removed} removed")
        return removed

    def for_owner(self, owner: str) -> list[Reminder]:
        return [r for r in self._reminders if r.owner == owner]

    def all(self) -> list[Reminder]:
        return list(self._reminders)

    # --- Scheduler operations ---

    def scan_due(self, current_minute: str) -> list[Reminder]:
        """Reminders whose time is current_minute and that are not already sent."""
        return [r for r in self._reminders if r.time == current_minute and not r.sent]

    def contains(self, reminder: Reminder) -> bool:
        return any(r is reminder for r in self._reminders)

    def mark_sent(self, reminder: Reminder) -> None:
        reminder.sent = True
        self._persist()

    def retire(self, reminder: Reminder) -> int:
        """Remove a delivered once-reminder and every (owner, text) duplicate."""
        removed = self._remove_matching(reminder.owner, reminder.text)
        logger.info(f"One-time reminder '{reminder.text}' removed ({removed} entries)")
        return removed

    def rearm(self, reminder: Reminder) -> bool:
        """Make a delivered daily reminder eligible again.

        Returns False (and changes nothing) if the reminder was deleted in
        the meantime.
        """
        if not self.contains(reminder):
            logger.info(f"Skipping re-arm of deleted reminder '{reminder.text}'")
            return False
        reminder.sent = False
        self._persist()
        logger.info(f"Reset sent flag for reminder '{reminder.text}'")
        return True

    def _remove_matching(self, owner: str, text: str) -> int:
        before = len(self._reminders)
        self._reminders = [
            r for r in self._reminders
            if not (r.owner == owner and r.text == text)
        ]
        removed = before - len(self._reminders)
        self._persist()
        return removed
