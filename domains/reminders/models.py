"""Reminder data model and the small tagged types around it."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


class Action(Enum):
    """What an inbound request wants done."""
    CREATE = "create"
    DELETE = "delete"


class Repeat(Enum):
    """Repeat policy of a reminder."""
    ONCE = "once"
    DAILY = "daily"


class Verdict(Enum):
    """Appropriateness gate labels."""
    ENCOURAGED = "encouraged"
    PERMISSIBLE = "permissible"
    DISCOURAGED = "discouraged"


@dataclass(eq=False)
class Reminder:
    """A pending reminder.

    Compared by identity: two reminders with the same owner and text are
    still distinct entries in the store.
    """
    owner: str
    text: str
    time: str  # HH:mm, 24-hour, local wall clock
    repeat: Repeat = Repeat.ONCE
    sent: bool = False

    def to_record(self) -> dict:
        return {
            "owner": self.owner,
            "text": self.text,
            "time": self.time,
            "repeat": self.repeat.value,
            "sent": self.sent,
        }

    @classmethod
    def from_record(cls, record: dict) -> "Reminder":
        return cls(
            owner=str(record["owner"]),
            text=record["text"],
            time=record["time"],
            repeat=Repeat(record.get("repeat", Repeat.ONCE.value)),
            sent=bool(record.get("sent", False)),
        )


@dataclass(frozen=True)
class ReminderIntent:
    """Structured request extracted from a chat message."""
    action: Action
    text: Optional[str] = None
    time: Optional[str] = None
    repeat: Repeat = Repeat.ONCE


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful oracle result."""
    value: T


@dataclass(frozen=True)
class Err:
    """Failed oracle result with a human-readable reason."""
    reason: str


Result = Union[Ok[T], Err]
