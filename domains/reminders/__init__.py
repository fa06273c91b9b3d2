"""Reminders domain - natural-language reminders delivered at a wall-clock minute.

Intent extraction, appropriateness gating and motivation use Claude; the
delivery loop runs on APScheduler with a flat JSON store.
"""

from .models import Action, Repeat, Verdict, Reminder, ReminderIntent, Ok, Err
from .timefmt import normalize_time
from .parser import parse_intent, resolve_intent
from .oracles import classify_reminder, generate_motivation
from .store import ReminderStore, JsonReminderFile
from .executor import DiscordTransport, compose_message, execute_reminder
from .scheduler import DeliveryScheduler
from .handler import handle_reminder_message

__all__ = [
    "Action",
    "Repeat",
    "Verdict",
    "Reminder",
    "ReminderIntent",
    "Ok",
    "Err",
    "normalize_time",
    "parse_intent",
    "resolve_intent",
    "classify_reminder",
    "generate_motivation",
    "ReminderStore",
    "JsonReminderFile",
    "DiscordTransport",
    "compose_message",
    "execute_reminder",
    "DeliveryScheduler",
    "handle_reminder_message",
]
