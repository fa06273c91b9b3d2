"""Reminder intent handler for inbound chat messages."""

from logger import logger
from .config import (
    LIST_COMMANDS,
    REPLY_AMBIGUOUS_DELETE,
    REPLY_DISCOURAGED,
    REPLY_INCOMPLETE_CREATE,
    REPLY_NOT_UNDERSTOOD,
)
from .errors import (
    AmbiguousDeleteRequest,
    GateUnavailable,
    IncompleteCreateRequest,
    ResolutionFailure,
)
from .models import Action, Err, ReminderIntent, Verdict
from .oracles import classify_reminder
from .parser import resolve_intent
from .store import ReminderStore


async def handle_reminder_message(
    owner: str,
    content: str,
    store: ReminderStore,
    client
) -> str:
    """Handle one inbound chat message.

    Holds the store lock for the whole call, so a delivery tick never
    interleaves with a half-finished request.

    Args:
        owner: Chat identity the message came from
        content: Message text
        store: Reminder store
        client: Text oracle (ClaudeClient)

    Returns:
        Reply text for the sender

    Raises:
        PersistenceFailure: If the store could not be written
    """
    logger.info(f"Received: '{content}' from {owner}")

    async with store.lock:
        if content.lower().strip() in LIST_COMMANDS:
            return _list_reminders(owner, store)

        try:
            intent = await resolve_intent(content, client)
        except ResolutionFailure:
            return REPLY_NOT_UNDERSTOOD

        try:
            if intent.action is Action.CREATE:
                return await _create_reminder(owner, intent, store, client)
            return _delete_reminders(owner, intent, store)
        except IncompleteCreateRequest as e:
            logger.warning(f"Incomplete create request from {owner}: {e}")
            return REPLY_INCOMPLETE_CREATE
        except AmbiguousDeleteRequest as e:
            logger.warning(f"Ambiguous delete request from {owner}: {e}")
            return REPLY_AMBIGUOUS_DELETE


async def _create_reminder(owner: str, intent: ReminderIntent, store: ReminderStore, client) -> str:
    """Gate and store a new reminder."""
    if not intent.text or not intent.time:
        raise IncompleteCreateRequest(f"text={intent.text!r} time={intent.time!r}")

    result = await classify_reminder(intent.text, client)
    if isinstance(result, Err):
        # Fail open: an unreachable gate never blocks creation
        logger.warning(f"{GateUnavailable.__name__}: {result.reason}")
    elif result.value is Verdict.DISCOURAGED:
        logger.info(f"Rejected reminder (discouraged): '{intent.text}'")
        return REPLY_DISCOURAGED

    store.create(owner, intent.text, intent.time, intent.repeat)
    return f"Reminder set for \"{intent.text}\" at {intent.time} ({intent.repeat.value})"


def _delete_reminders(owner: str, intent: ReminderIntent, store: ReminderStore) -> str:
    """Delete all of an owner's reminders, or those matching the text."""
    if not intent.text:
        raise AmbiguousDeleteRequest("delete request without text")

    if "all" in intent.text.lower():
        removed = store.delete_all(owner)
        return f"All your reminders have been deleted ({removed} removed)."

    removed = store.delete_by_text(owner, intent.text)
    if not removed:
        return f"No reminder found for \"{intent.text}\"."
    return f"Reminder \"{intent.text}\" deleted."


def _list_reminders(owner: str, store: ReminderStore) -> str:
    """List an owner's reminders."""
    reminders = sorted(store.for_owner(owner), key=lambda r: r.time)

    if not reminders:
        return "No active reminders."

    lines = ["**Your reminders:**\n"]
    for r in reminders:
        lines.append(f"- {r.time} ({r.repeat.value}) - {r.text}")

    return "\n".join(lines)
