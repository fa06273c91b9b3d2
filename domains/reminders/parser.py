"""Turn chat messages into structured reminder intents via Claude."""

import json
import re

from logger import logger
from .config import INTENT_PROMPT
from .errors import ResolutionFailure
from .models import Action, Repeat, ReminderIntent
from .timefmt import normalize_time

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_fences(raw: str) -> str:
    """Remove markdown code fences around an oracle reply."""
    return _FENCE_RE.sub("", raw or "").strip()


def parse_intent(raw: str) -> ReminderIntent:
    """Parse the oracle's reply into a ReminderIntent.

    Args:
        raw: Oracle reply, optionally wrapped in ```json fences

    Returns:
        Validated ReminderIntent. Text and time may be None; completeness
        is checked by the handler.

    Raises:
        ResolutionFailure: On malformed JSON or unknown action/repeat
    """
    try:
        data = json.loads(strip_fences(raw))
    except json.JSONDecodeError as e:
        raise ResolutionFailure(f"Oracle reply is not JSON: {e}") from e

    if not isinstance(data, dict):
        raise ResolutionFailure("Oracle reply is not a JSON object")

    try:
        action = Action(str(data.get("action", "")).strip().lower())
    except ValueError:
        raise ResolutionFailure(f"Unknown action: {data.get('action')!r}") from None

    repeat_raw = data.get("repeat") or Repeat.ONCE.value
    try:
        repeat = Repeat(str(repeat_raw).strip().lower())
    except ValueError:
        raise ResolutionFailure(f"Unknown repeat: {repeat_raw!r}") from None

    text = data.get("text")
    text = str(text).strip() if text is not None else None

    time = data.get("time")
    if time:
        try:
            time = normalize_time(str(time))
        except ValueError as e:
            raise ResolutionFailure(str(e)) from e
    else:
        time = None

    return ReminderIntent(action=action, text=text or None, time=time, repeat=repeat)


async def resolve_intent(message: str, client) -> ReminderIntent:
    """Ask the intent oracle about a chat message.

    Any oracle error counts the same as an unparsable reply.

    Raises:
        ResolutionFailure: If no valid intent could be extracted
    """
    try:
        raw = await client.complete(INTENT_PROMPT.format(message=message))
    except Exception as e:
        logger.warning(f"Intent oracle failed: {e}")
        raise ResolutionFailure(f"Intent oracle failed: {e}") from e

    try:
        intent = parse_intent(raw)
    except ResolutionFailure as e:
        logger.warning(f"Could not parse intent: {e}")
        raise

    logger.info(f"Resolved intent: {intent.action.value} '{intent.text}' at {intent.time} ({intent.repeat.value})")
    return intent
