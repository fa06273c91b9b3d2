"""Appropriateness gate and motivation enricher.

Both wrappers return Ok/Err instead of raising, so each call site picks its
own failure policy.
"""

from logger import logger
from .config import GATE_PROMPT, GATE_TEMPERATURE, MOTIVATION_PROMPT, MOTIVATION_TEMPERATURE
from .models import Err, Ok, Result, Verdict


def parse_verdict(label: str) -> Verdict:
    """Map an oracle label to a Verdict; anything unrecognised is permissible."""
    cleaned = (label or "").strip().strip(".!\"'*").lower()
    try:
        return Verdict(cleaned)
    except ValueError:
        logger.warning(f"Unrecognised gate label {label!r}, treating as permissible")
        return Verdict.PERMISSIBLE


async def classify_reminder(text: str, client) -> Result[Verdict]:
    """Ask the appropriateness oracle about a reminder's text."""
    try:
        label = await client.complete(
            GATE_PROMPT.format(text=text),
            temperature=GATE_TEMPERATURE
        )
    except Exception as e:
        return Err(f"Gate oracle failed: {e}")

    verdict = parse_verdict(label)
    logger.info(f"Gate verdict for '{text}': {verdict.value}")
    return Ok(verdict)


async def generate_motivation(text: str, client) -> Result[str]:
    """Generate a short motivational note for a reminder."""
    try:
        message = await client.complete(
            MOTIVATION_PROMPT.format(text=text),
            temperature=MOTIVATION_TEMPERATURE
        )
    except Exception as e:
        return Err(f"Motivation oracle failed: {e}")

    message = (message or "").strip()
    if not message:
        return Err("Motivation oracle returned nothing")

    logger.info(f"Motivation generated for '{text}'")
    return Ok(message)
