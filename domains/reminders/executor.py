"""Compose and deliver reminder messages."""

from typing import Protocol

import discord

from logger import logger
from .errors import DeliveryFailure, EnrichmentUnavailable
from .models import Err, Reminder
from .oracles import generate_motivation

# Discord message length limit
MAX_MESSAGE_LENGTH = 2000


class Transport(Protocol):
    """Outbound side of the chat channel."""

    async def deliver(self, owner: str, text: str) -> None: ...


class DiscordTransport:
    """Deliver text to the Discord channel identified by owner."""

    def __init__(self, bot: discord.Client):
        self.bot = bot

    async def deliver(self, owner: str, text: str) -> None:
        """Send text to a channel id.

        Raises:
            DeliveryFailure: If the channel can't be resolved or the send fails
        """
        try:
            channel_id = int(owner)
            channel = self.bot.get_channel(channel_id)
            if not channel:
                channel = await self.bot.fetch_channel(channel_id)

            # Split long messages
            for i in range(0, len(text), MAX_MESSAGE_LENGTH):
                await channel.send(text[i:i + MAX_MESSAGE_LENGTH])
        except (ValueError, discord.DiscordException) as e:
            raise DeliveryFailure(f"Could not deliver to {owner}: {e}") from e


def compose_message(text: str, motivation: str | None = None) -> str:
    """Build the delivered message, with the motivation line if there is one."""
    message = f"Reminder: **{text}**"
    if motivation:
        message += f"\n\n✨ {motivation}"
    return message


async def execute_reminder(reminder: Reminder, client, transport: Transport) -> bool:
    """Enrich and deliver one reminder.

    Never raises for oracle or transport errors; those are logged.

    Returns:
        True if the transport accepted the message
    """
    logger.info(f"Sending reminder to {reminder.owner}: '{reminder.text}'")

    result = await generate_motivation(reminder.text, client)
    if isinstance(result, Err):
        logger.warning(f"{EnrichmentUnavailable.__name__}: {result.reason}")
        motivation = None
    else:
        motivation = result.value

    try:
        await transport.deliver(reminder.owner, compose_message(reminder.text, motivation))
    except Exception as e:
        logger.error(f"Failed to send reminder '{reminder.text}' to {reminder.owner}: {e}")
        return False

    logger.info(f"Reminder sent to {reminder.owner}")
    return True
