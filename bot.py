"""Reminder Messenger - Main Bot.

Users ask for reminders in plain language; Claude extracts the intent and
the bot delivers each reminder at its HH:mm through the same channel.
"""

import sys
import threading

import discord
import uvicorn
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from claude_client import ClaudeClient
from logger import logger
from config import (
    DISCORD_TOKEN,
    ANTHROPIC_API_KEY,
    CLAUDE_MODEL,
    REMINDER_STORE_PATH,
    REMINDER_CHANNEL_IDS,
    HEALTH_PORT,
)
from domains.reminders import (
    DeliveryScheduler,
    DiscordTransport,
    JsonReminderFile,
    ReminderStore,
    handle_reminder_message,
)
from domains.reminders.errors import PersistenceFailure
from health_api import create_app

# Initialize bot
intents = discord.Intents.default()
intents.message_content = True
bot = discord.Client(intents=intents)

# Initialize Claude client - using config vars
claude = ClaudeClient(
    api_key=ANTHROPIC_API_KEY,
    model=CLAUDE_MODEL
)

# Reminder store + delivery loop
store = ReminderStore(JsonReminderFile(REMINDER_STORE_PATH))
scheduler = AsyncIOScheduler()

_exit_code = 0
_started = False


async def shutdown(error: Exception) -> None:
    """Stop the bot after a fatal error (store no longer matches disk)."""
    global _exit_code
    _exit_code = 1
    logger.critical(f"Shutting down: {error}")
    if scheduler.running:
        scheduler.shutdown(wait=False)
    await bot.close()


delivery = DeliveryScheduler(store, claude, DiscordTransport(bot), on_fatal=shutdown)


def start_health_server() -> threading.Thread:
    """Serve the health endpoint on a daemon thread."""
    server = uvicorn.Server(uvicorn.Config(
        create_app(store),
        host="0.0.0.0",
        port=HEALTH_PORT,
        log_level="warning"
    ))
    thread = threading.Thread(target=server.run, name="health-api", daemon=True)
    thread.start()
    logger.info(f"Health endpoint running at http://localhost:{HEALTH_PORT}")
    return thread


def accepts_channel(channel) -> bool:
    """DMs always; guild channels only if allow-listed (or no list set)."""
    if isinstance(channel, discord.DMChannel):
        return True
    return not REMINDER_CHANNEL_IDS or channel.id in REMINDER_CHANNEL_IDS


@bot.event
async def on_ready():
    """Called when bot is connected and ready."""
    global _started
    logger.info(f"Logged in as {bot.user}")

    # on_ready fires again after reconnects
    if _started:
        return
    _started = True

    delivery.start(scheduler)
    scheduler.start()
    logger.info(f"Scheduler started with {len(scheduler.get_jobs())} jobs")


@bot.event
async def on_message(message):
    """Handle incoming messages."""
    # Ignore bot messages
    if message.author.bot:
        return

    if not message.content or not accepts_channel(message.channel):
        return

    try:
        reply = await handle_reminder_message(
            str(message.channel.id),
            message.content,
            store,
            claude
        )
    except PersistenceFailure as e:
        await shutdown(e)
        return
    except Exception as e:
        logger.error(f"Error handling message: {e}")
        return

    try:
        await message.reply(reply)
    except discord.DiscordException as e:
        logger.error(f"Failed to reply to {message.channel.id}: {e}")


@bot.event
async def on_error(event, *args, **kwargs):
    """Handle errors."""
    logger.error(f"Bot error in {event}: {args}")


def main():
    """Entry point."""
    if not DISCORD_TOKEN:
        logger.error("DISCORD_TOKEN not set")
        return

    if not claude.configured:
        logger.warning("Claude API key not set - every request will be answered as not understood")

    try:
        store.load()
        delivery.recover()
    except PersistenceFailure as e:
        logger.critical(f"Could not load reminders: {e}")
        sys.exit(1)

    start_health_server()

    logger.info("Starting Reminder Messenger...")
    # Our logger.py already routes discord warnings to the log file
    bot.run(DISCORD_TOKEN, log_handler=None)
    sys.exit(_exit_code)


if __name__ == "__main__":
    main()
