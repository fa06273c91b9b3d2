"""Global configuration for the Reminder Messenger bot."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Discord
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")

# Channels the bot listens to (DMs are always accepted)
_channel_ids = os.getenv("REMINDER_CHANNEL_IDS", "")
REMINDER_CHANNEL_IDS = {int(cid.strip()) for cid in _channel_ids.split(",") if cid.strip()}

# Claude API - renamed var so other local tools don't pick it up
ANTHROPIC_API_KEY = os.getenv("REMINDER_BOT_CLAUDE_KEY") or os.getenv("ANTHROPIC_API_KEY")
CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-sonnet-4-20250514")

# Data
DATA_DIR = Path(os.getenv("LOCALAPPDATA", ".")) / "reminder-messenger"
REMINDER_STORE_PATH = Path(os.getenv("REMINDER_STORE_PATH", str(DATA_DIR / "reminders.json")))

# Health endpoint
HEALTH_PORT = int(os.getenv("PORT", "3000"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = DATA_DIR / "logs"
LOG_DIR.mkdir(parents=True, exist_ok=True)
