"""Health API - tells the host the bot process is alive.

Served by uvicorn on a daemon thread beside the Discord client (see bot.py).
"""

from datetime import datetime

from fastapi import FastAPI, Request

from domains.reminders.store import ReminderStore

SERVICE_NAME = "Reminder Messenger"


def create_app(store: ReminderStore) -> FastAPI:
    """Build the health app around a reminder store."""
    app = FastAPI(
        title=SERVICE_NAME,
        description="Health endpoint for the reminder bot",
        version="1.0.0"
    )
    app.state.store = store

    @app.get("/")
    async def root(request: Request):
        """Health check endpoint."""
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "reminders": len(request.app.state.store),
            "timestamp": datetime.now().isoformat()
        }

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
