"""Keep-alive HTTP endpoint for the reminder bot."""

from .main import create_app

__all__ = ["create_app"]
