"""Domain modules for Reminder Messenger."""
