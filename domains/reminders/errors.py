"""Reminder error taxonomy.

Everything except PersistenceFailure is recovered where it is raised or
one level up; PersistenceFailure is fatal to the process.
"""


class ReminderError(Exception):
    """Base class for reminder errors."""


class ResolutionFailure(ReminderError):
    """The intent oracle returned nothing usable."""


class IncompleteCreateRequest(ReminderError):
    """A create request without text or time."""


class AmbiguousDeleteRequest(ReminderError):
    """A delete request without any text to match."""


class GateUnavailable(ReminderError):
    """The appropriateness oracle could not be reached."""


class EnrichmentUnavailable(ReminderError):
    """The motivation oracle failed or returned nothing."""


class DeliveryFailure(ReminderError):
    """The chat transport could not deliver a message."""


class PersistenceFailure(ReminderError):
    """The reminder file could not be read or written."""
