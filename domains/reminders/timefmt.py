"""Normalize human time expressions to 24-hour HH:mm."""

import re

_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{1,2})\s*([ap]m)?\s*$", re.IGNORECASE)


def normalize_time(time_str: str) -> str:
    """Convert "5:00 AM", "11:45 pm" or "17:30" to zero-padded "HH:mm".

    Range is not checked: "25:99" comes back as "25:99" and simply never
    matches a wall-clock minute.

    Raises:
        ValueError: If the hour or minute is not numeric
    """
    match = _TIME_RE.match(time_str or "")
    if not match:
        raise ValueError(f"Unrecognised time: {time_str!r}")

    hours = int(match.group(1))
    minutes = int(match.group(2))
    modifier = (match.group(3) or "").lower()

    if modifier == "pm" and hours < 12:
        hours += 12
    elif modifier == "am" and hours == 12:
        hours = 0

    return f"{hours:02d}:{minutes:02d}"
