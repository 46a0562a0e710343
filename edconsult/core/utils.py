"""General utility functions."""
import secrets
from datetime import date, datetime, time
from typing import Union

from edconsult.core.constants import DISPLAY_ID_DIGITS, GENERATED_PASSWORD_LENGTH

# Ambiguous characters (0/O, 1/l/I) are left out
PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789!@#$%&*"


def parse_meeting_date(value: Union[str, date]) -> date:
    """Parse a YYYY-MM-DD calendar date (ISO datetimes are truncated to the date)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Date is required")
    try:
        return date.fromisoformat(value.strip().split("T")[0])
    except ValueError:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")


def parse_time_of_day(value: Union[str, time]) -> time:
    """Parse HH:MM or HH:MM:SS into a time with minute precision."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    if not isinstance(value, str):
        raise ValueError("Time is required")

    parts = value.strip().split(":")
    if (
        len(parts) not in (2, 3)
        or not all(p.isdigit() for p in parts)
        or len(parts[0]) > 2
        or any(len(p) != 2 for p in parts[1:])
    ):
        raise ValueError(f"Invalid time '{value}', expected HH:MM")

    hours, minutes = int(parts[0]), int(parts[1])
    seconds = int(parts[2]) if len(parts) == 3 else 0
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValueError(f"Invalid time '{value}', expected HH:MM")
    return time(hours, minutes)


def to_minute_offset(value: time) -> int:
    """Minutes elapsed since midnight."""
    return value.hour * 60 + value.minute


def format_minute_offset(offset: int) -> str:
    """Render a minute offset as HH:MM."""
    return f"{offset // 60:02d}:{offset % 60:02d}"


def intervals_overlap(start: int, end: int, other_start: int, other_end: int) -> bool:
    """
    Check whether [start, end) collides with [other_start, other_end).

    A collision is any of: the new interval starts inside the other one, ends
    inside it, or fully contains it. For positive-length intervals this is
    the usual half-open overlap, so back-to-back bookings do not collide.
    """
    return (
        (other_start <= start < other_end)
        or (other_start < end <= other_end)
        or (start <= other_start and end >= other_end)
    )


def format_display_id(prefix: str, number: int, digits: int = DISPLAY_ID_DIGITS) -> str:
    """Format a human-facing record ID such as COUN007 or STU2024012."""
    return f"{prefix}{number:0{digits}d}"


def generate_password(length: int = GENERATED_PASSWORD_LENGTH) -> str:
    """Generate a random initial password for a client account."""
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))
