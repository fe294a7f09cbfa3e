# utils/date_codec.py
import re
from datetime import date, datetime, timezone

from utils.errors import FormatError

_WIRE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


def decode_wire(text) -> date:
    """
    Parse a calendar day from its wire form.

    Args:
        text: Literal "YYYY-MM-DD" string

    Returns:
        The calendar day

    Raises:
        FormatError: on anything other than a real day in exactly that form
    """
    if not isinstance(text, str):
        raise FormatError(f"Date must be a string in YYYY-MM-DD format, got {type(text).__name__}")

    match = _WIRE_PATTERN.fullmatch(text)
    if not match:
        raise FormatError(f"Date '{text}' is not in YYYY-MM-DD format")

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as e:
        raise FormatError(f"Date '{text}' is not a valid calendar day: {e}") from e


def encode_wire(day: date) -> str:
    """Render a calendar day as exactly 10 characters, YYYY-MM-DD"""
    # strftime does not zero-pad years below 1000 on every platform
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def decode_storage(raw: datetime) -> date:
    """
    Read the calendar day out of a stored timestamp.

    Stored timestamps are UTC midnight. The MongoDB driver hands them back
    naive (already UTC) unless the client is tz-aware, in which case they are
    normalised to UTC before the day is taken.
    """
    if not isinstance(raw, datetime):
        raise FormatError(f"Stored date must be a datetime, got {type(raw).__name__}")

    if raw.tzinfo is not None:
        raw = raw.astimezone(timezone.utc)
    return raw.date()


def encode_storage(day: date) -> datetime:
    """Encode a calendar day as an aware datetime at UTC midnight"""
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
