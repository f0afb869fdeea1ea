"""Small helpers shared by stores and response schemas."""

import uuid
from datetime import datetime, timezone
from typing import Optional


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Return `value` as an aware UTC datetime.

    SQLite hands back naive datetimes even for DateTime(timezone=True)
    columns; objects created in the current session are still aware.
    Sorting or serializing a mix of both needs them normalized first.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_id(value: object) -> Optional[uuid.UUID]:
    """Parse an identifier received on the wire; None if it is not a valid id."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
