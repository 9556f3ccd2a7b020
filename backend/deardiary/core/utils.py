"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from deardiary.core.exceptions import ValidationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the application process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """
    Resolve an IANA zone name.

    Returns None for an empty name, meaning the server's local time.
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown time zone: {name}")


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Convert a stored timestamp to the given zone (server local time when tz is None).

    Naive values come from the database and are UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def local_date_string(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format a timestamp as its local calendar date, YYYY-MM-DD."""
    return to_local(value, tz).date().isoformat()


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD query value."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError("Date must be in YYYY-MM-DD format")
