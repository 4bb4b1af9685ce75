"""
Utility functions for the application.
"""
from typing import Any, Dict, Tuple
from datetime import datetime, timezone
import re

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
_MONTH_RE = re.compile(MONTH_PATTERN)


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def current_month(now: datetime = None) -> str:
    """Month key ("YYYY-MM") for the given moment, defaulting to now (UTC)."""
    return (now or utcnow()).strftime("%Y-%m")


def month_bounds(month: str) -> Tuple[datetime, datetime]:
    """
    Half-open [start, end) datetime range covering a "YYYY-MM" month.
    """
    if not _MONTH_RE.match(month):
        raise ValueError(f"Invalid month '{month}', expected YYYY-MM")
    year, mon = (int(part) for part in month.split("-"))
    start = datetime(year, mon, 1)
    end = datetime(year + 1, 1, 1) if mon == 12 else datetime(year, mon + 1, 1)
    return start, end


def format_error(message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message}
    if details:
        response["details"] = details
    return response
