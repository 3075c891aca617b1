"""Timestamp helpers for log directories and resume history."""

from datetime import datetime
from typing import Optional

# (seconds per unit, suffix), largest first
_RELATIVE_UNITS = ((86400, "d"), (3600, "h"), (60, "m"), (1, "s"))


def now() -> str:
    """Current local time as a compact sortable string (e.g., "20251114_183045")."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """Current local time as an ISO 8601 string (history created_at values)."""
    return datetime.now().isoformat()


def format_timestamp(iso_timestamp: Optional[str], relative: bool = False) -> str:
    """
    Format a stored ISO 8601 timestamp for display.

    Args:
        iso_timestamp: created_at value from the record store
        relative: Compact relative form ("2h ago") instead of "2025-11-13 18:45:40"

    Returns:
        Display string, or the input unchanged if it cannot be parsed
    """
    try:
        dt = datetime.fromisoformat(iso_timestamp)
    except (ValueError, TypeError):
        return iso_timestamp

    if not relative:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    seconds = int((datetime.now() - dt).total_seconds())
    suffix = "ago" if seconds >= 0 else "from now"
    seconds = abs(seconds)
    for unit_seconds, unit in _RELATIVE_UNITS:
        if seconds >= unit_seconds or unit == "s":
            return f"{seconds // unit_seconds}{unit} {suffix}"
