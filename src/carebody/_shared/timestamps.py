# Area: Shared
"""
carebody._shared.timestamps — Timestamp helpers
===============================================

Lenient timestamp parsing for entity snapshots. Anything that cannot be
read as a point in time becomes ``None`` (the "unknown" timestamp) and
is logged, never raised: the phase evaluator turns ``None`` into the
UNKNOWN phase.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger("carebody.timestamps")


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def resolve_now(now: Any = None) -> datetime:
    """
    Normalize an evaluation time to an aware UTC datetime.

    Accepts anything parse_timestamp() reads (naive datetimes are taken
    as UTC, ISO strings, epoch seconds). Missing or unreadable values
    fall back to the current time.
    """
    return parse_timestamp(now) or utc_now()


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """ISO 8601 string with a trailing Z for UTC, or None."""
    if value is None:
        return None
    value = value.astimezone(timezone.utc)
    return value.isoformat().replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a snapshot timestamp into an aware UTC datetime.

    Accepts datetimes (naive ones are taken as UTC), ISO 8601 strings
    with or without a trailing ``Z``, Unix epoch seconds, and Mongo
    extended-JSON ``{"$date": ...}`` wrappers.

    Returns:
        Aware datetime, or None for missing/unparseable input
    """
    if value is None or value == "":
        return None

    if isinstance(value, dict) and "$date" in value:
        return parse_timestamp(value["$date"])

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    # bool is an int subclass but never a timestamp
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.warning("Unreadable epoch timestamp: %r", value)
            return None

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning("Unparseable timestamp: %r", value)
            return None
        return parse_timestamp(parsed)

    logger.warning("Unsupported timestamp type %s: %r", type(value).__name__, value)
    return None
