"""Translation between TimeEntry and Notion page properties."""

import logging
import math
from datetime import date, datetime
from typing import Any, Optional

from work_scheduler.core.models import TimeEntry

logger = logging.getLogger(__name__)

PROJECT = "Project"
DESCRIPTION = "Description"
DATE = "Date"
HOURS = "Hours"
START_TIME = "Start Time"
END_TIME = "End Time"

REQUIRED_FIELDS = (PROJECT, DESCRIPTION, DATE, HOURS)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO date or datetime string.

    Only the calendar date has to survive: if the full timestamp cannot be
    parsed, the leading ``YYYY-MM-DD`` part is used on its own.

    Returns:
        Parsed datetime, or None if ``value`` holds no usable date
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass
    try:
        return datetime.combine(date.fromisoformat(value[:10]), datetime.min.time())
    except ValueError:
        return None


def parse_entry_date(value: Any) -> Optional[datetime]:
    """Parse an entry date, keeping the wall-clock day as written."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.replace(tzinfo=None)


def _text(content: str) -> list[dict[str, Any]]:
    return [{"text": {"content": content}}]


def entry_to_properties(entry: TimeEntry) -> dict[str, Any]:
    """Build Notion page properties for an entry.

    ``Start Time`` and ``End Time`` are only present when the entry has them.
    """
    properties: dict[str, Any] = {
        PROJECT: {"title": _text(entry.project)},
        DESCRIPTION: {"rich_text": _text(entry.description)},
        HOURS: {"number": entry.hours},
    }
    if entry.date is not None:
        properties[DATE] = {"date": {"start": entry.date.date().isoformat()}}

    if entry.start_time:
        properties[START_TIME] = {"rich_text": _text(entry.start_time)}
    if entry.end_time:
        properties[END_TIME] = {"rich_text": _text(entry.end_time)}

    return properties


def _property(properties: dict[str, Any], name: str, kind: str) -> Any:
    prop = properties.get(name)
    if not isinstance(prop, dict):
        return None
    return prop.get(kind)


def _first_plain_text(properties: dict[str, Any], name: str, kind: str) -> str:
    fragments = _property(properties, name, kind)
    if not isinstance(fragments, list) or not fragments:
        return ""
    first = fragments[0]
    if not isinstance(first, dict):
        return ""
    text = first.get("plain_text")
    return text if isinstance(text, str) else ""


def _number(properties: dict[str, Any], name: str) -> float:
    value = _property(properties, name, "number")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return float(value)


def _date_start(properties: dict[str, Any], name: str) -> Optional[datetime]:
    value = _property(properties, name, "date")
    if not isinstance(value, dict):
        return None
    return parse_entry_date(value.get("start"))


def record_to_entry(record: dict[str, Any]) -> TimeEntry:
    """Map a Notion page back to a TimeEntry.

    Every attribute is looked up and defaulted on its own, so a page with a
    missing or oddly shaped property still yields an entry.
    """
    properties = record.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    record_id = record.get("id")
    created_at = parse_timestamp(record.get("created_time"))
    if created_at is None:
        logger.debug("Record %s has no usable created_time", record_id)
        created_at = datetime.now()

    return TimeEntry(
        id=str(record_id) if record_id else "",
        project=_first_plain_text(properties, PROJECT, "title"),
        description=_first_plain_text(properties, DESCRIPTION, "rich_text"),
        date=_date_start(properties, DATE),
        hours=_number(properties, HOURS),
        start_time=_first_plain_text(properties, START_TIME, "rich_text"),
        end_time=_first_plain_text(properties, END_TIME, "rich_text"),
        created_at=created_at,
    )


def database_title(schema: dict[str, Any], fallback: str = "Untitled") -> str:
    """Plain-text title of a database, or ``fallback`` when it has none."""
    fragments = schema.get("title")
    if isinstance(fragments, list) and fragments and isinstance(fragments[0], dict):
        text = fragments[0].get("plain_text")
        if text:
            return str(text)
    return fallback


def missing_required_fields(schema: dict[str, Any]) -> list[str]:
    """Required property names absent from a database schema, in canonical order."""
    properties = schema.get("properties")
    if not isinstance(properties, dict):
        properties = {}
    return [name for name in REQUIRED_FIELDS if name not in properties]
