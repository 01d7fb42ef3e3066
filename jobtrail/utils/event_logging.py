"""
Activity event logging utilities for JOBTRAIL.

Provides uniform interfaces for appending record mutations to an activity log in
JSON Lines format (one JSON object per line). The detailed session log lives in
jobtrail.utils.logger; this log is the durable trail of what changed and when.

Usage:
    from jobtrail.utils.event_logging import log_activity_event, log_status_change

    log_status_change(
        event_file,
        application_id="a1b2",
        old_status="applied",
        new_status="interviewing",
        source="cli",
    )
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from jobtrail.utils.timestamp import now_exact

# Event types that change an application's pipeline status
STATUS_FIELD_BY_EVENT_TYPE = {
    "status_change": "new_status",
    "application_created": "status",
}


def log_activity_event(
    event_file: Path, event_type: str, record_id: str, source: str, **extra_fields
) -> None:
    """
    Append an event to the activity log.

    Args:
        event_file: JSON Lines file to append to (parent directories are created)
        event_type: Type of event (e.g., "application_created", "resume_deleted")
        record_id: Application or resume identifier
        source: Event source (e.g., "gateway", "cli")
        **extra_fields: Additional event-specific fields
    """
    event_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "record_id": record_id,
        "source": source,
        **extra_fields,
    }

    with open(event_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def log_status_change(
    event_file: Path,
    application_id: str,
    old_status: str,
    new_status: str,
    source: str,
    **extra_fields,
) -> None:
    """
    Log a pipeline status change for an application.

    Pure logging function - does NOT touch the record itself.
    """
    log_activity_event(
        event_file,
        event_type="status_change",
        record_id=application_id,
        old_status=old_status,
        new_status=new_status,
        source=source,
        **extra_fields,
    )


def _read_events(event_file: Path) -> List[Dict]:
    if not event_file.exists():
        return []

    events = []
    with open(event_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue
    return events


def get_recent_events(
    event_file: Path,
    n: int = 10,
    record_id: Optional[str] = None,
    event_type: Optional[str] = None,
) -> list[dict]:
    """
    Get the last n events from the activity log, optionally filtered.

    Args:
        event_file: JSON Lines activity log
        n: Number of recent events to return (default: 10)
        record_id: Filter to only events for this record (optional)
        event_type: Filter to only events of this type (optional)

    Returns:
        List of event dicts (most recent last)
    """
    events = _read_events(event_file)

    if record_id:
        events = [e for e in events if e.get("record_id") == record_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events


def deduce_statuses_from_events(event_file: Path) -> Dict[str, str]:
    """
    Rebuild the latest pipeline status of every application from the activity log.

    Applications whose most recent event is a deletion are left out.

    Returns:
        Dict mapping application id -> most recent status, in creation order
    """
    statuses: Dict[str, str] = {}

    for event in _read_events(event_file):
        event_type = event.get("event_type")
        record_id = event.get("record_id")

        if event_type in STATUS_FIELD_BY_EVENT_TYPE:
            statuses[record_id] = event[STATUS_FIELD_BY_EVENT_TYPE[event_type]]
        elif event_type == "application_deleted":
            statuses.pop(record_id, None)

    return statuses
