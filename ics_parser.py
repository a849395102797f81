import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone

import icalendar

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S"
TIMESTAMP_RE = re.compile(r"[0-9]{8}T[0-9]{6}")


class CalendarParseError(ValueError):
    pass


@dataclass
class Event:
    name: str = ""
    start_time: int = 0
    end_time: int = 0
    description: str = ""
    status: str = ""


def parse_timestamp(value: str) -> int:
    """Convert a floating ``YYYYMMDDTHHMMSS`` value to epoch seconds.

    The wall-clock value is read as if it were already UTC. Anything else,
    including UTC values with a trailing ``Z`` and date-only values, is
    rejected.
    """
    if not TIMESTAMP_RE.fullmatch(value):
        raise CalendarParseError(f"Failed to parse date: {value!r}")
    try:
        wall = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise CalendarParseError(f"Failed to parse date: {value!r}") from e
    return epoch_seconds(wall)


def epoch_seconds(wall: datetime) -> int:
    # Any attached zone is dropped; the wall clock counts as UTC.
    unix = int(wall.replace(tzinfo=timezone.utc).timestamp())
    if unix < 0:
        raise CalendarParseError(f"Date before the epoch: {wall:%Y%m%dT%H%M%S}")
    logger.debug("Unix time: %d", unix)
    return unix


def _last(value):
    # Repeated properties come back as a list; the last one wins.
    return value[-1] if isinstance(value, list) else value


def _text(event: icalendar.Component, name: str) -> str:
    return str(_last(event.get(name, "")))


def _timestamp(event: icalendar.Component, name: str) -> int | None:
    """Epoch seconds of a date property, or None when it is absent.

    icalendar does not raise on a broken property inside a VEVENT, it records
    the failure in ``event.errors``; those are fatal here too.
    """
    for prop, message in event.errors:
        if prop == name:
            raise CalendarParseError(f"Failed to parse date in {name}: {message}")
    if name not in event:
        return None
    prop = _last(event[name])
    value = getattr(prop, "dt", None)
    # A zone without a TZID parameter can only come from a trailing "Z".
    utc_suffix = (
        isinstance(value, datetime)
        and value.tzinfo is not None
        and "TZID" not in getattr(prop, "params", {})
    )
    if not isinstance(value, datetime) or utc_suffix:
        raw = prop.to_ical().decode("utf-8")
        raise CalendarParseError(f"Failed to parse date in {name}: {raw!r}")
    return epoch_seconds(value)


def parse_event(event: icalendar.Component) -> Event:
    start_time = _timestamp(event, "DTSTART")
    if start_time is None:
        raise CalendarParseError(f"Event without DTSTART: {_text(event, 'SUMMARY')!r}")
    return Event(
        name=_text(event, "SUMMARY"),
        start_time=start_time,
        end_time=_timestamp(event, "DTEND") or 0,
        description=_text(event, "DESCRIPTION"),
        status=_text(event, "STATUS"),
    )


def parse_calendar(text: str) -> list[Event]:
    try:
        components = icalendar.Calendar.from_ical(text, multiple=True)
    except ValueError as e:
        raise CalendarParseError(f"Unreadable calendar: {e}") from e

    calendars = [c for c in components if c.name == "VCALENDAR"]
    if len(calendars) != 1:
        logger.warning("Calendar count is %d, not 1, something is weird", len(calendars))
    if not calendars:
        raise CalendarParseError("No VCALENDAR found")

    events = []
    for component in calendars[0].subcomponents:
        if component.name != "VEVENT":
            continue
        event = parse_event(component)
        logger.debug("Event: %r", event)
        events.append(event)
    return events
