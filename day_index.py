import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from ics_parser import Event

logger = logging.getLogger(__name__)

DAY_FORMAT = "%d.%m.%Y"

DayBucket = dict[str, list[Event]]
DayIndex = list[tuple[str, int]]


def day_key(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, timezone.utc).strftime(DAY_FORMAT)


def group_by_day(events: Iterable[Event]) -> tuple[DayBucket, DayIndex]:
    """Bucket events by day, keeping document order inside each day.

    The index holds one ``(key, start_time)`` pair per day, taken from the
    first event seen for that day. Later events never move it.
    """
    buckets: DayBucket = {}
    index: DayIndex = []

    for event in events:
        key = day_key(event.start_time)
        if key in buckets:
            buckets[key].append(event)
        else:
            buckets[key] = [event]
            index.append((key, event.start_time))

    logger.debug("Days: %r", buckets)
    return buckets, index
