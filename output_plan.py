import json
import logging
import string
from dataclasses import asdict, dataclass, field
from pathlib import Path

from day_index import DayBucket, DayIndex, day_key
from ics_parser import Event

logger = logging.getLogger(__name__)

INDEX_FILE = "index.txt"

# Only A-Z are folded; other letters pass through untouched.
ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


@dataclass
class OutputPlan:
    day_files: dict[str, str] = field(default_factory=dict)
    expired: list[str] = field(default_factory=list)
    index: str = ""


def render_day(key: str, events: list[Event]) -> str:
    data = {key: [asdict(event) for event in events]}
    return json.dumps(data, indent=2, ensure_ascii=False).translate(ASCII_LOWER)


def plan_output(buckets: DayBucket, index: DayIndex, limit_days: int) -> OutputPlan:
    """Decide what to write and what to prune.

    Every day gets a file. Days are then ordered by their representative
    start time; the first ``limit_days`` go into the index and the rest are
    marked for deletion.
    """
    if limit_days < 1:
        raise ValueError(f"limit_days must be positive, got {limit_days}")

    plan = OutputPlan()
    for key, events in buckets.items():
        plan.day_files[key] = render_day(key, events)

    lines = []
    for count, timestamp in enumerate(sorted(t for _, t in index), start=1):
        if count > limit_days:
            # Re-derived from the timestamp, not the bucket key. Both come out
            # of day_key() on the same UTC value, so they match.
            plan.expired.append(day_key(timestamp))
            continue
        lines.append(f"{timestamp}\n")
    plan.index = "".join(lines).translate(ASCII_LOWER)
    return plan


def apply_plan(plan: OutputPlan, output_dir: str | Path) -> None:
    output_dir = Path(output_dir)

    for name, content in plan.day_files.items():
        path = output_dir / name
        logger.info("Writing file: %s", path)
        path.write_text(content, encoding="utf-8")

    for name in plan.expired:
        path = output_dir / name
        logger.info("Removing file: %s", path)
        path.unlink()

    path = output_dir / INDEX_FILE
    logger.info("Writing file: %s", path)
    path.write_text(plan.index, encoding="utf-8")
