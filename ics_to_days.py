# /// script
# dependencies = [
#     "icalendar",
# ]
# ///
import argparse
import logging
import os
import sys
from pathlib import Path

from day_index import group_by_day
from ics_parser import CalendarParseError, parse_calendar
from output_plan import OutputPlan, apply_plan, plan_output

__version__ = "0.1.0"

logger = logging.getLogger("ics_to_days")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Split an .ics file into per-day JSON files for an Inkwatchy watch"
    )
    parser.add_argument("-p", "--path", help="Path to the ics file")
    parser.add_argument(
        "-o",
        "--output-dir",
        required=True,
        help="Path to the output dir (Inkwatchy littlefs filesystem)",
    )
    parser.add_argument(
        "-l",
        "--limit-days",
        type=positive_int,
        default=20,
        help="Limit how many days to actually show (default: %(default)s)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def setup_logging():
    level = os.environ.get("ICS_DAYS_LOG", "DEBUG").upper()
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def run(path: str | Path, output_dir: str | Path, limit_days: int) -> OutputPlan:
    text = Path(path).read_text(encoding="utf-8")
    buckets, index = group_by_day(parse_calendar(text))
    logger.info("There are %d days", len(buckets))
    plan = plan_output(buckets, index, limit_days)
    apply_plan(plan, output_dir)
    logger.info("Done, bye!")
    return plan


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging()
    logger.debug("Start")

    if args.path is None:
        logger.info("No ics file given, nothing to do")
        return 0

    try:
        run(args.path, args.output_dir, args.limit_days)
    except (CalendarParseError, OSError) as e:
        logger.critical("%s", e)
        return 1
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
