import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from models.errors import TimelogError
from models.schema import Summary
from timelog import summarize_file
from utils.config import load_settings, resolve_log_path
from utils.helper import TIMESTAMP_FORMAT, format_time, hours_mins, parse_timestamp

LABEL_WIDTH = 45


def _timestamp_arg(value: str):
    try:
        return parse_timestamp(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected {TIMESTAMP_FORMAT}, got {value!r}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Summarize an Emacs timeclock log.")
    parser.add_argument("--log", type=Path, help="Path to the timelog (overrides $TIMELOG).")
    parser.add_argument(
        "--now",
        type=_timestamp_arg,
        help="Reference time as 'YYYY/MM/DD HH:MM:SS' (defaults to the local clock).",
    )
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON.")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log output (-v, -vv)."
    )
    return parser.parse_args(argv)


def render(summary: Summary) -> str:
    rows = [
        ("Average number of hours worked per workday:", hours_mins(summary.avg_worked)),
        ("Number of days worked:", str(summary.num_days_worked)),
        ("Total time worked:", hours_mins(summary.total_worked)),
        ("Cumulative overtime per yesterday:", hours_mins(summary.overtime)),
        ("First punch in today:", format_time(summary.first_punch_in_today)),
        ("Worked today:", hours_mins(summary.worked_today)),
        ("Still to work (8hrs):", hours_mins(summary.still_to_work_8)),
        ("Still to work:", hours_mins(summary.still_to_work)),
        ("Time to leave (8hrs):", format_time(summary.time_to_leave_8)),
        ("Time to leave:", format_time(summary.time_to_leave)),
    ]
    return "\n".join(f"{label:<{LABEL_WIDTH}}{value}" for label, value in rows)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings()
    except TimelogError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    level = settings.log_level
    if args.verbose == 1:
        level = "INFO"
    elif args.verbose > 1:
        level = "DEBUG"
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        path = resolve_log_path(settings, args.log)
        summary = summarize_file(path, args.now)
    except TimelogError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(summary.model_dump_json(indent=2))
    else:
        print(render(summary))
    return 0


if __name__ == "__main__":
    sys.exit(main())
