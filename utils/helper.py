import re
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Optional, Tuple

from models.errors import TimelogIOError

# Emacs timeclock writes "YYYY/MM/DD HH:MM:SS", zero-padded, 24-hour clock.
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"
TIMESTAMP_PATTERN = re.compile(r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}")
ABSENT = "-"


def parse_timestamp(value: str) -> datetime:
    # strptime alone accepts unpadded fields like "2022/1/1 9:0:0"
    if not TIMESTAMP_PATTERN.fullmatch(value):
        raise ValueError(f"time data {value!r} does not match format {TIMESTAMP_FORMAT!r}")
    return datetime.strptime(value, TIMESTAMP_FORMAT)


def now_local() -> datetime:
    """Current local wall-clock time at the log's one-second resolution."""
    return datetime.now().replace(microsecond=0)


def iter_numbered_lines(source: Iterable[str]) -> Iterator[Tuple[int, str]]:
    iterator = iter(source)
    line_number = 0
    while True:
        line_number += 1
        try:
            line = next(iterator)
        except StopIteration:
            return
        except (OSError, UnicodeDecodeError) as exc:
            raise TimelogIOError(f"failed to read line {line_number}", line_number) from exc
        yield line_number, line


def hours_mins(duration: timedelta) -> str:
    sign = "-" if duration < timedelta(0) else ""
    total_minutes = int(abs(duration).total_seconds()) // 60
    hours, minutes = divmod(total_minutes, 60)
    return f"{sign}{hours} hours, {minutes} minutes"


def format_time(value: Optional[datetime]) -> str:
    if value is None:
        return ABSENT
    return value.strftime("%H:%M")
