import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional, Tuple

from models.errors import (
    EmptyClockTypeError,
    EmptyLogError,
    OrderingError,
    ParseError,
    SequenceError,
    TimelogIOError,
    UnknownClockTypeError,
    UnparseableDateError,
)
from models.schema import ClockType, Expectation, PunchEvent, ReducerState, Summary
from utils.helper import iter_numbered_lines, now_local, parse_timestamp

COMMENT = "#"
SPACE = " "
WORKDAY = timedelta(hours=8)

CLOCK_TYPES = {
    "i": ClockType.IN,
    "I": ClockType.IN,
    "o": ClockType.OUT,
    "O": ClockType.OUT,
}


def parse_line(raw: str) -> PunchEvent:
    """Parse one timelog record such as ``i 2022/04/22 21:33:23 project``.

    The first character is the clock type, the timestamp starts after a single
    separator and ends at the second space (or end of line). Anything after the
    timestamp is ignored.
    """
    line = raw.strip()
    if not line:
        raise EmptyClockTypeError()
    clock_type = CLOCK_TYPES.get(line[0])
    if clock_type is None:
        raise UnknownClockTypeError()

    date_time_onward = line[2:]
    time_start = date_time_onward.find(SPACE)
    date_time_end = -1
    if time_start != -1:
        date_time_end = date_time_onward.find(SPACE, time_start + 1)
    if date_time_end == -1:
        date_time_end = len(date_time_onward)
    date_time_slice = date_time_onward[:date_time_end]

    try:
        timestamp = parse_timestamp(date_time_slice)
    except ValueError as exc:
        raise UnparseableDateError(date_time_slice, str(exc)) from exc
    return PunchEvent(clock_type=clock_type, timestamp=timestamp)


class PunchReducer:
    """Single-pass state machine over punch events in file order."""

    def __init__(self):
        self.state = ReducerState()

    def feed(self, line_number: int, event: PunchEvent) -> None:
        state = self.state
        expecting_in = state.expectation == Expectation.EXPECTING_IN
        state.last_line_number = line_number

        if expecting_in and event.clock_type == ClockType.IN:
            current_date = event.timestamp.date()
            if state.last_seen_date != current_date:
                logging.debug(f"New workday {current_date} starts on line {line_number}")
                state.worked_today = timedelta(0)
                state.num_days_worked += 1
                state.first_punch_in_today = event.timestamp
                state.last_seen_date = current_date
            state.open_punch_in = event.timestamp
            state.expectation = Expectation.EXPECTING_OUT
        elif not expecting_in and event.clock_type == ClockType.OUT:
            if event.timestamp < state.open_punch_in:
                message = f"clock out time before clock in time on line {line_number}"
                logging.error(message)
                raise OrderingError(message, line_number)
            self._add_worked(event.timestamp - state.open_punch_in)
            state.open_punch_in = None
            state.expectation = Expectation.EXPECTING_IN
        elif expecting_in:
            if state.num_days_worked == 0:
                message = f"unexpected, clock out on line {line_number}, no previous clock in"
            else:
                message = f"unexpected, clock out on line {line_number}, expecting clock in"
            logging.error(message)
            raise SequenceError(message, line_number)
        else:
            message = f"unexpected, clock in on line {line_number}, expecting clock out"
            logging.error(message)
            raise SequenceError(message, line_number)

    def finalize(self, now: datetime) -> bool:
        """Close a dangling clock-in against ``now``.

        Returns True when the log ended clocked in.
        """
        state = self.state
        if state.expectation == Expectation.EXPECTING_IN:
            return False
        if now < state.open_punch_in:
            message = f"now ({now}) is before clock in time on line {state.last_line_number}"
            logging.error(message)
            raise OrderingError(message, state.last_line_number)
        logging.info(f"Open clock-in at {state.open_punch_in} closed against now {now}")
        self._add_worked(now - state.open_punch_in)
        return True

    def _add_worked(self, delta: timedelta) -> None:
        self.state.worked_today += delta
        self.state.total_worked += delta


def reduce_punches(
    events: Iterable[Tuple[int, PunchEvent]], now: datetime
) -> Tuple[ReducerState, bool]:
    reducer = PunchReducer()
    for line_number, event in events:
        reducer.feed(line_number, event)
    still_clocked_in = reducer.finalize(now)
    return reducer.state, still_clocked_in


def summarize(state: ReducerState, now: datetime, still_clocked_in: bool) -> Summary:
    if state.num_days_worked == 0:
        raise EmptyLogError("no clock in records found, nothing to summarize")

    avg_worked = state.total_worked / state.num_days_worked
    total_worked_until_prev_day = state.total_worked - state.worked_today
    overtime = total_worked_until_prev_day - max(state.num_days_worked - 1, 0) * WORKDAY
    still_to_work_8 = WORKDAY - state.worked_today
    still_to_work = still_to_work_8 - overtime

    first_punch_in_today = state.first_punch_in_today
    if first_punch_in_today is not None and first_punch_in_today.date() != now.date():
        first_punch_in_today = None

    time_to_leave = time_to_leave_8 = None
    if still_clocked_in:
        time_to_leave = now + still_to_work
        time_to_leave_8 = now + still_to_work_8

    return Summary(
        num_days_worked=state.num_days_worked,
        first_punch_in_today=first_punch_in_today,
        avg_worked=avg_worked,
        total_worked=state.total_worked,
        worked_today=state.worked_today,
        overtime=overtime,
        still_to_work=still_to_work,
        still_to_work_8=still_to_work_8,
        time_to_leave=time_to_leave,
        time_to_leave_8=time_to_leave_8,
    )


def parse_events(lines: Iterable[str]):
    for line_number, raw in iter_numbered_lines(lines):
        line = raw.strip()
        if not line or line.startswith(COMMENT):
            logging.debug(f"Skipping line {line_number}")
            continue
        try:
            event = parse_line(line)
        except ParseError as exc:
            exc.line_number = line_number
            raise
        yield line_number, event


def summarize_lines(lines: Iterable[str], now: datetime) -> Summary:
    state, still_clocked_in = reduce_punches(parse_events(lines), now)
    return summarize(state, now, still_clocked_in)


def summarize_file(path: Path, now: Optional[datetime] = None) -> Summary:
    if now is None:
        now = now_local()
    try:
        handle = open(path, encoding="utf-8")
    except OSError as exc:
        raise TimelogIOError(f"unable to read {path}") from exc
    with handle:
        return summarize_lines(handle, now)
