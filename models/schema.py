from datetime import datetime, date, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class ClockType(str, Enum):
    IN = "IN"
    OUT = "OUT"


class Expectation(str, Enum):
    EXPECTING_IN = "EXPECTING_IN"
    EXPECTING_OUT = "EXPECTING_OUT"


class PunchEvent(BaseModel):
    clock_type: ClockType
    timestamp: datetime


class ReducerState(BaseModel):
    expectation: Expectation = Expectation.EXPECTING_IN
    open_punch_in: Optional[datetime] = None
    worked_today: timedelta = timedelta(0)
    first_punch_in_today: Optional[datetime] = None
    total_worked: timedelta = timedelta(0)
    num_days_worked: int = 0
    last_seen_date: Optional[date] = None
    last_line_number: int = 0


class Summary(BaseModel):
    num_days_worked: int
    first_punch_in_today: Optional[datetime] = None
    avg_worked: timedelta
    total_worked: timedelta
    worked_today: timedelta
    overtime: timedelta
    still_to_work: timedelta
    still_to_work_8: timedelta
    time_to_leave: Optional[datetime] = None
    time_to_leave_8: Optional[datetime] = None
