from typing import Optional


class TimelogError(Exception):
    """Base exception for everything that aborts a summarization run."""


class ParseError(TimelogError):
    """Raised when a log line cannot be turned into a punch event."""

    reason = "unparseable line"

    def __init__(self, reason: Optional[str] = None, line_number: Optional[int] = None):
        if reason is not None:
            self.reason = reason
        self.line_number = line_number
        super().__init__(self.reason)

    def __str__(self) -> str:
        if self.line_number is None:
            return self.reason
        return f"failed to parse line {self.line_number}: {self.reason}"


class EmptyClockTypeError(ParseError):
    reason = "unable to find clock in/out marker"


class UnknownClockTypeError(ParseError):
    reason = "unknown clock type"


class UnparseableDateError(ParseError):
    def __init__(self, value: str, diagnostic: Optional[str] = None, line_number: Optional[int] = None):
        self.value = value
        self.diagnostic = diagnostic
        reason = f"unable to parse date [{value}]"
        if diagnostic:
            reason = f"{reason}: {diagnostic}"
        super().__init__(reason, line_number)


class SequenceError(TimelogError):
    """Raised when clock-in and clock-out records do not alternate."""

    def __init__(self, message: str, line_number: int):
        self.line_number = line_number
        super().__init__(message)


class OrderingError(TimelogError):
    """Raised when a clock-out (or "now") is earlier than its clock-in."""

    def __init__(self, message: str, line_number: int):
        self.line_number = line_number
        super().__init__(message)


class TimelogIOError(TimelogError):
    """Raised when the log cannot be opened or a line cannot be read."""

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        super().__init__(message)


class EmptyLogError(TimelogError):
    """Raised when the log holds no clock-in record to average over."""


class TimelogNotFoundError(TimelogError):
    """Raised when the resolved log file does not exist."""


class ConfigError(TimelogError):
    """Raised when a setting read from the environment is invalid."""
