"""
Round data error classifications.

These exceptions are raised by the parsers when a round snapshot or a contest
configuration cannot be turned into the engine's typed models.
"""

from typing import Any, Optional


class RoundDataError(Exception):
    """Base class for input data issues that can be reported to the caller."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedRoundError(RoundDataError):
    """Round data exists but is in an incorrect format."""

    def __init__(self, message: str, field: Optional[str] = None,
                 raw_value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.raw_value = raw_value


class MissingRoundDataError(RoundDataError):
    """A required section of the round snapshot is absent."""

    def __init__(self, message: str, section: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.section = section


class MalformedContestConfigError(RoundDataError):
    """Contest configuration cannot be parsed into a ContestConfig."""

    def __init__(self, message: str, contest_id: Optional[str] = None,
                 field: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.contest_id = contest_id
        self.field = field
