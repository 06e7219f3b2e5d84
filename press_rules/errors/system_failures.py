"""
System failure error classifications.

These exceptions indicate a broken contract between engine components, such as
a handler raising on validated input or a settler producing a negative amount.
"""

from typing import Any, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable engine failures."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ContestComputationError(SystemFailureError):
    """A contest handler failed while computing a validated contest."""

    def __init__(self, message: str, contest_id: Optional[str] = None,
                 contest_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.contest_id = contest_id
        self.contest_type = contest_type


class InvalidLedgerAmountError(SystemFailureError):
    """A ledger entry was requested with a negative amount."""

    def __init__(self, message: str, amount: Optional[int] = None,
                 contest_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.amount = amount
        self.contest_id = contest_id


class UnknownContestTypeError(SystemFailureError):
    """No handler is registered for the requested contest type."""

    def __init__(self, message: str, contest_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.contest_type = contest_type
