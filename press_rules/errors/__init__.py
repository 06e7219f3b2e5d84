"""
Error classification for round ingestion and contest computation.

Round data errors describe structurally broken input and can be reported back
to the caller. System failures describe broken contracts inside the engine.
"""

from .data_quality import (
    RoundDataError,
    MalformedRoundError,
    MissingRoundDataError,
    MalformedContestConfigError,
)
from .system_failures import (
    SystemFailureError,
    ContestComputationError,
    InvalidLedgerAmountError,
    UnknownContestTypeError,
)

__all__ = [
    # Round Data Errors
    "RoundDataError",
    "MalformedRoundError",
    "MissingRoundDataError",
    "MalformedContestConfigError",
    # System Failures
    "SystemFailureError",
    "ContestComputationError",
    "InvalidLedgerAmountError",
    "UnknownContestTypeError",
]
