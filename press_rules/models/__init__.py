"""
Typed models for round input, contest configuration and contest results.
"""

from .contest import (
    CarryoverRules,
    ContestConfig,
    ContestOptions,
    ContestType,
    HandicapConfig,
    PressConfig,
    ScoringBasis,
    Segment,
    SegmentId,
    SegmentStakes,
    StablefordTable,
    StakesConfig,
    Team,
    TieRule,
    get_all_player_ids,
    is_player_participants,
    is_team_participants,
)
from .results import (
    AggregatedSettlement,
    ContestAudit,
    ContestResult,
    ContestSettlement,
    ContestStatus,
    ContestSummary,
    HoleAuditEntry,
    HolePlayerAudit,
    LedgerEntry,
    ValidationResult,
)
from .round import (
    CtpEvent,
    LongDriveEvent,
    PlayerData,
    PressEvent,
    Round,
    RoundEvents,
    RoundMeta,
    TeeData,
    ThreePuttEvent,
)

__all__ = [
    # Round input
    "CtpEvent",
    "LongDriveEvent",
    "PlayerData",
    "PressEvent",
    "Round",
    "RoundEvents",
    "RoundMeta",
    "TeeData",
    "ThreePuttEvent",
    # Contest configuration
    "CarryoverRules",
    "ContestConfig",
    "ContestOptions",
    "ContestType",
    "HandicapConfig",
    "PressConfig",
    "ScoringBasis",
    "Segment",
    "SegmentId",
    "SegmentStakes",
    "StablefordTable",
    "StakesConfig",
    "Team",
    "TieRule",
    "get_all_player_ids",
    "is_player_participants",
    "is_team_participants",
    # Results
    "AggregatedSettlement",
    "ContestAudit",
    "ContestResult",
    "ContestSettlement",
    "ContestStatus",
    "ContestSummary",
    "HoleAuditEntry",
    "HolePlayerAudit",
    "LedgerEntry",
    "ValidationResult",
]
