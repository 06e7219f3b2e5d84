"""
Contest result models.

Every computed contest produces a ContestResult made of four parts: a summary,
family-specific standings, a hole-by-hole audit and the settlement ledger.
Standings are a tagged union: each family has its own dataclass with a fixed
``kind`` tag and only the fields that family needs.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ContestStatus(str, Enum):
    """Lifecycle status of a contest result."""
    LIVE = "live"
    FINAL = "final"
    INVALID = "invalid"


class MatchStatusKind(str, Enum):
    """Match play state from one side's perspective."""
    ALL_SQUARE = "all_square"
    LEADING = "leading"
    TRAILING = "trailing"
    DORMIE = "dormie"
    CLOSED = "closed"


@dataclass(frozen=True)
class ContestSummary:
    """Headline information for a contest."""
    contest_id: str
    name: str
    contest_type: str
    scoring_basis: str
    status: ContestStatus
    thru_hole: Optional[int]
    stakes_summary: Optional[str] = None
    errors: tuple[str, ...] = ()


# Standings variants

@dataclass(frozen=True)
class MatchPlayStanding:
    player_id: str
    player_name: str
    holes_up: int                                    # Positive when winning
    holes_played: int
    holes_remaining: int
    match_status: MatchStatusKind
    result: Optional[str] = None


@dataclass(frozen=True)
class MatchPlayStandings:
    standings: list[MatchPlayStanding]
    kind: str = field(default="match_play", init=False)


@dataclass(frozen=True)
class TeamMatchPlayStanding:
    team_id: str
    team_name: str
    player_ids: tuple[str, ...]
    holes_up: int
    holes_played: int
    holes_remaining: int
    match_status: MatchStatusKind
    result: Optional[str] = None


@dataclass(frozen=True)
class TeamMatchPlayStandings:
    standings: list[TeamMatchPlayStanding]
    kind: str = field(default="team_match_play", init=False)


@dataclass(frozen=True)
class SkinsStanding:
    player_id: str
    player_name: str
    skins_won: int
    total_value: int


@dataclass(frozen=True)
class SkinResultEntry:
    hole: int
    winner_id: Optional[str]                         # None on a carryover
    winner_name: Optional[str]
    skins_won: int
    split_among: tuple[str, ...] = ()                # Final-hole split of unresolved skins


@dataclass(frozen=True)
class SkinsStandings:
    standings: list[SkinsStanding]
    skin_results: list[SkinResultEntry]
    total_skins_awarded: int
    carryover_skins: int
    kind: str = field(default="skins", init=False)


@dataclass(frozen=True)
class StablefordStanding:
    player_id: str
    player_name: str
    total_points: int
    thru_hole: Optional[int]
    rank: int


@dataclass(frozen=True)
class StablefordStandings:
    standings: list[StablefordStanding]
    kind: str = field(default="stableford", init=False)


@dataclass(frozen=True)
class StrokePlayStanding:
    name: str
    gross_total: int
    thru_hole: Optional[int]
    rank: int
    net_total: Optional[int] = None
    player_id: Optional[str] = None
    team_id: Optional[str] = None


@dataclass(frozen=True)
class StrokePlayStandings:
    standings: list[StrokePlayStanding]
    kind: str = field(default="stroke_play", init=False)


@dataclass(frozen=True)
class NassauSegmentResult:
    segment_id: str
    segment_name: str
    start_hole: int
    end_hole: int
    stake: int
    winner_id: Optional[str]
    winner_name: Optional[str]
    holes_up: int
    result: str
    status: ContestStatus
    thru_hole: Optional[int]


@dataclass(frozen=True)
class NassauPressResult:
    press_id: str
    parent_segment: str
    start_hole: int
    end_hole: int
    stake: int
    winner_id: Optional[str]
    winner_name: Optional[str]
    holes_up: int
    result: str
    status: ContestStatus
    thru_hole: Optional[int]


@dataclass(frozen=True)
class NassauNetStanding:
    id: str
    name: str
    segments_won: int
    segments_lost: int
    presses_won: int
    presses_lost: int
    net_units: int


@dataclass(frozen=True)
class NassauStandings:
    segments: list[NassauSegmentResult]
    presses: list[NassauPressResult]
    net_standings: list[NassauNetStanding]
    kind: str = field(default="nassau", init=False)


@dataclass(frozen=True)
class SidePotStanding:
    player_id: str
    player_name: str
    wins: int
    total_winnings: int
    is_holding: Optional[bool] = None                # Snake only


@dataclass(frozen=True)
class SidePotHoleResult:
    hole: int
    winner_id: Optional[str]
    winner_name: Optional[str]
    value: int
    details: Optional[str] = None


@dataclass(frozen=True)
class SidePotStandings:
    pot_type: str
    standings: list[SidePotStanding]
    pot_total: int
    hole_results: list[SidePotHoleResult] = field(default_factory=list)
    kind: str = field(default="side_pot", init=False)


@dataclass(frozen=True)
class HighLowTotalStanding:
    player_id: str
    player_name: str
    low_points: float
    high_points: float
    total_points: float
    net_points: float
    net_value: float


@dataclass(frozen=True)
class PointCarryover:
    low: int = 0
    high: int = 0
    total: int = 0


@dataclass(frozen=True)
class HighLowTotalHoleResult:
    hole: int
    low_winner_ids: tuple[str, ...]
    high_loser_ids: tuple[str, ...]
    total_winner_team_ids: tuple[str, ...]
    carryover: PointCarryover


@dataclass(frozen=True)
class HighLowTotalStandings:
    standings: list[HighLowTotalStanding]
    hole_results: list[HighLowTotalHoleResult]
    tie_rule: str
    is_team_mode: bool
    point_value: int
    kind: str = field(default="high_low_total", init=False)


ContestStandings = Union[
    MatchPlayStandings,
    TeamMatchPlayStandings,
    SkinsStandings,
    StablefordStandings,
    StrokePlayStandings,
    NassauStandings,
    SidePotStandings,
    HighLowTotalStandings,
]


# Audit

@dataclass(frozen=True)
class HolePlayerAudit:
    player_id: str
    player_name: str
    gross: int
    net: Optional[int] = None
    dots: Optional[int] = None
    counted: Optional[bool] = None                   # Best ball only
    stableford_points: Optional[int] = None


@dataclass(frozen=True)
class HoleAuditEntry:
    hole: int
    par: int
    players: list[HolePlayerAudit]
    winner: Optional[Union[str, tuple[str, ...]]] = None  # Player id(s), "halved" or "carryover"
    skin_value: Optional[int] = None
    carryover_count: Optional[int] = None
    match_state: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class ContestAudit:
    hole_by_hole: list[HoleAuditEntry] = field(default_factory=list)
    summary: Optional[str] = None


# Settlement

@dataclass(frozen=True)
class LedgerEntry:
    """A single positive transfer between two players."""
    id: str
    contest_id: str
    from_player_id: str
    to_player_id: str
    amount: int
    description: str


@dataclass(frozen=True)
class ContestSettlement:
    ledger_entries: list[LedgerEntry] = field(default_factory=list)
    balances_by_player_id: dict[str, int] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.ledger_entries


@dataclass(frozen=True)
class AggregatedSettlement:
    """Every ledger entry of a round plus the net balance per player."""
    all_entries: list[LedgerEntry]
    net_balances: dict[str, int]


@dataclass(frozen=True)
class ContestResult:
    summary: ContestSummary
    standings: Optional[ContestStandings]            # None for invalid contests
    audit: ContestAudit
    settlement: ContestSettlement


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a contest config."""
    valid: bool
    errors: tuple[str, ...] = ()

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(valid=not errors, errors=tuple(errors))

    @classmethod
    def combine(cls, *validations: "ValidationResult") -> "ValidationResult":
        errors: list[str] = []
        for validation in validations:
            errors.extend(validation.errors)
        return cls.from_errors(errors)
