"""
Contest configuration models.

These immutable structures describe one contest: its type tag, participants,
scoring basis, stakes, handicap handling and type-specific options.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ContestType(str, Enum):
    """Contest type tags understood by the built-in handlers."""
    MATCH_PLAY_SINGLES = "match_play_singles"
    MATCH_PLAY_BESTBALL = "match_play_bestball"
    NASSAU = "nassau"
    SKINS = "skins"
    BESTBALL_STROKE = "bestball_stroke"
    STABLEFORD = "stableford"
    CTP = "ctp"
    LONG_DRIVE = "long_drive"
    BIRDIE_POOL = "birdie_pool"
    SNAKE = "snake"
    HIGH_LOW_TOTAL = "high_low_total"


class ScoringBasis(str, Enum):
    """Whether hole scores are compared gross or net of handicap strokes."""
    GROSS = "gross"
    NET = "net"


class SegmentId(str, Enum):
    """Independently settled scoring windows."""
    FRONT = "front"
    BACK = "back"
    TOTAL = "total"


class TieRule(str, Enum):
    """Tie handling for high-low-total points."""
    PUSH = "push"
    SPLIT = "split"
    CARRYOVER = "carryover"


@dataclass(frozen=True)
class Team:
    """Team definition for team-based contests."""
    id: str
    player_ids: tuple[str, ...]
    name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or f"Team {self.id}"


@dataclass(frozen=True)
class HandicapConfig:
    """Handicap handling for net contests."""
    use_relative_handicap: bool = True               # Lowest handicap plays off scratch
    allow_below_1: bool = False                      # Floor net hole scores at 1


@dataclass(frozen=True)
class SegmentStakes:
    """Per-segment stakes for Nassau."""
    front: Optional[int] = None
    back: Optional[int] = None
    total: Optional[int] = None

    def for_segment(self, segment_id: SegmentId, default: int) -> int:
        value = getattr(self, SegmentId(segment_id).value)
        return default if value is None else value


@dataclass(frozen=True)
class StakesConfig:
    """Stakes configuration in integer units."""
    unit: int
    pot_total: Optional[int] = None
    segments: Optional[SegmentStakes] = None


@dataclass(frozen=True)
class StablefordTable:
    """Stableford points per score band relative to par."""
    albatross: int = 5
    eagle: int = 4
    birdie: int = 3
    par: int = 2
    bogey: int = 1
    double_bogey: int = 0
    worse: int = 0


@dataclass(frozen=True)
class Segment:
    """A scoring window within the round."""
    id: SegmentId
    start_hole: int
    end_hole: int
    active: bool = True

    @property
    def hole_count(self) -> int:
        return self.end_hole - self.start_hole + 1

    @property
    def display_name(self) -> str:
        if self.id == SegmentId.FRONT:
            return "Front 9"
        if self.id == SegmentId.BACK:
            return "Back 9"
        return "Total"


@dataclass(frozen=True)
class PressConfig:
    """A press defined up front in the contest config."""
    press_id: str
    parent_segment: SegmentId
    start_hole: int
    stake: int
    end_hole: Optional[int] = None


@dataclass(frozen=True)
class CarryoverRules:
    """Skins carryover behaviour."""
    enabled: bool = True
    max_multiplier: Optional[int] = None             # None means unlimited


@dataclass(frozen=True)
class ContestOptions:
    """Contest-specific options."""
    stableford_table: Optional[StablefordTable] = None
    presses: tuple[PressConfig, ...] = ()
    carryover_rules: Optional[CarryoverRules] = None
    designated_holes: tuple[int, ...] = ()
    per_player_buy_in: Optional[int] = None
    tie_rule: str = TieRule.PUSH.value


Participants = Union[tuple[str, ...], tuple[Team, ...]]


@dataclass(frozen=True)
class ContestConfig:
    """Configuration of a single contest."""
    contest_id: str
    name: str
    contest_type: str
    participants: Participants
    stakes_config: StakesConfig
    scoring_basis: ScoringBasis = ScoringBasis.GROSS
    handicap_config: HandicapConfig = field(default_factory=HandicapConfig)
    segments: Optional[tuple[Segment, ...]] = None
    options: ContestOptions = field(default_factory=ContestOptions)

    @property
    def type_key(self) -> str:
        """Contest type as a plain string tag."""
        if isinstance(self.contest_type, Enum):
            return self.contest_type.value
        return str(self.contest_type)

    @property
    def is_net(self) -> bool:
        return self.scoring_basis == ScoringBasis.NET


def is_team_participants(participants: Participants) -> bool:
    """True when participants are teams rather than player ids."""
    return len(participants) > 0 and all(isinstance(p, Team) for p in participants)


def is_player_participants(participants: Participants) -> bool:
    """True when participants are plain player ids."""
    return len(participants) > 0 and all(isinstance(p, str) for p in participants)


def get_all_player_ids(participants: Participants) -> list[str]:
    """Flatten participants into player ids, preserving order."""
    player_ids: list[str] = []
    for participant in participants:
        if isinstance(participant, Team):
            player_ids.extend(participant.player_ids)
        else:
            player_ids.append(participant)
    return player_ids
