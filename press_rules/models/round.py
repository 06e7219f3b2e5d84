"""
Round snapshot models.

A Round is the immutable input to every contest computation: the roster, the
tee's par and stroke index per hole, the sparse gross strokes recorded so far
and the auxiliary events logged during play.
"""

from dataclasses import dataclass, field
from typing import Optional

from .contest import SegmentId


@dataclass(frozen=True)
class PlayerData:
    """A player in the round."""
    id: str
    name: str
    course_handicap: int = 0                         # 0 plays gross


@dataclass(frozen=True)
class TeeData:
    """Par and stroke index per hole number (1-18)."""
    par: dict[int, int]
    stroke_index: dict[int, int]                     # 1 = hardest hole
    rating: Optional[float] = None
    slope: Optional[int] = None


@dataclass(frozen=True)
class PressEvent:
    """Press declared during play."""
    press_id: str
    parent_segment: SegmentId
    initiated_on_hole: int
    stake: int
    start_hole: Optional[int] = None                 # Defaults to the next hole
    end_hole: Optional[int] = None                   # Nominal window end, clamped to parent
    initiator_player_id: Optional[str] = None

    @property
    def effective_start_hole(self) -> int:
        if self.start_hole is not None:
            return self.start_hole
        return self.initiated_on_hole + 1


@dataclass(frozen=True)
class CtpEvent:
    """Closest-to-pin winner on a hole."""
    hole: int
    winner_player_id: str
    distance_ft: Optional[float] = None


@dataclass(frozen=True)
class LongDriveEvent:
    """Long drive winner on a hole."""
    hole: int
    winner_player_id: str
    distance_yds: Optional[float] = None


@dataclass(frozen=True)
class ThreePuttEvent:
    """A three-putt, used to pass the snake."""
    hole: int
    player_id: str


@dataclass(frozen=True)
class RoundEvents:
    """Events recorded during play."""
    presses: tuple[PressEvent, ...] = ()
    ctp: tuple[CtpEvent, ...] = ()
    long_drive: tuple[LongDriveEvent, ...] = ()
    three_putts: tuple[ThreePuttEvent, ...] = ()


@dataclass(frozen=True)
class RoundMeta:
    """Round metadata."""
    holes_planned: int = 18                          # 9 or 18
    events: RoundEvents = field(default_factory=RoundEvents)


@dataclass(frozen=True)
class Round:
    """Complete round snapshot handed to the engine."""
    tee: TeeData
    players: tuple[PlayerData, ...]
    gross_strokes: dict[str, dict[int, int]]
    meta: RoundMeta = field(default_factory=RoundMeta)

    @property
    def holes_planned(self) -> int:
        return self.meta.holes_planned

    @property
    def last_hole(self) -> int:
        """Last hole of the round (9 for nine-hole rounds, else 18)."""
        return 9 if self.meta.holes_planned == 9 else 18

    def gross(self, player_id: str, hole: int) -> Optional[int]:
        """Recorded gross strokes, or None when the hole has not been played."""
        return self.gross_strokes.get(player_id, {}).get(hole)

    def par(self, hole: int) -> int:
        return self.tee.par.get(hole, 0)

    def player(self, player_id: str) -> Optional[PlayerData]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def player_name(self, player_id: str) -> str:
        player = self.player(player_id)
        return player.name if player else player_id

    def course_handicap(self, player_id: str) -> int:
        player = self.player(player_id)
        return player.course_handicap if player else 0

    def name_map(self) -> dict[str, str]:
        return {player.id: player.name for player in self.players}

    def player_ids(self) -> set[str]:
        return {player.id for player in self.players}
