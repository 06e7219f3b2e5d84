"""Best ball selection, stableford points and skins winners."""

from dataclasses import dataclass, field
from typing import Optional

from ..models.contest import StablefordTable

DEFAULT_STABLEFORD_TABLE = StablefordTable()


@dataclass(frozen=True)
class BestBallResult:
    """Lowest score for a side on one hole and who made it."""
    score: int
    counted_player_id: str
    counted_player_name: Optional[str] = None


@dataclass(frozen=True)
class SkinResult:
    """Skin outcome for a single hole."""
    hole: int
    winner_id: Optional[str]                         # None on a tie
    skin_count: int                                  # 1 + carryovers at stake
    scores: dict[str, int] = field(default_factory=dict)
    winner_name: Optional[str] = None
    tied_player_ids: tuple[str, ...] = ()


def compute_best_ball_score(
    scores_by_player: dict[str, Optional[int]],
    name_map: Optional[dict[str, str]] = None,
) -> Optional[BestBallResult]:
    """
    Pick the lowest present score for a team.

    Ties go to the first player in ``scores_by_player`` iteration order, which
    callers build in roster order so the counted player is stable.
    """
    best_score: Optional[int] = None
    best_player: Optional[str] = None

    for player_id, score in scores_by_player.items():
        if score is None:
            continue
        if best_score is None or score < best_score:
            best_score = score
            best_player = player_id

    if best_score is None or best_player is None:
        return None

    return BestBallResult(
        score=best_score,
        counted_player_id=best_player,
        counted_player_name=(name_map or {}).get(best_player),
    )


def compute_stableford_points(
    net_score: int,
    par: int,
    table: StablefordTable = DEFAULT_STABLEFORD_TABLE,
) -> int:
    """Stableford points for a net score relative to par."""
    diff = net_score - par
    if diff <= -3:
        return table.albatross
    if diff == -2:
        return table.eagle
    if diff == -1:
        return table.birdie
    if diff == 0:
        return table.par
    if diff == 1:
        return table.bogey
    if diff == 2:
        return table.double_bogey
    return table.worse


def get_score_name(net_score: int, par: int) -> str:
    diff = net_score - par
    if diff <= -3:
        return "Albatross"
    names = {
        -2: "Eagle",
        -1: "Birdie",
        0: "Par",
        1: "Bogey",
        2: "Double Bogey",
        3: "Triple Bogey",
    }
    return names.get(diff, f"+{diff}")


def compute_skin_winner(
    hole: int,
    scores: dict[str, int],
    name_map: Optional[dict[str, str]] = None,
    carryover: int = 0,
) -> SkinResult:
    """A unique low score wins every skin at stake; any tie at the low leaves it unwon."""
    skin_count = carryover + 1
    if not scores:
        return SkinResult(hole=hole, winner_id=None, skin_count=skin_count, scores=dict(scores))

    lowest = min(scores.values())
    low_players = tuple(player_id for player_id, score in scores.items() if score == lowest)

    if len(low_players) == 1:
        winner_id = low_players[0]
        return SkinResult(
            hole=hole,
            winner_id=winner_id,
            skin_count=skin_count,
            scores=dict(scores),
            winner_name=(name_map or {}).get(winner_id),
        )

    return SkinResult(
        hole=hole,
        winner_id=None,
        skin_count=skin_count,
        scores=dict(scores),
        tied_player_ids=low_players,
    )
