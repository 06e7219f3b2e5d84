"""Match play hole results and the cumulative match status machine."""

from dataclasses import dataclass
from typing import Optional

from ..models.results import MatchStatusKind


@dataclass(frozen=True)
class HoleMatchResult:
    """Outcome of one hole between two sides."""
    hole: int
    winner: Optional[str]                            # None when halved
    winner_name: Optional[str] = None
    loser: Optional[str] = None
    margin: int = 0                                  # Stroke difference


@dataclass(frozen=True)
class MatchStatus:
    """Cumulative state of a match after the holes played so far."""
    leader_id: Optional[str]
    leader_name: Optional[str]
    holes_up: int
    holes_played: int
    holes_remaining: int
    is_closed: bool
    status: MatchStatusKind
    closed_on_hole: Optional[int] = None
    result: Optional[str] = None                     # "3&2", "1 UP", "A/S"

    @property
    def is_complete(self) -> bool:
        return self.is_closed or self.holes_remaining == 0


def compute_hole_match_result(
    hole: int,
    score_a: int,
    score_b: int,
    id_a: str,
    id_b: str,
    name_a: Optional[str] = None,
    name_b: Optional[str] = None,
) -> HoleMatchResult:
    """Lower score wins the hole; equal scores halve it."""
    if score_a < score_b:
        return HoleMatchResult(hole=hole, winner=id_a, winner_name=name_a,
                               loser=id_b, margin=score_b - score_a)
    if score_b < score_a:
        return HoleMatchResult(hole=hole, winner=id_b, winner_name=name_b,
                               loser=id_a, margin=score_a - score_b)
    return HoleMatchResult(hole=hole, winner=None)


def compute_match_status(
    hole_results: list[HoleMatchResult],
    total_holes: int,
    id_a: str,
    id_b: str,
    name_a: Optional[str] = None,
    name_b: Optional[str] = None,
    can_close: bool = True,
) -> MatchStatus:
    """
    Compute the cumulative match status from hole results.

    A match closes the moment the margin exceeds the holes remaining in its
    window. Remaining holes are counted from the results played so far, so a
    hole skipped earlier in the window keeps the match open. With
    ``can_close`` False the window is always played out and only reports
    "N UP" or "A/S" once every hole is played.

    Args:
        hole_results: Results for each played hole, in hole order
        total_holes: Number of holes in the match window
        id_a: First side's id
        id_b: Second side's id
        name_a: First side's display name
        name_b: Second side's display name
        can_close: Whether the match may end early

    Returns:
        MatchStatus after the last result
    """
    net_a = 0
    closed_on_hole: Optional[int] = None
    closed_with_remaining = 0
    for index, result in enumerate(hole_results):
        if result.winner == id_a:
            net_a += 1
        elif result.winner == id_b:
            net_a -= 1
        # Unplayed holes anywhere in the window still count as remaining
        remaining = total_holes - (index + 1)
        if can_close and closed_on_hole is None and 0 < remaining < abs(net_a):
            closed_on_hole = result.hole
            closed_with_remaining = remaining

    holes_played = len(hole_results)
    holes_remaining = max(0, total_holes - holes_played)
    holes_up = abs(net_a)

    leader_id: Optional[str] = None
    leader_name: Optional[str] = None
    if net_a > 0:
        leader_id, leader_name = id_a, name_a
    elif net_a < 0:
        leader_id, leader_name = id_b, name_b

    is_closed = closed_on_hole is not None

    if is_closed:
        status = MatchStatusKind.CLOSED
    elif holes_up == 0:
        status = MatchStatusKind.ALL_SQUARE
    elif holes_up == holes_remaining:
        status = MatchStatusKind.DORMIE
    else:
        status = MatchStatusKind.LEADING

    result_text: Optional[str] = None
    if is_closed:
        result_text = f"{holes_up}&{closed_with_remaining}"
    elif holes_remaining == 0:
        result_text = "A/S" if holes_up == 0 else f"{holes_up} UP"

    return MatchStatus(
        leader_id=leader_id,
        leader_name=leader_name,
        holes_up=holes_up,
        holes_played=holes_played,
        holes_remaining=holes_remaining,
        is_closed=is_closed,
        status=status,
        closed_on_hole=closed_on_hole if is_closed else None,
        result=result_text,
    )


def format_match_state(status: MatchStatus, leader_perspective: bool = True) -> str:
    """Short display form: "A/S", "2 UP", "2 DN" or the final result."""
    if status.result:
        return status.result
    if status.holes_up == 0:
        return "A/S"
    return f"{status.holes_up} {'UP' if leader_perspective else 'DN'}"


def describe_match(status: MatchStatus) -> str:
    """Named description, e.g. "Alex 2 UP" or "Blake wins 3&1"."""
    if status.result and status.leader_id is not None:
        return f"{status.leader_name} wins {status.result}"
    if status.holes_up == 0:
        return "All Square"
    return f"{status.leader_name} {status.holes_up} UP"


def side_status_kind(status: MatchStatus, side_id: str) -> MatchStatusKind:
    """Match status seen from one side."""
    if status.is_closed:
        return MatchStatusKind.CLOSED
    if status.status in (MatchStatusKind.DORMIE, MatchStatusKind.ALL_SQUARE):
        return status.status
    if status.leader_id == side_id:
        return MatchStatusKind.LEADING
    return MatchStatusKind.TRAILING


def side_holes_up(status: MatchStatus, side_id: str) -> int:
    """Signed margin from one side's perspective."""
    if status.leader_id is None:
        return 0
    return status.holes_up if status.leader_id == side_id else -status.holes_up
