"""
Handicap stroke allocation.

Stroke index 1 is the hardest hole. A course handicap up to 18 gives one stroke
(a "dot") on every hole whose stroke index is at or below the handicap; a
handicap between 19 and 36 adds a second stroke on holes whose stroke index is
at or below ``handicap - 18``. Negative handicaps give strokes back, so their
allocation is returned sign-flipped.
"""

from typing import Optional

from ..models.contest import HandicapConfig

HOLES = range(1, 19)


def compute_handicap_strokes(stroke_index: dict[int, int], course_handicap: int) -> dict[int, int]:
    """
    Compute handicap strokes per hole.

    Args:
        stroke_index: Stroke index (1-18) per hole number
        course_handicap: Player's course handicap, negative when giving strokes

    Returns:
        Dots per hole for holes 1-18 (positive receiving, negative giving)
    """
    giving = course_handicap < 0
    abs_handicap = abs(course_handicap)
    base_strokes = min(abs_handicap, 18)
    extra_strokes = max(0, abs_handicap - 18)

    strokes: dict[int, int] = {}
    for hole in HOLES:
        index = stroke_index.get(hole)
        dots = 0
        if index is not None:
            if index <= base_strokes:
                dots += 1
            if index <= extra_strokes:
                dots += 1
        strokes[hole] = -dots if giving else dots

    return strokes


def compute_relative_handicaps(handicaps: dict[str, int]) -> dict[str, int]:
    """Re-base handicaps so the lowest player plays off scratch."""
    if not handicaps:
        return {}

    lowest = min(handicaps.values())
    return {player_id: handicap - lowest for player_id, handicap in handicaps.items()}


def compute_net_score(gross: int, dots: int, config: Optional[HandicapConfig] = None) -> int:
    """Net score for a hole, floored at 1 unless the config allows lower."""
    net = gross - dots
    allow_below_1 = config.allow_below_1 if config is not None else False
    if not allow_below_1 and net < 1:
        return 1
    return net


def get_total_strokes_in_range(strokes: dict[int, int], start_hole: int, end_hole: int) -> int:
    return sum(strokes.get(hole, 0) for hole in range(start_hole, end_hole + 1))


def get_holes_with_dots(strokes: dict[int, int]) -> list[int]:
    return [hole for hole in HOLES if strokes.get(hole, 0) > 0]


def get_holes_with_double_dots(strokes: dict[int, int]) -> list[int]:
    return [hole for hole in HOLES if strokes.get(hole, 0) >= 2]


def strokes_for_players(
    stroke_index: dict[int, int],
    handicaps: dict[str, int],
    use_relative: bool = False,
) -> dict[str, dict[int, int]]:
    """Allocate strokes for several players, optionally off the lowest handicap."""
    effective = compute_relative_handicaps(handicaps) if use_relative else dict(handicaps)
    return {
        player_id: compute_handicap_strokes(stroke_index, handicap)
        for player_id, handicap in effective.items()
    }
