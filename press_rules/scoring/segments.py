"""Segment and press windows, thru-hole tracking and finality."""

from typing import Optional, Union

from ..models.contest import PressConfig, Segment, SegmentId
from ..models.round import PressEvent, Round


def get_default_segments(holes_planned: int) -> list[Segment]:
    """
    Default Nassau segments.

    Eighteen-hole rounds get front (1-9), back (10-18) and total (1-18). A
    nine-hole round has a single front segment that is also the overall match.
    """
    if holes_planned == 9:
        return [Segment(id=SegmentId.FRONT, start_hole=1, end_hole=9)]

    return [
        Segment(id=SegmentId.FRONT, start_hole=1, end_hole=9),
        Segment(id=SegmentId.BACK, start_hole=10, end_hole=18),
        Segment(id=SegmentId.TOTAL, start_hole=1, end_hole=18),
    ]


def find_parent_segment(segments: list[Segment], parent_id: SegmentId) -> Optional[Segment]:
    """Locate a press's parent; on a single-segment round total maps to front."""
    for segment in segments:
        if segment.id == parent_id:
            return segment
    if parent_id == SegmentId.TOTAL and len(segments) == 1:
        return segments[0]
    return None


def get_press_end_hole(press: Union[PressConfig, PressEvent], parent: Segment) -> int:
    """A press ends at its nominal end, never past its parent segment's last hole."""
    if press.end_hole is None:
        return parent.end_hole
    return min(press.end_hole, parent.end_hole)


def get_segment_for_hole(hole: int) -> SegmentId:
    return SegmentId.FRONT if hole <= 9 else SegmentId.BACK


def get_thru_hole(round_: Round, player_ids: list[str], start_hole: int, end_hole: int) -> Optional[int]:
    """
    Highest hole of the unbroken run from ``start_hole`` on which every listed
    player has a recorded score. None when the first hole is incomplete.
    """
    thru_hole: Optional[int] = None
    for hole in range(start_hole, end_hole + 1):
        complete = all(
            (round_.gross(player_id, hole) or 0) > 0 for player_id in player_ids
        )
        if not complete:
            break
        thru_hole = hole
    return thru_hole


def is_contest_final(thru_hole: Optional[int], end_hole: int, is_closed: bool = False) -> bool:
    if is_closed:
        return True
    return thru_hole == end_hole
