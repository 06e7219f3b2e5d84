"""
Nassau: independent front, back and overall matches plus presses.

Segments close early like any match. Presses are sub-matches that start
mid-segment, end no later than their parent segment's last hole, are played
out to their end hole and settle as their own ledger rows.
"""

from dataclasses import dataclass
from typing import Optional

import structlog

from ..models.contest import (
    ContestConfig,
    ContestType,
    Segment,
    SegmentId,
    SegmentStakes,
    get_all_player_ids,
    is_player_participants,
    is_team_participants,
)
from ..models.results import (
    ContestAudit,
    ContestResult,
    ContestStatus,
    HoleAuditEntry,
    LedgerEntry,
    NassauNetStanding,
    NassauPressResult,
    NassauSegmentResult,
    NassauStandings,
)
from ..models.round import Round
from ..scoring.match_play import MatchStatus
from ..scoring.segments import (
    find_parent_segment,
    get_default_segments,
    get_press_end_hole,
    get_thru_hole,
)
from ..settlement.ledger import LedgerSequence, build_settlement, create_empty_settlement
from ..settlement.settlers import settle_match_play, settle_team_match_play
from .base import ContestHandler, Side, build_summary, player_strokes, resolve_sides, run_match

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PressWindow:
    """A press from either the contest config or the round's event log."""
    press_id: str
    parent_segment: SegmentId
    start_hole: int
    end_hole: int
    stake: int


def _window_result(status: MatchStatus) -> str:
    if status.result:
        return status.result
    return "A/S" if status.holes_up == 0 else f"{status.holes_up} UP"


def _window_status(status: MatchStatus) -> ContestStatus:
    return ContestStatus.FINAL if status.is_complete else ContestStatus.LIVE


def _last_hole(run) -> Optional[int]:
    return run.hole_results[-1].hole if run.hole_results else None


class NassauHandler(ContestHandler):
    contest_type = ContestType.NASSAU

    def validate_participants(self, config: ContestConfig) -> list[str]:
        participants = config.participants
        if is_player_participants(participants):
            if len(participants) != 2:
                return [f"Nassau requires exactly 2 players, got {len(participants)}"]
            return []
        if is_team_participants(participants):
            if len(participants) != 2:
                return [f"Nassau requires exactly 2 teams, got {len(participants)}"]
            return []
        return ["Nassau requires either 2 players or 2 teams"]

    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        side_a, side_b = resolve_sides(round_, config)
        player_ids = get_all_player_ids(config.participants)
        name_map = round_.name_map()
        strokes = player_strokes(
            round_, config, player_ids, relative=config.handicap_config.use_relative_handicap
        )

        segments = [s for s in (config.segments or get_default_segments(round_.holes_planned)) if s.active]
        segment_stakes = config.stakes_config.segments or SegmentStakes()
        unit = config.stakes_config.unit

        audit_by_hole: dict[int, HoleAuditEntry] = {}
        segment_results = []
        for segment in segments:
            run = run_match(
                round_, config, side_a, side_b, strokes, name_map,
                segment.start_hole, segment.end_hole,
            )
            for entry in run.audit:
                audit_by_hole.setdefault(entry.hole, entry)
            status = run.status
            segment_results.append(NassauSegmentResult(
                segment_id=SegmentId(segment.id).value,
                segment_name=segment.display_name,
                start_hole=segment.start_hole,
                end_hole=segment.end_hole,
                stake=segment_stakes.for_segment(segment.id, unit),
                winner_id=status.leader_id,
                winner_name=status.leader_name,
                holes_up=status.holes_up,
                result=_window_result(status),
                status=_window_status(status),
                thru_hole=_last_hole(run),
            ))

        press_results = []
        for press in self._collect_presses(round_, config, segments):
            run = run_match(
                round_, config, side_a, side_b, strokes, name_map,
                press.start_hole, press.end_hole, can_close=False,
            )
            status = run.status
            press_results.append(NassauPressResult(
                press_id=press.press_id,
                parent_segment=press.parent_segment.value,
                start_hole=press.start_hole,
                end_hole=press.end_hole,
                stake=press.stake,
                winner_id=status.leader_id,
                winner_name=status.leader_name,
                holes_up=status.holes_up,
                result=_window_result(status),
                status=_window_status(status),
                thru_hole=_last_hole(run),
            ))

        max_end = max((segment.end_hole for segment in segments), default=round_.last_hole)
        thru_hole = get_thru_hole(round_, player_ids, 1, max_end)
        is_final = all(
            row.status == ContestStatus.FINAL for row in segment_results + press_results
        )

        standings = NassauStandings(
            segments=segment_results,
            presses=press_results,
            net_standings=[
                self._net_standing(side, segment_results, press_results)
                for side in (side_a, side_b)
            ],
        )

        settlement = create_empty_settlement()
        if is_final:
            entries: list[LedgerEntry] = []
            for row in segment_results:
                entries.extend(self._settle_row(
                    sequence, config, side_a, side_b, row.winner_id, row.holes_up, row.stake,
                    f"{row.segment_name}: {row.winner_name} wins {row.result}",
                ))
            for row in press_results:
                entries.extend(self._settle_row(
                    sequence, config, side_a, side_b, row.winner_id, row.holes_up, row.stake,
                    f"Press ({row.start_hole}-{row.end_hole}): {row.winner_name} wins {row.result}",
                ))
            settlement = build_settlement(entries)

        if config.stakes_config.segments is not None:
            stakes_summary = ", ".join(
                f"{row.segment_name}: {row.stake}" for row in segment_results
            )
        else:
            stakes_summary = f"{unit} units/hole per segment"

        completed = sum(1 for row in segment_results if row.status == ContestStatus.FINAL)
        audit = ContestAudit(
            hole_by_hole=[audit_by_hole[hole] for hole in sorted(audit_by_hole)],
            summary=f"{completed}/{len(segment_results)} segments complete, {len(press_results)} presses",
        )

        return ContestResult(
            summary=build_summary(config, is_final, thru_hole, stakes_summary),
            standings=standings,
            audit=audit,
            settlement=settlement,
        )

    def _collect_presses(
        self, round_: Round, config: ContestConfig, segments: list[Segment]
    ) -> list[PressWindow]:
        """Presses from the config first, then from the round's event log."""
        declared = [(press.start_hole, press) for press in config.options.presses]
        declared += [(event.effective_start_hole, event) for event in round_.meta.events.presses]

        windows = []
        for start_hole, press in declared:
            parent = find_parent_segment(segments, SegmentId(press.parent_segment))
            if parent is None:
                logger.debug("Press skipped, parent segment not in play",
                             press_id=press.press_id, parent_segment=SegmentId(press.parent_segment).value)
                continue

            end_hole = get_press_end_hole(press, parent)
            if start_hole < parent.start_hole or start_hole > end_hole:
                logger.debug("Press skipped, start outside parent window",
                             press_id=press.press_id, start_hole=start_hole, end_hole=end_hole)
                continue

            windows.append(PressWindow(
                press_id=press.press_id,
                parent_segment=SegmentId(parent.id),
                start_hole=start_hole,
                end_hole=end_hole,
                stake=press.stake,
            ))
        return windows

    def _settle_row(
        self,
        sequence: LedgerSequence,
        config: ContestConfig,
        side_a: Side,
        side_b: Side,
        winner_id: Optional[str],
        holes_up: int,
        stake: int,
        description: str,
    ) -> list[LedgerEntry]:
        if winner_id is None or holes_up == 0:
            return []

        winner, loser = (side_a, side_b) if winner_id == side_a.id else (side_b, side_a)
        if winner.is_team:
            return settle_team_match_play(
                sequence, config.contest_id, winner.team, loser.team, holes_up, stake, description
            )
        return settle_match_play(
            sequence, config.contest_id, winner.id, loser.id, holes_up, stake, description
        )

    def _net_standing(
        self,
        side: Side,
        segments: list[NassauSegmentResult],
        presses: list[NassauPressResult],
    ) -> NassauNetStanding:
        segments_won = segments_lost = presses_won = presses_lost = 0
        net_units = 0

        for row in segments:
            if row.status != ContestStatus.FINAL or row.winner_id is None:
                continue
            if row.winner_id == side.id:
                segments_won += 1
                net_units += row.stake * row.holes_up
            else:
                segments_lost += 1
                net_units -= row.stake * row.holes_up

        for row in presses:
            if row.status != ContestStatus.FINAL or row.winner_id is None:
                continue
            if row.winner_id == side.id:
                presses_won += 1
                net_units += row.stake * row.holes_up
            else:
                presses_lost += 1
                net_units -= row.stake * row.holes_up

        return NassauNetStanding(
            id=side.id,
            name=side.name,
            segments_won=segments_won,
            segments_lost=segments_lost,
            presses_won=presses_won,
            presses_lost=presses_lost,
            net_units=net_units,
        )
