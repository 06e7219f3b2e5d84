"""Head-to-head match play between two players over the whole round."""

from ..models.contest import ContestConfig, ContestType, is_player_participants
from ..models.results import (
    ContestAudit,
    ContestResult,
    MatchPlayStanding,
    MatchPlayStandings,
)
from ..models.round import Round
from ..scoring.match_play import describe_match, side_holes_up, side_status_kind
from ..scoring.segments import get_thru_hole, is_contest_final
from ..settlement.ledger import LedgerSequence, build_settlement, create_empty_settlement
from ..settlement.settlers import settle_match_play
from .base import ContestHandler, build_summary, player_strokes, resolve_sides, run_match


class MatchPlaySinglesHandler(ContestHandler):
    contest_type = ContestType.MATCH_PLAY_SINGLES

    def validate_participants(self, config: ContestConfig) -> list[str]:
        if not is_player_participants(config.participants):
            return ["Match Play Singles requires player participants (not teams)"]
        if len(config.participants) != 2:
            return [f"Match Play Singles requires exactly 2 players, got {len(config.participants)}"]
        return []

    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        start_hole, end_hole = 1, round_.last_hole
        total_holes = end_hole - start_hole + 1
        side_a, side_b = resolve_sides(round_, config)
        player_ids = [side_a.id, side_b.id]
        name_map = round_.name_map()

        strokes = player_strokes(
            round_, config, player_ids, relative=config.handicap_config.use_relative_handicap
        )
        run = run_match(round_, config, side_a, side_b, strokes, name_map, start_hole, end_hole)
        status = run.status

        thru_hole = get_thru_hole(round_, player_ids, start_hole, end_hole)
        is_final = is_contest_final(thru_hole, end_hole, status.is_closed)

        holes_played = len(run.hole_results)
        standings = MatchPlayStandings(standings=[
            MatchPlayStanding(
                player_id=side.id,
                player_name=side.name,
                holes_up=side_holes_up(status, side.id),
                holes_played=holes_played,
                holes_remaining=total_holes - holes_played,
                match_status=side_status_kind(status, side.id),
                result=status.result,
            )
            for side in (side_a, side_b)
        ])

        settlement = create_empty_settlement()
        if is_final and status.leader_id is not None and status.holes_up > 0:
            loser_id = side_b.id if status.leader_id == side_a.id else side_a.id
            outcome = status.result or f"{status.holes_up} UP"
            settlement = build_settlement(settle_match_play(
                sequence,
                config.contest_id,
                status.leader_id,
                loser_id,
                status.holes_up,
                config.stakes_config.unit,
                f"{config.name}: {status.leader_name} wins {outcome}",
            ))

        return ContestResult(
            summary=build_summary(
                config, is_final, thru_hole, f"{config.stakes_config.unit} units/hole"
            ),
            standings=standings,
            audit=ContestAudit(hole_by_hole=run.audit, summary=describe_match(status)),
            settlement=settlement,
        )
