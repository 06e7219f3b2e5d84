"""Two-team best-ball stroke play: lowest cumulative team best ball wins."""

from typing import Optional

from ..models.contest import ContestConfig, ContestType, get_all_player_ids, is_team_participants
from ..models.results import (
    ContestAudit,
    ContestResult,
    HoleAuditEntry,
    StrokePlayStanding,
    StrokePlayStandings,
)
from ..models.round import Round
from ..scoring.points import compute_best_ball_score
from ..scoring.segments import get_thru_hole, is_contest_final
from ..settlement.ledger import LedgerSequence, build_settlement, create_empty_settlement
from ..settlement.settlers import settle_team_match_play
from .base import (
    ContestHandler,
    build_summary,
    player_audit,
    player_strokes,
    resolve_sides,
    side_score,
)


class BestballStrokeHandler(ContestHandler):
    contest_type = ContestType.BESTBALL_STROKE

    def validate_participants(self, config: ContestConfig) -> list[str]:
        if not is_team_participants(config.participants):
            return ["Best Ball Stroke Play requires team participants"]
        if len(config.participants) != 2:
            return [f"Best Ball Stroke Play requires exactly 2 teams, got {len(config.participants)}"]
        return []

    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        start_hole, end_hole = 1, round_.last_hole
        side_a, side_b = resolve_sides(round_, config)
        player_ids = get_all_player_ids(config.participants)
        name_map = round_.name_map()
        strokes = player_strokes(round_, config, player_ids)

        totals = {side_a.id: 0, side_b.id: 0}
        gross_totals = {side_a.id: 0, side_b.id: 0}
        last_complete: Optional[int] = None
        audit_entries = []

        for hole in range(start_hole, end_hole + 1):
            best_a = side_score(round_, config, strokes, side_a, hole, name_map)
            best_b = side_score(round_, config, strokes, side_b, hole, name_map)
            if best_a is None or best_b is None:
                continue

            totals[side_a.id] += best_a.score
            totals[side_b.id] += best_b.score
            for side in (side_a, side_b):
                best_gross = compute_best_ball_score(
                    {player_id: round_.gross(player_id, hole) for player_id in side.player_ids}
                )
                gross_totals[side.id] += best_gross.score if best_gross else 0
            last_complete = hole

            counted_ids = {best_a.counted_player_id, best_b.counted_player_id}
            players = [
                audit for audit in (
                    player_audit(round_, config, strokes, player_id, hole, name_map,
                                 counted=player_id in counted_ids)
                    for player_id in player_ids
                )
                if audit is not None
            ]
            audit_entries.append(HoleAuditEntry(
                hole=hole,
                par=round_.par(hole),
                players=players,
                notes=(
                    f"{side_a.name}: {best_a.counted_player_name} {best_a.score} "
                    f"(Total: {totals[side_a.id]}), "
                    f"{side_b.name}: {best_b.counted_player_name} {best_b.score} "
                    f"(Total: {totals[side_b.id]})"
                ),
            ))

        thru_hole = get_thru_hole(round_, player_ids, start_hole, end_hole)
        is_final = is_contest_final(thru_hole, end_hole)

        total_a, total_b = totals[side_a.id], totals[side_b.id]
        stroke_diff = abs(total_a - total_b)
        winner = loser = None
        if total_a < total_b:
            winner, loser = side_a, side_b
        elif total_b < total_a:
            winner, loser = side_b, side_a

        rows = [
            StrokePlayStanding(
                team_id=side.id,
                name=side.name,
                gross_total=gross_totals[side.id],
                net_total=totals[side.id] if config.is_net else None,
                thru_hole=last_complete,
                rank=1 if totals[side.id] <= totals[other.id] else 2,
            )
            for side, other in ((side_a, side_b), (side_b, side_a))
        ]
        standings = StrokePlayStandings(standings=sorted(rows, key=lambda row: row.rank))

        settlement = create_empty_settlement()
        if is_final and winner is not None and stroke_diff > 0:
            settlement = build_settlement(settle_team_match_play(
                sequence,
                config.contest_id,
                winner.team,
                loser.team,
                stroke_diff,
                config.stakes_config.unit,
                f"{config.name}: {winner.name} wins by {stroke_diff}",
            ))

        if winner is not None:
            summary_text = f"{winner.name} wins by {stroke_diff} strokes ({total_a} vs {total_b})"
        else:
            summary_text = f"Tied at {total_a}"

        return ContestResult(
            summary=build_summary(
                config, is_final, thru_hole, f"{config.stakes_config.unit} units/stroke"
            ),
            standings=standings,
            audit=ContestAudit(hole_by_hole=audit_entries, summary=summary_text),
            settlement=settlement,
        )
