"""Individual stableford: points per hole against par, highest total wins."""

from typing import Optional

from ..models.contest import ContestConfig, ContestType, StablefordTable, is_player_participants
from ..models.results import (
    ContestAudit,
    ContestResult,
    HoleAuditEntry,
    StablefordStanding,
    StablefordStandings,
)
from ..models.round import Round
from ..scoring.points import compute_stableford_points
from ..scoring.segments import get_thru_hole, is_contest_final
from ..settlement.ledger import LedgerSequence, build_settlement, create_empty_settlement
from ..settlement.settlers import settle_stableford
from .base import ContestHandler, build_summary, hole_score, player_audit, player_strokes


def rank_by_points(rows: list[tuple[str, int]]) -> list[tuple[str, int, int]]:
    """Competition ranking (1, 1, 3) by points descending, stable on ties."""
    ordered = sorted(rows, key=lambda row: -row[1])
    ranked = []
    rank = 1
    for index, (player_id, points) in enumerate(ordered):
        if index > 0 and points < ordered[index - 1][1]:
            rank = index + 1
        ranked.append((player_id, points, rank))
    return ranked


class StablefordHandler(ContestHandler):
    contest_type = ContestType.STABLEFORD

    def validate_participants(self, config: ContestConfig) -> list[str]:
        if not is_player_participants(config.participants):
            return ["Stableford requires individual player participants (not teams)"]
        if not 2 <= len(config.participants) <= 4:
            return [f"Stableford requires 2-4 players, got {len(config.participants)}"]
        return []

    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        start_hole, end_hole = 1, round_.last_hole
        player_ids = list(config.participants)
        name_map = round_.name_map()
        strokes = player_strokes(round_, config, player_ids)
        table = config.options.stableford_table or StablefordTable()

        points = {player_id: 0 for player_id in player_ids}
        player_thru: dict[str, Optional[int]] = {player_id: None for player_id in player_ids}
        audit_entries = []

        for hole in range(start_hole, end_hole + 1):
            par = round_.par(hole)
            players = []
            hole_points = {}
            for player_id in player_ids:
                score = hole_score(round_, config, strokes, player_id, hole)
                if score is None:
                    continue
                earned = compute_stableford_points(score, par, table)
                points[player_id] += earned
                player_thru[player_id] = hole
                hole_points[player_id] = earned
                players.append(player_audit(
                    round_, config, strokes, player_id, hole, name_map, stableford_points=earned
                ))

            if not players:
                continue

            best = max(hole_points.values())
            leaders = tuple(player_id for player_id, earned in hole_points.items() if earned == best)
            audit_entries.append(HoleAuditEntry(
                hole=hole,
                par=par,
                players=players,
                winner=leaders[0] if len(leaders) == 1 else leaders,
                notes=", ".join(f"{audit.player_name}: {audit.stableford_points} pts" for audit in players),
            ))

        thru_hole = get_thru_hole(round_, player_ids, start_hole, end_hole)
        is_final = is_contest_final(thru_hole, end_hole)

        ranked = rank_by_points([(player_id, points[player_id]) for player_id in player_ids])
        standings = StablefordStandings(standings=[
            StablefordStanding(
                player_id=player_id,
                player_name=name_map.get(player_id, player_id),
                total_points=total,
                thru_hole=player_thru[player_id],
                rank=rank,
            )
            for player_id, total, rank in ranked
        ])

        high_score = ranked[0][1] if ranked else 0
        winner_ids = [player_id for player_id, total, _ in ranked if total == high_score]
        loser_ids = [player_id for player_id, total, _ in ranked if total < high_score]

        settlement = create_empty_settlement()
        if is_final and winner_ids and loser_ids:
            settlement = build_settlement(settle_stableford(
                sequence, config.contest_id, winner_ids, loser_ids, config.stakes_config.unit
            ))

        winner_names = " & ".join(name_map.get(player_id, player_id) for player_id in winner_ids)
        if len(winner_ids) > 1:
            summary_text = f"Tied: {winner_names} with {high_score} points"
        else:
            summary_text = f"{winner_names} leads with {high_score} points"
            if is_final:
                summary_text = f"{winner_names} wins with {high_score} points"

        return ContestResult(
            summary=build_summary(config, is_final, thru_hole, f"{config.stakes_config.unit} units"),
            standings=standings,
            audit=ContestAudit(hole_by_hole=audit_entries, summary=summary_text),
            settlement=settlement,
        )
