"""
High-low-total for 3-4 individual players or two teams of two.

Each hole the lowest score earns the low point and the highest score gives up
the high point. In team mode the team with the lowest combined score also
earns the total point, shared equally by its players. Ties follow the contest's
tie rule: ``push`` awards nothing, ``split`` shares the point among the tied
and ``carryover`` rolls it onto the next hole.

``split`` is a real share in all three categories, including a tied high
point and a tied team total. It is deliberately not a second name for
``push``, so a tie under ``split`` still moves points.
"""

from typing import Optional

from ..models.contest import (
    ContestConfig,
    ContestType,
    Team,
    TieRule,
    get_all_player_ids,
    is_player_participants,
    is_team_participants,
)
from ..models.results import (
    ContestAudit,
    ContestResult,
    HighLowTotalHoleResult,
    HighLowTotalStanding,
    HighLowTotalStandings,
    HoleAuditEntry,
    PointCarryover,
)
from ..models.round import Round
from ..scoring.segments import get_thru_hole, is_contest_final
from ..settlement.ledger import LedgerSequence, build_settlement, create_empty_settlement
from ..settlement.settlers import settle_net_positions
from .base import ContestHandler, build_summary, hole_score, player_audit, player_strokes


class PointTally:
    """Running points for one category with tie-rule handling."""

    def __init__(self, ids: list[str], tie_rule: str):
        self.points: dict[str, float] = {key: 0.0 for key in ids}
        self.tie_rule = tie_rule
        self.carry = 0

    def award(self, values: dict[str, int], lowest: bool = True) -> tuple[tuple[str, ...], int]:
        """
        Award the point for the best (or worst) value.

        Returns the ids that scored and the points at stake on this hole.
        """
        target = min(values.values()) if lowest else max(values.values())
        ids = tuple(key for key, value in values.items() if value == target)
        at_stake = 1 + self.carry

        if len(ids) == 1:
            self.points[ids[0]] += at_stake
            self.carry = 0
            return ids, at_stake

        if self.tie_rule == TieRule.SPLIT.value:
            for key in ids:
                self.points[key] += at_stake / len(ids)
            self.carry = 0
            return ids, at_stake
        if self.tie_rule == TieRule.CARRYOVER.value:
            self.carry += 1
            return (), 0

        self.carry = 0
        return (), 0


class HighLowTotalHandler(ContestHandler):
    contest_type = ContestType.HIGH_LOW_TOTAL

    def validate_participants(self, config: ContestConfig) -> list[str]:
        participants = config.participants
        if is_team_participants(participants):
            errors = []
            if len(participants) != 2:
                errors.append("High-Low-Total team mode requires exactly 2 teams")
            for team in participants:
                if len(team.player_ids) != 2:
                    errors.append("Each team must have exactly 2 players")
            return errors
        if is_player_participants(participants):
            if not 3 <= len(participants) <= 4:
                return ["High-Low-Total requires 3-4 players in individual mode"]
            return []
        return ["High-Low-Total requires either 3-4 players or 2 teams"]

    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        start_hole, end_hole = 1, round_.last_hole
        player_ids = get_all_player_ids(config.participants)
        name_map = round_.name_map()
        strokes = player_strokes(round_, config, player_ids)
        tie_rule = getattr(config.options.tie_rule, "value", config.options.tie_rule)
        point_value = config.stakes_config.unit

        is_team_mode = is_team_participants(config.participants)
        teams: list[Team] = list(config.participants) if is_team_mode else []

        low = PointTally(player_ids, tie_rule)
        high = PointTally(player_ids, tie_rule)
        total = PointTally([team.id for team in teams], tie_rule)

        hole_results = []
        audit_entries = []
        for hole in range(start_hole, end_hole + 1):
            scores = {
                player_id: hole_score(round_, config, strokes, player_id, hole)
                for player_id in player_ids
            }
            if any(score is None for score in scores.values()):
                continue

            low_ids, low_points = low.award(scores)
            high_ids, high_points = high.award(scores, lowest=False)
            total_ids: tuple[str, ...] = ()
            total_points = 0
            if is_team_mode:
                team_totals = {
                    team.id: sum(scores[player_id] for player_id in team.player_ids)
                    for team in teams
                }
                total_ids, total_points = total.award(team_totals)

            hole_results.append(HighLowTotalHoleResult(
                hole=hole,
                low_winner_ids=low_ids,
                high_loser_ids=high_ids,
                total_winner_team_ids=total_ids,
                carryover=PointCarryover(low=low.carry, high=high.carry, total=total.carry),
            ))
            audit_entries.append(HoleAuditEntry(
                hole=hole,
                par=round_.par(hole),
                players=[
                    player_audit(round_, config, strokes, player_id, hole, name_map)
                    for player_id in player_ids
                ],
                winner=low_ids[0] if len(low_ids) == 1 else (low_ids or None),
                notes=self._hole_notes(
                    low_ids, low_points, high_ids, high_points, total_ids, total_points,
                    name_map, {team.id: team.display_name for team in teams}, is_team_mode,
                ),
            ))

        thru_hole = get_thru_hole(round_, player_ids, start_hole, end_hole)
        is_final = is_contest_final(thru_hole, end_hole)

        # Team total points are shared by the team's players
        player_total = {player_id: 0.0 for player_id in player_ids}
        for team in teams:
            for player_id in team.player_ids:
                player_total[player_id] += total.points[team.id] / len(team.player_ids)

        standings = []
        for player_id in player_ids:
            net_points = low.points[player_id] + player_total[player_id] - high.points[player_id]
            standings.append(HighLowTotalStanding(
                player_id=player_id,
                player_name=name_map.get(player_id, player_id),
                low_points=low.points[player_id],
                high_points=high.points[player_id],
                total_points=player_total[player_id],
                net_points=net_points,
                net_value=net_points * point_value,
            ))
        standings.sort(key=lambda row: -row.net_points)

        settlement = create_empty_settlement()
        if is_final:
            settlement = build_settlement(settle_net_positions(
                sequence,
                config.contest_id,
                {row.player_id: row.net_value for row in standings},
                "High-Low-Total",
                name_map,
            ))

        distributed = sum(abs(row.net_points) for row in standings)
        pending = ", carryovers pending" if low.carry + high.carry + total.carry > 0 else ""

        return ContestResult(
            summary=build_summary(config, is_final, thru_hole, f"{point_value} units/point"),
            standings=HighLowTotalStandings(
                standings=standings,
                hole_results=hole_results,
                tie_rule=tie_rule,
                is_team_mode=is_team_mode,
                point_value=point_value,
            ),
            audit=ContestAudit(
                hole_by_hole=audit_entries,
                summary=f"{distributed:g} total points distributed{pending}",
            ),
            settlement=settlement,
        )

    @staticmethod
    def _hole_notes(
        low_ids: tuple[str, ...],
        low_points: int,
        high_ids: tuple[str, ...],
        high_points: int,
        total_ids: tuple[str, ...],
        total_points: int,
        name_map: dict[str, str],
        team_names: dict[str, str],
        is_team_mode: bool,
    ) -> str:
        def label(prefix: str, ids: tuple[str, ...], points: int, sign: str,
                  names: dict[str, str]) -> str:
            if not ids:
                return f"{prefix}: push"
            who = " & ".join(names.get(key, key) for key in ids)
            bonus: Optional[str] = f" ({sign}{points})" if points > 1 else None
            return f"{prefix}: {who}{bonus or ''}"

        parts = [
            label("L", low_ids, low_points, "+", name_map),
            label("H", high_ids, high_points, "-", name_map),
        ]
        if is_team_mode:
            parts.append(label("T", total_ids, total_points, "+", team_names))
        return " | ".join(parts)
