"""
Skins: a uniquely low score on a hole wins every skin at stake.

Ties carry the skin to the next hole when carryover is enabled. Skins still
carried over when the contest goes final are split among the players tied low
on the last hole.
"""

from typing import Optional, Union

from ..models.contest import CarryoverRules, ContestConfig, ContestType, is_player_participants
from ..models.results import (
    ContestAudit,
    ContestResult,
    HoleAuditEntry,
    SkinResultEntry,
    SkinsStanding,
    SkinsStandings,
)
from ..models.round import Round
from ..scoring.points import SkinResult, compute_skin_winner
from ..scoring.segments import get_thru_hole, is_contest_final
from ..settlement.ledger import LedgerSequence, build_settlement, create_empty_settlement
from ..settlement.settlers import settle_skins, settle_skins_with_pot, settle_split_skins
from .base import ContestHandler, build_summary, hole_score, player_audit, player_strokes


class SkinsHandler(ContestHandler):
    contest_type = ContestType.SKINS

    def validate_participants(self, config: ContestConfig) -> list[str]:
        if not is_player_participants(config.participants):
            return ["Skins requires individual player participants (not teams)"]
        if not 2 <= len(config.participants) <= 4:
            return [f"Skins requires 2-4 players, got {len(config.participants)}"]
        return []

    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        start_hole, end_hole = 1, round_.last_hole
        player_ids = list(config.participants)
        name_map = round_.name_map()
        strokes = player_strokes(round_, config, player_ids)
        rules = config.options.carryover_rules or CarryoverRules()

        skins_won = {player_id: 0 for player_id in player_ids}
        results: list[SkinResultEntry] = []
        audit_entries: list[HoleAuditEntry] = []
        carryover = 0
        last_result: Optional[SkinResult] = None

        for hole in range(start_hole, end_hole + 1):
            scores = {}
            for player_id in player_ids:
                score = hole_score(round_, config, strokes, player_id, hole)
                if score is None:
                    break
                scores[player_id] = score
            else:
                result = compute_skin_winner(hole, scores, name_map, carryover)
                last_result = result
                results.append(SkinResultEntry(
                    hole=hole,
                    winner_id=result.winner_id,
                    winner_name=result.winner_name,
                    skins_won=result.skin_count if result.winner_id else 0,
                ))

                if result.winner_id:
                    skins_won[result.winner_id] += result.skin_count
                    carryover = 0
                    won = "skin" if result.skin_count == 1 else f"{result.skin_count} skins"
                    notes = f"{result.winner_name} wins {won}"
                elif rules.enabled:
                    carryover += 1
                    if rules.max_multiplier is not None:
                        carryover = min(carryover, rules.max_multiplier)
                    notes = f"Carryover ({carryover + 1} skins at stake)"
                else:
                    carryover = 0
                    notes = "Tied, skin lost"

                audit_entries.append(HoleAuditEntry(
                    hole=hole,
                    par=round_.par(hole),
                    players=[
                        player_audit(round_, config, strokes, player_id, hole, name_map)
                        for player_id in player_ids
                    ],
                    winner=result.winner_id or "carryover",
                    skin_value=result.skin_count if result.winner_id else None,
                    carryover_count=0 if result.winner_id else carryover,
                    notes=notes,
                ))

        thru_hole = get_thru_hole(round_, player_ids, start_hole, end_hole)
        is_final = is_contest_final(thru_hole, end_hole)

        # Carried skins resolve on the last hole once the round is complete
        split: Optional[SkinResult] = None
        if (is_final and rules.enabled and last_result is not None
                and last_result.winner_id is None and last_result.tied_player_ids):
            split = last_result
            results[-1] = SkinResultEntry(
                hole=split.hole,
                winner_id=None,
                winner_name=None,
                skins_won=split.skin_count,
                split_among=split.tied_player_ids,
            )
            carryover = 0

        unit = config.stakes_config.unit
        pot_total = config.stakes_config.pot_total
        credits: dict[str, Union[int, float]] = dict(skins_won)
        if split is not None:
            for player_id in split.tied_player_ids:
                credits[player_id] += split.skin_count / len(split.tied_player_ids)

        total_awarded = sum(skins_won.values()) + (split.skin_count if split else 0)
        standings = SkinsStandings(
            standings=sorted(
                [
                    SkinsStanding(
                        player_id=player_id,
                        player_name=name_map.get(player_id, player_id),
                        skins_won=skins_won[player_id],
                        total_value=self._skin_value(credits[player_id], unit, pot_total,
                                                     total_awarded, len(player_ids)),
                    )
                    for player_id in player_ids
                ],
                key=lambda row: -row.skins_won,
            ),
            skin_results=results,
            total_skins_awarded=total_awarded,
            carryover_skins=carryover,
        )

        settlement = create_empty_settlement()
        if is_final and total_awarded > 0:
            if pot_total:
                entries = settle_skins_with_pot(
                    sequence, config.contest_id, credits, pot_total, player_ids
                )
            else:
                entries = settle_skins(sequence, config.contest_id, results, unit, player_ids)
                if split is not None:
                    entries.extend(settle_split_skins(
                        sequence, config.contest_id, split.hole, list(split.tied_player_ids),
                        split.skin_count, unit, player_ids,
                    ))
            settlement = build_settlement(entries)

        pending = f", {carryover} pending" if carryover > 0 else ""
        return ContestResult(
            summary=build_summary(
                config, is_final, thru_hole,
                f"{pot_total} unit pot" if pot_total else f"{unit} units/skin",
            ),
            standings=standings,
            audit=ContestAudit(
                hole_by_hole=audit_entries,
                summary=f"{total_awarded} skins awarded{pending}",
            ),
            settlement=settlement,
        )

    @staticmethod
    def _skin_value(
        credit: Union[int, float],
        unit: int,
        pot_total: Optional[int],
        total_awarded: int,
        player_count: int,
    ) -> int:
        if pot_total:
            return int(pot_total * credit // (total_awarded or 1))
        return int(credit * unit * (player_count - 1))
