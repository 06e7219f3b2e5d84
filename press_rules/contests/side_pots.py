"""
Side pots driven by discrete events or per-hole achievements.

Closest-to-pin and long drive pay per designated hole, the birdie pool splits a
pot among everyone who made a birdie and the snake makes the last player to
three-putt pay everyone else. Team participants are flattened to players.
"""

from abc import abstractmethod
from typing import Optional, Union

import structlog

from ..models.contest import ContestConfig, ContestType, get_all_player_ids
from ..models.results import (
    ContestAudit,
    ContestResult,
    HoleAuditEntry,
    SidePotHoleResult,
    SidePotStanding,
    SidePotStandings,
)
from ..models.round import CtpEvent, LongDriveEvent, Round
from ..scoring.segments import get_thru_hole, is_contest_final
from ..settlement.ledger import LedgerSequence, build_settlement, create_empty_settlement
from ..settlement.settlers import settle_per_hole_pot, settle_pot, settle_snake
from .base import ContestHandler, build_summary, hole_score, player_strokes

logger = structlog.get_logger(__name__)


class SidePotHandler(ContestHandler):
    """Common participant rules for side pots."""

    label = "Side pot"

    def validate_participants(self, config: ContestConfig) -> list[str]:
        player_ids = get_all_player_ids(config.participants)
        errors = []
        if len(player_ids) < 2:
            errors.append(f"{self.label} requires at least 2 players, got {len(player_ids)}")
        if len(set(player_ids)) != len(player_ids):
            errors.append(f"{self.label} participants must be unique")
        return errors


class HoleEventPotHandler(SidePotHandler):
    """Per-hole pot won by a recorded event (closest-to-pin, long drive)."""

    pot_type = ""

    @abstractmethod
    def events(self, round_: Round) -> tuple[Union[CtpEvent, LongDriveEvent], ...]:
        """Recorded winners for this pot, in the order they were logged."""

    @abstractmethod
    def details(self, event: Union[CtpEvent, LongDriveEvent]) -> Optional[str]:
        """Display text for a winning event, such as its distance."""

    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        player_ids = get_all_player_ids(config.participants)
        name_map = round_.name_map()
        designated = set(config.options.designated_holes)
        per_hole = config.stakes_config.unit

        # Later events on a hole replace earlier ones
        latest: dict[int, Union[CtpEvent, LongDriveEvent]] = {}
        for event in self.events(round_):
            if designated and event.hole not in designated:
                continue
            if event.winner_player_id not in player_ids:
                logger.debug("Side pot event ignored, winner not a participant",
                             contest_type=self.pot_type, hole=event.hole,
                             player_id=event.winner_player_id)
                continue
            latest[event.hole] = event

        hole_winners = {hole: latest[hole].winner_player_id for hole in sorted(latest)}
        wins = {player_id: 0 for player_id in player_ids}
        for winner_id in hole_winners.values():
            wins[winner_id] += 1

        hole_results = [
            SidePotHoleResult(
                hole=hole,
                winner_id=latest[hole].winner_player_id,
                winner_name=name_map.get(latest[hole].winner_player_id, latest[hole].winner_player_id),
                value=per_hole,
                details=self.details(latest[hole]),
            )
            for hole in sorted(latest)
        ]

        end_hole = round_.last_hole
        thru_hole = get_thru_hole(round_, player_ids, 1, end_hole)
        all_designated_won = bool(designated) and designated.issubset(hole_winners)
        is_final = all_designated_won or is_contest_final(thru_hole, end_hole)

        per_payer = per_hole // (len(player_ids) - 1)
        standings = SidePotStandings(
            pot_type=self.pot_type,
            standings=sorted(
                [
                    SidePotStanding(
                        player_id=player_id,
                        player_name=name_map.get(player_id, player_id),
                        wins=wins[player_id],
                        total_winnings=wins[player_id] * per_payer * (len(player_ids) - 1),
                    )
                    for player_id in player_ids
                ],
                key=lambda row: -row.wins,
            ),
            pot_total=config.stakes_config.pot_total or per_hole * len(hole_winners),
            hole_results=hole_results,
        )

        settlement = create_empty_settlement()
        if is_final and hole_winners:
            settlement = build_settlement(settle_per_hole_pot(
                sequence, config.contest_id, per_hole, hole_winners, player_ids, self.label
            ))

        audit = ContestAudit(
            hole_by_hole=[
                HoleAuditEntry(
                    hole=row.hole,
                    par=round_.par(row.hole),
                    players=[],
                    winner=row.winner_id,
                    notes=f"{row.winner_name}: {row.details}" if row.details else row.winner_name,
                )
                for row in hole_results
            ],
            summary=f"{len(hole_winners)} {self.label} winners",
        )

        return ContestResult(
            summary=build_summary(
                config, is_final, thru_hole, f"{per_hole} units/hole", scoring_basis="gross"
            ),
            standings=standings,
            audit=audit,
            settlement=settlement,
        )


class CtpHandler(HoleEventPotHandler):
    contest_type = ContestType.CTP
    pot_type = "ctp"
    label = "CTP"

    def events(self, round_: Round) -> tuple[CtpEvent, ...]:
        return round_.meta.events.ctp

    def details(self, event: CtpEvent) -> Optional[str]:
        if event.distance_ft is None:
            return None
        feet = int(event.distance_ft)
        inches = round((event.distance_ft - feet) * 12)
        return f"{feet} ft {inches} in" if inches else f"{feet} ft"


class LongDriveHandler(HoleEventPotHandler):
    contest_type = ContestType.LONG_DRIVE
    pot_type = "long_drive"
    label = "Long Drive"

    def events(self, round_: Round) -> tuple[LongDriveEvent, ...]:
        return round_.meta.events.long_drive

    def details(self, event: LongDriveEvent) -> Optional[str]:
        if event.distance_yds is None:
            return None
        return f"{event.distance_yds:g} yds"


class BirdiePoolHandler(SidePotHandler):
    contest_type = ContestType.BIRDIE_POOL
    label = "Birdie Pool"

    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        start_hole, end_hole = 1, round_.last_hole
        player_ids = get_all_player_ids(config.participants)
        name_map = round_.name_map()
        strokes = player_strokes(round_, config, player_ids)

        buy_in = config.options.per_player_buy_in
        if buy_in is None:
            buy_in = config.stakes_config.unit
        pot_total = config.stakes_config.pot_total or buy_in * len(player_ids)

        birdies = {player_id: 0 for player_id in player_ids}
        audit_entries = []
        for hole in range(start_hole, end_hole + 1):
            par = round_.par(hole)
            makers = []
            for player_id in player_ids:
                score = hole_score(round_, config, strokes, player_id, hole)
                if score is not None and score < par:
                    birdies[player_id] += 1
                    makers.append(player_id)

            if makers:
                audit_entries.append(HoleAuditEntry(
                    hole=hole,
                    par=par,
                    players=[],
                    winner=makers[0] if len(makers) == 1 else tuple(makers),
                    notes="Birdies: " + ", ".join(name_map.get(p, p) for p in makers),
                ))

        thru_hole = get_thru_hole(round_, player_ids, start_hole, end_hole)
        is_final = is_contest_final(thru_hole, end_hole)

        total_birdies = sum(birdies.values())
        per_birdie = pot_total // total_birdies if total_birdies else 0
        standings = SidePotStandings(
            pot_type="birdie_pool",
            standings=sorted(
                [
                    SidePotStanding(
                        player_id=player_id,
                        player_name=name_map.get(player_id, player_id),
                        wins=birdies[player_id],
                        total_winnings=birdies[player_id] * per_birdie,
                    )
                    for player_id in player_ids
                ],
                key=lambda row: -row.wins,
            ),
            pot_total=pot_total,
        )

        settlement = create_empty_settlement()
        if is_final and total_birdies > 0:
            winner_ids = [player_id for player_id in player_ids if birdies[player_id] > 0]
            settlement = build_settlement(settle_pot(
                sequence, config.contest_id, pot_total, winner_ids, player_ids, self.label
            ))

        return ContestResult(
            summary=build_summary(config, is_final, thru_hole, f"{pot_total} unit pot"),
            standings=standings,
            audit=ContestAudit(
                hole_by_hole=audit_entries,
                summary=f"{total_birdies} birdies made, pot = {pot_total} units",
            ),
            settlement=settlement,
        )


class SnakeHandler(SidePotHandler):
    contest_type = ContestType.SNAKE
    label = "Snake"

    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        start_hole, end_hole = 1, round_.last_hole
        player_ids = get_all_player_ids(config.participants)
        name_map = round_.name_map()
        others_count = len(player_ids) - 1

        pot_total = config.stakes_config.pot_total or config.stakes_config.unit * len(player_ids)
        per_player = pot_total // others_count

        holder: Optional[str] = None
        three_putts = {player_id: 0 for player_id in player_ids}
        audit_entries = []
        for event in sorted(round_.meta.events.three_putts, key=lambda e: e.hole):
            if event.player_id not in three_putts:
                continue
            holder = event.player_id
            three_putts[holder] += 1
            audit_entries.append(HoleAuditEntry(
                hole=event.hole,
                par=round_.par(event.hole),
                players=[],
                winner=holder,
                notes=f"{name_map.get(holder, holder)} 3-putted (holds snake)",
            ))

        thru_hole = get_thru_hole(round_, player_ids, start_hole, end_hole)
        is_final = is_contest_final(thru_hole, end_hole)

        rows = [
            SidePotStanding(
                player_id=player_id,
                player_name=name_map.get(player_id, player_id),
                wins=three_putts[player_id],
                is_holding=player_id == holder,
                total_winnings=(
                    -per_player * others_count if player_id == holder else per_player
                ) if is_final and holder is not None else 0,
            )
            for player_id in player_ids
        ]
        standings = SidePotStandings(
            pot_type="snake",
            standings=sorted(rows, key=lambda row: (bool(row.is_holding), row.wins)),
            pot_total=pot_total,
        )

        settlement = create_empty_settlement()
        if is_final and holder is not None:
            settlement = build_settlement(settle_snake(
                sequence, config.contest_id, holder,
                [player_id for player_id in player_ids if player_id != holder], per_player,
            ))

        if holder is not None:
            summary_text = f"{name_map.get(holder, holder)} holds the snake ({three_putts[holder]} 3-putts)"
        else:
            summary_text = "No three-putts yet"

        return ContestResult(
            summary=build_summary(
                config, is_final, thru_hole, f"{per_player} units to each player",
                scoring_basis="gross",
            ),
            standings=standings,
            audit=ContestAudit(hole_by_hole=audit_entries, summary=summary_text),
            settlement=settlement,
        )
