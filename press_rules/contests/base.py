"""
Contest handler interface and helpers shared by the contest families.

A handler validates a ContestConfig without raising and computes a complete
ContestResult from a Round. Compute assumes validated input.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from ..config.validation import ConfigValidator, format_errors
from ..models.contest import ContestConfig, ContestType, Team, is_team_participants
from ..models.results import (
    ContestResult,
    ContestStatus,
    ContestSummary,
    HoleAuditEntry,
    HolePlayerAudit,
    ValidationResult,
)
from ..models.round import Round
from ..scoring.handicap import compute_net_score, strokes_for_players
from ..scoring.match_play import (
    HoleMatchResult,
    MatchStatus,
    compute_hole_match_result,
    compute_match_status,
)
from ..scoring.points import BestBallResult, compute_best_ball_score
from ..settlement.ledger import LedgerSequence


class ContestHandler(ABC):
    """Validates and computes one contest type."""

    contest_type: ContestType

    def validate(self, config: ContestConfig) -> ValidationResult:
        """Collect every configuration problem; never raises."""
        errors = format_errors(ConfigValidator.validate_contest(config))
        if config.participants:
            errors.extend(self.validate_participants(config))
        return ValidationResult.from_errors(errors)

    @abstractmethod
    def validate_participants(self, config: ContestConfig) -> list[str]:
        """Participant shape and count rules for this contest type."""

    @abstractmethod
    def compute(self, round_: Round, config: ContestConfig, sequence: LedgerSequence) -> ContestResult:
        """Compute standings, audit and settlement for a validated config."""


@dataclass(frozen=True)
class Side:
    """One side of a head-to-head contest: a single player or a team."""
    id: str
    name: str
    player_ids: tuple[str, ...]
    team: Optional[Team] = None

    @property
    def is_team(self) -> bool:
        return self.team is not None


@dataclass
class MatchRun:
    """Hole results, audit and final status of one match window."""
    hole_results: list[HoleMatchResult] = field(default_factory=list)
    audit: list[HoleAuditEntry] = field(default_factory=list)
    status: Optional[MatchStatus] = None


def resolve_sides(round_: Round, config: ContestConfig) -> tuple[Side, Side]:
    """Build the two sides of a head-to-head contest."""
    participants = config.participants
    if is_team_participants(participants):
        team_a, team_b = participants[0], participants[1]
        return (
            Side(id=team_a.id, name=team_a.display_name, player_ids=tuple(team_a.player_ids), team=team_a),
            Side(id=team_b.id, name=team_b.display_name, player_ids=tuple(team_b.player_ids), team=team_b),
        )

    player_a, player_b = participants[0], participants[1]
    return (
        Side(id=player_a, name=round_.player_name(player_a), player_ids=(player_a,)),
        Side(id=player_b, name=round_.player_name(player_b), player_ids=(player_b,)),
    )


def player_strokes(
    round_: Round,
    config: ContestConfig,
    player_ids: list[str],
    relative: bool = False,
) -> dict[str, dict[int, int]]:
    """Dots per player per hole; empty for gross contests."""
    if not config.is_net:
        return {}

    handicaps = {player_id: round_.course_handicap(player_id) for player_id in player_ids}
    return strokes_for_players(round_.tee.stroke_index, handicaps, use_relative=relative)


def dots_for(strokes: dict[str, dict[int, int]], player_id: str, hole: int) -> int:
    return strokes.get(player_id, {}).get(hole, 0)


def hole_score(
    round_: Round,
    config: ContestConfig,
    strokes: dict[str, dict[int, int]],
    player_id: str,
    hole: int,
) -> Optional[int]:
    """Score that counts for the contest's basis, or None when unplayed."""
    gross = round_.gross(player_id, hole)
    if gross is None:
        return None
    if not config.is_net:
        return gross
    return compute_net_score(gross, dots_for(strokes, player_id, hole), config.handicap_config)


def side_score(
    round_: Round,
    config: ContestConfig,
    strokes: dict[str, dict[int, int]],
    side: Side,
    hole: int,
    name_map: dict[str, str],
) -> Optional[BestBallResult]:
    """Best ball of a side; a single player's side is just that player's score."""
    scores = {
        player_id: hole_score(round_, config, strokes, player_id, hole)
        for player_id in side.player_ids
    }
    return compute_best_ball_score(scores, name_map)


def player_audit(
    round_: Round,
    config: ContestConfig,
    strokes: dict[str, dict[int, int]],
    player_id: str,
    hole: int,
    name_map: dict[str, str],
    counted: Optional[bool] = None,
    stableford_points: Optional[int] = None,
) -> Optional[HolePlayerAudit]:
    gross = round_.gross(player_id, hole)
    if gross is None:
        return None

    dots = dots_for(strokes, player_id, hole)
    return HolePlayerAudit(
        player_id=player_id,
        player_name=name_map.get(player_id, player_id),
        gross=gross,
        net=compute_net_score(gross, dots, config.handicap_config) if config.is_net else None,
        dots=dots if config.is_net else None,
        counted=counted,
        stableford_points=stableford_points,
    )


def run_match(
    round_: Round,
    config: ContestConfig,
    side_a: Side,
    side_b: Side,
    strokes: dict[str, dict[int, int]],
    name_map: dict[str, str],
    start_hole: int,
    end_hole: int,
    can_close: bool = True,
) -> MatchRun:
    """
    Play a match window hole by hole.

    Holes where either side has no score are skipped. When ``can_close`` is
    set, play stops on the hole where the match is mathematically decided.
    """
    total_holes = end_hole - start_hole + 1
    run = MatchRun()
    is_team = side_a.is_team or side_b.is_team

    for hole in range(start_hole, end_hole + 1):
        best_a = side_score(round_, config, strokes, side_a, hole, name_map)
        best_b = side_score(round_, config, strokes, side_b, hole, name_map)
        if best_a is None or best_b is None:
            continue

        result = compute_hole_match_result(
            hole, best_a.score, best_b.score, side_a.id, side_b.id, side_a.name, side_b.name
        )
        run.hole_results.append(result)

        status = compute_match_status(
            run.hole_results, total_holes, side_a.id, side_b.id,
            side_a.name, side_b.name, can_close=can_close,
        )

        counted_ids = {best_a.counted_player_id, best_b.counted_player_id}
        players = []
        for player_id in side_a.player_ids + side_b.player_ids:
            audit = player_audit(
                round_, config, strokes, player_id, hole, name_map,
                counted=(player_id in counted_ids) if is_team else None,
            )
            if audit is not None:
                players.append(audit)

        notes = None
        if is_team:
            notes = (
                f"{side_a.name}: {best_a.counted_player_name} {best_a.score}, "
                f"{side_b.name}: {best_b.counted_player_name} {best_b.score}"
            )

        run.audit.append(HoleAuditEntry(
            hole=hole,
            par=round_.par(hole),
            players=players,
            winner=result.winner or "halved",
            match_state="A/S" if status.holes_up == 0 else f"{status.leader_name} {status.holes_up} UP",
            notes=notes,
        ))

        if status.is_closed:
            break

    run.status = compute_match_status(
        run.hole_results, total_holes, side_a.id, side_b.id,
        side_a.name, side_b.name, can_close=can_close,
    )
    return run


def build_summary(
    config: ContestConfig,
    is_final: bool,
    thru_hole: Optional[int],
    stakes_summary: str,
    scoring_basis: Optional[str] = None,
) -> ContestSummary:
    basis = scoring_basis or getattr(config.scoring_basis, "value", config.scoring_basis)
    return ContestSummary(
        contest_id=config.contest_id,
        name=config.name,
        contest_type=config.type_key,
        scoring_basis=basis,
        status=ContestStatus.FINAL if is_final else ContestStatus.LIVE,
        thru_hole=thru_hole,
        stakes_summary=stakes_summary,
    )