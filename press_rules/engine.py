"""
Contest registry and settlement engine.

Dispatches every contest config of a round to its handler, in order:
handler lookup, validation, participant check against the round roster and
computation. Invalid contests produce an ``invalid`` result and never block
the rest of the round.
"""

from typing import Any, Optional

import structlog

from .config.loader import ConfigLoader
from .contests import register_all
from .contests.base import ContestHandler
from .data.parsers import parse_contest_configs, parse_round
from .errors import ContestComputationError, UnknownContestTypeError
from .logging.config import get_settlement_logger, log_contest_outcome, log_validation_failure
from .models.contest import ContestConfig, get_all_player_ids
from .models.results import (
    AggregatedSettlement,
    ContestAudit,
    ContestResult,
    ContestStatus,
    ContestSummary,
    ValidationResult,
)
from .models.round import Round
from .settlement.ledger import LedgerSequence, aggregate_settlements, create_empty_settlement

logger = structlog.get_logger(__name__)
settlement_logger = get_settlement_logger(__name__)


class ContestRegistry:
    """Maps contest type tags to handlers; nothing is registered implicitly."""

    def __init__(self) -> None:
        self._handlers: dict[str, ContestHandler] = {}

    @staticmethod
    def _key(contest_type: Any) -> str:
        return getattr(contest_type, "value", contest_type)

    def register(self, handler: ContestHandler) -> None:
        key = self._key(handler.contest_type)
        if key in self._handlers:
            logger.debug("Replacing contest handler", contest_type=key)
        self._handlers[key] = handler
        logger.debug("Registered contest handler", contest_type=key,
                     handler=type(handler).__name__)

    def get(self, contest_type: Any) -> Optional[ContestHandler]:
        return self._handlers.get(self._key(contest_type))

    def require(self, contest_type: Any) -> ContestHandler:
        """
        Look up a handler that must exist.

        Raises:
            UnknownContestTypeError: If no handler is registered for the type
        """
        handler = self.get(contest_type)
        if handler is None:
            key = self._key(contest_type)
            raise UnknownContestTypeError(
                f"No handler registered for contest type: {key}",
                contest_type=key,
            )
        return handler

    def has(self, contest_type: Any) -> bool:
        return self._key(contest_type) in self._handlers

    def types(self) -> list[str]:
        return list(self._handlers)

    def validate(self, config: ContestConfig) -> ValidationResult:
        handler = self.get(config.type_key)
        if handler is None:
            return ValidationResult.from_errors([f"Unknown contest type: {config.type_key}"])
        return handler.validate(config)


def create_default_registry() -> ContestRegistry:
    """Registry populated with every built-in contest handler."""
    registry = ContestRegistry()
    register_all(registry)
    return registry


def validate_participants_exist(round_: Round, config: ContestConfig) -> ValidationResult:
    """Every participant must be on the round's roster."""
    roster = round_.player_ids()
    errors = [
        f"Player {player_id} not found in round"
        for player_id in get_all_player_ids(config.participants)
        if player_id not in roster
    ]
    return ValidationResult.from_errors(errors)


def invalid_result(config: ContestConfig, errors: tuple[str, ...]) -> ContestResult:
    """Result for a contest that could not be computed."""
    basis = getattr(config.scoring_basis, "value", config.scoring_basis)
    return ContestResult(
        summary=ContestSummary(
            contest_id=config.contest_id,
            name=config.name,
            contest_type=config.type_key,
            scoring_basis=basis,
            status=ContestStatus.INVALID,
            thru_hole=None,
            errors=tuple(errors),
        ),
        standings=None,
        audit=ContestAudit(hole_by_hole=[], summary="Invalid configuration"),
        settlement=create_empty_settlement(),
    )


class SettlementEngine:
    """
    Computes every contest of a round and aggregates their settlements.

    The ledger id sequence belongs to the caller. When none is supplied each
    computation starts a fresh sequence, so repeated runs over the same input
    produce identical ids.
    """

    def __init__(
        self,
        registry: Optional[ContestRegistry] = None,
        config_loader: Optional[ConfigLoader] = None,
    ) -> None:
        self.registry = registry or create_default_registry()
        self.config_loader = config_loader or ConfigLoader.create()
        self.logger = settlement_logger

    def compute(
        self,
        round_: Round,
        configs: list[ContestConfig],
        sequence: Optional[LedgerSequence] = None,
    ) -> list[ContestResult]:
        """One result per config, in config order."""
        if sequence is None:
            sequence = LedgerSequence()

        return [self._compute_one(round_, config, sequence) for config in configs]

    def compute_from_dicts(
        self,
        round_data: dict[str, Any],
        contests_data: list[dict[str, Any]],
        sequence: Optional[LedgerSequence] = None,
    ) -> list[ContestResult]:
        """
        Parse raw round and contest payloads, then compute them.

        Raises:
            RoundDataError: If the round or a contest payload is structurally broken
        """
        round_ = parse_round(round_data)
        configs = parse_contest_configs(contests_data, self.config_loader)
        return self.compute(round_, configs, sequence)

    def _compute_one(
        self,
        round_: Round,
        config: ContestConfig,
        sequence: LedgerSequence,
    ) -> ContestResult:
        contest_type = config.type_key
        handler = self.registry.get(contest_type)
        if handler is None:
            errors = (f"Unknown contest type: {contest_type}",)
            log_validation_failure(self.logger, config.contest_id, contest_type, list(errors))
            return invalid_result(config, errors)

        validation = ValidationResult.combine(
            handler.validate(config),
            validate_participants_exist(round_, config),
        )
        if not validation.valid:
            log_validation_failure(self.logger, config.contest_id, contest_type, list(validation.errors))
            return invalid_result(config, validation.errors)

        try:
            result = handler.compute(round_, config, sequence)
        except Exception as e:
            self.logger.error(
                "Contest computation failed",
                contest_id=config.contest_id,
                contest_type=contest_type,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ContestComputationError(
                f"Failed to compute contest {config.contest_id}: {e}",
                contest_id=config.contest_id,
                contest_type=contest_type,
            ) from e

        log_contest_outcome(
            self.logger,
            config.contest_id,
            contest_type,
            result.summary.status.value,
            result.summary.thru_hole,
            len(result.settlement.ledger_entries),
        )
        return result


def compute_contests(
    round_: Round,
    configs: list[ContestConfig],
    registry: Optional[ContestRegistry] = None,
    sequence: Optional[LedgerSequence] = None,
) -> list[ContestResult]:
    """Compute every contest config against one round."""
    engine = SettlementEngine(registry=registry)
    return engine.compute(round_, configs, sequence)


def compute_aggregated_settlement(results: list[ContestResult]) -> AggregatedSettlement:
    """Merge every contest's ledger into one entry list and balance view."""
    return aggregate_settlements([result.settlement for result in results])
