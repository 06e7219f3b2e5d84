"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..models.contest import ContestConfig, ContestOptions, StakesConfig, TieRule

TIE_RULES = {rule.value for rule in TieRule}
STABLEFORD_BANDS = ("albatross", "eagle", "birdie", "par", "bogey", "double_bogey", "worse")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def format_errors(errors: list[ValidationError]) -> list[str]:
    """Render validation errors as messages for a ValidationResult."""
    return [f"{err.field}: {err.message} (got: {err.value!r})" for err in errors]


class ConfigValidator:
    """Validates contest configuration."""

    @staticmethod
    def validate_basic_config(config: ContestConfig) -> list[ValidationError]:
        """Validate the fields every contest needs."""
        errors = []

        if not config.contest_id:
            errors.append(ValidationError(
                field="contest_id",
                message="Is required",
                value=config.contest_id
            ))

        if not config.name:
            errors.append(ValidationError(
                field="name",
                message="Is required",
                value=config.name
            ))

        if not config.type_key:
            errors.append(ValidationError(
                field="contest_type",
                message="Is required",
                value=config.contest_type
            ))

        if not config.participants:
            errors.append(ValidationError(
                field="participants",
                message="At least one participant is required",
                value=config.participants
            ))

        if config.stakes_config is None:
            errors.append(ValidationError(
                field="stakes_config",
                message="Is required",
                value=None
            ))

        return errors

    @staticmethod
    def validate_stakes(stakes: StakesConfig) -> list[ValidationError]:
        """Validate stake amounts."""
        errors = []

        if not _is_int(stakes.unit) or stakes.unit < 0:
            errors.append(ValidationError(
                field="stakes_config.unit",
                message="Must be a non-negative integer",
                value=stakes.unit
            ))

        if stakes.pot_total is not None and (not _is_int(stakes.pot_total) or stakes.pot_total < 0):
            errors.append(ValidationError(
                field="stakes_config.pot_total",
                message="Must be a non-negative integer",
                value=stakes.pot_total
            ))

        if stakes.segments is not None:
            for name in ("front", "back", "total"):
                value = getattr(stakes.segments, name)
                if value is not None and (not _is_int(value) or value < 0):
                    errors.append(ValidationError(
                        field=f"stakes_config.segments.{name}",
                        message="Must be a non-negative integer",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_options(options: ContestOptions) -> list[ValidationError]:
        """Validate contest-specific options."""
        errors = []

        if options.tie_rule not in TIE_RULES:
            errors.append(ValidationError(
                field="options.tie_rule",
                message=f"Must be one of {sorted(TIE_RULES)}",
                value=options.tie_rule
            ))

        rules = options.carryover_rules
        if rules is not None and rules.max_multiplier is not None:
            if not _is_int(rules.max_multiplier) or rules.max_multiplier <= 0:
                errors.append(ValidationError(
                    field="options.carryover_rules.max_multiplier",
                    message="Must be a positive integer",
                    value=rules.max_multiplier
                ))

        if options.stableford_table is not None:
            for band in STABLEFORD_BANDS:
                value = getattr(options.stableford_table, band)
                if not _is_int(value):
                    errors.append(ValidationError(
                        field=f"options.stableford_table.{band}",
                        message="Must be an integer",
                        value=value
                    ))

        for hole in options.designated_holes:
            if not _is_int(hole) or not 1 <= hole <= 18:
                errors.append(ValidationError(
                    field="options.designated_holes",
                    message="Holes must be between 1 and 18",
                    value=hole
                ))

        if options.per_player_buy_in is not None and (
            not _is_int(options.per_player_buy_in) or options.per_player_buy_in < 0
        ):
            errors.append(ValidationError(
                field="options.per_player_buy_in",
                message="Must be a non-negative integer",
                value=options.per_player_buy_in
            ))

        for press in options.presses:
            if not _is_int(press.start_hole) or not 1 <= press.start_hole <= 18:
                errors.append(ValidationError(
                    field=f"options.presses[{press.press_id}].start_hole",
                    message="Must be between 1 and 18",
                    value=press.start_hole
                ))
            if press.end_hole is not None and press.end_hole < press.start_hole:
                errors.append(ValidationError(
                    field=f"options.presses[{press.press_id}].end_hole",
                    message="Must not precede the start hole",
                    value=press.end_hole
                ))
            if not _is_int(press.stake) or press.stake < 0:
                errors.append(ValidationError(
                    field=f"options.presses[{press.press_id}].stake",
                    message="Must be a non-negative integer",
                    value=press.stake
                ))

        return errors

    @staticmethod
    def validate_contest(config: ContestConfig) -> list[ValidationError]:
        """Validate a complete contest config."""
        errors = ConfigValidator.validate_basic_config(config)

        if config.stakes_config is not None:
            errors.extend(ConfigValidator.validate_stakes(config.stakes_config))

        if config.options is not None:
            errors.extend(ConfigValidator.validate_options(config.options))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate a merged defaults/overrides dictionary."""
        errors = []

        for key in ("use_relative_handicap", "allow_below_1"):
            value = config.get("handicap", {}).get(key)
            if value is not None and not isinstance(value, bool):
                errors.append(ValidationError(
                    field=f"handicap.{key}",
                    message="Must be a boolean",
                    value=value
                ))

        for band in STABLEFORD_BANDS:
            value = config.get("stableford", {}).get(band)
            if value is not None and not _is_int(value):
                errors.append(ValidationError(
                    field=f"stableford.{band}",
                    message="Must be an integer",
                    value=value
                ))

        max_multiplier = config.get("skins", {}).get("max_multiplier")
        if max_multiplier is not None and (not _is_int(max_multiplier) or max_multiplier <= 0):
            errors.append(ValidationError(
                field="skins.max_multiplier",
                message="Must be a positive integer",
                value=max_multiplier
            ))

        tie_rule = config.get("high_low_total", {}).get("tie_rule")
        if tie_rule is not None and tie_rule not in TIE_RULES:
            errors.append(ValidationError(
                field="high_low_total.tie_rule",
                message=f"Must be one of {sorted(TIE_RULES)}",
                value=tie_rule
            ))

        holes_planned = config.get("round", {}).get("holes_planned")
        if holes_planned is not None and holes_planned not in (9, 18):
            errors.append(ValidationError(
                field="round.holes_planned",
                message="Must be 9 or 18",
                value=holes_planned
            ))

        return errors
