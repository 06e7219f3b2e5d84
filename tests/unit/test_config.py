"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from press_rules.config.defaults import get_default_config
from press_rules.config.loader import ConfigLoader, deep_merge
from press_rules.config.validation import ConfigValidator, ValidationError, format_errors
from press_rules.models.contest import (
    CarryoverRules,
    ContestOptions,
    PressConfig,
    SegmentId,
    SegmentStakes,
    StakesConfig,
)


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        """Test that default configuration can be created."""
        config = get_default_config()
        assert config.handicap.use_relative_handicap is True
        assert config.handicap.allow_below_1 is False
        assert config.stableford.par == 2
        assert config.skins.carryover_enabled is True
        assert config.skins.max_multiplier is None
        assert config.high_low_total.tie_rule == "push"
        assert config.round.holes_planned == 18


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        """Test that ConfigLoader points at the bundled config directory."""
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)
        assert (loader.config_dir / "contests.yaml").exists()

    def test_merge_config_defaults_only(self) -> None:
        """Test config merging for a type without overrides."""
        loader = ConfigLoader.create()
        config = loader.merge_config("unknown_contest")

        assert config["stableford"]["birdie"] == 3
        assert config["skins"]["carryover_enabled"] is True
        assert config["high_low_total"]["tie_rule"] == "push"

    def test_merge_config_with_overrides(self) -> None:
        """Test per-contest overrides win over type and default values."""
        loader = ConfigLoader.create()
        config = loader.merge_config("skins", {"skins": {"max_multiplier": 3}})

        assert config["skins"]["max_multiplier"] == 3
        # Sibling keys keep their lower-tier values
        assert config["skins"]["carryover_enabled"] is True

    def test_contest_type_overrides(self, tmp_path: Path) -> None:
        """Test contests.yaml values sit between defaults and per-contest overrides."""
        (tmp_path / "contests.yaml").write_text(
            "contest_types:\n"
            "  high_low_total:\n"
            "    high_low_total:\n"
            "      tie_rule: carryover\n"
            "  stableford:\n"
            "    stableford:\n"
            "      birdie: 4\n"
        )
        loader = ConfigLoader.create(tmp_path)

        assert loader.merge_config("high_low_total")["high_low_total"]["tie_rule"] == "carryover"
        assert loader.merge_config("stableford")["stableford"]["birdie"] == 4
        assert loader.merge_config("stableford", {"stableford": {"birdie": 5}})["stableford"]["birdie"] == 5
        assert loader.merge_config("skins")["stableford"]["birdie"] == 3

    def test_missing_contests_file(self, tmp_path: Path) -> None:
        """Test a config directory without contests.yaml falls back to defaults."""
        loader = ConfigLoader.create(tmp_path)
        assert loader.load_contest_type_config("nassau") == {}
        assert loader.merge_config("nassau")["handicap"]["use_relative_handicap"] is True

    def test_empty_contests_file(self, tmp_path: Path) -> None:
        """Test an empty contests.yaml is treated as no overrides."""
        (tmp_path / "contests.yaml").write_text("")
        assert ConfigLoader.create(tmp_path).load_contest_type_config("skins") == {}

    def test_contests_file_read_once(self, tmp_path: Path) -> None:
        """Test overrides are fixed when the loader is created."""
        contests_file = tmp_path / "contests.yaml"
        contests_file.write_text("contest_types:\n  skins:\n    skins:\n      max_multiplier: 2\n")
        loader = ConfigLoader.create(tmp_path)
        contests_file.write_text("contest_types:\n  skins:\n    skins:\n      max_multiplier: 9\n")

        assert loader.merge_config("skins")["skins"]["max_multiplier"] == 2

    def test_merge_leaves_loader_untouched(self) -> None:
        """Test per-contest overrides never leak into later merges."""
        loader = ConfigLoader.create()
        loader.merge_config("skins", {"skins": {"max_multiplier": 3}})
        assert loader.merge_config("skins")["skins"]["max_multiplier"] is None


class TestDeepMerge:
    """Test suite for nested dictionary merging."""

    def test_nested_keys_merge(self) -> None:
        base = {"skins": {"carryover_enabled": True, "max_multiplier": None}, "round": {"holes_planned": 18}}
        merged = deep_merge(base, {"skins": {"max_multiplier": 4}})

        assert merged == {"skins": {"carryover_enabled": True, "max_multiplier": 4}, "round": {"holes_planned": 18}}
        assert base["skins"]["max_multiplier"] is None

    def test_scalar_replaces_mapping(self) -> None:
        assert deep_merge({"a": {"b": 1}}, {"a": 2}) == {"a": 2}


class TestContestValidation:
    """Test suite for contest config validation."""

    def test_valid_config(self, make_config) -> None:
        """Test a well-formed config has no errors."""
        assert ConfigValidator.validate_contest(make_config("skins", ("alex", "blake"))) == []

    def test_missing_identity_fields(self, make_config) -> None:
        """Test contest id and participants are required."""
        config = make_config("skins", (), contest_id="")
        fields = {error.field for error in ConfigValidator.validate_contest(config)}
        assert {"contest_id", "participants"} <= fields

    def test_negative_unit(self) -> None:
        """Test stakes must be non-negative integers."""
        errors = ConfigValidator.validate_stakes(StakesConfig(unit=-5))
        assert format_errors(errors) == ["stakes_config.unit: Must be a non-negative integer (got: -5)"]

    def test_negative_segment_stake(self) -> None:
        """Test per-segment stakes are validated."""
        errors = ConfigValidator.validate_stakes(StakesConfig(unit=10, segments=SegmentStakes(back=-1)))
        assert [error.field for error in errors] == ["stakes_config.segments.back"]

    def test_invalid_tie_rule(self) -> None:
        """Test tie rules outside push, split and carryover are rejected."""
        errors = ConfigValidator.validate_options(ContestOptions(tie_rule="sudden_death"))
        assert errors[0].field == "options.tie_rule"

    def test_invalid_max_multiplier(self) -> None:
        """Test the carryover cap must be positive."""
        options = ContestOptions(carryover_rules=CarryoverRules(max_multiplier=0))
        errors = ConfigValidator.validate_options(options)
        assert errors[0].field == "options.carryover_rules.max_multiplier"
        assert "Must be a positive integer" in errors[0].message

    def test_press_window(self) -> None:
        """Test presses need a start hole on the course and a non-negative stake."""
        options = ContestOptions(presses=(
            PressConfig(press_id="p1", parent_segment=SegmentId.BACK, start_hole=21, stake=-10),
        ))
        fields = [error.field for error in ConfigValidator.validate_options(options)]
        assert fields == ["options.presses[p1].start_hole", "options.presses[p1].stake"]


class TestMergedConfigValidation:
    """Test suite for validating merged configuration dictionaries."""

    def test_bundled_config_is_valid(self) -> None:
        """Test every bundled contest type merges into a valid config."""
        loader = ConfigLoader.create()
        for contest_type in ("skins", "stableford", "high_low_total", "nassau", "match_play_singles"):
            assert ConfigValidator.validate_config(loader.merge_config(contest_type)) == []

    @pytest.mark.parametrize(
        "override,field",
        [
            ({"handicap": {"allow_below_1": "yes"}}, "handicap.allow_below_1"),
            ({"stableford": {"eagle": 4.5}}, "stableford.eagle"),
            ({"skins": {"max_multiplier": -2}}, "skins.max_multiplier"),
            ({"high_low_total": {"tie_rule": "replay"}}, "high_low_total.tie_rule"),
            ({"round": {"holes_planned": 12}}, "round.holes_planned"),
        ],
    )
    def test_invalid_merged_values(self, override, field) -> None:
        """Test each merged section is type checked."""
        config = ConfigLoader.create().merge_config("skins", override)
        errors = ConfigValidator.validate_config(config)
        assert len(errors) == 1
        assert isinstance(errors[0], ValidationError)
        assert errors[0].field == field
