#!/usr/bin/env python3
"""Validate the merged configuration of every contest type."""

import sys

from press_rules.config.loader import ConfigLoader
from press_rules.config.validation import ConfigValidator, ValidationError
from press_rules.models.contest import ContestType


def validate_contest_type_config(loader: ConfigLoader, contest_type: str) -> list[ValidationError]:
    """Validate configuration for a specific contest type."""
    config = loader.merge_config(contest_type)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("Validating press rules configuration...")

    loader = ConfigLoader.create()
    contest_types = [contest_type.value for contest_type in ContestType]
    contest_types.append("unknown_contest")  # Should use defaults

    all_valid = True

    for contest_type in contest_types:
        errors = validate_contest_type_config(loader, contest_type)
        if errors:
            print(f"\n{contest_type}: {len(errors)} validation errors")
            for error in errors:
                print(f"  - {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"{contest_type}: ok")

    # Per-contest overrides
    test_overrides = {
        "handicap": {"allow_below_1": True},
        "high_low_total": {"tie_rule": "carryover"},
    }
    errors = ConfigValidator.validate_config(loader.merge_config("high_low_total", test_overrides))
    if errors:
        print("\nContest override validation failed:")
        for error in errors:
            print(f"  - {error.field}: {error.message}")
        all_valid = False
    else:
        print("Contest override validation passed")

    if all_valid:
        print("\nAll configuration validation passed")
        sys.exit(0)
    else:
        print("\nConfiguration validation failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
