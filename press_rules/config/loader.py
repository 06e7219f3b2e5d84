"""
Contest configuration lookup.

Values resolve in three tiers: per-contest overrides beat the per-type
entries of ``contests.yaml``, which beat the built-in defaults.
"""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import DefaultConfig, get_default_config

CONTESTS_FILE = "contests.yaml"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Nested merge where ``override`` wins; neither input is modified."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def read_contest_types(config_dir: Path) -> dict[str, dict[str, Any]]:
    """The ``contest_types`` mapping of ``contests.yaml``; empty when the file is absent."""
    path = config_dir / CONTESTS_FILE
    if not path.exists():
        return {}

    with open(path) as f:
        document = yaml.safe_load(f) or {}
    return document.get("contest_types") or {}


@dataclass(frozen=True)
class ConfigLoader:
    """Resolved defaults plus per-type overrides read once from ``config_dir``."""

    config_dir: Path
    defaults: DefaultConfig
    contest_types: dict[str, dict[str, Any]] = field(default_factory=dict, hash=False)

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"
        config_dir = Path(config_dir)

        return cls(
            config_dir=config_dir,
            defaults=get_default_config(),
            contest_types=read_contest_types(config_dir),
        )

    def load_contest_type_config(self, contest_type: str) -> dict[str, Any]:
        return self.contest_types.get(contest_type) or {}

    def merge_config(
        self,
        contest_type: str,
        contest_overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """Defaults, then the contest type's YAML entry, then ``contest_overrides``."""
        config = deep_merge(asdict(self.defaults), self.load_contest_type_config(contest_type))
        if contest_overrides:
            config = deep_merge(config, contest_overrides)
        return config
