"""Default configuration parameters for contest computation."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class HandicapDefaults:
    """Handicap handling when a contest does not say otherwise."""
    use_relative_handicap: bool = True               # Match formats play off the low man
    allow_below_1: bool = False                      # Net hole scores floor at 1


@dataclass(frozen=True)
class StablefordDefaults:
    """Default stableford points per score band."""
    albatross: int = 5
    eagle: int = 4
    birdie: int = 3
    par: int = 2
    bogey: int = 1
    double_bogey: int = 0
    worse: int = 0


@dataclass(frozen=True)
class SkinsDefaults:
    """Skins carryover behaviour."""
    carryover_enabled: bool = True
    max_multiplier: Optional[int] = None             # Unlimited


@dataclass(frozen=True)
class HighLowTotalDefaults:
    """High-low-total tie handling."""
    tie_rule: str = "push"                           # push, split or carryover


@dataclass(frozen=True)
class RoundDefaults:
    """Round shape assumed when metadata is missing."""
    holes_planned: int = 18


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    handicap: HandicapDefaults = field(default_factory=HandicapDefaults)
    stableford: StablefordDefaults = field(default_factory=StablefordDefaults)
    skins: SkinsDefaults = field(default_factory=SkinsDefaults)
    high_low_total: HighLowTotalDefaults = field(default_factory=HighLowTotalDefaults)
    round: RoundDefaults = field(default_factory=RoundDefaults)


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig()
