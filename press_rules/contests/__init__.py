"""Built-in contest handlers."""

from .base import ContestHandler
from .bestball_stroke import BestballStrokeHandler
from .high_low_total import HighLowTotalHandler
from .match_play_bestball import MatchPlayBestballHandler
from .match_play_singles import MatchPlaySinglesHandler
from .nassau import NassauHandler
from .side_pots import BirdiePoolHandler, CtpHandler, LongDriveHandler, SnakeHandler
from .skins import SkinsHandler
from .stableford import StablefordHandler

BUILTIN_HANDLERS: tuple[type[ContestHandler], ...] = (
    MatchPlaySinglesHandler,
    MatchPlayBestballHandler,
    NassauHandler,
    SkinsHandler,
    BestballStrokeHandler,
    StablefordHandler,
    CtpHandler,
    LongDriveHandler,
    BirdiePoolHandler,
    SnakeHandler,
    HighLowTotalHandler,
)


def register_all(registry) -> None:
    """Register every built-in handler, in a fixed order."""
    for handler_class in BUILTIN_HANDLERS:
        registry.register(handler_class())


__all__ = [
    "BUILTIN_HANDLERS",
    "BestballStrokeHandler",
    "BirdiePoolHandler",
    "ContestHandler",
    "CtpHandler",
    "HighLowTotalHandler",
    "LongDriveHandler",
    "MatchPlayBestballHandler",
    "MatchPlaySinglesHandler",
    "NassauHandler",
    "SkinsHandler",
    "SnakeHandler",
    "StablefordHandler",
    "register_all",
]
