"""Pytest configuration and shared fixtures."""

from typing import Any, Callable, Optional, Union

import pytest

from press_rules.models.contest import (
    ContestConfig,
    ContestOptions,
    PressConfig,
    ScoringBasis,
    Segment,
    SegmentId,
    StakesConfig,
    Team,
)
from press_rules.models.round import PlayerData, Round, RoundEvents, RoundMeta, TeeData
from press_rules.settlement.ledger import LedgerSequence

FRONT_PAR = [4, 4, 3, 4, 5, 4, 3, 5, 4]
BACK_PAR = [4, 4, 3, 5, 4, 4, 3, 5, 4]
PAR = dict(zip(range(1, 19), FRONT_PAR + BACK_PAR))
STROKE_INDEX = {hole: hole for hole in range(1, 19)}

ALEX_SCORES = [4, 5, 3, 4, 5, 4, 3, 5, 4] + [5, 5, 3, 6, 4, 5, 3, 4, 4]
BLAKE_SCORES = [5, 4, 4, 5, 4, 4, 4, 4, 5] + [4, 4, 3, 5, 4, 4, 3, 3, 4]

PLAYER_NAMES = {
    "alex": "Alex",
    "blake": "Blake",
    "casey": "Casey",
    "drew": "Drew",
}

Scores = Union[list[int], dict[int, int]]


def build_round(
    scores: dict[str, Scores],
    handicaps: Optional[dict[str, int]] = None,
    holes_planned: int = 18,
    events: Optional[RoundEvents] = None,
) -> Round:
    """Round with the standard tee; list scores start at hole 1."""
    handicaps = handicaps or {}
    gross = {}
    for player_id, player_scores in scores.items():
        if isinstance(player_scores, dict):
            gross[player_id] = dict(player_scores)
        else:
            gross[player_id] = {hole: value for hole, value in enumerate(player_scores, start=1)}

    players = tuple(
        PlayerData(
            id=player_id,
            name=PLAYER_NAMES.get(player_id, player_id.title()),
            course_handicap=handicaps.get(player_id, 0),
        )
        for player_id in scores
    )
    return Round(
        tee=TeeData(par=dict(PAR), stroke_index=dict(STROKE_INDEX)),
        players=players,
        gross_strokes=gross,
        meta=RoundMeta(holes_planned=holes_planned, events=events or RoundEvents()),
    )


def build_config(
    contest_type: str,
    participants: tuple,
    unit: int = 10,
    contest_id: str = "contest-1",
    name: Optional[str] = None,
    scoring_basis: ScoringBasis = ScoringBasis.GROSS,
    pot_total: Optional[int] = None,
    options: Optional[ContestOptions] = None,
    **kwargs: Any,
) -> ContestConfig:
    return ContestConfig(
        contest_id=contest_id,
        name=name or contest_type.replace("_", " ").title(),
        contest_type=contest_type,
        participants=participants,
        stakes_config=StakesConfig(unit=unit, pot_total=pot_total),
        scoring_basis=scoring_basis,
        options=options or ContestOptions(),
        **kwargs,
    )


@pytest.fixture
def make_round() -> Callable[..., Round]:
    """Factory for rounds on the standard par-72 tee."""
    return build_round


@pytest.fixture
def make_config() -> Callable[..., ContestConfig]:
    """Factory for contest configs with sensible stakes."""
    return build_config


@pytest.fixture
def sequence() -> LedgerSequence:
    """Fresh ledger id sequence."""
    return LedgerSequence()


@pytest.fixture
def scenario_round() -> Round:
    """Alex and Blake, full eighteen holes, gross."""
    return build_round({"alex": ALEX_SCORES, "blake": BLAKE_SCORES})


@pytest.fixture
def scenario_front_round() -> Round:
    """Alex and Blake after the front nine only."""
    return build_round({"alex": ALEX_SCORES[:9], "blake": BLAKE_SCORES[:9]})


@pytest.fixture
def scenario_nassau_config() -> ContestConfig:
    """Overall match with a press from hole 10 at 10 per hole."""
    return build_config(
        "nassau",
        ("alex", "blake"),
        unit=10,
        contest_id="match",
        name="Alex vs Blake",
        segments=(Segment(id=SegmentId.TOTAL, start_hole=1, end_hole=18),),
        options=ContestOptions(presses=(
            PressConfig(press_id="press-1", parent_segment=SegmentId.TOTAL, start_hole=10, stake=10),
        )),
    )


@pytest.fixture
def round_payload() -> dict[str, Any]:
    """Raw camelCase round snapshot for the Alex and Blake scenario."""
    return {
        "tee": {
            "par": {str(hole): par for hole, par in PAR.items()},
            "strokeIndex": {str(hole): index for hole, index in STROKE_INDEX.items()},
        },
        "players": [
            {"id": "alex", "name": "Alex", "courseHandicap": 0},
            {"id": "blake", "name": "Blake", "courseHandicap": 0},
        ],
        "grossStrokes": {
            "alex": {str(hole): score for hole, score in enumerate(ALEX_SCORES, start=1)},
            "blake": {str(hole): score for hole, score in enumerate(BLAKE_SCORES, start=1)},
        },
        "meta": {"holesPlanned": 18},
    }


@pytest.fixture
def contests_payload() -> list[dict[str, Any]]:
    """Raw camelCase contest list matching the scenario Nassau."""
    return [
        {
            "contestId": "match",
            "name": "Alex vs Blake",
            "type": "nassau",
            "scoringBasis": "gross",
            "participants": ["alex", "blake"],
            "stakesConfig": {"unit": 10},
            "handicapConfig": {"useRelativeHandicap": True},
            "segments": [{"id": "total", "startHole": 1, "endHole": 18, "active": True}],
            "options": {
                "presses": [
                    {"pressId": "press-1", "parentSegment": "total", "startHole": 10, "stake": 10},
                ],
            },
        },
    ]


FOURBALL_SCORES = {
    "alex": [4, 4, 3, 4, 5, 4, 2, 5, 4],
    "blake": [5, 3, 4, 5, 5, 5, 4, 6, 3],
    "casey": [5, 5, 3, 4, 4, 4, 3, 5, 4],
    "drew": [4, 5, 4, 5, 6, 5, 4, 5, 5],
}


@pytest.fixture
def fourball_round() -> Round:
    """Four players over a nine-hole round."""
    return build_round(FOURBALL_SCORES, holes_planned=9)


@pytest.fixture
def fourball_teams() -> tuple[Team, Team]:
    """Alex and Blake against Casey and Drew."""
    return (
        Team(id="aces", player_ids=("alex", "blake"), name="Aces"),
        Team(id="birdies", player_ids=("casey", "drew"), name="Birdies"),
    )


@pytest.fixture
def fourball_scores() -> dict[str, list[int]]:
    """Raw nine-hole scores behind ``fourball_round``."""
    return {player_id: list(scores) for player_id, scores in FOURBALL_SCORES.items()}
