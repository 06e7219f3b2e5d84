"""
Parsers for raw round snapshots and contest configurations.

Payloads use the camelCase keys of the JSON test vectors. Hole numbers may be
given as strings ("1".."18") and are converted to integers. Structurally
broken input raises a RoundDataError subclass; semantic problems in a parsed
contest config are left to validation.
"""

from pathlib import Path
from typing import Any, Optional, Union

import orjson
import yaml

from ..config.defaults import get_default_config
from ..config.loader import ConfigLoader
from ..errors import MalformedContestConfigError, MalformedRoundError, MissingRoundDataError
from ..models.contest import (
    CarryoverRules,
    ContestConfig,
    ContestOptions,
    HandicapConfig,
    PressConfig,
    ScoringBasis,
    Segment,
    SegmentId,
    SegmentStakes,
    StablefordTable,
    StakesConfig,
    Team,
)
from ..models.round import (
    CtpEvent,
    LongDriveEvent,
    PlayerData,
    PressEvent,
    Round,
    RoundEvents,
    RoundMeta,
    TeeData,
    ThreePuttEvent,
)


def parse_json(raw: Union[str, bytes]) -> Any:
    """Decode a JSON document with orjson."""
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        raise MalformedRoundError(f"Invalid JSON: {e}", raw_value=str(raw)[:100]) from e


def load_payload(path: Union[str, Path]) -> Any:
    """Load a JSON or YAML payload from disk, chosen by file extension."""
    path = Path(path)
    if path.suffix in (".yaml", ".yml"):
        with open(path) as f:
            return yaml.safe_load(f)
    return parse_json(path.read_bytes())


def _hole_map(raw: Any, field: str) -> dict[int, int]:
    if not isinstance(raw, dict):
        raise MalformedRoundError(f"{field} must be a mapping of hole to value",
                                  field=field, raw_value=raw)
    try:
        return {int(hole): int(value) for hole, value in raw.items() if value is not None}
    except (TypeError, ValueError) as e:
        raise MalformedRoundError(f"Invalid {field} entry: {e}", field=field, raw_value=raw) from e


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def parse_round(data: dict[str, Any]) -> Round:
    """
    Parse a raw round snapshot.

    Raises:
        MalformedRoundError: If a section has the wrong shape or type
        MissingRoundDataError: If the tee or roster is absent
    """
    if not isinstance(data, dict):
        raise MalformedRoundError(f"Round must be a mapping, got {type(data).__name__}",
                                  raw_value=str(data)[:100])

    tee_raw = data.get("tee")
    if not tee_raw:
        raise MissingRoundDataError("Round is missing tee data", section="tee")
    if "par" not in tee_raw or "strokeIndex" not in tee_raw:
        raise MissingRoundDataError("Tee requires par and strokeIndex", section="tee")

    tee = TeeData(
        par=_hole_map(tee_raw["par"], "tee.par"),
        stroke_index=_hole_map(tee_raw["strokeIndex"], "tee.strokeIndex"),
        rating=_optional_float(tee_raw.get("rating")),
        slope=_optional_int(tee_raw.get("slope")),
    )

    players_raw = data.get("players")
    if not players_raw:
        raise MissingRoundDataError("Round has no players", section="players")

    players = []
    for index, player in enumerate(players_raw):
        if not isinstance(player, dict) or "id" not in player:
            raise MalformedRoundError(f"Player at index {index} requires an id",
                                      field="players", raw_value=player)
        try:
            players.append(PlayerData(
                id=str(player["id"]),
                name=str(player.get("name", player["id"])),
                course_handicap=int(player.get("courseHandicap") or 0),
            ))
        except (TypeError, ValueError) as e:
            raise MalformedRoundError(f"Invalid courseHandicap for player {player['id']}: {e}",
                                      field="players.courseHandicap", raw_value=player) from e

    gross_raw = data.get("grossStrokes") or {}
    if not isinstance(gross_raw, dict):
        raise MalformedRoundError("grossStrokes must be a mapping of player to holes",
                                  field="grossStrokes", raw_value=gross_raw)
    gross_strokes = {
        str(player_id): _hole_map(holes or {}, f"grossStrokes.{player_id}")
        for player_id, holes in gross_raw.items()
    }

    return Round(
        tee=tee,
        players=tuple(players),
        gross_strokes=gross_strokes,
        meta=_parse_meta(data.get("meta") or {}),
    )


def _parse_meta(raw: dict[str, Any]) -> RoundMeta:
    holes_planned = int(raw.get("holesPlanned") or get_default_config().round.holes_planned)
    if holes_planned not in (9, 18):
        raise MalformedRoundError(f"holesPlanned must be 9 or 18, got {holes_planned}",
                                  field="meta.holesPlanned", raw_value=holes_planned)

    events = raw.get("events") or {}
    try:
        return RoundMeta(
            holes_planned=holes_planned,
            events=RoundEvents(
                presses=tuple(
                    PressEvent(
                        press_id=str(press["pressId"]),
                        parent_segment=SegmentId(press["parentSegment"]),
                        initiated_on_hole=int(press["initiatedOnHole"]),
                        stake=int(press["stake"]),
                        start_hole=_optional_int(press.get("startHole")),
                        end_hole=_optional_int(press.get("endHole")),
                        initiator_player_id=press.get("initiatorPlayerId"),
                    )
                    for press in events.get("presses") or []
                ),
                ctp=tuple(
                    CtpEvent(
                        hole=int(event["hole"]),
                        winner_player_id=str(event["winnerPlayerId"]),
                        distance_ft=_optional_float(event.get("distanceFt")),
                    )
                    for event in events.get("ctp") or []
                ),
                long_drive=tuple(
                    LongDriveEvent(
                        hole=int(event["hole"]),
                        winner_player_id=str(event["winnerPlayerId"]),
                        distance_yds=_optional_float(event.get("distanceYds")),
                    )
                    for event in events.get("longDrive") or []
                ),
                three_putts=tuple(
                    ThreePuttEvent(hole=int(event["hole"]), player_id=str(event["playerId"]))
                    for event in events.get("threePutts") or []
                ),
            ),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedRoundError(f"Invalid round event: {e}", field="meta.events",
                                  raw_value=events) from e


def _parse_participants(raw: Any, contest_id: str) -> Union[tuple[str, ...], tuple[Team, ...]]:
    if not isinstance(raw, list):
        raise MalformedContestConfigError("participants must be a list",
                                          contest_id=contest_id, field="participants")
    if raw and all(isinstance(item, dict) for item in raw):
        if any("id" not in team for team in raw):
            raise MalformedContestConfigError("Every team requires an id",
                                              contest_id=contest_id, field="participants")
        return tuple(
            Team(
                id=str(team["id"]),
                player_ids=tuple(str(player_id) for player_id in team.get("playerIds", [])),
                name=team.get("name"),
            )
            for team in raw
        )
    if all(isinstance(item, str) for item in raw):
        return tuple(raw)
    raise MalformedContestConfigError("participants must be all player ids or all teams",
                                      contest_id=contest_id, field="participants")


def _contest_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Per-contest values in the loader's config layout."""
    overrides: dict[str, Any] = {}
    handicap = raw.get("handicapConfig") or {}
    if "useRelativeHandicap" in handicap:
        overrides.setdefault("handicap", {})["use_relative_handicap"] = bool(handicap["useRelativeHandicap"])
    if "allowBelow1" in handicap:
        overrides.setdefault("handicap", {})["allow_below_1"] = bool(handicap["allowBelow1"])

    options = raw.get("options") or {}
    table = options.get("stablefordTable")
    if table:
        overrides["stableford"] = {
            "albatross": table.get("albatross"),
            "eagle": table.get("eagle"),
            "birdie": table.get("birdie"),
            "par": table.get("par"),
            "bogey": table.get("bogey"),
            "double_bogey": table.get("doubleBogey"),
            "worse": table.get("worse"),
        }
        overrides["stableford"] = {k: v for k, v in overrides["stableford"].items() if v is not None}
    carryover = options.get("carryoverRules")
    if carryover:
        overrides["skins"] = {"carryover_enabled": carryover.get("enabled", True),
                              "max_multiplier": carryover.get("maxMultiplier")}
    if "tieRule" in options:
        overrides["high_low_total"] = {"tie_rule": options["tieRule"]}
    return overrides


def parse_contest_config(raw: dict[str, Any], loader: Optional[ConfigLoader] = None) -> ContestConfig:
    """
    Parse one contest configuration.

    Handicap handling, the stableford table, skins carryover and the tie rule
    fall back to the contest type's configured defaults when not given.

    Raises:
        MalformedContestConfigError: If required fields are missing or mistyped
    """
    if not isinstance(raw, dict):
        raise MalformedContestConfigError(f"Contest config must be a mapping, got {type(raw).__name__}")

    contest_id = raw.get("contestId")
    contest_type = raw.get("type")
    if not contest_id:
        raise MalformedContestConfigError("Contest config requires contestId", field="contestId")
    if not contest_type:
        raise MalformedContestConfigError("Contest config requires type",
                                          contest_id=contest_id, field="type")

    loader = loader or ConfigLoader.create()
    merged = loader.merge_config(contest_type, _contest_overrides(raw))

    try:
        basis = ScoringBasis(
            raw.get("scoringBasis") or (raw.get("handicapConfig") or {}).get("basis") or "gross"
        )
        stakes_raw = raw.get("stakesConfig") or {}
        segment_stakes = stakes_raw.get("segments")
        stakes = StakesConfig(
            unit=int(stakes_raw.get("unit", 0)),
            pot_total=_optional_int(stakes_raw.get("potTotal")),
            segments=SegmentStakes(
                front=_optional_int(segment_stakes.get("front")),
                back=_optional_int(segment_stakes.get("back")),
                total=_optional_int(segment_stakes.get("total")),
            ) if segment_stakes else None,
        )

        segments = None
        if raw.get("segments"):
            segments = tuple(
                Segment(
                    id=SegmentId(segment["id"]),
                    start_hole=int(segment["startHole"]),
                    end_hole=int(segment["endHole"]),
                    active=bool(segment.get("active", True)),
                )
                for segment in raw["segments"]
            )

        options_raw = raw.get("options") or {}
        skins = merged["skins"]
        options = ContestOptions(
            stableford_table=StablefordTable(**merged["stableford"]),
            presses=tuple(
                PressConfig(
                    press_id=str(press["pressId"]),
                    parent_segment=SegmentId(press["parentSegment"]),
                    start_hole=int(press["startHole"]),
                    stake=int(press["stake"]),
                    end_hole=_optional_int(press.get("endHole")),
                )
                for press in options_raw.get("presses") or []
            ),
            carryover_rules=CarryoverRules(
                enabled=bool(skins["carryover_enabled"]),
                max_multiplier=_optional_int(skins["max_multiplier"]),
            ),
            designated_holes=tuple(int(hole) for hole in options_raw.get("designatedHoles") or []),
            per_player_buy_in=_optional_int(options_raw.get("perPlayerBuyIn")),
            tie_rule=str(merged["high_low_total"]["tie_rule"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedContestConfigError(f"Invalid contest config {contest_id}: {e}",
                                          contest_id=contest_id) from e

    return ContestConfig(
        contest_id=str(contest_id),
        name=str(raw.get("name") or contest_id),
        contest_type=str(contest_type),
        participants=_parse_participants(raw.get("participants", []), contest_id),
        stakes_config=stakes,
        scoring_basis=basis,
        handicap_config=HandicapConfig(
            use_relative_handicap=bool(merged["handicap"]["use_relative_handicap"]),
            allow_below_1=bool(merged["handicap"]["allow_below_1"]),
        ),
        segments=segments,
        options=options,
    )


def parse_contest_configs(
    raw: list[dict[str, Any]],
    loader: Optional[ConfigLoader] = None,
) -> list[ContestConfig]:
    loader = loader or ConfigLoader.create()
    return [parse_contest_config(item, loader) for item in raw]
