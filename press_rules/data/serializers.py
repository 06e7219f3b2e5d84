"""Canonical JSON rendering of computed results."""

from typing import Any

import orjson

from ..models.results import AggregatedSettlement, ContestResult


def to_dict(obj: Any) -> Any:
    """Plain JSON-compatible values; dataclasses become dicts, enums their values."""
    return orjson.loads(orjson.dumps(obj, option=orjson.OPT_NON_STR_KEYS))


def dumps(obj: Any) -> bytes:
    """Serialize with sorted keys so equal inputs give byte-identical output."""
    return orjson.dumps(obj, option=orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS)


def results_to_json(results: list[ContestResult]) -> str:
    # Dataclass fields keep declaration order, so flatten to dicts before sorting
    return dumps(to_dict(results)).decode()


def aggregated_to_json(aggregated: AggregatedSettlement) -> str:
    return dumps(to_dict(aggregated)).decode()
