#!/usr/bin/env python3
"""
Basic Usage Example - Press Rules Settlement Engine

This script shows the engine on a round that is still being played:
- Build round and contest payloads
- Compute a live snapshot after the front nine
- Compute the final results once the round is complete
- Aggregate every contest into net balances

Run: python examples/basic_usage.py
"""

from typing import Any

from press_rules.data.serializers import results_to_json
from press_rules.engine import SettlementEngine, compute_aggregated_settlement

PAR = [4, 4, 3, 4, 5, 4, 3, 5, 4, 4, 4, 3, 5, 4, 4, 3, 5, 4]
SCORES = {
    "alex": [4, 5, 3, 4, 5, 4, 3, 5, 4, 5, 5, 3, 6, 4, 5, 3, 4, 4],
    "blake": [5, 4, 4, 5, 4, 4, 4, 4, 5, 4, 4, 3, 5, 4, 4, 3, 3, 4],
}


def create_round(thru_hole: int) -> dict[str, Any]:
    """Round snapshot with scores posted through ``thru_hole``."""
    return {
        "tee": {
            "par": {str(hole): par for hole, par in enumerate(PAR, start=1)},
            "strokeIndex": {str(hole): hole for hole in range(1, 19)},
        },
        "players": [
            {"id": "alex", "name": "Alex", "courseHandicap": 0},
            {"id": "blake", "name": "Blake", "courseHandicap": 0},
        ],
        "grossStrokes": {
            player_id: {str(hole): score for hole, score in enumerate(scores[:thru_hole], start=1)}
            for player_id, scores in SCORES.items()
        },
        "meta": {
            "holesPlanned": 18,
            "events": {
                # Blake presses the overall match after losing the 9th
                "presses": [{"pressId": "press-1", "parentSegment": "total",
                             "initiatedOnHole": 9, "stake": 10}] if thru_hole >= 9 else [],
            },
        },
    }


def create_contests() -> list[dict[str, Any]]:
    """A Nassau and a skins game between the same two players."""
    return [
        {
            "contestId": "nassau",
            "name": "Alex vs Blake",
            "type": "nassau",
            "participants": ["alex", "blake"],
            "stakesConfig": {"unit": 10},
        },
        {
            "contestId": "skins",
            "name": "Skins",
            "type": "skins",
            "participants": ["alex", "blake"],
            "stakesConfig": {"unit": 5},
        },
    ]


def print_results(title: str, results) -> None:
    print(f"\n=== {title} ===")
    for result in results:
        summary = result.summary
        print(f"{summary.name}: {summary.status.value} thru {summary.thru_hole}")
        print(f"  {result.audit.summary}")
        for entry in result.settlement.ledger_entries:
            print(f"  {entry.from_player_id} pays {entry.to_player_id} {entry.amount}: {entry.description}")


def main():
    engine = SettlementEngine()
    contests = create_contests()

    front = engine.compute_from_dicts(create_round(thru_hole=9), contests)
    print_results("After the front nine", front)

    final = engine.compute_from_dicts(create_round(thru_hole=18), contests)
    print_results("Final", final)

    aggregated = compute_aggregated_settlement(final)
    print("\nNet balances:")
    for player_id, balance in sorted(aggregated.net_balances.items()):
        print(f"  {player_id}: {balance:+d}")

    print("\nCanonical JSON:")
    print(results_to_json(final))


if __name__ == "__main__":
    main()
