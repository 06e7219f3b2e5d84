#!/usr/bin/env python3
"""
Settle every contest of a round from a JSON or YAML file.

The file holds a ``round`` snapshot and a ``contests`` list in the camelCase
payload format.

Usage:
    python scripts/settle_round.py examples/sample_round.json [--json] [--log-level DEBUG]
"""

import argparse
import sys

from press_rules.data.parsers import load_payload
from press_rules.data.serializers import results_to_json
from press_rules.engine import SettlementEngine, compute_aggregated_settlement
from press_rules.errors import RoundDataError, SystemFailureError
from press_rules.logging import configure_logging


def main() -> int:
    parser = argparse.ArgumentParser(description="Settle the contests of a golf round")
    parser.add_argument("path", help="Round file (.json, .yaml or .yml)")
    parser.add_argument("--json", action="store_true", help="Print results as canonical JSON")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    configure_logging(level=args.log_level, include_timestamp=False)

    try:
        payload = load_payload(args.path)
        engine = SettlementEngine()
        results = engine.compute_from_dicts(payload.get("round", {}), payload.get("contests", []))
    except RoundDataError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 2
    except SystemFailureError as e:
        print(f"Settlement failed: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(results_to_json(results))
        return 0

    for result in results:
        summary = result.summary
        thru = summary.thru_hole if summary.thru_hole is not None else "-"
        print(f"{summary.name} [{summary.contest_type}] {summary.status.value} thru {thru}")
        for error in summary.errors:
            print(f"  ! {error}")
        if result.audit.summary:
            print(f"  {result.audit.summary}")
        for entry in result.settlement.ledger_entries:
            print(f"  {entry.id}: {entry.from_player_id} -> {entry.to_player_id} "
                  f"{entry.amount} ({entry.description})")

    aggregated = compute_aggregated_settlement(results)
    print("\nNet balances:")
    for player_id, balance in sorted(aggregated.net_balances.items()):
        print(f"  {player_id}: {balance:+d}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
