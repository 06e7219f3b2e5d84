"""
Settlement ledger: id sequencing, ledger entries, balances and per-family settlers.
"""

from .ledger import (
    LedgerSequence,
    aggregate_settlements,
    build_settlement,
    compute_balances,
    create_empty_settlement,
    create_ledger_entry,
)

__all__ = [
    "LedgerSequence",
    "aggregate_settlements",
    "build_settlement",
    "compute_balances",
    "create_empty_settlement",
    "create_ledger_entry",
]
