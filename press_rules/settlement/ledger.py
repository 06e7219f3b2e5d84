"""
Ledger entry construction and balance aggregation.

Ledger ids come from a LedgerSequence owned by the caller of the engine. The
sequence is the only state that survives between computations, and resetting
it reproduces the same ids for the same inputs.
"""

from dataclasses import dataclass

from ..errors import InvalidLedgerAmountError
from ..models.results import AggregatedSettlement, ContestSettlement, LedgerEntry


@dataclass
class LedgerSequence:
    """Monotonic ledger id generator."""

    start: int = 0
    prefix: str = "ledger"

    def __post_init__(self) -> None:
        self._value = self.start

    @property
    def current(self) -> int:
        return self._value

    def next_id(self) -> str:
        self._value += 1
        return f"{self.prefix}-{self._value}"

    def reset(self, start: int = 0) -> None:
        self._value = start


def create_ledger_entry(
    sequence: LedgerSequence,
    contest_id: str,
    from_player_id: str,
    to_player_id: str,
    amount: int,
    description: str,
) -> LedgerEntry:
    """
    Create a ledger entry with the next id from ``sequence``.

    Raises:
        InvalidLedgerAmountError: If amount is negative
    """
    if amount < 0:
        raise InvalidLedgerAmountError(
            f"Ledger amount must be non-negative, got {amount}",
            amount=amount,
            contest_id=contest_id,
            context={"from": from_player_id, "to": to_player_id},
        )

    return LedgerEntry(
        id=sequence.next_id(),
        contest_id=contest_id,
        from_player_id=from_player_id,
        to_player_id=to_player_id,
        amount=amount,
        description=description,
    )


def compute_balances(entries: list[LedgerEntry]) -> dict[str, int]:
    """Net balance per player; positive is owed to the player."""
    balances: dict[str, int] = {}
    for entry in entries:
        balances[entry.from_player_id] = balances.get(entry.from_player_id, 0) - entry.amount
        balances[entry.to_player_id] = balances.get(entry.to_player_id, 0) + entry.amount
    return balances


def create_empty_settlement() -> ContestSettlement:
    return ContestSettlement(ledger_entries=[], balances_by_player_id={})


def build_settlement(entries: list[LedgerEntry]) -> ContestSettlement:
    return ContestSettlement(
        ledger_entries=list(entries),
        balances_by_player_id=compute_balances(entries),
    )


def aggregate_settlements(settlements: list[ContestSettlement]) -> AggregatedSettlement:
    """Merge several settlements into one entry list and balance view."""
    all_entries: list[LedgerEntry] = []
    for settlement in settlements:
        all_entries.extend(settlement.ledger_entries)

    return AggregatedSettlement(
        all_entries=all_entries,
        net_balances=compute_balances(all_entries),
    )
