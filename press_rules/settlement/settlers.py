"""
Settlement generators per contest family.

Every settler returns a list of ledger entries where each entry is a positive
transfer from one player to another, so any list of entries nets to zero
across its players. Integer division always rounds down; remainders are not
paid out.
"""

from typing import Optional, Union

from ..models.contest import Team
from ..models.results import LedgerEntry, SkinResultEntry
from .ledger import LedgerSequence, create_ledger_entry


def settle_match_play(
    sequence: LedgerSequence,
    contest_id: str,
    winner_id: str,
    loser_id: str,
    holes_up: int,
    unit: int,
    description: str,
) -> list[LedgerEntry]:
    """Loser pays the winner ``holes_up * unit`` in a single entry."""
    if holes_up <= 0:
        return []

    return [
        create_ledger_entry(sequence, contest_id, loser_id, winner_id, holes_up * unit, description)
    ]


def settle_team_match_play(
    sequence: LedgerSequence,
    contest_id: str,
    winning_team: Team,
    losing_team: Team,
    margin: int,
    unit: int,
    description: str,
) -> list[LedgerEntry]:
    """
    Split ``margin * unit`` across every losing/winning player pair.

    The losing team pays the total once: each loser covers an equal share and
    each winner collects an equal share, giving one entry per pair worth
    ``total // (losers * winners)``.
    """
    if margin <= 0:
        return []

    payers = list(losing_team.player_ids)
    payees = list(winning_team.player_ids)
    if not payers or not payees:
        return []

    per_pair = (margin * unit) // (len(payers) * len(payees))
    if per_pair <= 0:
        return []

    entries = []
    for loser_id in payers:
        for winner_id in payees:
            entries.append(create_ledger_entry(
                sequence, contest_id, loser_id, winner_id, per_pair, description
            ))
    return entries


def settle_skins(
    sequence: LedgerSequence,
    contest_id: str,
    skin_results: list[SkinResultEntry],
    unit: int,
    player_ids: list[str],
) -> list[LedgerEntry]:
    """Each skin winner collects ``unit`` per skin from every other player."""
    entries = []
    for result in skin_results:
        if result.winner_id is None or result.skins_won <= 0:
            continue
        skins = "skin" if result.skins_won == 1 else f"{result.skins_won} skins"
        description = f"Skins hole {result.hole}: {result.winner_name or result.winner_id} wins {skins}"
        for payer_id in player_ids:
            if payer_id == result.winner_id:
                continue
            entries.append(create_ledger_entry(
                sequence, contest_id, payer_id, result.winner_id,
                unit * result.skins_won, description,
            ))
    return entries


def settle_split_skins(
    sequence: LedgerSequence,
    contest_id: str,
    hole: int,
    tied_player_ids: list[str],
    skin_count: int,
    unit: int,
    player_ids: list[str],
) -> list[LedgerEntry]:
    """
    Split skins still carried over at the final hole among the players tied low.

    Each tied player collects ``unit * skin_count // len(tied)`` from every
    player outside the tie. When everyone tied nothing changes hands.
    """
    if not tied_player_ids or skin_count <= 0:
        return []

    payers = [player_id for player_id in player_ids if player_id not in tied_player_ids]
    share = (unit * skin_count) // len(tied_player_ids)
    if not payers or share <= 0:
        return []

    entries = []
    for winner_id in tied_player_ids:
        for payer_id in payers:
            entries.append(create_ledger_entry(
                sequence, contest_id, payer_id, winner_id, share,
                f"Skins hole {hole}: {skin_count} carried skins split {len(tied_player_ids)} ways",
            ))
    return entries


def settle_net_positions(
    sequence: LedgerSequence,
    contest_id: str,
    positions: dict[str, Union[int, float]],
    description: str,
    name_map: Optional[dict[str, str]] = None,
) -> list[LedgerEntry]:
    """
    Turn signed per-player positions into loser-to-winner transfers.

    Each loser pays each winner a share of the loser's amount proportional to
    that winner's share of all winnings, rounded down.
    """
    winners = [(player_id, value) for player_id, value in positions.items() if value > 0]
    losers = [(player_id, -value) for player_id, value in positions.items() if value < 0]
    if not winners or not losers:
        return []

    total_winnings = sum(value for _, value in winners)
    names = name_map or {}

    entries = []
    for loser_id, owed in losers:
        for winner_id, won in winners:
            payment = int(owed * won // total_winnings)
            if payment <= 0:
                continue
            entries.append(create_ledger_entry(
                sequence, contest_id, loser_id, winner_id, payment,
                f"{description}: {names.get(loser_id, loser_id)} to {names.get(winner_id, winner_id)}",
            ))
    return entries


def settle_skins_with_pot(
    sequence: LedgerSequence,
    contest_id: str,
    skins_won: dict[str, int],
    pot_total: int,
    player_ids: list[str],
) -> list[LedgerEntry]:
    """Every player funds an equal share of the pot; skins are paid from it."""
    total_skins = sum(skins_won.values())
    if total_skins == 0 or not player_ids:
        return []

    value_per_skin = pot_total // total_skins
    contribution = pot_total // len(player_ids)

    positions = {
        player_id: skins_won.get(player_id, 0) * value_per_skin - contribution
        for player_id in player_ids
    }
    return settle_net_positions(sequence, contest_id, positions, "Skins pot")


def settle_pot(
    sequence: LedgerSequence,
    contest_id: str,
    pot_total: int,
    winner_ids: list[str],
    contributor_ids: list[str],
    description: str,
) -> list[LedgerEntry]:
    """
    Winners split a pot funded equally by every contributor.

    Only contributors outside the winning group pay; each pays its share of
    the pot divided evenly among the winners.
    """
    if not winner_ids or pot_total <= 0 or not contributor_ids:
        return []

    non_winners = [player_id for player_id in contributor_ids if player_id not in winner_ids]
    if not non_winners:
        return []

    per_contributor = pot_total // len(contributor_ids)
    payment = per_contributor // len(winner_ids)
    if payment <= 0:
        return []

    entries = []
    for winner_id in winner_ids:
        for contributor_id in non_winners:
            entries.append(create_ledger_entry(
                sequence, contest_id, contributor_id, winner_id, payment, description
            ))
    return entries


def settle_per_hole_pot(
    sequence: LedgerSequence,
    contest_id: str,
    per_hole_value: int,
    hole_winners: dict[int, str],
    player_ids: list[str],
    description: str,
) -> list[LedgerEntry]:
    """Each hole winner collects ``per_hole_value`` split across the other players."""
    if len(player_ids) < 2:
        return []

    payment = per_hole_value // (len(player_ids) - 1)
    if payment <= 0:
        return []

    entries = []
    for hole in sorted(hole_winners):
        winner_id = hole_winners[hole]
        for payer_id in player_ids:
            if payer_id == winner_id:
                continue
            entries.append(create_ledger_entry(
                sequence, contest_id, payer_id, winner_id, payment, f"{description} hole {hole}"
            ))
    return entries


def settle_snake(
    sequence: LedgerSequence,
    contest_id: str,
    holder_id: Optional[str],
    other_ids: list[str],
    amount: int,
) -> list[LedgerEntry]:
    """The final snake holder pays ``amount`` to every other player."""
    if holder_id is None or amount <= 0:
        return []

    return [
        create_ledger_entry(sequence, contest_id, holder_id, recipient_id, amount, "Snake penalty")
        for recipient_id in other_ids
        if recipient_id != holder_id
    ]


def settle_stableford(
    sequence: LedgerSequence,
    contest_id: str,
    winner_ids: list[str],
    loser_ids: list[str],
    stake: int,
) -> list[LedgerEntry]:
    """Each loser pays an equal share of the stake, split among the winners."""
    if not winner_ids or not loser_ids or stake <= 0:
        return []

    per_loser = stake // (len(winner_ids) + len(loser_ids) - 1)
    per_winner = per_loser // len(winner_ids)
    if per_winner <= 0:
        return []

    entries = []
    for loser_id in loser_ids:
        for winner_id in winner_ids:
            entries.append(create_ledger_entry(
                sequence, contest_id, loser_id, winner_id, per_winner, "Stableford"
            ))
    return entries
