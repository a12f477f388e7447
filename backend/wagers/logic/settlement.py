"""
Turning game results into debts and netting them per player pair.

Games that produce standings are converted to loser-to-winner obligations
by splitting each loser's loss over the winners in proportion to what they
won. The consolidator then nets every obligation of the round so each pair
of players ends up with at most one settlement.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING

import structlog

from wagers.logic.exceptions import InvalidSettlementError, SettlementLimitError
from wagers.logic.money import ZERO, allocate_cents, from_cents, to_cents, to_money
from wagers.logic.settings import DEFAULT_RULES
from wagers.logic.types import Obligation, Settlement

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wagers.logic.settings import WagerRules
    from wagers.logic.types import PlayerStanding

logger = structlog.get_logger()


def obligations_from_standings(standings: Iterable[PlayerStanding], source: str) -> list[Obligation]:
    """
    Split every loser's loss over the winners by their share of total winnings.

    Each loser's split is rounded to whole cents with the largest-remainder
    method, so the loser pays exactly what they lost. Nothing is emitted when
    nobody won.
    """
    money = {s.player_id: to_money(s.money) for s in standings}
    winners = {player_id: amount for player_id, amount in money.items() if amount > 0}
    total_won = sum(winners.values(), ZERO)
    if total_won <= 0:
        return []

    obligations: list[Obligation] = []
    for loser_id, amount in money.items():
        if amount >= 0:
            continue
        owed = -to_cents(amount)
        exact = {
            winner_id: Fraction(owed, 100) * Fraction(won) / Fraction(total_won) for winner_id, won in winners.items()
        }
        for winner_id, cents in allocate_cents(exact, owed).items():
            if cents <= 0 or winner_id == loser_id:
                continue
            obligations.append(Obligation(from_id=loser_id, to_id=winner_id, amount=from_cents(cents), source=source))
    return obligations


def check_limits(obligations: Iterable[Obligation], rules: WagerRules = DEFAULT_RULES) -> None:
    """Reject negative or oversized obligations before they are consolidated."""
    for ob in obligations:
        if ob.amount < 0:
            logger.error("negative settlement amount", from_id=ob.from_id, to_id=ob.to_id, amount=str(ob.amount))
            raise InvalidSettlementError("Invalid settlement calculation")
        if ob.amount > rules.max_individual_settlement:
            logger.warning(
                "settlement amount exceeds maximum",
                from_id=ob.from_id,
                to_id=ob.to_id,
                amount=str(ob.amount),
            )
            raise SettlementLimitError(
                f"Settlement amount (${ob.amount:.2f}) exceeds maximum allowed (${rules.max_individual_settlement})"
            )


def consolidate(obligations: Iterable[Obligation], rules: WagerRules = DEFAULT_RULES) -> list[Settlement]:
    """
    Net obligations so each unordered pair of players has at most one settlement.

    An obligation is added to the pair's running balance under the key it
    was first seen with; one in the opposite direction is subtracted. The
    sign of the final balance gives the direction. Balances below the
    settlement epsilon are dropped, as are self-obligations.
    """
    balances: dict[tuple[str, str], Decimal] = {}
    for ob in obligations:
        if ob.from_id == ob.to_id:
            continue
        key = (ob.from_id, ob.to_id)
        reverse = (ob.to_id, ob.from_id)
        if reverse in balances:
            balances[reverse] -= ob.amount
        else:
            balances[key] = balances.get(key, ZERO) + ob.amount

    settlements: list[Settlement] = []
    for (from_id, to_id), amount in balances.items():
        amount = to_money(amount)
        if abs(amount) < rules.settlement_epsilon:
            continue
        if amount > 0:
            settlements.append(Settlement(from_id=from_id, to_id=to_id, amount=amount))
        else:
            settlements.append(Settlement(from_id=to_id, to_id=from_id, amount=-amount))

    total = sum((s.amount for s in settlements), ZERO)
    if total > rules.max_total_settlement:
        raise SettlementLimitError(
            f"Total settlement amount (${total:.2f}) exceeds maximum allowed (${rules.max_total_settlement})"
        )
    return settlements


def net_positions(items: Iterable[Obligation | Settlement]) -> dict[str, Decimal]:
    """Signed net per player: receivers positive, payers negative."""
    positions: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for item in items:
        positions[item.to_id] += item.amount
        positions[item.from_id] -= item.amount
    return {player_id: amount for player_id, amount in positions.items() if amount != 0}


def assert_conserved(obligations: Iterable[Obligation], settlements: Iterable[Settlement]) -> None:
    """Raise if netting changed what any player receives or pays overall."""
    before = net_positions(obligations)
    after = net_positions(settlements)
    if before != after:
        logger.error("settlement not conserved", before=str(before), after=str(after))
        raise InvalidSettlementError("Consolidated settlements do not match the raw obligations")
    if sum(after.values(), ZERO) != 0:
        raise InvalidSettlementError("Settlements do not sum to zero")
