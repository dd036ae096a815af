from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping

from .balances import calculate_balances
from .group import Group, PersonId, Settlement

DEFAULT_EPSILON = Decimal("0.01")
CENT = Decimal("0.01")


@dataclass
class _OpenPosition:
    person_id: PersonId
    remaining: Decimal


def get_settlements(group: Group, *, epsilon: Decimal = DEFAULT_EPSILON) -> list[Settlement]:
    """Payments that settle every balance in ``group``.

    Balances are recomputed on each call.
    """

    return plan_settlements(calculate_balances(group), epsilon=epsilon)


def plan_settlements(
    balances: Mapping[PersonId, Decimal],
    *,
    epsilon: Decimal = DEFAULT_EPSILON,
) -> list[Settlement]:
    """Greedy largest-first matching of debtors against creditors.

    Produces at most ``n - 1`` payments for ``n`` people with a non-zero
    balance. Equal amounts are ordered by person id. Balances and remainders
    smaller than ``epsilon`` are treated as settled and never produce a payment.
    """

    creditors = _sorted_positions(
        (person_id, balance) for person_id, balance in balances.items() if balance >= epsilon
    )
    debtors = _sorted_positions(
        (person_id, -balance) for person_id, balance in balances.items() if -balance >= epsilon
    )

    settlements: list[Settlement] = []
    creditor_index = debtor_index = 0
    while creditor_index < len(creditors) and debtor_index < len(debtors):
        creditor = creditors[creditor_index]
        debtor = debtors[debtor_index]

        amount = min(creditor.remaining, debtor.remaining)
        settlements.append(
            Settlement(
                from_person=debtor.person_id,
                to_person=creditor.person_id,
                amount=amount.quantize(CENT, rounding=ROUND_HALF_UP),
            )
        )

        creditor.remaining -= amount
        debtor.remaining -= amount

        if creditor.remaining < epsilon:
            creditor_index += 1
        if debtor.remaining < epsilon:
            debtor_index += 1

    return settlements


def _sorted_positions(entries: Iterable[tuple[PersonId, Decimal]]) -> list[_OpenPosition]:
    positions = [_OpenPosition(person_id=person_id, remaining=amount) for person_id, amount in entries]
    positions.sort(key=lambda position: position.person_id)
    positions.sort(key=lambda position: position.remaining, reverse=True)
    return positions
