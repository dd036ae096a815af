from __future__ import annotations

import logging
from decimal import Decimal

from .group import Expense, Group, PersonId

logger = logging.getLogger(__name__)


def calculate_balances(group: Group) -> dict[PersonId, Decimal]:
    """Reduce a group's expenses to one signed net balance per person.

    Positive balance: the person is owed money. Negative: the person owes.
    Every group member appears in the result, including those at zero.
    References to people outside the group contribute nothing.
    """

    if group is None:
        raise TypeError("calculate_balances() requires a Group, got None")

    balances: dict[PersonId, Decimal] = {person.id: Decimal(0) for person in group.people}

    for expense in group.expenses:
        _apply_expense(expense, balances)

    return balances


def _apply_expense(expense: Expense, balances: dict[PersonId, Decimal]) -> None:
    if not expense.items:
        return

    subtotal = expense.subtotal
    tax_amount = expense.tax_amount

    if expense.paid_by in balances:
        balances[expense.paid_by] += expense.total_amount
    else:
        logger.debug("Expense %s: payer %s not in group, skipping credit", expense.id, expense.paid_by)

    for item in expense.items:
        if item.person_id not in balances:
            logger.debug("Expense %s: consumer %s not in group, skipping debit", expense.id, item.person_id)
            continue
        share = item.amount
        if tax_amount and subtotal:
            share += item.amount * tax_amount / subtotal
        balances[item.person_id] -= share
