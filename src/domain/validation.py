from __future__ import annotations

from decimal import Decimal

from .group import Expense, ExpenseId, Group
from .settlement import DEFAULT_EPSILON


class ExpenseValidationError(Exception):
    def __init__(self, *, expense_id: ExpenseId, problems: list[str]) -> None:
        self.expense_id = expense_id
        self.problems = problems
        super().__init__(f"Invalid expense {expense_id}: {'; '.join(problems)}")


def validate_expense(group: Group, expense: Expense, *, tolerance: Decimal = DEFAULT_EPSILON) -> None:
    """Checks applied before an expense is stored in ``group``.

    The balance calculator tolerates everything rejected here; these rules
    keep bad data from reaching it in the first place.
    """

    problems: list[str] = []
    members = group.person_ids()

    if not expense.title.strip():
        problems.append("title is required")
    if expense.total_amount <= 0:
        problems.append("total_amount must be greater than 0")
    if expense.paid_by not in members:
        problems.append(f"payer {expense.paid_by} is not a member of group {group.id}")

    if not expense.items:
        problems.append("at least one item is required")
    for index, item in enumerate(expense.items):
        if not item.item_name.strip():
            problems.append(f"item {index}: item_name is required")
        if item.amount <= 0:
            problems.append(f"item {index}: amount must be greater than 0")
        if item.person_id not in members:
            problems.append(f"item {index}: person {item.person_id} is not a member of group {group.id}")

    if expense.items:
        expected_total = expense.subtotal + expense.tax_amount
        if abs(expense.total_amount - expected_total) > tolerance:
            problems.append(f"total_amount {expense.total_amount} does not match items plus tax ({expected_total})")

    if problems:
        raise ExpenseValidationError(expense_id=expense.id, problems=problems)
