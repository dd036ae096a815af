from __future__ import annotations

from decimal import Decimal

from domain.group import Expense, ExpenseLineItem, Group, Person, PersonId


def make_group(*person_ids: PersonId, expenses: list[Expense] | None = None, title: str = "Test group") -> Group:
    people = [Person(id=person_id, name=person_id.capitalize()) for person_id in person_ids]
    return Group(title=title, people=people, expenses=expenses or [])


def make_expense(
    paid_by: PersonId,
    shares: dict[PersonId, str],
    *,
    total_amount: str | None = None,
    tax_percentage: str = "0",
    include_tax: bool | None = None,
    title: str = "Dinner",
) -> Expense:
    """Build an expense; ``total_amount`` defaults to items plus tax."""
    items = [
        ExpenseLineItem(person_id=person_id, item_name=f"{title} share", amount=Decimal(amount))
        for person_id, amount in shares.items()
    ]
    tax = Decimal(tax_percentage)
    if include_tax is None:
        include_tax = tax > 0
    subtotal = sum((item.amount for item in items), start=Decimal(0))
    if total_amount is None:
        total = subtotal * (1 + tax / 100) if include_tax else subtotal
    else:
        total = Decimal(total_amount)
    return Expense(
        title=title,
        total_amount=total,
        paid_by=paid_by,
        items=items,
        include_tax=include_tax,
        tax_percentage=tax,
    )
