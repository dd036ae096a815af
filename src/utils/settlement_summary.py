from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from domain.balances import calculate_balances
from domain.group import Group, PersonId
from domain.settlement import DEFAULT_EPSILON, plan_settlements

from .formatting import format_currency, format_signed_currency


@dataclass
class BalanceLine:
    person_id: PersonId
    name: str
    balance: Decimal


@dataclass
class SettlementLine:
    from_name: str
    to_name: str
    amount: Decimal


@dataclass
class GroupSummary:
    group_id: str
    title: str
    total_spent: Decimal
    balances: list[BalanceLine] = field(default_factory=list)
    settlements: list[SettlementLine] = field(default_factory=list)


def compute_group_summary(group: Group, *, epsilon: Decimal = DEFAULT_EPSILON) -> GroupSummary:
    balances = calculate_balances(group)
    settlements = plan_settlements(balances, epsilon=epsilon)

    return GroupSummary(
        group_id=group.id,
        title=group.title,
        total_spent=sum((expense.total_amount for expense in group.expenses), start=Decimal(0)),
        balances=[
            BalanceLine(person_id=person.id, name=person.name, balance=balances[person.id]) for person in group.people
        ],
        settlements=[
            SettlementLine(
                from_name=_person_name(group, settlement.from_person),
                to_name=_person_name(group, settlement.to_person),
                amount=settlement.amount,
            )
            for settlement in settlements
        ],
    )


def _person_name(group: Group, person_id: PersonId) -> str:
    person = group.person(person_id)
    return person.name if person is not None else person_id


def render_group_summary(summary: GroupSummary) -> None:
    print(f"Group: {summary.title} (total spent {format_currency(summary.total_spent)})")
    if not summary.balances:
        print("  (no people)")
        return

    name_label = "Person"
    balance_label = "Balance"

    rows = [(line.name, format_signed_currency(line.balance)) for line in summary.balances]
    name_width = max(len(name_label), max((len(name) for name, _ in rows), default=0))
    balance_width = max(len(balance_label), max((len(balance) for _, balance in rows), default=0))

    header = f"{name_label:<{name_width}} {balance_label:>{balance_width}}"
    lines = [header, "-" * len(header)]
    for name, balance in rows:
        lines.append(f"{name:<{name_width}} {balance:>{balance_width}}")
    lines.append("-" * len(header))

    if not summary.settlements:
        lines.append("All settled.")
    else:
        lines.append("Settlements:")
        for settlement in summary.settlements:
            lines.append(f"  {settlement.from_name} -> {settlement.to_name}: {format_currency(settlement.amount)}")

    print("\n".join(lines))
