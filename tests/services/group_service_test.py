from decimal import Decimal

import pytest

from db.repositories import GroupRepository
from domain.group import GroupId, Settlement
from services.group_service import GroupService
from tests.constants import ALICE, BOB, CHARLIE
from tests.helpers.groups import make_expense, make_group


@pytest.fixture()
def service(group_repository: GroupRepository) -> GroupService:
    return GroupService(group_repository)


def test_missing_group_yields_empty_results(service: GroupService) -> None:
    missing = GroupId("missing")

    assert service.balances(missing) == {}
    assert service.settlements(missing) == []
    assert service.summary(missing) is None


def test_balances_and_settlements_for_stored_group(service: GroupService, group_repository: GroupRepository) -> None:
    group = make_group(
        ALICE,
        BOB,
        CHARLIE,
        expenses=[make_expense(CHARLIE, {ALICE: "100", BOB: "200"}, total_amount="330", tax_percentage="10")],
    )
    group_repository.create(group)

    balances = service.balances(group.id)
    settlements = service.settlements(group.id)

    assert balances == {ALICE: Decimal("-110"), BOB: Decimal("-220"), CHARLIE: Decimal("330")}
    assert settlements == [
        Settlement(from_person=BOB, to_person=CHARLIE, amount=Decimal("220.00")),
        Settlement(from_person=ALICE, to_person=CHARLIE, amount=Decimal("110.00")),
    ]


def test_summary_uses_person_names(service: GroupService, group_repository: GroupRepository) -> None:
    group = make_group(ALICE, BOB, expenses=[make_expense(ALICE, {BOB: "25"})], title="Lunch club")
    group_repository.create(group)

    summary = service.summary(group.id)

    assert summary is not None
    assert summary.title == "Lunch club"
    assert summary.total_spent == Decimal("25")
    assert [(line.name, line.balance) for line in summary.balances] == [("Alice", Decimal("25")), ("Bob", Decimal("-25"))]
    assert [(line.from_name, line.to_name, line.amount) for line in summary.settlements] == [
        ("Bob", "Alice", Decimal("25.00"))
    ]
