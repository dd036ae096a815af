from decimal import Decimal

import pytest

from domain.group import Group
from tests.constants import ALICE, BOB, CHARLIE
from tests.helpers.groups import make_expense, make_group
from utils.formatting import format_currency, format_signed_currency
from utils.settlement_summary import compute_group_summary, render_group_summary


def test_render_group_summary(capsys: pytest.CaptureFixture[str]) -> None:
    group = make_group(
        ALICE,
        BOB,
        CHARLIE,
        expenses=[make_expense(ALICE, {BOB: "10.005", CHARLIE: "20"})],
        title="Weekend",
    )

    render_group_summary(compute_group_summary(group))

    output = capsys.readouterr().out.splitlines()
    assert output[0] == "Group: Weekend (total spent 30.01)"
    assert output[1].split() == ["Person", "Balance"]
    assert output[3].split() == ["Alice", "+30.01"]
    assert output[4].split() == ["Bob", "-10.01"]
    assert output[5].split() == ["Charlie", "-20.00"]
    assert output[7] == "Settlements:"
    assert output[8] == "  Charlie -> Alice: 20.00"
    assert output[9] == "  Bob -> Alice: 10.01"


def test_render_settled_group(capsys: pytest.CaptureFixture[str]) -> None:
    group = make_group(ALICE, BOB, expenses=[make_expense(ALICE, {ALICE: "15"})])

    render_group_summary(compute_group_summary(group))

    assert capsys.readouterr().out.splitlines()[-1] == "All settled."


def test_render_group_without_people(capsys: pytest.CaptureFixture[str]) -> None:
    render_group_summary(compute_group_summary(Group(title="Empty")))

    assert capsys.readouterr().out.splitlines() == ["Group: Empty (total spent 0.00)", "  (no people)"]


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("12.345"), "12.35"),
        (Decimal("-0.001"), "0.00"),
        (Decimal("7"), "7.00"),
    ],
)
def test_format_currency(value: Decimal, expected: str) -> None:
    assert format_currency(value) == expected


def test_format_signed_currency() -> None:
    assert format_signed_currency(Decimal("5")) == "+5.00"
    assert format_signed_currency(Decimal("-5")) == "-5.00"
    assert format_signed_currency(Decimal("0")) == "0.00"
