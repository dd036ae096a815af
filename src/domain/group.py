from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import NewType
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

GroupId = NewType("GroupId", str)
PersonId = NewType("PersonId", str)
ExpenseId = NewType("ExpenseId", str)

HUNDRED = Decimal(100)


def new_id() -> str:
    return str(uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Person(BaseModel):
    id: PersonId = PersonId(Field(default_factory=new_id))
    name: str
    email: str | None = None

    @model_validator(mode="after")
    def _normalize_contact(self) -> Person:
        self.name = self.name.strip()
        if not self.name:
            raise ValueError("Person.name must be non-empty")
        # Blank emails are stored as missing.
        self.email = (self.email or "").strip() or None
        return self


class ExpenseLineItem(BaseModel):
    """What one person consumed within an expense, before tax."""

    person_id: PersonId
    item_name: str
    amount: Decimal

    @model_validator(mode="after")
    def _validate_amount(self) -> ExpenseLineItem:
        if self.amount < 0:
            raise ValueError("ExpenseLineItem.amount must be >= 0")
        return self


class Expense(BaseModel):
    """A single payment made by one group member on behalf of others.

    `total_amount` is what the payer actually handed over. When tax is
    included it is expected to match ``subtotal + tax_amount``; that is
    checked on the write path (see ``domain.validation``), not here.
    """

    id: ExpenseId = ExpenseId(Field(default_factory=new_id))
    title: str
    total_amount: Decimal
    paid_by: PersonId
    items: list[ExpenseLineItem] = Field(default_factory=list)
    include_tax: bool = False
    tax_percentage: Decimal = Decimal(0)
    category: str = ""
    date: datetime = Field(default_factory=_utc_now)
    description: str = ""

    @model_validator(mode="after")
    def _validate_amounts(self) -> Expense:
        if self.total_amount < 0:
            raise ValueError("Expense.total_amount must be >= 0")
        if not Decimal(0) <= self.tax_percentage <= HUNDRED:
            raise ValueError("Expense.tax_percentage must be within 0..100")
        return self

    @property
    def subtotal(self) -> Decimal:
        return sum((item.amount for item in self.items), start=Decimal(0))

    @property
    def tax_amount(self) -> Decimal:
        subtotal = self.subtotal
        if not self.include_tax or self.tax_percentage <= 0 or subtotal == 0:
            return Decimal(0)
        return subtotal * (self.tax_percentage / HUNDRED)


class Group(BaseModel):
    id: GroupId = GroupId(Field(default_factory=new_id))
    title: str
    description: str = ""
    people: list[Person] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    def person_ids(self) -> set[PersonId]:
        return {person.id for person in self.people}

    def person(self, person_id: PersonId) -> Person | None:
        for person in self.people:
            if person.id == person_id:
                return person
        return None


class Settlement(BaseModel):
    """A single payment instruction: ``from_person`` pays ``to_person``."""

    model_config = ConfigDict(populate_by_name=True)

    from_person: PersonId = Field(alias="from")
    to_person: PersonId = Field(alias="to")
    amount: Decimal
