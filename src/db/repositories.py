from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from db import models
from domain.group import Expense, ExpenseId, ExpenseLineItem, Group, GroupId, Person, PersonId
from domain.validation import validate_expense

logger = logging.getLogger(__name__)


class GroupNotFoundError(Exception):
    def __init__(self, group_id: GroupId) -> None:
        self.group_id = group_id
        super().__init__(f"Expense group not found: {group_id}")


class GroupRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, group: Group) -> Group:
        orm_group = models.ExpenseGroupOrm(
            id=group.id,
            title=group.title,
            description=group.description or None,
            created_at=group.created_at,
            updated_at=group.updated_at,
        )
        orm_group.people = [self._person_to_orm(person, position) for position, person in enumerate(group.people)]
        orm_group.expenses = [self._expense_to_orm(expense) for expense in group.expenses]

        self._session.add(orm_group)
        self._session.commit()
        self._session.refresh(orm_group)
        return self._to_domain(orm_group)

    def get(self, group_id: GroupId) -> Group | None:
        orm_group = self._session.get(models.ExpenseGroupOrm, group_id)
        if orm_group is None:
            return None
        return self._to_domain(orm_group)

    def list(self) -> list[Group]:
        orm_groups = (
            self._session.query(models.ExpenseGroupOrm).order_by(models.ExpenseGroupOrm.created_at.desc()).all()
        )
        return [self._to_domain(group) for group in orm_groups]

    def delete(self, group_id: GroupId) -> bool:
        orm_group = self._session.get(models.ExpenseGroupOrm, group_id)
        if orm_group is None:
            return False
        self._session.delete(orm_group)
        self._session.commit()
        return True

    def add_person(self, group_id: GroupId, person: Person) -> Person:
        orm_group = self._require(group_id)
        orm_group.people.append(self._person_to_orm(person, len(orm_group.people)))
        orm_group.updated_at = datetime.now(timezone.utc)
        self._session.commit()
        return person

    def update_group(self, group_id: GroupId, *, title: str, description: str = "") -> Group:
        orm_group = self._require(group_id)
        if not title.strip():
            raise ValueError("Group title is required")
        orm_group.title = title.strip()
        orm_group.description = description.strip() or None
        orm_group.updated_at = datetime.now(timezone.utc)
        self._session.commit()
        return self._to_domain(orm_group)

    def update_person(self, group_id: GroupId, person: Person) -> Person | None:
        """Replace name and email of an existing member; ``None`` if not a member."""
        orm_group = self._require(group_id)
        orm_person = next((member for member in orm_group.people if member.id == person.id), None)
        if orm_person is None:
            return None
        orm_person.name = person.name
        orm_person.email = person.email
        orm_group.updated_at = datetime.now(timezone.utc)
        self._session.commit()
        return person

    def remove_person(self, group_id: GroupId, person_id: PersonId) -> bool:
        """Remove a member together with every expense they paid for or consumed in."""
        orm_group = self._require(group_id)
        orm_person = next((person for person in orm_group.people if person.id == person_id), None)
        if orm_person is None:
            return False

        involved = [
            expense
            for expense in orm_group.expenses
            if expense.paid_by == person_id or any(item.person_id == person_id for item in expense.items)
        ]
        for expense in involved:
            orm_group.expenses.remove(expense)
        orm_group.people.remove(orm_person)
        orm_group.updated_at = datetime.now(timezone.utc)
        self._session.commit()

        logger.info("Removed person %s from group %s along with %d expenses", person_id, group_id, len(involved))
        return True

    def add_expense(self, group_id: GroupId, expense: Expense) -> Expense:
        orm_group = self._require(group_id)
        validate_expense(self._to_domain(orm_group), expense)

        orm_group.expenses.append(self._expense_to_orm(expense))
        orm_group.updated_at = datetime.now(timezone.utc)
        self._session.commit()
        return expense

    def update_expense(self, group_id: GroupId, expense: Expense) -> Expense | None:
        """Replace a stored expense, line items included; ``None`` if it does not exist."""
        orm_group = self._require(group_id)
        orm_expense = next((stored for stored in orm_group.expenses if stored.id == expense.id), None)
        if orm_expense is None:
            return None
        validate_expense(self._to_domain(orm_group), expense)

        self._copy_expense(expense, orm_expense)
        orm_group.updated_at = datetime.now(timezone.utc)
        self._session.commit()
        return expense

    def remove_expense(self, group_id: GroupId, expense_id: ExpenseId) -> bool:
        orm_group = self._require(group_id)
        orm_expense = next((expense for expense in orm_group.expenses if expense.id == expense_id), None)
        if orm_expense is None:
            return False
        orm_group.expenses.remove(orm_expense)
        orm_group.updated_at = datetime.now(timezone.utc)
        self._session.commit()
        return True

    def _require(self, group_id: GroupId) -> models.ExpenseGroupOrm:
        orm_group = self._session.get(models.ExpenseGroupOrm, group_id)
        if orm_group is None:
            raise GroupNotFoundError(group_id)
        return orm_group

    @staticmethod
    def _person_to_orm(person: Person, position: int) -> models.PersonOrm:
        return models.PersonOrm(id=person.id, position=position, name=person.name, email=person.email)

    @staticmethod
    def _expense_to_orm(expense: Expense) -> models.ExpenseOrm:
        orm_expense = models.ExpenseOrm(id=expense.id)
        GroupRepository._copy_expense(expense, orm_expense)
        return orm_expense

    @staticmethod
    def _copy_expense(expense: Expense, orm_expense: models.ExpenseOrm) -> None:
        orm_expense.title = expense.title
        orm_expense.total_amount = expense.total_amount
        orm_expense.paid_by = expense.paid_by
        orm_expense.include_tax = expense.include_tax
        orm_expense.tax_percentage = expense.tax_percentage
        orm_expense.category = expense.category
        orm_expense.date = expense.date
        orm_expense.description = expense.description or None
        orm_expense.items = [
            models.ExpenseLineItemOrm(
                person_id=item.person_id,
                position=position,
                item_name=item.item_name,
                amount=item.amount,
            )
            for position, item in enumerate(expense.items)
        ]

    @staticmethod
    def _to_domain(orm_group: models.ExpenseGroupOrm) -> Group:
        people = [
            Person(id=PersonId(person.id), name=person.name, email=person.email) for person in orm_group.people
        ]
        expenses = [
            Expense(
                id=ExpenseId(expense.id),
                title=expense.title,
                total_amount=expense.total_amount,
                paid_by=PersonId(expense.paid_by),
                items=[
                    ExpenseLineItem(person_id=PersonId(item.person_id), item_name=item.item_name, amount=item.amount)
                    for item in expense.items
                ],
                include_tax=expense.include_tax,
                tax_percentage=expense.tax_percentage,
                category=expense.category,
                date=_as_utc(expense.date),
                description=expense.description or "",
            )
            for expense in orm_group.expenses
        ]
        return Group(
            id=GroupId(orm_group.id),
            title=orm_group.title,
            description=orm_group.description or "",
            people=people,
            expenses=expenses,
            created_at=_as_utc(orm_group.created_at),
            updated_at=_as_utc(orm_group.updated_at),
        )


def _as_utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp
