from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator


class DecimalAsString(TypeDecorator):
    impl = String
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect: object) -> str | None:
        if value is None:
            return None
        return str(value)

    def process_result_value(self, value: str | None, dialect: object) -> Decimal | None:
        if value is None:
            return None
        return Decimal(value)


class Base(DeclarativeBase):
    pass


class ExpenseGroupOrm(Base):
    __tablename__ = "expense_groups"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    people: Mapped[list["PersonOrm"]] = relationship(
        cascade="all, delete-orphan", back_populates="group", order_by="PersonOrm.position"
    )
    expenses: Mapped[list["ExpenseOrm"]] = relationship(
        cascade="all, delete-orphan", back_populates="group", order_by="ExpenseOrm.date"
    )


class PersonOrm(Base):
    __tablename__ = "people"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    group_id: Mapped[str] = mapped_column(String, ForeignKey("expense_groups.id"), nullable=False)
    position: Mapped[int] = mapped_column(nullable=False, default=0)
    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True)

    group: Mapped[ExpenseGroupOrm] = relationship(back_populates="people")


class ExpenseOrm(Base):
    __tablename__ = "expenses"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    group_id: Mapped[str] = mapped_column(String, ForeignKey("expense_groups.id"), nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(DecimalAsString, nullable=False)
    paid_by: Mapped[str] = mapped_column(String, ForeignKey("people.id"), nullable=False)
    include_tax: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    tax_percentage: Mapped[Decimal] = mapped_column(DecimalAsString, nullable=False)
    category: Mapped[str] = mapped_column(String, default="", nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    description: Mapped[str | None] = mapped_column(String, nullable=True)

    group: Mapped[ExpenseGroupOrm] = relationship(back_populates="expenses")
    items: Mapped[list["ExpenseLineItemOrm"]] = relationship(
        cascade="all, delete-orphan", back_populates="expense", lazy="joined", order_by="ExpenseLineItemOrm.position"
    )


class ExpenseLineItemOrm(Base):
    __tablename__ = "expense_line_items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    expense_id: Mapped[str] = mapped_column(String, ForeignKey("expenses.id"), nullable=False)
    person_id: Mapped[str] = mapped_column(String, ForeignKey("people.id"), nullable=False)
    position: Mapped[int] = mapped_column(nullable=False, default=0)
    item_name: Mapped[str] = mapped_column(String, nullable=False)
    amount: Mapped[Decimal] = mapped_column(DecimalAsString, nullable=False)

    expense: Mapped[ExpenseOrm] = relationship(back_populates="items")
