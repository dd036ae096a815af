from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from domain.group import Expense, ExpenseLineItem, Group, Person, PersonId

logger = logging.getLogger(__name__)


def load_seed_groups(json_path: Path) -> list[Group]:
    """Load expense groups from a JSON seed file.

    The file holds a list of groups. Each group has ``title``, optional
    ``description``, ``people`` (``name``, optional ``email`` and ``id``) and
    ``expenses``. Expenses and their items point at people either by id
    (``paid_by`` / ``person_id``) or by position in ``people``
    (``paid_by_index`` / ``person_index``). Numbers are read as Decimal.
    """

    if not json_path.exists():
        return []

    with json_path.open(encoding="utf-8") as f:
        try:
            raw = json.load(f, parse_float=Decimal, parse_int=Decimal)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Seed file {json_path} is not valid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise ValueError(f"Seed file {json_path} must contain a list of groups")

    groups: list[Group] = []
    for index, raw_group in enumerate(raw):
        try:
            groups.append(_parse_group(raw_group))
        except (KeyError, TypeError, ValidationError, ValueError) as exc:
            raise ValueError(f"Seed file {json_path}: group {index} is invalid: {exc}") from exc

    logger.info("Loaded %d groups from %s", len(groups), json_path)
    return groups


def _parse_group(raw: dict[str, Any]) -> Group:
    people = [Person.model_validate(person) for person in raw.get("people", [])]
    expenses = [_parse_expense(expense, people) for expense in raw.get("expenses", [])]
    return Group(
        title=raw["title"],
        description=raw.get("description") or "",
        people=people,
        expenses=expenses,
    )


def _parse_expense(raw: dict[str, Any], people: list[Person]) -> Expense:
    items = [
        ExpenseLineItem(
            person_id=_resolve_person(item, people, id_key="person_id", index_key="person_index"),
            item_name=item["item_name"],
            amount=item["amount"],
        )
        for item in raw.get("items", [])
    ]
    fields: dict[str, Any] = {
        "title": raw["title"],
        "total_amount": raw["total_amount"],
        "paid_by": _resolve_person(raw, people, id_key="paid_by", index_key="paid_by_index"),
        "items": items,
        "include_tax": bool(raw.get("include_tax", False)),
        "tax_percentage": raw.get("tax_percentage", Decimal(0)),
        "category": raw.get("category") or "",
        "description": raw.get("description") or "",
    }
    if raw.get("date"):
        fields["date"] = raw["date"]
    return Expense(**fields)


def _resolve_person(raw: dict[str, Any], people: list[Person], *, id_key: str, index_key: str) -> PersonId:
    if raw.get(id_key):
        return PersonId(str(raw[id_key]))
    if index_key not in raw:
        raise ValueError(f"either {id_key} or {index_key} is required")
    position = int(raw[index_key])
    if not 0 <= position < len(people):
        raise ValueError(f"{index_key}={position} is out of range for {len(people)} people")
    return people[position].id
