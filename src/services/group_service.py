from __future__ import annotations

import logging
from decimal import Decimal

from db.repositories import GroupRepository
from domain.balances import calculate_balances
from domain.group import GroupId, PersonId, Settlement
from domain.settlement import DEFAULT_EPSILON, get_settlements
from utils.settlement_summary import GroupSummary, compute_group_summary

logger = logging.getLogger(__name__)


class GroupService:
    """Answers balance and settlement queries by group id.

    A group id that does not exist is not an error: it yields empty results.
    """

    def __init__(self, repository: GroupRepository, *, epsilon: Decimal = DEFAULT_EPSILON) -> None:
        self.repository = repository
        self.epsilon = epsilon

    def balances(self, group_id: GroupId) -> dict[PersonId, Decimal]:
        group = self.repository.get(group_id)
        if group is None:
            logger.info("Balances requested for unknown group %s", group_id)
            return {}
        return calculate_balances(group)

    def settlements(self, group_id: GroupId) -> list[Settlement]:
        group = self.repository.get(group_id)
        if group is None:
            logger.info("Settlements requested for unknown group %s", group_id)
            return []
        return get_settlements(group, epsilon=self.epsilon)

    def summary(self, group_id: GroupId) -> GroupSummary | None:
        group = self.repository.get(group_id)
        if group is None:
            return None
        return compute_group_summary(group, epsilon=self.epsilon)
