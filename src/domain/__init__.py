"""Domain models and calculations for the expense splitter.

This package contains in-memory (Pydantic) models describing groups, people
and expenses, and the pure functions that turn them into balances and
settlements. They are independent from persistence models so that business
logic and testing can evolve without DB coupling.
"""

__all__ = [
    "balances",
    "group",
    "settlement",
    "validation",
]
