"""Helper utilities for tests."""

from datetime import date
from typing import List, Optional

from models.category import Category
from models.decision import FinancialDecision


def create_decision(
    services,
    title: str = "Buy car",
    decision_date: Optional[date] = None,
    options: Optional[List[str]] = None,
    **fields,
):
    """Record a valid decision through the service, filling in defaults."""
    return services.decisions.create(
        title=title,
        decision_date=decision_date or date.today(),
        options=options or ["Yes", "No"],
        **fields,
    )


def make_decision(
    title: str = "Decision",
    decision_date: Optional[date] = date(2024, 6, 1),
    success_rating: int = 0,
    category: Optional[Category] = None,
    **fields,
) -> FinancialDecision:
    """Build an in-memory decision for the pure aggregation functions."""
    return FinancialDecision.new(
        title=title,
        date=decision_date,
        options=fields.pop("options", ["A", "B"]),
        success_rating=success_rating,
        category=category,
        **fields,
    )
