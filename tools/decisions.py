"""Decision filtering and success statistics.

The filtering and aggregation functions are pure and work on lists already
fetched from the store. The get_* helpers at the bottom fetch through the
services container first.
"""

from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Optional

from models.category import Category
from models.decision import FinancialDecision

UNCATEGORIZED = "Uncategorized"
NOT_AVAILABLE = "N/A"
HIGH_EMOTION_THRESHOLD = 7
LOW_EMOTION_THRESHOLD = 4
REFLECTION_RATING_CEILING = 6


def matches_search(decision: FinancialDecision, search_text: str) -> bool:
    """Case-insensitive substring match on title, note, chosen option and category name.

    An empty search matches every decision.
    """
    if not search_text:
        return True

    needle = search_text.lower()
    haystacks = (
        decision.title,
        decision.note,
        decision.chosen_option,
        decision.category.name if decision.category else None,
    )
    return any(needle in (text or "").lower() for text in haystacks)


def filter_decisions(
    decisions: Iterable[FinancialDecision],
    search_text: str = "",
    category: Optional[Category] = None,
    year: Optional[int] = None,
) -> List[FinancialDecision]:
    """Apply category, year and text filters in that order.

    Args:
        decisions: Decisions to filter.
        search_text: Text to look for; empty disables the text filter.
        category: Only keep decisions filed under this category (matched by ID).
        year: Only keep decisions dated in this year. Undated decisions never match.

    Returns:
        Decisions passing every active filter, in their original order.
    """
    filtered = list(decisions)

    if category is not None:
        filtered = [d for d in filtered if d.category_id == category.id]

    if year is not None:
        filtered = [d for d in filtered if d.date is not None and d.date.year == year]

    if search_text:
        filtered = [d for d in filtered if matches_search(d, search_text)]

    return filtered


def rated(decisions: Iterable[FinancialDecision]) -> List[FinancialDecision]:
    return [d for d in decisions if d.is_rated]


def success_rate(decisions: Iterable[FinancialDecision]) -> float:
    """Average rating of the rated decisions, scaled to 0.0-1.0.

    Unrated decisions (rating 0) are ignored. Returns 0.0 when nothing is rated.
    """
    ratings = [d.success_rating for d in rated(decisions)]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings) / 10.0


def group_success_rates(
    decisions: Iterable[FinancialDecision],
    key: Callable[[FinancialDecision], Optional[str]],
) -> Dict[str, float]:
    """Success rate per group of rated decisions.

    Args:
        decisions: Decisions to group.
        key: Extracts the group label; decisions whose label is None are skipped.

    Returns:
        Mapping of group label to success rate, in first-seen order.
    """
    groups: Dict[str, List[FinancialDecision]] = defaultdict(list)
    for decision in rated(decisions):
        label = key(decision)
        if label is not None:
            groups[label].append(decision)
    return {label: success_rate(members) for label, members in groups.items()}


def month_label(decision: FinancialDecision) -> Optional[str]:
    """Month-year label like "Jan 2025", or None for undated decisions."""
    return decision.date.strftime("%b %Y") if decision.date else None


def category_label(decision: FinancialDecision) -> str:
    return decision.category.name if decision.category else UNCATEGORIZED


def success_by_month(decisions: Iterable[FinancialDecision]) -> Dict[str, float]:
    """Monthly success rates in chronological order."""
    dated = sorted(
        (d for d in decisions if d.date is not None), key=lambda d: d.date
    )
    return group_success_rates(dated, month_label)


def success_by_category(decisions: Iterable[FinancialDecision]) -> Dict[str, float]:
    """Success rate per category name, best first.

    Decisions without a category are grouped under "Uncategorized".
    """
    rates = group_success_rates(decisions, category_label)
    return dict(sorted(rates.items(), key=lambda item: item[1], reverse=True))


def best_month(decisions: Iterable[FinancialDecision]) -> str:
    """Label of the month with the highest success rate, or "N/A"."""
    rates = success_by_month(decisions)
    if not rates:
        return NOT_AVAILABLE
    return max(rates.items(), key=lambda item: item[1])[0]


def emotion_success_pattern(decisions: Iterable[FinancialDecision]) -> str:
    """Compare outcomes of emotionally charged and calm decisions.

    Rated decisions with emotional state >= 7 are compared with those <= 4.
    Returns "N/A" when nothing is rated or either bucket is empty.
    """
    rated_decisions = rated(decisions)
    high = [d for d in rated_decisions if d.emotional_state >= HIGH_EMOTION_THRESHOLD]
    low = [d for d in rated_decisions if d.emotional_state <= LOW_EMOTION_THRESHOLD]

    if not high or not low:
        return NOT_AVAILABLE

    if success_rate(high) < success_rate(low):
        return "High emotion decisions tend to have lower success rates"
    return "Emotional state doesn't significantly impact success"


def reflection_candidates(
    decisions: Iterable[FinancialDecision],
) -> List[FinancialDecision]:
    """Decisions worth revisiting: those with a note or a low (1-5) rating."""
    return [
        d
        for d in decisions
        if d.note or (d.is_rated and d.success_rating < REFLECTION_RATING_CEILING)
    ]


def recent_decisions(
    decisions: Iterable[FinancialDecision], search_text: str = "", limit: int = 5
) -> List[FinancialDecision]:
    """First decisions matching the search, in the order given."""
    return [d for d in decisions if matches_search(d, search_text)][:limit]


def available_years(decisions: Iterable[FinancialDecision]) -> List[int]:
    """Distinct years of dated decisions, newest first."""
    return sorted({d.date.year for d in decisions if d.date is not None}, reverse=True)


def summarize(decisions: List[FinancialDecision]) -> Dict:
    """Aggregate statistics for a list of decisions.

    Returns:
        Dictionary with:
        - "total": number of decisions
        - "rated": number of rated decisions
        - "success_rate": overall success rate (0.0-1.0)
        - "best_month": label of the best month or "N/A"
        - "by_month": month label -> success rate, chronological
        - "by_category": category name -> success rate, best first
        - "pattern": emotional-state observation or "N/A"
    """
    return {
        "total": len(decisions),
        "rated": len(rated(decisions)),
        "success_rate": success_rate(decisions),
        "best_month": best_month(decisions),
        "by_month": success_by_month(decisions),
        "by_category": success_by_category(decisions),
        "pattern": emotion_success_pattern(decisions),
    }


def get_dashboard_summary(services, search_text: str = "") -> Dict:
    """Dashboard figures: overall statistics plus the five latest matching decisions.

    Args:
        services: Services container with the decision service.
        search_text: Optional text filter for the recent list.
    """
    decisions = services.decisions.find_all()
    summary = summarize(decisions)
    summary["recent"] = recent_decisions(decisions, search_text)
    return summary


def get_year_summary(services, year: int) -> Dict:
    """Statistics for the decisions dated in one year."""
    decisions = services.decisions.find_all(year=year)
    summary = summarize(decisions)
    summary["year"] = year
    return summary
