"""
Summary tile counts and the category drill-down behind them.
"""

from typing import Dict, Iterable, List, Optional

from models import Rating
from rating_classifier import SUMMARY_PREDICATES


def get_summary_data(ratings: Iterable[Rating]) -> Dict[str, int]:
    """
    Count ratings per summary category.

    The predicates overlap, so one rating may be counted in two categories.
    Categories without ratings are left out rather than reported as 0.
    """
    ratings = list(ratings)
    summary = {
        name: sum(1 for rating in ratings if predicate(rating.rating))
        for name, predicate in SUMMARY_PREDICATES.items()
    }
    return {name: count for name, count in summary.items() if count > 0}


def get_category_ratings(ratings: Iterable[Rating], category: Optional[str]) -> List[Rating]:
    """Ratings behind one summary tile, in their original order."""
    predicate = SUMMARY_PREDICATES.get(category) if category else None
    if predicate is None:
        return []
    return [rating for rating in ratings if predicate(rating.rating)]
