"""
Rating classification rules.

Three rule sets live here and they intentionally disagree with each other:

* summary predicates: five independent tests used for the summary tiles. They
  overlap, so a rating of 2 counts as both positive and neutral.
* priority buckets: the same names, resolved first-match-wins so every value
  gets exactly one badge.
* chart sentiment: a three-way split (> 3, < -3, rest) used by the
  distribution chart.

The category range table in config.RATING_CATEGORIES is a fourth definition,
used only by the filter. Do not merge these; each screen depends on its own.
"""

from typing import Callable, Dict, Iterable, List, Optional

from models import RatingCategory

# Summary tile predicates, checked independently of each other
SUMMARY_PREDICATES: Dict[str, Callable[[int], bool]] = {
    'positive': lambda r: 0 < r <= 6,
    'negative': lambda r: -6 <= r < 0,
    'neutral': lambda r: -3 <= r <= 3,
    'heavily-positive': lambda r: r > 6,
    'heavily-negative': lambda r: r < -6,
}

CHART_SENTIMENTS = ['positive', 'neutral', 'negative']


def summary_categories_of(value: int) -> List[str]:
    """All summary categories a rating value counts towards."""
    return [name for name, predicate in SUMMARY_PREDICATES.items() if predicate(value)]


def bucket_of(value: int) -> str:
    """Single badge category for a rating value, first matching rule wins."""
    if value > 6:
        return 'heavily-positive'
    if 0 < value <= 6:
        return 'positive'
    if -3 <= value <= 3:
        return 'neutral'
    if -6 <= value < 0:
        return 'negative'
    return 'heavily-negative'


def chart_sentiment_of(value: int) -> str:
    """Series a rating is counted in on the distribution chart."""
    if value > 3:
        return 'positive'
    if value < -3:
        return 'negative'
    return 'neutral'


def in_category_range(value: int, category: RatingCategory) -> bool:
    low, high = category.range
    return low <= value <= high


def find_category(category_id: str, categories: Iterable[RatingCategory]) -> Optional[RatingCategory]:
    for category in categories:
        if category.id == category_id:
            return category
    return None
