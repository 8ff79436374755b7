"""
Rating filter engine.

Applies the sidebar selections (users, date range, rating categories) to a
collection of ratings. Every stage narrows the result; none of them reorders
or modifies the ratings.
"""

import logging
from collections import namedtuple
from datetime import timedelta
from typing import Iterable, List, Optional, Sequence

from config import RATING_CATEGORIES
from date_utils import parse_date
from errors import InvalidArgument
from logging_config import log_app_event
from models import FilterState, Rating, RatingCategory
from rating_classifier import find_category, in_category_range

FilterResult = namedtuple('FilterResult', ['ratings', 'skipped_dates', 'unknown_categories'])

# The upper bound covers the whole of the "to" day
END_OF_DAY = timedelta(hours=23, minutes=59, seconds=59)


def _require_ratings(ratings) -> List[Rating]:
    if ratings is None:
        raise InvalidArgument("ratings must be a collection, got None")
    if isinstance(ratings, (str, bytes)):
        raise InvalidArgument("ratings must be a collection of Rating objects")
    try:
        return list(ratings)
    except TypeError:
        raise InvalidArgument(f"ratings must be iterable, got {type(ratings).__name__}")


def filter_by_users(ratings: List[Rating], selected_users: Sequence[int]) -> List[Rating]:
    """Keep ratings of the selected users; an empty selection keeps everyone."""
    if not selected_users:
        return list(ratings)
    selected = set(selected_users)
    return [rating for rating in ratings if rating.user_id in selected]


def filter_by_date_range(ratings: List[Rating], from_date: str, to_date: str):
    """
    Keep ratings dated within [from_date, to_date], both days included.

    Returns (kept_ratings, skipped_count) where skipped_count is the number of
    ratings dropped because their own date could not be read.
    """
    start = parse_date(from_date)
    end = parse_date(to_date)
    if start is None or end is None:
        log_app_event(f"Unreadable filter range {from_date!r} - {to_date!r}; no rating matches",
                      level=logging.WARNING)
        return [], 0
    end = end + END_OF_DAY

    kept = []
    skipped = 0
    for rating in ratings:
        rating_date = parse_date(rating.date)
        if rating_date is None:
            skipped += 1
            continue
        if start <= rating_date <= end:
            kept.append(rating)
    return kept, skipped


def resolve_category_ranges(category_ids: Iterable[str], categories: Iterable[RatingCategory]):
    """Look up selected category ids; returns (ranges, unknown_ids)."""
    categories = list(categories)
    resolved = []
    unknown = []
    for category_id in category_ids:
        category = find_category(category_id, categories)
        if category is None:
            unknown.append(category_id)
        else:
            resolved.append(category)
    return resolved, unknown


def filter_by_categories(ratings: List[Rating], category_ids: Sequence[str],
                         categories: Iterable[RatingCategory] = RATING_CATEGORIES):
    """
    Keep ratings that fall in any of the selected category ranges.

    Selecting 'all' disables the stage, and so does a selection in which no id
    could be resolved. Returns (kept_ratings, unknown_ids).
    """
    if 'all' in category_ids:
        return list(ratings), []

    resolved, unknown = resolve_category_ranges(category_ids, categories)
    if not resolved:
        return list(ratings), unknown

    kept = [rating for rating in ratings
            if any(in_category_range(rating.rating, category) for category in resolved)]
    return kept, unknown


def apply_filters(ratings: Iterable[Rating], filters: FilterState,
                  categories: Optional[Iterable[RatingCategory]] = None) -> FilterResult:
    """Filter ratings and report what had to be dropped along the way."""
    ratings = _require_ratings(ratings)
    if filters is None:
        raise InvalidArgument("filters are required")
    if categories is None:
        categories = RATING_CATEGORIES

    filtered = filter_by_users(ratings, filters.selected_users)
    filtered, skipped_dates = filter_by_date_range(filtered, filters.from_date, filters.to_date)
    filtered, unknown_categories = filter_by_categories(
        filtered, filters.selected_rating_categories, categories
    )

    if skipped_dates:
        log_app_event(f"Skipped {skipped_dates} ratings with unreadable dates", level=logging.DEBUG)
    if unknown_categories:
        log_app_event(f"Ignored unknown rating categories: {unknown_categories}", level=logging.DEBUG)

    return FilterResult(filtered, skipped_dates, unknown_categories)


def filter_ratings(ratings: Iterable[Rating], filters: FilterState,
                   categories: Optional[Iterable[RatingCategory]] = None) -> List[Rating]:
    """Filter ratings by the selected users, date range and rating categories."""
    return apply_filters(ratings, filters, categories).ratings
