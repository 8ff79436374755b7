"""
Sidebar filter state transitions.

Each function takes the current FilterState and returns a new one; the Dash
callbacks keep the result in a dcc.Store.
"""

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from config import DEFAULT_TIME_PERIOD, MOCK_REFERENCE_DATE, TIME_PERIOD_OPTIONS
from date_utils import get_date_range_for_period, is_valid_date_string, parse_date
from errors import InvalidArgument
from models import FilterState, TimePeriodOption


def find_time_period(period_id: str) -> Optional[TimePeriodOption]:
    for option in TIME_PERIOD_OPTIONS:
        if option.id == period_id:
            return option
    return None


def reference_today() -> datetime:
    """The dashboard's "today"; fixed so the mock data always lines up."""
    return parse_date(MOCK_REFERENCE_DATE)


def toggle_user(filters: FilterState, user_id: int) -> FilterState:
    if user_id in filters.selected_users:
        selected = tuple(uid for uid in filters.selected_users if uid != user_id)
    else:
        selected = filters.selected_users + (user_id,)
    return replace(filters, selected_users=selected)


def toggle_all_users(filters: FilterState, user_ids: Iterable[int]) -> FilterState:
    """Select every user, or clear the selection when everyone is selected."""
    user_ids = tuple(user_ids)
    if set(filters.selected_users) >= set(user_ids):
        return replace(filters, selected_users=())
    return replace(filters, selected_users=user_ids)


def toggle_rating_category(filters: FilterState, category_id: str) -> FilterState:
    """
    Toggle one category checkbox.

    Ticking 'all' replaces the selection; ticking a specific category drops
    'all' so the specific ranges take effect.
    """
    current = filters.selected_rating_categories
    if category_id == 'all':
        if 'all' in current:
            selected = tuple(c for c in current if c != 'all')
        else:
            selected = ('all',)
        return replace(filters, selected_rating_categories=selected)

    selected = tuple(c for c in current if c != 'all')
    if category_id in selected:
        selected = tuple(c for c in selected if c != category_id)
    else:
        selected = selected + (category_id,)
    return replace(filters, selected_rating_categories=selected)


def select_time_period(filters: FilterState, period_id: str, today: Optional[datetime] = None) -> FilterState:
    """Switch to a preset period, recomputing dates unless it is the custom one."""
    period = find_time_period(period_id)
    if period is None:
        raise InvalidArgument(f"Unknown time period: {period_id}")
    if period.is_custom:
        return replace(filters, selected_time_period=period.id)

    from_date, to_date = get_date_range_for_period(period.days, today or reference_today())
    return replace(filters, selected_time_period=period.id, from_date=from_date, to_date=to_date)


def set_date_range(filters: FilterState, from_date: str, to_date: str) -> FilterState:
    """Apply manually typed dates; the period becomes 'custom'."""
    for value in (from_date, to_date):
        if not is_valid_date_string(value):
            raise InvalidArgument(f"Invalid date: {value!r}. Expected DD/MM/YYYY")
    if parse_date(from_date) > parse_date(to_date):
        raise InvalidArgument(f"From date {from_date} is after to date {to_date}")
    return replace(filters, selected_time_period='custom', from_date=from_date, to_date=to_date)


def default_filters(user_ids: Iterable[int]) -> FilterState:
    """Initial sidebar state: every user, last week, all categories."""
    filters = FilterState(selected_users=tuple(user_ids), selected_rating_categories=('all',))
    return select_time_period(filters, DEFAULT_TIME_PERIOD)
