"""
Unit tests for the sidebar filter state transitions.
"""

from datetime import datetime

import pytest

from errors import InvalidArgument
from filter_state import (
    default_filters, select_time_period, set_date_range, toggle_all_users, toggle_rating_category, toggle_user
)
from models import FilterState

TODAY = datetime(2025, 4, 19)


def test_default_filters():
    filters = default_filters([1, 2, 3])
    assert filters.selected_users == (1, 2, 3)
    assert filters.selected_time_period == 'last-week'
    assert (filters.from_date, filters.to_date) == ('13/04/2025', '19/04/2025')
    assert filters.selected_rating_categories == ('all',)


def test_toggle_user():
    filters = FilterState(selected_users=(1, 2))
    assert toggle_user(filters, 2).selected_users == (1,)
    assert toggle_user(filters, 3).selected_users == (1, 2, 3)
    assert filters.selected_users == (1, 2)


def test_toggle_all_users():
    """Test that the all-users toggle selects everyone, then nobody."""
    filters = FilterState(selected_users=(1,))
    everyone = toggle_all_users(filters, [1, 2, 3])
    assert everyone.selected_users == (1, 2, 3)
    assert toggle_all_users(everyone, [1, 2, 3]).selected_users == ()


def test_selecting_specific_category_drops_all():
    filters = FilterState(selected_rating_categories=('all',))
    assert toggle_rating_category(filters, 'positive').selected_rating_categories == ('positive',)


def test_selecting_all_replaces_specific_categories():
    filters = FilterState(selected_rating_categories=('positive', 'neutral'))
    assert toggle_rating_category(filters, 'all').selected_rating_categories == ('all',)


def test_unselecting_categories():
    filters = FilterState(selected_rating_categories=('positive', 'neutral'))
    assert toggle_rating_category(filters, 'neutral').selected_rating_categories == ('positive',)
    only_all = FilterState(selected_rating_categories=('all',))
    assert toggle_rating_category(only_all, 'all').selected_rating_categories == ()


@pytest.mark.parametrize('period_id, expected_from', [
    ('last-day', '19/04/2025'),
    ('last-week', '13/04/2025'),
    ('last-month', '21/03/2025'),
    ('last-quarter', '20/01/2025'),
])
def test_select_time_period(period_id, expected_from):
    filters = select_time_period(FilterState(), period_id, TODAY)
    assert filters.selected_time_period == period_id
    assert filters.from_date == expected_from
    assert filters.to_date == '19/04/2025'


def test_select_custom_period_keeps_dates():
    filters = FilterState(from_date='01/04/2025', to_date='05/04/2025')
    custom = select_time_period(filters, 'custom', TODAY)
    assert custom.selected_time_period == 'custom'
    assert (custom.from_date, custom.to_date) == ('01/04/2025', '05/04/2025')


def test_select_unknown_period():
    with pytest.raises(InvalidArgument):
        select_time_period(FilterState(), 'last-decade', TODAY)


def test_set_date_range_switches_to_custom():
    filters = set_date_range(FilterState(), '01/04/2025', '10/04/2025')
    assert filters.selected_time_period == 'custom'
    assert (filters.from_date, filters.to_date) == ('01/04/2025', '10/04/2025')


def test_set_date_range_accepts_single_day():
    filters = set_date_range(FilterState(), '10/04/2025', '10/04/2025')
    assert filters.from_date == filters.to_date == '10/04/2025'


@pytest.mark.parametrize('from_date, to_date', [
    ('1/4/2025', '10/04/2025'),
    ('01/04/2025', '31/04/2025'),
    ('10/04/2025', '01/04/2025'),
    ('', ''),
])
def test_set_date_range_rejects_bad_input(from_date, to_date):
    with pytest.raises(InvalidArgument):
        set_date_range(FilterState(), from_date, to_date)
