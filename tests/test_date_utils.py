"""
Unit tests for the DD/MM/YYYY date helpers.
"""

from datetime import datetime

import pytest

from date_utils import (
    date_span_days, format_date, get_date_range_for_period, is_valid_date_string, parse_date, week_number
)
from errors import InvalidArgument


def test_parse_date_valid():
    assert parse_date('19/04/2025') == datetime(2025, 4, 19)


@pytest.mark.parametrize('value', ['31/02/2025', '2025-04-19', 'not a date', '', None, 20250419])
def test_parse_date_invalid_returns_none(value):
    """Test that unreadable values give None instead of raising."""
    assert parse_date(value) is None


def test_format_date_zero_pads():
    assert format_date(datetime(2025, 1, 5)) == '05/01/2025'
    assert format_date(datetime(999, 3, 7)) == '07/03/0999'


def test_is_valid_date_string():
    """Test the strict two/two/four digit check."""
    assert is_valid_date_string('19/04/2025')
    assert is_valid_date_string('29/02/2024')
    assert not is_valid_date_string('29/02/2025')
    assert not is_valid_date_string('1/4/2025')
    assert not is_valid_date_string('19-04-2025')
    assert not is_valid_date_string('')
    assert not is_valid_date_string(None)


@pytest.mark.parametrize('date, expected', [
    (datetime(2025, 1, 1), 1),   # Wednesday, 1 January
    (datetime(2025, 1, 4), 1),   # Saturday closes the first week
    (datetime(2025, 1, 5), 2),   # Sunday opens the second week
    (datetime(2025, 4, 19), 16),
])
def test_week_number(date, expected):
    assert week_number(date) == expected


@pytest.mark.parametrize('days, expected_from', [
    (1, '19/04/2025'),
    (7, '13/04/2025'),
    (30, '21/03/2025'),
    (90, '20/01/2025'),
])
def test_get_date_range_for_period(days, expected_from):
    """Test that preset ranges include the base date itself."""
    from_date, to_date = get_date_range_for_period(days, datetime(2025, 4, 19))
    assert from_date == expected_from
    assert to_date == '19/04/2025'


@pytest.mark.parametrize('days', [None, 0, -3])
def test_get_date_range_for_period_rejects_bad_lengths(days):
    with pytest.raises(InvalidArgument):
        get_date_range_for_period(days, datetime(2025, 4, 19))


def test_date_span_days():
    assert date_span_days([]) == 0
    assert date_span_days([datetime(2025, 4, 1)]) == 0
    assert date_span_days([datetime(2025, 4, 10), datetime(2025, 4, 1), datetime(2025, 4, 5)]) == 9


@pytest.mark.parametrize('value', ['1/4/2025', '01/04/25', '19/4/2025', ' 19/04/2025'])
def test_parse_date_requires_full_layout(value):
    """Test that short days, months and years are not parsed."""
    assert parse_date(value) is None


@pytest.mark.parametrize('date', [
    datetime(2024, 2, 28),
    datetime(2024, 2, 29),
    datetime(2024, 3, 1),
    datetime(2024, 12, 31),
    datetime(2025, 1, 1),
    datetime(2025, 4, 19),
    datetime(999, 3, 7),
])
def test_format_then_parse_gives_same_date(date):
    assert parse_date(format_date(date)) == date
