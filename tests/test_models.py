"""
Unit tests for the data models.
"""

import pytest

from models import DashboardState, FilterState, Rating, RatingCategory, User


def test_rating_validation():
    """Test that ratings outside -10..10 are rejected."""
    Rating(id=1, user_id=1, date='15/04/2025', rating=10)
    with pytest.raises(ValueError):
        Rating(id=1, user_id=1, date='15/04/2025', rating=11)
    with pytest.raises(ValueError):
        Rating(id=1, user_id=1, date='15/04/2025', rating=-11)


def test_rating_from_dict_accepts_api_names():
    rating = Rating.from_dict({
        'id': '7',
        'userId': 3,
        'date': '15/04/2025',
        'rating': -4,
        'message': 'Too slow',
        'conversation': [
            {'id': 1, 'userId': 3, 'content': 'Hi', 'timestamp': '2025-04-15T09:00:00'},
            {'id': 2, 'userId': None, 'content': 'Hello!', 'timestamp': '2025-04-15T09:00:02'},
        ],
    })
    assert rating.id == 7
    assert rating.user_id == 3
    assert rating.feedback == 'Too slow'
    assert rating.has_conversation
    assert [m.is_bot for m in rating.conversation] == [False, True]


def test_rating_serialization():
    rating = Rating(id=1, user_id=2, date='15/04/2025', rating=5, feedback='Good')
    data = rating.to_dict()
    assert data == {'id': 1, 'userId': 2, 'date': '15/04/2025', 'rating': 5, 'feedback': 'Good'}
    assert Rating.from_dict(data) == rating


def test_category_range_must_be_ordered():
    with pytest.raises(ValueError):
        RatingCategory('bad', 'Bad', (5, 1))


def test_filter_state_store_round_trip():
    filters = FilterState(selected_users=[1, 2], from_date='01/04/2025', to_date='10/04/2025',
                          selected_rating_categories=['positive'])
    assert filters.selected_users == (1, 2)
    assert FilterState.from_dict(filters.to_dict()) == filters


def test_filter_state_from_partial_fills_defaults():
    users = [User(1, 'Alice'), User(2, 'Bob')]
    filters = FilterState.from_partial({'selectedRatingCategories': ['neutral']}, users)
    assert filters.selected_users == (1, 2)
    assert filters.selected_time_period == 'last-week'
    assert (filters.from_date, filters.to_date) == ('13/04/2025', '19/04/2025')
    assert filters.selected_rating_categories == ('neutral',)


def test_filter_state_from_partial_empty():
    filters = FilterState.from_partial(None, [User(1, 'Alice')])
    assert filters.selected_users == (1,)
    assert filters.selected_rating_categories == ('all',)


def test_dashboard_state_round_trip():
    state = DashboardState(selected_category='neutral', active_tab='distribution', expanded_messages=[3])
    assert DashboardState.from_dict(state.to_dict()) == state
    assert DashboardState.from_dict(None) == DashboardState()


def test_filter_state_from_partial_keeps_empty_user_selection():
    filters = FilterState.from_partial({'selectedUsers': []}, [User(1, 'Alice')])
    assert filters.selected_users == ()
