"""
Shared fixtures.

Log files go to a temporary directory; logging_config creates it on import,
so the environment is set before any project module is loaded.
"""

import os
import tempfile

os.environ.setdefault('RATINGS_LOG_DIR', tempfile.mkdtemp(prefix='ratings-logs-'))

import pytest

from models import ConversationMessage, Rating, User


@pytest.fixture
def make_rating():
    """Build a Rating with only the fields a test cares about."""
    counter = {'next_id': 1}

    def _make(rating=0, date='15/04/2025', user_id=1, feedback='', conversation=()):
        rating_id = counter['next_id']
        counter['next_id'] += 1
        return Rating(id=rating_id, user_id=user_id, date=date, rating=rating,
                      feedback=feedback, conversation=conversation)

    return _make


@pytest.fixture
def users():
    return [User(1, 'Alice'), User(2, 'Bob'), User(3, 'Carol')]


@pytest.fixture
def conversation():
    return (
        ConversationMessage(1, 1, 'Where is my order?', '2025-04-15T09:00:00'),
        ConversationMessage(2, None, 'Let me check that for you.', '2025-04-15T09:00:05'),
    )
