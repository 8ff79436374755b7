"""
Generated sample data for development and tests.
"""

import random
from datetime import timedelta
from typing import List, Optional

from config import MOCK_HISTORY_DAYS, MOCK_RATING_COUNT, MOCK_REFERENCE_DATE, MOCK_SEED
from date_utils import format_date, parse_date
from models import ConversationMessage, Rating, User

MOCK_USERS = [
    User(1, 'John Doe'),
    User(2, 'Jane Smith'),
    User(3, 'Robert Johnson'),
    User(4, 'Lisa Anderson'),
    User(5, 'Michael Chen'),
    User(6, 'Sarah Williams'),
    User(7, 'David Brown'),
]

FEEDBACK_MESSAGES = [
    'The chatbot was very helpful in answering my question about account settings.',
    'I had trouble getting the bot to understand what I was asking about billing information.',
    'Great experience! The chatbot quickly resolved my issue with password reset.',
    'The responses were very slow today, and I had to repeat my question multiple times.',
    'Excellent support from the chatbot. It provided detailed information about the new features.',
    "The chatbot didn't seem to understand my question about refund policy.",
    'Very impressed with how the chatbot handled my complex query about API integration.',
    "Couldn't get a clear answer to my shipping question, had to contact support instead.",
    'The suggested solutions were spot on! Saved me a lot of time troubleshooting.',
    'I appreciate how the chatbot guided me through the setup process step by step.',
    'Extremely frustrating experience. The chatbot kept suggesting irrelevant solutions.',
    'Pleasantly surprised by how human-like and helpful the responses were.',
]

USER_QUESTIONS = [
    'How do I change my account settings?',
    'Why was I charged twice this month?',
    'I forgot my password, can you help?',
    'Where is my order?',
    'How do I connect the API to my project?',
]

BOT_ANSWERS = [
    'Sure, let me walk you through it.',
    'I can help with that. Could you give me a few more details?',
    'Here is a link to the relevant help article.',
    'I have found the information you asked for.',
]


def _generate_conversation(rng: random.Random, rating_id: int, user_id: int, date_str: str) -> tuple:
    date = parse_date(date_str)
    turns = rng.randint(2, 4)
    messages = []
    for turn in range(turns):
        from_user = turn % 2 == 0
        timestamp = (date + timedelta(hours=9, minutes=2 * turn)).strftime('%Y-%m-%dT%H:%M:%S')
        messages.append(ConversationMessage(
            id=rating_id * 100 + turn,
            user_id=user_id if from_user else None,
            content=rng.choice(USER_QUESTIONS if from_user else BOT_ANSWERS),
            timestamp=timestamp,
        ))
    return tuple(messages)


def generate_mock_ratings(count: int = MOCK_RATING_COUNT, reference_date: Optional[str] = None,
                          seed: Optional[int] = MOCK_SEED, users: Optional[List[User]] = None) -> List[Rating]:
    """
    Random ratings spread over the days before reference_date.

    A fixed seed gives the same data on every run.
    """
    rng = random.Random(seed)
    users = users or MOCK_USERS
    today = parse_date(reference_date or MOCK_REFERENCE_DATE)

    ratings = []
    for rating_id in range(1, count + 1):
        user = rng.choice(users)
        value = rng.randint(-10, 10)
        date_str = format_date(today - timedelta(days=rng.randrange(MOCK_HISTORY_DAYS)))
        conversation = ()
        if rng.random() < 0.4:
            conversation = _generate_conversation(rng, rating_id, user.id, date_str)
        ratings.append(Rating(
            id=rating_id,
            user_id=user.id,
            date=date_str,
            rating=value,
            feedback=rng.choice(FEEDBACK_MESSAGES),
            conversation=conversation,
        ))
    return ratings
