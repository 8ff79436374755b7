"""
Per-user rating counts for the distribution tab.
"""

from collections import Counter
from typing import Dict, Iterable, List

from models import Rating, User


def user_display_name(user_id: int, names_by_id: Dict[int, str]) -> str:
    return names_by_id.get(user_id) or f"User {user_id}"


def get_user_distribution_data(ratings: Iterable[Rating], users: Iterable[User]) -> Dict[str, int]:
    """
    Count ratings per user display name.

    Users missing from ``users`` are shown as "User <id>". Counts are keyed by
    the display string only, so two users sharing a name share a bar.
    """
    names_by_id = {user.id: user.name for user in users}
    distribution = Counter(user_display_name(rating.user_id, names_by_id) for rating in ratings)
    return dict(distribution)


def prepare_user_distribution_data(distribution: Dict[str, int]) -> List[Dict]:
    """Chart rows sorted by count, largest first."""
    sorted_users = sorted(distribution, key=lambda name: distribution[name], reverse=True)
    return [{'name': name, 'value': distribution[name]} for name in sorted_users]
