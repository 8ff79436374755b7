"""
Data models for users, ratings and the dashboard filters.

Data sources serve camelCase JSON; ``from_dict`` accepts either that or the
snake_case attribute names, and ``to_dict`` produces the camelCase form.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Iterable, List, Optional, Tuple


def _pick(data: Dict, *keys, default=None):
    """Return the first key present in ``data``."""
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass(frozen=True)
class User:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Dict) -> 'User':
        return cls(id=int(data['id']), name=str(data['name']))

    def to_dict(self) -> Dict:
        return {'id': self.id, 'name': self.name}


@dataclass(frozen=True)
class ConversationMessage:
    """One turn of the conversation a rating refers to."""
    id: int
    user_id: Optional[int]  # None when the chatbot sent the message
    content: str
    timestamp: str

    @property
    def is_bot(self) -> bool:
        return self.user_id is None

    @classmethod
    def from_dict(cls, data: Dict) -> 'ConversationMessage':
        user_id = _pick(data, 'userId', 'user_id')
        return cls(
            id=int(data['id']),
            user_id=int(user_id) if user_id is not None else None,
            content=str(data.get('content', '')),
            timestamp=str(data.get('timestamp', '')),
        )

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'userId': self.user_id,
            'content': self.content,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class Rating:
    """
    A scored piece of feedback about a chatbot interaction.

    The date stays a DD/MM/YYYY string as delivered by the data source; it is
    only parsed when filtering or bucketing, so a bad date does not stop the
    record from loading.
    """
    id: int
    user_id: int
    date: str
    rating: int  # -10 to 10
    feedback: str = ''
    conversation: Tuple[ConversationMessage, ...] = ()

    def __post_init__(self):
        if not (-10 <= self.rating <= 10):
            raise ValueError(f"Invalid rating: {self.rating}. Must be -10 to 10")

    @property
    def has_conversation(self) -> bool:
        return len(self.conversation) > 0

    @classmethod
    def from_dict(cls, data: Dict) -> 'Rating':
        messages = data.get('conversation') or []
        return cls(
            id=int(data['id']),
            user_id=int(_pick(data, 'userId', 'user_id')),
            date=str(data.get('date', '')),
            rating=int(data['rating']),
            feedback=str(_pick(data, 'feedback', 'message', default='')),
            conversation=tuple(ConversationMessage.from_dict(m) for m in messages),
        )

    def to_dict(self) -> Dict:
        result = {
            'id': self.id,
            'userId': self.user_id,
            'date': self.date,
            'rating': self.rating,
            'feedback': self.feedback,
        }
        if self.conversation:
            result['conversation'] = [m.to_dict() for m in self.conversation]
        return result


@dataclass(frozen=True)
class RatingCategory:
    """A named inclusive range of rating values. Ranges may overlap."""
    id: str
    name: str
    range: Tuple[int, int]

    def __post_init__(self):
        low, high = self.range
        if low > high:
            raise ValueError(f"Invalid range for category {self.id}: {self.range}")

    @classmethod
    def from_dict(cls, data: Dict) -> 'RatingCategory':
        low, high = data['range']
        return cls(id=str(data['id']), name=str(data.get('name', data['id'])), range=(int(low), int(high)))

    def to_dict(self) -> Dict:
        return {'id': self.id, 'name': self.name, 'range': list(self.range)}


@dataclass(frozen=True)
class TimePeriodOption:
    id: str
    name: str
    days: Optional[int]  # None for a custom range

    @property
    def is_custom(self) -> bool:
        return self.days is None


@dataclass(frozen=True)
class FilterState:
    """Filter selections made in the sidebar."""
    selected_users: Tuple[int, ...] = ()
    expand_users: bool = False  # only drives the sidebar
    selected_time_period: str = 'last-week'
    from_date: str = ''
    to_date: str = ''
    selected_rating_categories: Tuple[str, ...] = ('all',)

    def __post_init__(self):
        # Accept lists and sets from JSON stores and callers
        object.__setattr__(self, 'selected_users', tuple(self.selected_users))
        object.__setattr__(self, 'selected_rating_categories', tuple(self.selected_rating_categories))

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'FilterState':
        data = data or {}
        defaults = cls()
        return cls(
            selected_users=tuple(int(u) for u in _pick(data, 'selectedUsers', 'selected_users', default=())),
            expand_users=bool(_pick(data, 'expandUsers', 'expand_users', default=False)),
            selected_time_period=_pick(data, 'selectedTimePeriod', 'selected_time_period',
                                       default=defaults.selected_time_period),
            from_date=_pick(data, 'fromDate', 'from_date', default=''),
            to_date=_pick(data, 'toDate', 'to_date', default=''),
            selected_rating_categories=tuple(_pick(data, 'selectedRatingCategories',
                                                   'selected_rating_categories', default=('all',))),
        )

    @classmethod
    def from_partial(cls, partial: Optional[Dict], users: Iterable[User]) -> 'FilterState':
        """
        Complete a partial filter mapping with the dashboard defaults.

        Missing users mean every known user; an explicitly empty selection is
        kept and filters nothing. Missing dates mean the default period ending
        on the reference date, and missing categories mean "all".
        """
        from config import DEFAULT_TIME_PERIOD, DEFAULT_FROM_DATE, DEFAULT_TO_DATE

        partial = partial or {}
        selected_users = _pick(partial, 'selectedUsers', 'selected_users')
        categories = _pick(partial, 'selectedRatingCategories', 'selected_rating_categories')
        return cls(
            selected_users=tuple(u.id for u in users) if selected_users is None else tuple(selected_users),
            expand_users=bool(_pick(partial, 'expandUsers', 'expand_users', default=False)),
            selected_time_period=_pick(partial, 'selectedTimePeriod', 'selected_time_period')
            or DEFAULT_TIME_PERIOD,
            from_date=_pick(partial, 'fromDate', 'from_date') or DEFAULT_FROM_DATE,
            to_date=_pick(partial, 'toDate', 'to_date') or DEFAULT_TO_DATE,
            selected_rating_categories=tuple(categories) if categories else ('all',),
        )

    def to_dict(self) -> Dict:
        return {
            'selectedUsers': list(self.selected_users),
            'expandUsers': self.expand_users,
            'selectedTimePeriod': self.selected_time_period,
            'fromDate': self.from_date,
            'toDate': self.to_date,
            'selectedRatingCategories': list(self.selected_rating_categories),
        }


@dataclass
class DashboardState:
    """UI state of the main panel, kept in a dcc.Store between callbacks."""
    selected_category: Optional[str] = None
    active_tab: str = 'details'  # 'details' or 'distribution'
    expanded_messages: List[int] = field(default_factory=list)
    expanded_conversations: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'DashboardState':
        data = data or {}
        return cls(
            selected_category=data.get('selected_category'),
            active_tab=data.get('active_tab', 'details'),
            expanded_messages=list(data.get('expanded_messages', [])),
            expanded_conversations=list(data.get('expanded_conversations', [])),
        )

    def to_dict(self) -> Dict:
        return asdict(self)
