"""
Data sources for the dashboard.

Every source exposes the same methods. The mock and JSON file sources hold
the data in memory and answer filtered and statistics calls with the local
filter and aggregation functions; the REST source forwards them to a server
implementing the same contract.
"""

import json
import logging
import random
import threading
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple, Union

import requests
from cachetools import TTLCache

from config import (
    API_URL, AUTH_TOKEN, CACHE_MAXSIZE, CACHE_TTL, DATA_SOURCE,
    JSON_DATA_PATH, MOCK_LATENCY, RATING_CATEGORIES, REQUEST_TIMEOUT
)
from errors import ConnectorError, InvalidArgument
from filters import filter_by_categories, filter_ratings
from logging_config import log_app_event, log_error
from mock_data import MOCK_USERS, generate_mock_ratings
from models import FilterState, Rating, RatingCategory, User
from rating_classifier import find_category
from summary import get_summary_data
from time_series import prepare_rating_distribution
from user_distribution import get_user_distribution_data

# Filters may be a complete FilterState or a partial camelCase mapping
Filters = Optional[Union[FilterState, Dict]]


def _as_partial(filters: Filters) -> Optional[Dict]:
    if filters is None:
        return None
    if isinstance(filters, FilterState):
        return filters.to_dict()
    return dict(filters)


class BaseConnector(ABC):
    """Contract between the dashboard and a ratings data source."""

    def __init__(self, api_url: str):
        self.api_url = api_url

    def handle_request(self, request, *args, **kwargs):
        """Run a request, turning any failure into a ConnectorError."""
        try:
            return request(*args, **kwargs)
        except (ConnectorError, InvalidArgument):
            raise
        except Exception as e:
            log_error(f"Request to {self.api_url} failed: {e}", exc_info=True)
            raise ConnectorError(f"Request failed: {e}") from e

    # User-related methods
    @abstractmethod
    def get_users(self) -> List[User]: ...

    @abstractmethod
    def get_user_by_id(self, user_id: int) -> Optional[User]: ...

    # Rating-related methods
    @abstractmethod
    def get_ratings(self, filters: Filters = None) -> List[Rating]: ...

    @abstractmethod
    def get_rating_by_id(self, rating_id: int) -> Optional[Rating]: ...

    @abstractmethod
    def get_ratings_by_user_id(self, user_id: int, filters: Filters = None) -> List[Rating]: ...

    @abstractmethod
    def get_ratings_by_date_range(self, from_date: str, to_date: str) -> List[Rating]: ...

    @abstractmethod
    def get_ratings_by_category(self, category_id: str) -> List[Rating]: ...

    # Conversation-related methods
    @abstractmethod
    def get_rating_conversation(self, rating_id: int) -> Optional[Rating]: ...

    # Statistics methods
    @abstractmethod
    def get_rating_summary(self, filters: Filters = None) -> Dict[str, int]: ...

    @abstractmethod
    def get_rating_distribution(self, filters: Filters = None) -> Dict: ...

    @abstractmethod
    def get_user_distribution(self, category_id: str, filters: Filters = None) -> Dict[str, int]: ...


class LocalDataConnector(BaseConnector):
    """
    Base for sources that hold users and ratings in memory.

    Subclasses provide ``load_data``; responses pass through an optional
    simulated network delay.
    """

    def __init__(self, api_url: str, latency: Optional[Tuple[float, float]] = None):
        super().__init__(api_url)
        self.latency = latency

    @abstractmethod
    def load_data(self) -> Tuple[List[User], List[Rating], List[RatingCategory]]: ...

    def _data(self):
        return self.handle_request(self.load_data)

    def _respond(self, data):
        if self.latency:
            low, high = self.latency
            time.sleep(random.uniform(low, high))
        return data

    def _filtered(self, ratings, users, categories, filters: Filters):
        full_filters = FilterState.from_partial(_as_partial(filters), users)
        return filter_ratings(ratings, full_filters, categories)

    def get_users(self):
        users, _, _ = self._data()
        return self._respond(list(users))

    def get_user_by_id(self, user_id):
        users, _, _ = self._data()
        return self._respond(next((u for u in users if u.id == user_id), None))

    def get_ratings(self, filters=None):
        users, ratings, categories = self._data()
        if filters is None:
            return self._respond(list(ratings))
        return self._respond(self._filtered(ratings, users, categories, filters))

    def get_rating_by_id(self, rating_id):
        _, ratings, _ = self._data()
        return self._respond(next((r for r in ratings if r.id == rating_id), None))

    def get_ratings_by_user_id(self, user_id, filters=None):
        users, ratings, categories = self._data()
        user_ratings = [r for r in ratings if r.user_id == user_id]
        if filters is None:
            return self._respond(user_ratings)
        partial = _as_partial(filters)
        partial['selectedUsers'] = [user_id]
        return self._respond(self._filtered(user_ratings, users, categories, partial))

    def get_ratings_by_date_range(self, from_date, to_date):
        users, ratings, categories = self._data()
        filters = FilterState(
            selected_users=(),
            selected_time_period='custom',
            from_date=from_date,
            to_date=to_date,
            selected_rating_categories=('all',),
        )
        return self._respond(filter_ratings(ratings, filters, categories))

    def get_ratings_by_category(self, category_id):
        _, ratings, categories = self._data()
        kept, _ = filter_by_categories(ratings, [category_id], categories)
        return self._respond(kept)

    def get_rating_conversation(self, rating_id):
        _, ratings, _ = self._data()
        rating = next((r for r in ratings if r.id == rating_id), None)
        if rating is None or not rating.has_conversation:
            return self._respond(None)
        return self._respond(rating)

    def get_rating_summary(self, filters=None):
        users, ratings, categories = self._data()
        if filters is not None:
            ratings = self._filtered(ratings, users, categories, filters)
        return self._respond(get_summary_data(ratings))

    def get_rating_distribution(self, filters=None):
        users, ratings, categories = self._data()
        if filters is not None:
            ratings = self._filtered(ratings, users, categories, filters)
        return self._respond(prepare_rating_distribution(ratings))

    def get_user_distribution(self, category_id, filters=None):
        users, ratings, categories = self._data()
        if category_id == 'all':
            category_ratings = list(ratings)
        else:
            category = find_category(category_id, categories)
            if category is None:
                return self._respond({})
            category_ratings, _ = filter_by_categories(ratings, [category_id], categories)

        if filters is not None:
            partial = _as_partial(filters)
            partial['selectedRatingCategories'] = [category_id]
            category_ratings = self._filtered(category_ratings, users, categories, partial)

        return self._respond(get_user_distribution_data(category_ratings, users))


class MockConnector(LocalDataConnector):
    """Serves generated ratings with a simulated network delay."""

    def __init__(self, ratings: Optional[List[Rating]] = None, users: Optional[List[User]] = None,
                 latency: Optional[Tuple[float, float]] = MOCK_LATENCY):
        super().__init__('mock://api', latency)
        self.users = list(users or MOCK_USERS)
        self.ratings = list(ratings) if ratings is not None else generate_mock_ratings(users=self.users)

    def load_data(self):
        return self.users, self.ratings, RATING_CATEGORIES


def parse_record(item, model, kind):
    """Build one model from a record, or None with a warning when it is invalid."""
    try:
        return model.from_dict(item)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        log_app_event(f"Skipping invalid {kind} record {item!r}: {e}", level=logging.WARNING)
        return None


def parse_records(items, model, kind) -> List:
    """Build models from a list of records, skipping the invalid ones."""
    parsed = (parse_record(item, model, kind) for item in items or [])
    return [record for record in parsed if record is not None]


def parse_payload(payload: Dict) -> Tuple[List[User], List[Rating], List[RatingCategory]]:
    """
    Build models from a {"users", "ratings", "categories"} payload.

    Records that cannot be read are skipped; a payload without categories
    falls back to the default table.
    """
    if not isinstance(payload, dict):
        raise ConnectorError("Ratings payload must be a JSON object")

    users = parse_records(payload.get('users'), User, 'user')
    ratings = parse_records(payload.get('ratings'), Rating, 'rating')
    categories = parse_records(payload.get('categories'), RatingCategory, 'category') or list(RATING_CATEGORIES)
    return users, ratings, categories


class JsonFileConnector(LocalDataConnector):
    """
    Reads users, ratings and categories from a JSON file or URL.

    The parsed payload is cached for CACHE_TTL seconds so repeated callbacks
    do not re-read the file; ``refresh`` drops the cached copy.
    """

    def __init__(self, json_path: str, latency: Optional[Tuple[float, float]] = None,
                 ttl: float = CACHE_TTL):
        super().__init__(json_path, latency)
        self.json_path = json_path
        self._cache = TTLCache(maxsize=CACHE_MAXSIZE, ttl=ttl)
        self._lock = threading.Lock()
        log_app_event(f"JsonFileConnector initialized with {json_path}")

    def _read_payload(self) -> Dict:
        if self.json_path.startswith(('http://', 'https://')):
            response = requests.get(self.json_path, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            return response.json()
        with open(self.json_path, encoding='utf-8') as f:
            return json.load(f)

    def load_data(self):
        # One load at a time; concurrent callers wait for it and reuse the result
        with self._lock:
            if self.json_path in self._cache:
                return self._cache[self.json_path]
            data = parse_payload(self._read_payload())
            users, ratings, categories = data
            log_app_event(f"Loaded {len(users)} users, {len(ratings)} ratings and "
                          f"{len(categories)} categories from {self.json_path}")
            self._cache[self.json_path] = data
            return data

    def refresh(self):
        """Drop the cached payload and load it again."""
        with self._lock:
            self._cache.clear()
        return self._data()


class RestApiConnector(BaseConnector):
    """Client for a ratings REST API."""

    def __init__(self, api_url: str, auth_token: Optional[str] = None, timeout: float = REQUEST_TIMEOUT):
        super().__init__(api_url.rstrip('/'))
        self.auth_token = auth_token
        self.timeout = timeout
        self.session = requests.Session()

    def get_headers(self) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if self.auth_token:
            headers['Authorization'] = f'Bearer {self.auth_token}'
        return headers

    @staticmethod
    def build_query_params(filters: Filters) -> Dict[str, str]:
        partial = _as_partial(filters)
        if not partial:
            return {}
        params = {}
        users = partial.get('selectedUsers')
        if users:
            params['users'] = ','.join(str(u) for u in users)
        if partial.get('fromDate'):
            params['fromDate'] = partial['fromDate']
        if partial.get('toDate'):
            params['toDate'] = partial['toDate']
        categories = partial.get('selectedRatingCategories')
        if categories:
            params['categories'] = ','.join(categories)
        return params

    def _get(self, path: str, params: Optional[Dict] = None, allow_missing: bool = False):
        def request():
            response = self.session.get(f"{self.api_url}{path}", params=params or None,
                                        headers=self.get_headers(), timeout=self.timeout)
            if allow_missing and response.status_code == 404:
                return None
            if not response.ok:
                raise ConnectorError(f"HTTP error: {response.status_code}")
            return response.json()
        return self.handle_request(request)

    def _ratings(self, path, params=None) -> List[Rating]:
        return parse_records(self._get(path, params), Rating, 'rating')

    def _item(self, path, model, kind):
        data = self._get(path, allow_missing=True)
        return parse_record(data, model, kind) if data else None

    def get_users(self):
        return parse_records(self._get('/users'), User, 'user')

    def get_user_by_id(self, user_id):
        return self._item(f'/users/{user_id}', User, 'user')

    def get_ratings(self, filters=None):
        return self._ratings('/ratings', self.build_query_params(filters))

    def get_rating_by_id(self, rating_id):
        return self._item(f'/ratings/{rating_id}', Rating, 'rating')

    def get_ratings_by_user_id(self, user_id, filters=None):
        return self._ratings(f'/users/{user_id}/ratings', self.build_query_params(filters))

    def get_ratings_by_date_range(self, from_date, to_date):
        return self._ratings('/ratings', {'fromDate': from_date, 'toDate': to_date})

    def get_ratings_by_category(self, category_id):
        return self._ratings('/ratings', {'category': category_id})

    def get_rating_conversation(self, rating_id):
        return self._item(f'/ratings/{rating_id}/conversation', Rating, 'rating')

    def get_rating_summary(self, filters=None):
        return self._get('/statistics/summary', self.build_query_params(filters)) or {}

    def get_rating_distribution(self, filters=None):
        return self._get('/statistics/distribution', self.build_query_params(filters)) or {}

    def get_user_distribution(self, category_id, filters=None):
        return self._get(f'/statistics/users/{category_id}', self.build_query_params(filters)) or {}


CONNECTOR_TYPES = ['mock', 'json', 'rest']


def create_connector(connector_type: str, api_url: Optional[str] = None, auth_token: Optional[str] = None,
                     json_path: Optional[str] = None) -> BaseConnector:
    """Create a connector of the given type."""
    if connector_type == 'rest':
        if not api_url:
            raise InvalidArgument("API URL is required for REST connector")
        return RestApiConnector(api_url, auth_token or None)
    if connector_type == 'json':
        if not json_path:
            raise InvalidArgument("A JSON file path or URL is required for the JSON connector")
        return JsonFileConnector(json_path)
    if connector_type != 'mock':
        log_app_event(f"Unknown connector type '{connector_type}', using mock data", level=logging.WARNING)
    return MockConnector()


def get_default_connector() -> BaseConnector:
    """Connector selected by the RATINGS_DATA_SOURCE environment setting."""
    return create_connector(DATA_SOURCE, api_url=API_URL, auth_token=AUTH_TOKEN, json_path=JSON_DATA_PATH)
