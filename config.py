import os

from models import RatingCategory, TimePeriodOption

# Constants and directory setup
ROOT_DIR = os.path.dirname(os.path.abspath(__file__))
LOG_DIR = os.environ.get('RATINGS_LOG_DIR', os.path.join(ROOT_DIR, 'logs'))

# Data source configuration ('mock', 'json' or 'rest')
DATA_SOURCE = os.environ.get('RATINGS_DATA_SOURCE', 'mock')
API_URL = os.environ.get('RATINGS_API_URL', 'https://api.example.com/v1')
AUTH_TOKEN = os.environ.get('RATINGS_AUTH_TOKEN', '')
JSON_DATA_PATH = os.environ.get('RATINGS_JSON_PATH', os.path.join(ROOT_DIR, 'data', 'ratings.json'))
REQUEST_TIMEOUT = 10  # seconds
ENABLE_DETAILED_LOGGING = os.environ.get('RATINGS_DETAILED_LOGGING', 'false').lower() == 'true'

# Cache configurations
CACHE_TTL = 5  # JSON file payload is re-read after this many seconds
CACHE_MAXSIZE = 1  # One payload per connector

# Mock data configuration
MOCK_REFERENCE_DATE = '19/04/2025'  # Fixed "today" so mock data stays reproducible
MOCK_RATING_COUNT = 200
MOCK_HISTORY_DAYS = 90
MOCK_SEED = int(os.environ.get('RATINGS_MOCK_SEED', '42'))
MOCK_LATENCY = (0.1, 0.3)  # Simulated network delay range in seconds

# Time period presets
TIME_PERIOD_OPTIONS = [
    TimePeriodOption('last-day', 'Last Day', 1),
    TimePeriodOption('last-week', 'Last Week', 7),
    TimePeriodOption('last-month', 'Last Month', 30),
    TimePeriodOption('last-quarter', 'Last Quarter', 90),
    TimePeriodOption('custom', 'Custom', None),
]

DEFAULT_TIME_PERIOD = 'last-week'
DEFAULT_FROM_DATE = '13/04/2025'
DEFAULT_TO_DATE = MOCK_REFERENCE_DATE

# Rating category lookup table used by the filter. Ranges overlap on purpose;
# 'all' must always be present.
RATING_CATEGORIES = [
    RatingCategory('all', 'All', (-10, 10)),
    RatingCategory('positive', 'Positive', (1, 6)),
    RatingCategory('negative', 'Negative', (-6, -1)),
    RatingCategory('neutral', 'Relatively Neutral', (-3, 3)),
    RatingCategory('heavily-positive', 'Heavily Positive', (7, 10)),
    RatingCategory('heavily-negative', 'Heavily Negative', (-10, -7)),
]

# Colors for the distribution chart series
sentiment_colors = {
    'positive': 'rgb(75, 192, 192)',
    'neutral': 'rgb(201, 203, 207)',
    'negative': 'rgb(255, 99, 132)',
}

# Colors for the summary tiles and rating badges
category_colors = {
    'heavily-positive': '#15803D',
    'positive': '#4ADE80',
    'neutral': '#9CA3AF',
    'negative': '#F87171',
    'heavily-negative': '#B91C1C',
}

user_distribution_color = 'rgb(54, 162, 235)'

# Order of the summary tiles
SUMMARY_TILE_ORDER = ['heavily-positive', 'positive', 'neutral', 'negative', 'heavily-negative']

DEFAULT_LANGUAGE = 'en'

# Language translations
TRANSLATIONS = {
    'en': {
        'app_title': 'Chatbot Ratings Dashboard',
        'filters': 'Filters',
        'users': 'Users',
        'all_users': 'All Users',
        'show_users': 'Show users',
        'hide_users': 'Hide users',
        'time_period': 'Time Period',
        'from_date': 'From Date',
        'to_date': 'To Date',
        'date_placeholder': 'DD/MM/YYYY',
        'invalid_date': 'Please use the DD/MM/YYYY format with a real calendar date',
        'invalid_range': 'From date must not be after to date',
        'rating_categories': 'Rating Categories',
        'summary': 'Summary',
        'total_ratings': 'Total ratings',
        'period_label': 'Period',
        'categories_label': 'Categories',
        'all_categories': 'All Categories',
        'none_selected': 'None selected',
        'more': 'more',
        'to': 'to',
        'apply': 'Apply',
        'rating_distribution': 'Rating Distribution',
        'grouping_day': 'by day',
        'grouping_week': 'by week',
        'grouping_month': 'by month',
        'chart_x_axis': 'Date',
        'chart_y_axis': 'Number of ratings',
        'positive': 'Positive',
        'neutral': 'Neutral',
        'negative': 'Negative',
        'heavily-positive': 'Heavily Positive',
        'heavily-negative': 'Heavily Negative',
        'no_data_available': 'No ratings in the selected range',
        'details': 'Details',
        'distribution': 'User Distribution',
        'close': 'Close',
        'select_category_hint': 'Click a summary tile to inspect its ratings',
        'rating': 'Rating',
        'date': 'Date',
        'user': 'User',
        'feedback': 'Feedback',
        'show_more': 'Show more',
        'show_less': 'Show less',
        'show_conversation': 'Show conversation',
        'hide_conversation': 'Hide conversation',
        'chatbot': 'Chatbot',
        'no_ratings': 'No ratings in this category.',
        'hover_count': 'Count',
        'period': 'Period',
        'ratings_per_user': 'Ratings per user',
        'load_error': 'Could not load ratings: {error}',
    },
}
