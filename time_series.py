"""
Time bucketing for the rating distribution chart.

The bucket size follows the span of the data: a few days are shown per day,
a few weeks per week and anything longer per month.
"""

import calendar
import logging
from datetime import datetime
from typing import Dict, Iterable, List

import pandas as pd

from date_utils import date_span_days, format_date, parse_date, week_number
from logging_config import log_app_event
from models import Rating
from rating_classifier import CHART_SENTIMENTS, chart_sentiment_of

GRANULARITIES = ['day', 'week', 'month']

# Span thresholds in days; a span above the limit moves to the next bucket size
WEEK_SPAN_THRESHOLD = 14
MONTH_SPAN_THRESHOLD = 60


def choose_granularity(dates: Iterable[datetime]) -> str:
    """Pick day, week or month buckets from the span of the given dates."""
    span = date_span_days(dates)
    if span > MONTH_SPAN_THRESHOLD:
        return 'month'
    if span > WEEK_SPAN_THRESHOLD:
        return 'week'
    return 'day'


def bucket_key(date: datetime, granularity: str) -> str:
    """Bucket key: DD/MM/YYYY for days, W<n>/YYYY for weeks, MM/YYYY for months."""
    if granularity == 'month':
        return f"{date.month:02d}/{date.year}"
    if granularity == 'week':
        return f"W{week_number(date)}/{date.year}"
    return format_date(date)


def bucket_sort_key(key: str) -> int:
    """Numeric chronological key for a bucket key; unreadable keys give 0."""
    try:
        if key.startswith('W'):
            week, year = key[1:].split('/')
            return int(year) * 10000 + int(week) * 7
        parts = key.split('/')
        if len(parts) == 2:
            month, year = parts
            return int(year) * 100 + int(month)
        if len(parts) == 3:
            day, month, year = parts
            return int(year) * 10000 + int(month) * 100 + int(day)
    except (AttributeError, ValueError):
        pass
    return 0


def format_bucket_label(key: str) -> str:
    """Axis label for a bucket key."""
    try:
        if key.startswith('W'):
            return f"Week {int(key[1:key.index('/')])}"
        parts = key.split('/')
        if len(parts) == 2:
            month, year = parts
            return f"{calendar.month_abbr[int(month)]} {year}"
    except (IndexError, ValueError):
        pass
    return key


def prepare_rating_distribution(ratings: Iterable[Rating]) -> Dict:
    """
    Count positive, neutral and negative ratings per time bucket.

    Returns a dict with:
        data: one entry per bucket in chronological order, each with the
            display name, the bucket key and the three counts
        grouping_mode: 'day', 'week' or 'month'
        skipped: number of ratings left out because of an unreadable date
    """
    dated = []
    skipped = 0
    for rating in ratings:
        rating_date = parse_date(rating.date)
        if rating_date is None:
            skipped += 1
            continue
        dated.append((rating_date, rating))

    if skipped:
        log_app_event(f"Skipping {skipped} ratings with invalid dates", level=logging.DEBUG)

    grouping_mode = choose_granularity(date for date, _ in dated)
    if not dated:
        return {'data': [], 'grouping_mode': grouping_mode, 'skipped': skipped}

    df = pd.DataFrame({
        'key': [bucket_key(date, grouping_mode) for date, _ in dated],
        'sentiment': [chart_sentiment_of(rating.rating) for _, rating in dated],
    })
    counts = pd.crosstab(df['key'], df['sentiment']).reindex(columns=CHART_SENTIMENTS, fill_value=0)

    data: List[Dict] = []
    for key in sorted(counts.index, key=bucket_sort_key):
        entry = {'name': format_bucket_label(key), 'key': key}
        for sentiment in CHART_SENTIMENTS:
            entry[sentiment] = int(counts.at[key, sentiment])
        data.append(entry)

    return {'data': data, 'grouping_mode': grouping_mode, 'skipped': skipped}
