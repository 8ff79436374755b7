"""
Bar chart functionality for the dashboard.
Contains functions for creating the rating distribution and per-user charts.
"""

from datetime import datetime

import numpy as np
import plotly.graph_objects as go
from dateutil.relativedelta import relativedelta

from config import TRANSLATIONS, sentiment_colors, user_distribution_color
from rating_classifier import CHART_SENTIMENTS


def create_empty_figure(language='en'):
    """Figure with a centered "no data" message."""
    fig = go.Figure()
    fig.add_annotation(
        x=0.5, y=0.5,
        text=TRANSLATIONS[language].get('no_data_available', 'No data available'),
        font=dict(size=16),
        showarrow=False,
        xref="paper", yref="paper"
    )
    fig.update_layout(xaxis=dict(visible=False), yaxis=dict(visible=False), height=350)
    return fig


def get_bucket_period(key, grouping_mode):
    """Human readable period covered by a bucket key, used in hover text."""
    if grouping_mode == 'month':
        try:
            month, year = key.split('/')
            start_date = datetime(int(year), int(month), 1)
        except ValueError:
            return key
        end_date = start_date + relativedelta(months=1, days=-1)
        return f"{start_date.strftime('%d/%m/%Y')} to {end_date.strftime('%d/%m/%Y')}"
    if grouping_mode == 'week':
        week, _, year = key[1:].partition('/')
        return f"Week {week}, {year}"
    return key


def create_rating_distribution_chart(chart_data, language='en'):
    """
    Create the stacked positive/neutral/negative bar chart.

    Args:
        chart_data: Output of time_series.prepare_rating_distribution
        language: Current UI language

    Returns:
        plotly Figure
    """
    entries = chart_data.get('data', [])
    if not entries:
        return create_empty_figure(language)

    grouping_mode = chart_data.get('grouping_mode', 'day')
    labels = [entry['name'] for entry in entries]
    periods = [get_bucket_period(entry['key'], grouping_mode) for entry in entries]

    fig = go.Figure()
    for sentiment in CHART_SENTIMENTS:
        counts = [entry[sentiment] for entry in entries]
        fig.add_trace(go.Bar(
            x=labels,
            y=counts,
            name=TRANSLATIONS[language][sentiment],
            marker=dict(color=sentiment_colors[sentiment], line=dict(color='rgba(0,0,0,0.2)', width=1)),
            customdata=np.array(periods).reshape(-1, 1),
            hovertemplate=(
                f"{TRANSLATIONS[language]['period']}: %{{customdata[0]}}<br>" +
                f"{TRANSLATIONS[language]['hover_count']}: %{{y}}<extra>{TRANSLATIONS[language][sentiment]}</extra>"
            ),
        ))

    # Track the tallest stack for the y-axis range
    totals = np.array([[entry[s] for s in CHART_SENTIMENTS] for entry in entries]).sum(axis=1)
    max_y_value = int(totals.max())

    title = f"{TRANSLATIONS[language]['rating_distribution']} ({TRANSLATIONS[language]['grouping_' + grouping_mode]})"
    fig.update_layout(
        title=title,
        barmode='stack',
        xaxis=dict(
            title=TRANSLATIONS[language]['chart_x_axis'],
            tickangle=20 if len(labels) > 10 else 0,
            categoryorder='array',
            categoryarray=labels,
        ),
        yaxis=dict(title=TRANSLATIONS[language]['chart_y_axis']),
        legend=dict(
            orientation='h',
            yanchor='bottom',
            y=1.02,
            xanchor='right',
            x=1,
        ),
        hovermode='closest',
        height=400,
        margin=dict(l=60, r=30, t=80, b=60),
    )

    # Set y-axis range with some padding
    if max_y_value > 0:
        fig.update_yaxes(range=[0, max_y_value * 1.1])

    return fig


def create_user_distribution_chart(rows, language='en'):
    """
    Create the ratings-per-user bar chart.

    Args:
        rows: Output of user_distribution.prepare_user_distribution_data
        language: Current UI language
    """
    if not rows:
        return create_empty_figure(language)

    names = [row['name'] for row in rows]
    values = [row['value'] for row in rows]

    fig = go.Figure(go.Bar(
        x=values,
        y=names,
        orientation='h',
        marker=dict(color=user_distribution_color),
        hovertemplate=f"<b>%{{y}}</b><br>{TRANSLATIONS[language]['hover_count']}: %{{x}}<extra></extra>",
    ))
    fig.update_layout(
        title=TRANSLATIONS[language]['ratings_per_user'],
        # Largest count on top
        yaxis=dict(autorange='reversed'),
        xaxis=dict(title=TRANSLATIONS[language]['hover_count'], dtick=1),
        height=max(250, 40 * len(rows) + 120),
        margin=dict(l=140, r=30, t=60, b=50),
    )
    return fig
