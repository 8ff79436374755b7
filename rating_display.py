from dash import html
from typing import Dict, Iterable, List, Optional

from config import (
    RATING_CATEGORIES, SUMMARY_TILE_ORDER, TIME_PERIOD_OPTIONS, TRANSLATIONS, category_colors
)
from models import DashboardState, FilterState, Rating, User
from rating_classifier import bucket_of, find_category
from user_distribution import user_display_name

MESSAGE_PREVIEW_LENGTH = 100


def shorten_list(items: List[str], limit: int, language='en') -> str:
    """Join names, collapsing everything past ``limit`` into "+N more"."""
    if not items:
        return TRANSLATIONS[language]['none_selected']
    if len(items) > limit:
        return f"{', '.join(items[:limit])} +{len(items) - limit} {TRANSLATIONS[language]['more']}"
    return ', '.join(items)


def summarize_filters(filters: FilterState, users: Iterable[User], language='en') -> Dict[str, str]:
    """
    Describe the active filters in words for the header line.

    Returns:
        Dict with 'users', 'period' and 'categories' texts
    """
    users = list(users)
    if len(filters.selected_users) == len(users) and set(filters.selected_users) >= {u.id for u in users}:
        user_names = [TRANSLATIONS[language]['all_users']]
    else:
        user_names = [u.name for u in users if u.id in filters.selected_users]

    period = next((p for p in TIME_PERIOD_OPTIONS if p.id == filters.selected_time_period), None)
    if period is None or period.is_custom:
        period_text = f"{filters.from_date} {TRANSLATIONS[language]['to']} {filters.to_date}"
    else:
        period_text = period.name

    if 'all' in filters.selected_rating_categories:
        category_names = [TRANSLATIONS[language]['all_categories']]
    else:
        category_names = []
        for category_id in filters.selected_rating_categories:
            category = find_category(category_id, RATING_CATEGORIES)
            if category:
                category_names.append(category.name)

    return {
        'users': shorten_list(user_names, 3, language),
        'period': period_text,
        'categories': shorten_list(category_names, 2, language),
    }


def create_filter_summary(filters: FilterState, users: Iterable[User], total_ratings: int, language='en'):
    """Header line listing the active filters and the number of matching ratings."""
    texts = summarize_filters(filters, users, language)
    label_style = {'fontWeight': 'bold', 'marginRight': '4px'}
    item_style = {'marginRight': '20px', 'display': 'inline-block'}
    return html.Div([
        html.Span([html.Span(f"{TRANSLATIONS[language]['users']}:", style=label_style), texts['users']], style=item_style),
        html.Span([html.Span(f"{TRANSLATIONS[language]['period_label']}:", style=label_style), texts['period']], style=item_style),
        html.Span([html.Span(f"{TRANSLATIONS[language]['categories_label']}:", style=label_style), texts['categories']], style=item_style),
        html.Span(f"{TRANSLATIONS[language]['total_ratings']}: {total_ratings}", style={'color': '#444'}),
    ], style={'backgroundColor': '#f3f4f6', 'padding': '10px', 'borderRadius': '4px', 'marginBottom': '15px'})


def create_summary_tiles(summary: Dict[str, int], selected_category: Optional[str], language='en'):
    """One clickable tile per summary category that has ratings."""
    if not summary:
        return html.Div(TRANSLATIONS[language]['no_data_available'], style={'padding': '10px', 'color': '#666'})

    tiles = []
    for category in SUMMARY_TILE_ORDER:
        if category not in summary:
            continue
        is_selected = category == selected_category
        tiles.append(html.Button(
            [
                html.Div(TRANSLATIONS[language][category], style={'fontSize': '14px'}),
                html.Div(str(summary[category]), style={'fontSize': '26px', 'fontWeight': 'bold'}),
            ],
            id={'type': 'summary-tile', 'index': category},
            n_clicks=0,
            style={
                'backgroundColor': category_colors[category],
                'color': 'white',
                'border': '3px solid #1F2937' if is_selected else '3px solid transparent',
                'borderRadius': '6px',
                'padding': '10px 16px',
                'marginRight': '10px',
                'minWidth': '130px',
                'cursor': 'pointer',
            }
        ))
    return html.Div(tiles, style={'display': 'flex', 'flexWrap': 'wrap', 'gap': '6px'})


def create_rating_badge(value: int):
    """Rating value colored by its badge category."""
    return html.Span(
        f"{value:+d}" if value else "0",
        style={
            'backgroundColor': category_colors[bucket_of(value)],
            'color': 'white',
            'borderRadius': '10px',
            'padding': '2px 10px',
            'fontWeight': 'bold',
            'marginRight': '10px',
        }
    )


def create_conversation(rating: Rating, user_name: str, language='en'):
    """Chat transcript of the conversation a rating refers to."""
    bubbles = []
    for message in rating.conversation:
        speaker = TRANSLATIONS[language]['chatbot'] if message.is_bot else user_name
        bubbles.append(html.Div([
            html.Div(f"{speaker} · {message.timestamp}", style={'fontSize': '11px', 'color': '#666'}),
            html.Div(message.content),
        ], style={
            'backgroundColor': '#EFF6FF' if message.is_bot else '#F3F4F6',
            'borderRadius': '6px',
            'padding': '6px 10px',
            'margin': '4px 0',
            'marginLeft': '0' if message.is_bot else '40px',
            'marginRight': '40px' if message.is_bot else '0',
        }))
    return html.Div(bubbles, style={'marginTop': '8px'})


def format_feedback(feedback: str, expanded: bool) -> str:
    if expanded or len(feedback) <= MESSAGE_PREVIEW_LENGTH:
        return feedback
    return f"{feedback[:MESSAGE_PREVIEW_LENGTH]}..."


def create_rating_item(rating: Rating, user_name: str, state: DashboardState, language='en'):
    message_expanded = rating.id in state.expanded_messages
    conversation_expanded = rating.id in state.expanded_conversations

    controls = []
    if len(rating.feedback) > MESSAGE_PREVIEW_LENGTH:
        controls.append(html.Button(
            TRANSLATIONS[language]['show_less' if message_expanded else 'show_more'],
            id={'type': 'toggle-message', 'index': rating.id},
            n_clicks=0,
            style={'marginRight': '10px', 'fontSize': '12px'}
        ))
    if rating.has_conversation:
        controls.append(html.Button(
            TRANSLATIONS[language]['hide_conversation' if conversation_expanded else 'show_conversation'],
            id={'type': 'toggle-conversation', 'index': rating.id},
            n_clicks=0,
            style={'fontSize': '12px'}
        ))

    children = [
        html.Div([
            create_rating_badge(rating.rating),
            html.Span(user_name, style={'fontWeight': 'bold', 'marginRight': '10px'}),
            html.Span(rating.date, style={'color': '#666'}),
        ]),
        html.P(format_feedback(rating.feedback, message_expanded), style={'margin': '6px 0'}),
        html.Div(controls),
    ]
    if conversation_expanded and rating.has_conversation:
        children.append(create_conversation(rating, user_name, language))

    return html.Div(children, style={'borderBottom': '1px solid #eee', 'padding': '10px 0'})


def create_rating_display(ratings: List[Rating], users: Iterable[User], state: DashboardState, language='en'):
    """List of ratings for the selected summary category."""
    if not ratings:
        return html.Div(TRANSLATIONS[language]['no_ratings'], style={'padding': '20px', 'textAlign': 'center'})

    names_by_id = {user.id: user.name for user in users}
    return html.Div([
        create_rating_item(rating, user_display_name(rating.user_id, names_by_id), state, language)
        for rating in ratings
    ], style={'maxHeight': '600px', 'overflowY': 'auto'})


def toggle_expanded(expanded: List[int], rating_id: int) -> List[int]:
    """Add or remove a rating id from an expanded list."""
    if rating_id in expanded:
        return [rid for rid in expanded if rid != rating_id]
    return expanded + [rating_id]
