from dash import html, dcc

from config import RATING_CATEGORIES, TRANSLATIONS
from date_filter import get_time_period_options
from filter_state import default_filters
from models import DashboardState

SIDEBAR_STYLE = {
    'width': '280px',
    'padding': '20px',
    'backgroundColor': '#f9f9f9',
    'borderRight': '1px solid #ddd',
    'minHeight': '100vh',
    'boxSizing': 'border-box',
}

SECTION_STYLE = {'marginBottom': '25px'}

BUTTON_STYLE = {
    'backgroundColor': '#2196F3',
    'color': 'white',
    'border': 'none',
    'padding': '5px 12px',
    'cursor': 'pointer',
    'borderRadius': '4px',
    'marginRight': '8px',
}


def get_user_filter(users, filters, language='en'):
    """User checklist, hidden until expanded."""
    return html.Div([
        html.Label(TRANSLATIONS[language]['users'], style={'fontWeight': 'bold'}),
        html.Div([
            html.Button(TRANSLATIONS[language]['show_users'], id='toggle-users-btn', n_clicks=0, style=BUTTON_STYLE),
            html.Button(TRANSLATIONS[language]['all_users'], id='all-users-btn', n_clicks=0, style=BUTTON_STYLE),
        ], style={'margin': '8px 0'}),
        html.Div(
            dcc.Checklist(
                id='user-checklist',
                options=[{'label': user.name, 'value': user.id} for user in users],
                value=list(filters.selected_users),
                labelStyle={'display': 'block'},
            ),
            id='user-checklist-container',
            style={'display': 'block' if filters.expand_users else 'none'}
        ),
    ], style=SECTION_STYLE)


def get_date_filter(filters, language='en'):
    """Time period dropdown with the manual from/to inputs."""
    input_style = {'width': '110px', 'textAlign': 'center'}
    return html.Div([
        html.Label(TRANSLATIONS[language]['time_period'], style={'fontWeight': 'bold'}),
        dcc.Dropdown(
            id='period-dropdown',
            options=get_time_period_options(),
            value=filters.selected_time_period,
            clearable=False,
            style={'marginTop': '8px'}
        ),
        html.Div([
            html.Div([
                html.Label(TRANSLATIONS[language]['from_date'], style={'fontSize': '12px'}),
                dcc.Input(
                    id='from-date-input',
                    type='text',
                    value=filters.from_date,
                    placeholder=TRANSLATIONS[language]['date_placeholder'],
                    debounce=True,
                    style=input_style
                ),
            ], style={'marginRight': '10px'}),
            html.Div([
                html.Label(TRANSLATIONS[language]['to_date'], style={'fontSize': '12px'}),
                dcc.Input(
                    id='to-date-input',
                    type='text',
                    value=filters.to_date,
                    placeholder=TRANSLATIONS[language]['date_placeholder'],
                    debounce=True,
                    style=input_style
                ),
            ]),
        ], style={'display': 'flex', 'marginTop': '10px'}),
        html.Button(TRANSLATIONS[language]['apply'], id='apply-date-btn', n_clicks=0,
                    style={**BUTTON_STYLE, 'marginTop': '10px'}),
        html.Div(id='date-error', style={'color': 'red', 'fontSize': '12px', 'marginTop': '6px'}),
    ], style=SECTION_STYLE)


def get_category_filter(filters, language='en'):
    return html.Div([
        html.Label(TRANSLATIONS[language]['rating_categories'], style={'fontWeight': 'bold'}),
        dcc.Checklist(
            id='category-checklist',
            options=[
                {'label': f"{category.name} ({category.range[0]} to {category.range[1]})", 'value': category.id}
                for category in RATING_CATEGORIES
            ],
            value=list(filters.selected_rating_categories),
            labelStyle={'display': 'block'},
            style={'marginTop': '8px'}
        ),
    ], style=SECTION_STYLE)


def create_detail_tabs(active_tab='details', language='en'):
    return dcc.Tabs(
        id='detail-tabs',
        value=active_tab,
        children=[
            dcc.Tab(label=TRANSLATIONS[language]['details'], value='details'),
            dcc.Tab(label=TRANSLATIONS[language]['distribution'], value='distribution'),
        ],
        style={'marginTop': '10px'}
    )


def get_detail_panel(language='en'):
    """Panel shown after clicking a summary tile."""
    return html.Div(
        id='detail-panel',
        children=[
            html.Div([
                html.H3(id='detail-title', style={'margin': '0'}),
                html.Button(TRANSLATIONS[language]['close'], id='close-detail-btn', n_clicks=0, style=BUTTON_STYLE),
            ], style={'display': 'flex', 'justifyContent': 'space-between', 'alignItems': 'center'}),
            # Filled by the detail callback with the stored tab
            html.Div(id='detail-tabs-container'),
            dcc.Loading(html.Div(id='detail-content', style={'paddingTop': '10px'}), type='circle'),
        ],
        style={'display': 'none', 'marginTop': '20px', 'padding': '15px',
               'border': '1px solid #ddd', 'borderRadius': '5px'}
    )


def get_app_layout(users, language='en'):
    """
    Create the dashboard layout.

    Args:
        users: Users offered in the sidebar; all of them start selected
        language: UI language
    """
    users = list(users)
    filters = default_filters(user.id for user in users)

    sidebar = html.Div([
        html.H3(TRANSLATIONS[language]['filters']),
        get_user_filter(users, filters, language),
        get_date_filter(filters, language),
        get_category_filter(filters, language),
    ], style=SIDEBAR_STYLE)

    main_panel = html.Div([
        html.H2(TRANSLATIONS[language]['app_title']),
        html.Div(id='load-error', style={'color': 'red', 'marginBottom': '10px'}),
        html.Div(id='filter-summary'),
        html.H4(TRANSLATIONS[language]['summary']),
        html.Div(id='summary-tiles'),
        html.Div(TRANSLATIONS[language]['select_category_hint'], style={'color': '#666', 'fontSize': '12px', 'marginTop': '6px'}),
        dcc.Loading(dcc.Graph(id='distribution-chart'), type='circle'),
        get_detail_panel(language),
    ], style={'flex': '1', 'padding': '20px'})

    return html.Div([
        dcc.Store(id='filter-store', data=filters.to_dict()),
        dcc.Store(id='dashboard-store', data=DashboardState().to_dict()),
        dcc.Store(id='summary-store', data={}),
        html.Div([sidebar, main_panel], style={'display': 'flex'}),
    ], style={'fontFamily': 'Arial, sans-serif'})
