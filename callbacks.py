import json
from dataclasses import replace

import dash
from dash import ALL, Input, Output, State, dcc, html

from bar_chart import create_empty_figure, create_rating_distribution_chart, create_user_distribution_chart
from config import DEFAULT_LANGUAGE, TRANSLATIONS
from date_filter import handle_time_period_change, update_date_from_input
from errors import ConnectorError
from filter_state import toggle_all_users, toggle_rating_category, toggle_user
from layouts import create_detail_tabs
from logging_config import log_app_event, log_error, log_user_action
from models import DashboardState, FilterState
from rating_display import create_filter_summary, create_rating_display, create_summary_tiles, toggle_expanded
from summary import get_category_ratings, get_summary_data
from time_series import prepare_rating_distribution
from user_distribution import get_user_distribution_data, prepare_user_distribution_data

DASHBOARD_PATH = '/'


def get_trigger(ctx):
    """
    First triggered input that carries a value.

    Returns:
        Tuple of (component_id, value); pattern-matching ids come back as dicts
    """
    for triggered in ctx.triggered:
        prop_id = triggered['prop_id']
        if prop_id == '.':
            continue
        component_id = prop_id.rsplit('.', 1)[0]
        if component_id.startswith('{'):
            component_id = json.loads(component_id)
        return component_id, triggered['value']
    return None, None


def apply_checklist_change(filters, old_values, new_values, toggle):
    """Run ``toggle`` for every value ticked or unticked since the last update."""
    old_values = list(old_values)
    new_values = list(new_values or [])
    changed = [v for v in old_values if v not in new_values] + [v for v in new_values if v not in old_values]
    for value in changed:
        filters = toggle(filters, value)
    return filters


def update_dashboard_state(state, component_id, value):
    """
    Apply one click in the main panel to the dashboard state.

    Raises:
        PreventUpdate: when the trigger does not change anything
    """
    if component_id is None:
        raise dash.exceptions.PreventUpdate

    if isinstance(component_id, dict):
        # Pattern-matching buttons fire with n_clicks 0 when first rendered
        if not value:
            raise dash.exceptions.PreventUpdate
        kind, index = component_id.get('type'), component_id.get('index')
        if kind == 'summary-tile':
            if index == state.selected_category:
                raise dash.exceptions.PreventUpdate
            return DashboardState(selected_category=index)
        if kind == 'toggle-message':
            return replace(state, expanded_messages=toggle_expanded(state.expanded_messages, index))
        if kind == 'toggle-conversation':
            return replace(state, expanded_conversations=toggle_expanded(state.expanded_conversations, index))
        raise dash.exceptions.PreventUpdate

    if component_id == 'close-detail-btn':
        if not value or state.selected_category is None:
            raise dash.exceptions.PreventUpdate
        return DashboardState()
    if component_id == 'detail-tabs':
        if value == state.active_tab:
            raise dash.exceptions.PreventUpdate
        return replace(state, active_tab=value)
    raise dash.exceptions.PreventUpdate


def render_filter_controls(filters, language=DEFAULT_LANGUAGE):
    """Sidebar values mirroring a FilterState."""
    return (
        filters.to_dict(),
        list(filters.selected_users),
        {'display': 'block' if filters.expand_users else 'none'},
        TRANSLATIONS[language]['hide_users' if filters.expand_users else 'show_users'],
        list(filters.selected_rating_categories),
        filters.selected_time_period,
        filters.from_date,
        filters.to_date,
    )


def register_callbacks(app, connector, language=DEFAULT_LANGUAGE):
    """Register all callbacks with the app."""

    @app.callback(
        [Output('filter-store', 'data'),
         Output('user-checklist', 'value'),
         Output('user-checklist-container', 'style'),
         Output('toggle-users-btn', 'children'),
         Output('category-checklist', 'value'),
         Output('period-dropdown', 'value'),
         Output('from-date-input', 'value'),
         Output('to-date-input', 'value'),
         Output('date-error', 'children')],
        [Input('user-checklist', 'value'),
         Input('all-users-btn', 'n_clicks'),
         Input('toggle-users-btn', 'n_clicks'),
         Input('category-checklist', 'value'),
         Input('period-dropdown', 'value'),
         Input('apply-date-btn', 'n_clicks')],
        [State('user-checklist', 'options'),
         State('from-date-input', 'value'),
         State('to-date-input', 'value'),
         State('filter-store', 'data')],
        prevent_initial_call=True
    )
    def update_filters(user_values, all_users_clicks, toggle_users_clicks, category_values, period_id,
                       apply_clicks, user_options, from_input, to_input, filters_data):
        trigger_id, _ = get_trigger(dash.callback_context)
        filters = FilterState.from_dict(filters_data)

        if trigger_id == 'user-checklist':
            filters = apply_checklist_change(filters, filters.selected_users, user_values, toggle_user)
            context = {'selected_users': list(filters.selected_users)}
        elif trigger_id == 'all-users-btn':
            filters = toggle_all_users(filters, [option['value'] for option in user_options or []])
            context = {'selected_users': list(filters.selected_users)}
        elif trigger_id == 'toggle-users-btn':
            filters = replace(filters, expand_users=not filters.expand_users)
            context = {'expand_users': filters.expand_users}
        elif trigger_id == 'category-checklist':
            filters = apply_checklist_change(filters, filters.selected_rating_categories, category_values,
                                             toggle_rating_category)
            context = {'categories': list(filters.selected_rating_categories)}
        elif trigger_id == 'period-dropdown':
            filters_data, _, _ = handle_time_period_change(period_id, filters.to_dict())
            filters = FilterState.from_dict(filters_data)
            context = {'period': period_id, 'from_date': filters.from_date, 'to_date': filters.to_date}
        elif trigger_id == 'apply-date-btn':
            filters_data, _, error = update_date_from_input(apply_clicks, from_input, to_input,
                                                            filters.to_dict(), language)
            if error:
                log_user_action(None, DASHBOARD_PATH, 'apply_date_rejected',
                                {'from_date': from_input, 'to_date': to_input})
                return (dash.no_update,) * 8 + (error,)
            filters = FilterState.from_dict(filters_data)
            context = {'from_date': filters.from_date, 'to_date': filters.to_date}
        else:
            raise dash.exceptions.PreventUpdate

        log_user_action(None, DASHBOARD_PATH, f"filter:{trigger_id}", context)
        return render_filter_controls(filters, language) + ('',)

    @app.callback(
        [Output('filter-summary', 'children'),
         Output('summary-store', 'data'),
         Output('distribution-chart', 'figure'),
         Output('load-error', 'children')],
        [Input('filter-store', 'data')]
    )
    def update_main_view(filters_data):
        filters = FilterState.from_dict(filters_data)
        try:
            users = connector.get_users()
            ratings = connector.get_ratings(filters)
        except ConnectorError as e:
            log_error(f"Failed to load ratings for the main view: {e}")
            error = TRANSLATIONS[language]['load_error'].format(error=e)
            return '', {}, create_empty_figure(language), error

        summary = get_summary_data(ratings)
        chart_data = prepare_rating_distribution(ratings)

        log_app_event(f"Main view updated: {len(ratings)} ratings, grouping {chart_data['grouping_mode']}")
        return (
            create_filter_summary(filters, users, len(ratings), language),
            summary,
            create_rating_distribution_chart(chart_data, language),
            '',
        )

    @app.callback(
        Output('summary-tiles', 'children'),
        [Input('summary-store', 'data'),
         Input('dashboard-store', 'data')]
    )
    def update_summary_tiles(summary, dashboard_data):
        state = DashboardState.from_dict(dashboard_data)
        return create_summary_tiles(summary or {}, state.selected_category, language)

    @app.callback(
        Output('dashboard-store', 'data'),
        [Input({'type': 'summary-tile', 'index': ALL}, 'n_clicks'),
         Input('close-detail-btn', 'n_clicks'),
         Input('detail-tabs', 'value'),
         Input({'type': 'toggle-message', 'index': ALL}, 'n_clicks'),
         Input({'type': 'toggle-conversation', 'index': ALL}, 'n_clicks')],
        [State('dashboard-store', 'data')],
        prevent_initial_call=True
    )
    def update_dashboard(tile_clicks, close_clicks, active_tab, message_clicks, conversation_clicks,
                         dashboard_data):
        state = DashboardState.from_dict(dashboard_data)
        component_id, value = get_trigger(dash.callback_context)
        new_state = update_dashboard_state(state, component_id, value)
        log_user_action(None, DASHBOARD_PATH, 'dashboard', {'trigger': component_id, 'value': value})
        return new_state.to_dict()

    @app.callback(
        [Output('detail-panel', 'style'),
         Output('detail-title', 'children'),
         Output('detail-tabs-container', 'children'),
         Output('detail-content', 'children')],
        [Input('dashboard-store', 'data'),
         Input('filter-store', 'data')],
        [State('detail-panel', 'style')]
    )
    def update_detail_panel(dashboard_data, filters_data, panel_style):
        state = DashboardState.from_dict(dashboard_data)
        panel_style = dict(panel_style or {})
        if state.selected_category is None:
            panel_style['display'] = 'none'
            return panel_style, '', [], []

        panel_style['display'] = 'block'
        try:
            users = connector.get_users()
            ratings = connector.get_ratings(FilterState.from_dict(filters_data))
        except ConnectorError as e:
            log_error(f"Failed to load ratings for the detail view: {e}")
            return panel_style, '', [], html.Div(TRANSLATIONS[language]['load_error'].format(error=e),
                                                 style={'color': 'red'})

        category_ratings = get_category_ratings(ratings, state.selected_category)
        title = f"{TRANSLATIONS[language][state.selected_category]} ({len(category_ratings)})"

        if state.active_tab == 'distribution':
            rows = prepare_user_distribution_data(get_user_distribution_data(category_ratings, users))
            content = dcc.Graph(figure=create_user_distribution_chart(rows, language))
        else:
            content = create_rating_display(category_ratings, users, state, language)

        return panel_style, title, create_detail_tabs(state.active_tab, language), content
