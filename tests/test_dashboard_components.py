"""
Unit tests for the chart builders, display components and callback helpers.
"""

import dash
import pytest
from dash import dcc, html

from bar_chart import (
    create_empty_figure, create_rating_distribution_chart, create_user_distribution_chart, get_bucket_period
)
from callbacks import apply_checklist_change, get_trigger, render_filter_controls, update_dashboard_state
from date_filter import get_time_period_options, handle_time_period_change, update_date_from_input
from filter_state import toggle_rating_category, toggle_user
from layouts import get_app_layout
from models import DashboardState, FilterState
from rating_display import (
    create_rating_display, create_summary_tiles, format_feedback, summarize_filters, toggle_expanded
)


def find_components(component, predicate):
    """Walk a Dash component tree and collect matching components."""
    found = []
    if predicate(component):
        found.append(component)
    children = getattr(component, 'children', None)
    if isinstance(children, (list, tuple)):
        for child in children:
            found.extend(find_components(child, predicate))
    elif children is not None and hasattr(children, 'to_plotly_json'):
        found.extend(find_components(children, predicate))
    return found


# Charts

def test_distribution_chart_has_one_trace_per_sentiment():
    chart_data = {
        'grouping_mode': 'month',
        'skipped': 0,
        'data': [
            {'name': 'Mar 2025', 'key': '03/2025', 'positive': 2, 'neutral': 1, 'negative': 0},
            {'name': 'Apr 2025', 'key': '04/2025', 'positive': 1, 'neutral': 4, 'negative': 3},
        ],
    }
    fig = create_rating_distribution_chart(chart_data)
    assert [trace.name for trace in fig.data] == ['Positive', 'Neutral', 'Negative']
    assert list(fig.data[1].y) == [1, 4]
    assert fig.layout.barmode == 'stack'
    assert 'by month' in fig.layout.title.text
    assert fig.layout.yaxis.range[1] == pytest.approx(8.8)


def test_distribution_chart_without_data_is_empty_figure():
    fig = create_rating_distribution_chart({'data': [], 'grouping_mode': 'day', 'skipped': 0})
    assert len(fig.data) == 0
    assert fig.layout.annotations[0].text == create_empty_figure().layout.annotations[0].text


def test_bucket_period_text():
    assert get_bucket_period('02/2024', 'month') == '01/02/2024 to 29/02/2024'
    assert get_bucket_period('W16/2025', 'week') == 'Week 16, 2025'
    assert get_bucket_period('19/04/2025', 'day') == '19/04/2025'


def test_user_distribution_chart():
    fig = create_user_distribution_chart([{'name': 'Bob', 'value': 3}, {'name': 'Alice', 'value': 1}])
    assert list(fig.data[0].y) == ['Bob', 'Alice']
    assert list(fig.data[0].x) == [3, 1]


# Display components

def test_summary_tiles_only_for_present_categories():
    tiles = create_summary_tiles({'positive': 3, 'heavily-negative': 1}, 'positive')
    buttons = find_components(tiles, lambda c: isinstance(c, html.Button))
    assert [b.id['index'] for b in buttons] == ['positive', 'heavily-negative']
    assert '#1F2937' in buttons[0].style['border']


def test_summarize_filters_all_selected(users):
    filters = FilterState(selected_users=(1, 2, 3), selected_time_period='last-week',
                          from_date='13/04/2025', to_date='19/04/2025', selected_rating_categories=('all',))
    assert summarize_filters(filters, users) == {
        'users': 'All Users',
        'period': 'Last Week',
        'categories': 'All Categories',
    }


def test_summarize_filters_partial_selection(users):
    filters = FilterState(selected_users=(2,), selected_time_period='custom',
                          from_date='01/04/2025', to_date='10/04/2025',
                          selected_rating_categories=('positive', 'neutral', 'negative'))
    assert summarize_filters(filters, users) == {
        'users': 'Bob',
        'period': '01/04/2025 to 10/04/2025',
        'categories': 'Positive, Relatively Neutral +1 more',
    }


def test_summarize_filters_nothing_selected(users):
    filters = FilterState(selected_users=(), selected_rating_categories=())
    summary = summarize_filters(filters, users)
    assert summary['users'] == 'None selected'
    assert summary['categories'] == 'None selected'


def test_format_feedback_truncates_long_text():
    text = 'x' * 150
    assert format_feedback(text, expanded=False) == 'x' * 100 + '...'
    assert format_feedback(text, expanded=True) == text
    assert format_feedback('short', expanded=False) == 'short'


def test_rating_display_shows_conversation_when_expanded(make_rating, users, conversation):
    rating = make_rating(rating=-5, feedback='y' * 120, conversation=conversation)
    collapsed = create_rating_display([rating], users, DashboardState(selected_category='negative'))
    buttons = find_components(collapsed, lambda c: isinstance(c, html.Button))
    assert [b.id['type'] for b in buttons] == ['toggle-message', 'toggle-conversation']
    assert not find_components(collapsed, lambda c: getattr(c, 'children', None) == 'Chatbot · 2025-04-15T09:00:05')

    expanded = create_rating_display(
        [rating], users, DashboardState(selected_category='negative', expanded_conversations=[rating.id])
    )
    texts = find_components(expanded, lambda c: isinstance(c, html.Div) and c.children == 'Let me check that for you.')
    assert len(texts) == 1


def test_rating_display_empty(users):
    display = create_rating_display([], users, DashboardState())
    assert display.children == 'No ratings in this category.'


def test_toggle_expanded():
    assert toggle_expanded([], 3) == [3]
    assert toggle_expanded([3, 4], 3) == [4]


# Date filter

def test_time_period_options():
    assert [o['value'] for o in get_time_period_options()] == [
        'last-day', 'last-week', 'last-month', 'last-quarter', 'custom'
    ]


def test_handle_time_period_change():
    filters = FilterState(selected_time_period='last-week', from_date='13/04/2025', to_date='19/04/2025')
    data, from_date, to_date = handle_time_period_change('last-day', filters.to_dict())
    assert data['selectedTimePeriod'] == 'last-day'
    assert (from_date, to_date) == ('19/04/2025', '19/04/2025')


def test_handle_time_period_change_same_period():
    filters = FilterState(selected_time_period='last-week')
    with pytest.raises(dash.exceptions.PreventUpdate):
        handle_time_period_change('last-week', filters.to_dict())


def test_update_date_from_input():
    data, period, error = update_date_from_input(1, ' 01/04/2025 ', '10/04/2025', FilterState().to_dict())
    assert error == ''
    assert period == 'custom'
    assert (data['fromDate'], data['toDate']) == ('01/04/2025', '10/04/2025')


@pytest.mark.parametrize('from_date, to_date, message', [
    ('2025-04-01', '10/04/2025', 'Please use the DD/MM/YYYY format with a real calendar date'),
    ('10/04/2025', '01/04/2025', 'From date must not be after to date'),
])
def test_update_date_from_input_validation(from_date, to_date, message):
    data, period, error = update_date_from_input(1, from_date, to_date, FilterState().to_dict())
    assert data is dash.no_update
    assert error == message


def test_update_date_from_input_without_click():
    with pytest.raises(dash.exceptions.PreventUpdate):
        update_date_from_input(0, '01/04/2025', '10/04/2025', FilterState().to_dict())


# Callback helpers

class FakeContext:
    def __init__(self, triggered):
        self.triggered = triggered


def test_get_trigger_plain_and_pattern_ids():
    assert get_trigger(FakeContext([{'prop_id': 'apply-date-btn.n_clicks', 'value': 2}])) == ('apply-date-btn', 2)
    component_id, value = get_trigger(FakeContext([
        {'prop_id': '{"index":"positive","type":"summary-tile"}.n_clicks', 'value': 1}
    ]))
    assert component_id == {'index': 'positive', 'type': 'summary-tile'}
    assert value == 1
    assert get_trigger(FakeContext([{'prop_id': '.', 'value': None}])) == (None, None)


def test_apply_checklist_change_for_categories():
    filters = FilterState(selected_rating_categories=('all',))
    filters = apply_checklist_change(filters, filters.selected_rating_categories, ['all', 'positive'],
                                     toggle_rating_category)
    assert filters.selected_rating_categories == ('positive',)


def test_apply_checklist_change_for_users():
    filters = FilterState(selected_users=(1, 2))
    filters = apply_checklist_change(filters, filters.selected_users, [2, 3], toggle_user)
    assert filters.selected_users == (2, 3)


def test_selecting_a_tile_resets_detail_state():
    state = DashboardState(selected_category='neutral', active_tab='distribution', expanded_messages=[1])
    new_state = update_dashboard_state(state, {'type': 'summary-tile', 'index': 'positive'}, 1)
    assert new_state == DashboardState(selected_category='positive')


def test_dashboard_state_ignores_unclicked_buttons():
    with pytest.raises(dash.exceptions.PreventUpdate):
        update_dashboard_state(DashboardState(), {'type': 'summary-tile', 'index': 'positive'}, 0)


def test_dashboard_state_toggles_and_tabs():
    state = DashboardState(selected_category='positive')
    state = update_dashboard_state(state, {'type': 'toggle-message', 'index': 5}, 1)
    state = update_dashboard_state(state, {'type': 'toggle-conversation', 'index': 5}, 1)
    state = update_dashboard_state(state, 'detail-tabs', 'distribution')
    assert state.expanded_messages == [5]
    assert state.expanded_conversations == [5]
    assert state.active_tab == 'distribution'
    with pytest.raises(dash.exceptions.PreventUpdate):
        update_dashboard_state(state, 'detail-tabs', 'distribution')


def test_close_clears_selection():
    state = DashboardState(selected_category='positive', expanded_messages=[1])
    assert update_dashboard_state(state, 'close-detail-btn', 1) == DashboardState()


def test_render_filter_controls():
    filters = FilterState(selected_users=(1,), expand_users=True, selected_time_period='custom',
                          from_date='01/04/2025', to_date='02/04/2025', selected_rating_categories=('neutral',))
    store, user_values, style, label, categories, period, from_date, to_date = render_filter_controls(filters)
    assert store == filters.to_dict()
    assert user_values == [1]
    assert style == {'display': 'block'}
    assert label == 'Hide users'
    assert categories == ['neutral']
    assert (period, from_date, to_date) == ('custom', '01/04/2025', '02/04/2025')


def test_app_layout_starts_with_default_filters(users):
    layout = get_app_layout(users)
    stores = find_components(layout, lambda c: isinstance(c, dcc.Store))
    filter_store = next(s for s in stores if s.id == 'filter-store')
    assert filter_store.data['selectedUsers'] == [1, 2, 3]
    assert filter_store.data['selectedTimePeriod'] == 'last-week'
    assert filter_store.data['fromDate'] == '13/04/2025'
