import dash
from datetime import datetime
from typing import Optional

from config import TIME_PERIOD_OPTIONS, TRANSLATIONS
from date_utils import is_valid_date_string, parse_date
from errors import InvalidArgument
from filter_state import select_time_period, set_date_range
from logging_config import log_app_event
from models import FilterState


def get_time_period_options():
    """Dropdown options for the time period presets."""
    return [{'label': option.name, 'value': option.id} for option in TIME_PERIOD_OPTIONS]


def validate_date_inputs(from_date, to_date, language='en'):
    """
    Check the manually typed dates.

    Returns:
        Error message for the sidebar, or an empty string when both dates are usable
    """
    if not is_valid_date_string(from_date) or not is_valid_date_string(to_date):
        return TRANSLATIONS[language]['invalid_date']
    if parse_date(from_date) > parse_date(to_date):
        return TRANSLATIONS[language]['invalid_range']
    return ''


def handle_time_period_change(period_id, filters_data, today: Optional[datetime] = None):
    """
    Handle a change of the time period dropdown.

    Args:
        period_id: Selected preset id
        filters_data: Current filter storage dict
        today: Reference day for the preset range

    Returns:
        Tuple containing (updated_filter_storage, from_input_value, to_input_value)
    """
    if not period_id or filters_data is None:
        raise dash.exceptions.PreventUpdate

    filters = FilterState.from_dict(filters_data)
    if period_id == filters.selected_time_period:
        raise dash.exceptions.PreventUpdate

    try:
        filters = select_time_period(filters, period_id, today)
    except InvalidArgument as e:
        log_app_event(f"Ignoring time period change: {e}")
        raise dash.exceptions.PreventUpdate

    return filters.to_dict(), filters.from_date, filters.to_date


def update_date_from_input(n_clicks, from_input, to_input, filters_data, language='en'):
    """
    Apply the dates typed into the from/to inputs.

    Returns:
        Tuple of (updated_filter_storage, period_dropdown_value, error_message)
    """
    if not n_clicks or filters_data is None:
        raise dash.exceptions.PreventUpdate

    from_input = (from_input or '').strip()
    to_input = (to_input or '').strip()
    error = validate_date_inputs(from_input, to_input, language)
    if error:
        return dash.no_update, dash.no_update, error

    filters = set_date_range(FilterState.from_dict(filters_data), from_input, to_input)
    return filters.to_dict(), filters.selected_time_period, ''
