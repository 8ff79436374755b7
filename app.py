import os

import dash

from callbacks import register_callbacks
from config import DATA_SOURCE, DEFAULT_LANGUAGE, TRANSLATIONS
from connectors import get_default_connector
from errors import ConnectorError
from layouts import get_app_layout
from logging_config import log_app_event, log_error

# Initialize Dash app
app = dash.Dash(__name__, title=TRANSLATIONS[DEFAULT_LANGUAGE]['app_title'])
server = app.server
# Detail tabs and rating buttons are created by callbacks
app.config.suppress_callback_exceptions = True

log_app_event(f"Application starting with data source '{DATA_SOURCE}'")

connector = get_default_connector()

try:
    users = connector.get_users()
    log_app_event(f"Loaded {len(users)} users")
except ConnectorError:
    log_error("Failed to load users, starting with an empty user list", exc_info=True)
    users = []

app.layout = get_app_layout(users, DEFAULT_LANGUAGE)
log_app_event("Application layout set")

register_callbacks(app, connector, DEFAULT_LANGUAGE)
log_app_event("Callbacks registered")

# Run the app
if __name__ == '__main__':
    log_app_event("Starting application server")
    app.run(debug=os.environ.get('RATINGS_DEBUG', 'false').lower() == 'true', host='0.0.0.0', port=8080)
