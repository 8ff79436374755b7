import os
import logging
import datetime
from logging.handlers import RotatingFileHandler
import json

from config import LOG_DIR, ENABLE_DETAILED_LOGGING

# Ensure the logs directory exists
os.makedirs(LOG_DIR, exist_ok=True)

# Get today's date for log filenames
today = datetime.datetime.now().strftime('%Y-%m-%d')

# Set up formatters
standard_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# Custom JSON formatter for operator action logs
class JsonFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        # Add additional fields if they exist
        for attr in ('user', 'path', 'action', 'context'):
            if hasattr(record, attr):
                log_record[attr] = getattr(record, attr)

        return json.dumps(log_record, ensure_ascii=False)


def _rotating_handler(prefix, level, formatter):
    handler = RotatingFileHandler(
        os.path.join(LOG_DIR, f'{prefix}_{today}.log'),
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _configure(name, level, handler):
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False  # Prevent propagation to avoid duplicates
    # Re-importing the module (e.g. under a reloader) must not stack handlers
    if not logger.handlers:
        logger.addHandler(handler)
    return logger


app_level = logging.DEBUG if ENABLE_DETAILED_LOGGING else logging.INFO

error_logger = _configure('ratings.error', logging.ERROR,
                          _rotating_handler('error', logging.ERROR, standard_formatter))
app_logger = _configure('ratings.app', app_level,
                        _rotating_handler('app', app_level, standard_formatter))
user_logger = _configure('ratings.user', logging.INFO,
                         _rotating_handler('user', logging.INFO, JsonFormatter()))


def log_error(message, exc_info=None):
    """Log an error message"""
    error_logger.error(message, exc_info=exc_info)

def log_app_event(message, level=logging.INFO):
    """Log an application event"""
    app_logger.log(level, message)

def log_user_action(user, path, action, context):
    """Log an operator action in JSON format"""
    extra = {
        'user': user or 'Unknown',
        'path': path or 'Unknown',
        'action': action,
        'context': json.dumps(context, ensure_ascii=False, default=str)
    }
    user_logger.info('User action', extra=extra)
