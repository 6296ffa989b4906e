"""
Structured logging utilities for the application.
"""

import logging
import json
from datetime import datetime, timezone


EXTRA_FIELDS = (
    'user_id',
    'target_id',
    'right',
    'company_id',
    'model',
    'instance_id',
    'action',
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        # Add extra fields if present
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = str(getattr(record, field))

        # Add exception info if present
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def get_logger(name):
    """Get a logger that writes JSON lines, attaching its handler only once."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def log_model_change(logger, model_name, instance_id, action, user=None):
    """Log model instance changes."""
    logger.info(
        'Model Change',
        extra={
            'model': model_name,
            'instance_id': instance_id,
            'action': action,
            'user_id': user.id if user else None,
        }
    )
