"""JSON logging for the Lambda runtime

Every record is written to stdout as one JSON object so CloudWatch Logs
Insights can filter on fields such as `event` or `shortcode`:

    {"timestamp": "2026-01-05T09:30:00.000Z", "level": "INFO",
     "logger": "urlshortener.service", "message": "Shortened URL.",
     "shortcode": "EAaArVRs", "domain": "example.com"}

`initialize_logging()` must run once per cold start, before the first record
is emitted (see `urlshortener.lambdas.api.app.bootstrap`).
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlshortener.constants import ENV


# Attributes every LogRecord carries; anything else was passed through `extra`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None))) | {'message', 'asctime'}

# Chatty third-party loggers, capped so DEBUG runs stay readable
_QUIET_LOGGERS = ('boto3', 'botocore', 'urllib3')


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, its `extra` fields and any traceback as JSON"""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        return created.isoformat(timespec='milliseconds').replace('+00:00', 'Z')

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        payload.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)
        if record.stack_info:
            payload['stack'] = self.formatStack(record.stack_info)

        # Extras may hold arbitrary objects (exceptions, models), fall back to str()
        return json.dumps(payload, default=str)


def logging_config(level: str) -> dict:
    """Build the `logging.config.dictConfig` schema for a root log level."""
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'json': {'()': JsonFormatter}},
        'handlers': {
            'stdout': {
                'class': 'logging.StreamHandler',
                'formatter': 'json',
                'stream': 'ext://sys.stdout',
            }
        },
        'loggers': {name: {'level': 'WARNING'} for name in _QUIET_LOGGERS},
        'root': {'level': level, 'handlers': ['stdout']},
    }


def initialize_logging(level: str | None = None) -> None:
    """Route all logging through one JSON stdout handler

    Args:
        level (str | None):
            Root log level. Read from LOG_LEVEL (default INFO) when None.
    """
    level = (level or os.environ.get(ENV.App.LOG_LEVEL) or 'INFO').upper()
    logging.config.dictConfig(logging_config(level))
