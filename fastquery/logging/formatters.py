"""
Custom log formatters for FastQuery.

JSON lines carry the timestamp (UTC), level, logger name and message, plus
any structured fields passed through ``extra=...`` (the search service
logs its page coordinates this way) and the formatted exception, if any.
"""

import json
import logging
from datetime import datetime, timezone

# Attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """
    Format log records as JSON for structured logging.

    Extra values that are not JSON serializable are rendered with ``str``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the specified record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string containing the formatted log record
        """
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)
