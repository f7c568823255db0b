"""JSON log output for tplan.

One JSON object per line, suitable for log shippers.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

# Attributes every LogRecord has, plus the ones the formatter or
# FileContextFilter adds; anything else on a record came from ``extra``.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName", "run_id", "file_path", "file_tag"}


class JSONFormatter(logging.Formatter):
    """Format log records as JSON objects.

    Keys:
    - timestamp: ISO-8601 UTC time of the record
    - level, logger, message
    - run_id, file: per-file pipeline context, when set
    - extra: values passed through ``extra=``
    - exception: formatted traceback, when present
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        run_id = getattr(record, "run_id", None)
        if run_id:
            entry["run_id"] = run_id
        file_path = getattr(record, "file_path", None)
        if file_path:
            entry["file"] = file_path

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)
