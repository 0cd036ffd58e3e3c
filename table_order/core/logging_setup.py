from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

from table_order.core.config import LOG_LEVEL
from table_order.core.request_context import get_request_id, get_table_number

_SENSITIVE_PATTERNS = [
    re.compile(r"(phone\s*[:=]\s*)([^\s\",}]+)", re.IGNORECASE),
    re.compile(r"(email\s*[:=]\s*)([^\s\",}]+)", re.IGNORECASE),
    re.compile(r"(token\s*[:=]\s*)([^\s\",}]+)", re.IGNORECASE),
]


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "request_id": getattr(record, "request_id", None) or get_request_id(),
            "table_number": getattr(record, "table_number", None) or get_table_number(),
            "module": record.name,
            "message": self._mask(self.formatMessage(record)),
            "duration_ms": getattr(record, "duration_ms", None),
        }
        for key in ("endpoint", "method", "status_code", "command", "order_id"):
            value = getattr(record, key, None)
            if value is not None:
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)

    def _mask(self, value: str) -> str:
        masked = value
        for pattern in _SENSITIVE_PATTERNS:
            masked = pattern.sub(r"\1***", masked)
        return masked


def configure_logging() -> None:
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(LOG_LEVEL)

    handler = logging.StreamHandler()
    formatter = JsonFormatter("%(message)s")
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(LOG_LEVEL)
