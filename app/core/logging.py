import json
import logging

from app.core.request_context import get_operation, get_provider, get_request_id

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RESERVED_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime", "taskName"}
_CONTEXT_ATTRS = ("request_id", "operation", "provider")


class RequestIdFilter(logging.Filter):
    """Stamp records with the request id and the active generation context."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "unknown"
        record.operation = get_operation() or ""
        record.provider = get_provider() or ""
        return True


class StructuredJsonFormatter(logging.Formatter):
    """One JSON object per record.

    Empty context fields are omitted so lines emitted outside a generation
    call stay short.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_payload: dict[str, object] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "unknown"),
        }
        for attr in _CONTEXT_ATTRS[1:]:
            value = getattr(record, attr, None)
            if value:
                log_payload[attr] = value
        log_payload.update(_extra_fields(record))
        if record.exc_info:
            log_payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_payload["stack_info"] = record.stack_info
        try:
            return json.dumps(log_payload, default=str)
        except (TypeError, ValueError):
            return super().format(record)


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RESERVED_ATTRS
        and key not in _CONTEXT_ATTRS
        and not key.startswith("_")
        and value is not None
    }
