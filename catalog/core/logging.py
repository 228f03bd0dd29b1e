import logging
import sys
from typing import Final, TextIO
from logging import LoggerAdapter, LogRecord
from typing_extensions import override
from fastapi import Request

_LOG_FORMAT: Final[str] = (
    "%(asctime)s %(levelname)s %(name)s :: %(message)s [req=%(request_id)s]"
)
_HANDLER_NAME: Final[str] = "catalog"
_SERVER_LOGGERS: Final[tuple[str, ...]] = ("uvicorn", "uvicorn.error", "uvicorn.access")


class RequestLogFilter(logging.Filter):
    """
    Gives records logged outside a request a placeholder request_id.
    """

    @override
    def filter(self, record: LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> None:
    """
    Send the catalog's and uvicorn's records through one handler.
    Safe to call more than once: the previous catalog handler is replaced.
    """
    level = _resolve_level(level)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    handler.addFilter(RequestLogFilter())
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    root = logging.getLogger()
    for old in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(old)
    root.setLevel(level)
    root.addHandler(handler)

    for name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.setLevel(level)
        server_logger.addHandler(handler)
        server_logger.propagate = False


def get_logger(
    name: str,
    request: Request | None = None,
) -> LoggerAdapter[logging.Logger]:
    """
    Logger bound to the current request's correlation id, if any.
    Usage: logger = get_logger(__name__, request)
    """
    extra: dict[str, str] = {}
    if request is not None:
        extra["request_id"] = getattr(request.state, "correlation_id", "-")
    return LoggerAdapter(logging.getLogger(name), extra)
