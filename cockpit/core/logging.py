"""structlog setup for the cockpit service.

One processor chain serves both structlog loggers and stdlib records
(uvicorn, SQLAlchemy, httpx), so every line comes out in the same format:
JSON in production, ConsoleRenderer with ``debug=True``. The request's
X-Request-ID is attached as ``correlation_id``.
"""

import logging.config

import structlog
from asgi_correlation_id.context import correlation_id

# Third-party loggers that are only useful when something is wrong
QUIET_LOGGERS = ("uvicorn.access", "httpx", "sqlalchemy.engine")


def add_correlation_id(logger, method, event_dict):
    """Copy the asgi-correlation-id context var into the event."""
    cid = correlation_id.get(None)
    if cid:
        event_dict["correlation_id"] = cid
    return event_dict


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_correlation_id,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(json_logs: bool):
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_structlog(log_level: str = "INFO", json_logs: bool = True) -> None:
    """Configure structlog and route stdlib logging through it.

    Must run before other cockpit modules call ``structlog.get_logger``:
    loggers cache their processor chain on first use.

    Args:
        log_level: Root log level ("DEBUG", "INFO", "WARNING", "ERROR")
        json_logs: JSON lines when True, ConsoleRenderer otherwise
    """
    processors = _shared_processors()

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _renderer(json_logs),
                ],
                "foreign_pre_chain": processors,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "structlog",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["stdout"], "level": log_level},
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
    })

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
