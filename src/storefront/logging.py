import logging

import structlog

# Driver and HTTP client chatter stays at WARNING even in debug mode
QUIET_LOGGERS = ("pymongo", "pymongo.topology", "pymongo.connection", "pymongo.command", "httpx", "httpcore")


def build_processors(debug: bool) -> list[structlog.types.Processor]:
    """Processor chain: request context first, renderer last."""
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,  # user_name bound by the access guard
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    processors.append(structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer())
    return processors


def setup_logging(debug: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format="%(message)s")
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(debug),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_user(user_name: str) -> None:
    """Attach the authenticated user to every event logged for the current request."""
    structlog.contextvars.bind_contextvars(user_name=user_name)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
