import logging
import os

import structlog


def configure_logging(level: str | None = None):
    level_name = (level or os.environ.get("LOG_LEVEL") or "INFO").upper()
    level_value = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level_value, format="%(message)s")
    logging.getLogger().setLevel(level_value)
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    # python-http-client logs every request line at INFO; keep provider noise down
    logging.getLogger("python_http_client").setLevel(logging.WARNING)


def get_logger(name: str | None = None):
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)


def token_hint(token: str | None) -> str:
    """Shorten a token for log output so full secrets never reach the logs."""
    if not token:
        return ""
    return f"{token[:6]}..."
