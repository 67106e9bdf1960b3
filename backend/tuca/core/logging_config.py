"""
Structured logging setup shared by the API process and the maintenance scripts
"""

import logging
import re
from typing import Optional

import structlog

# Keys whose values never reach a log sink
SENSITIVE_KEYS = {
    "password",
    "password_hash",
    "current_password",
    "new_password",
    "confirm_password",
    "token",
    "reset_token",
    "session_id",
    "cookie",
    "session_secret",
}

_COOKIE_PATTERN = re.compile(r'(tuca\.sid=)[^;\s]+')
_BEARER_PATTERN = re.compile(r'(Bearer\s+)[A-Za-z0-9\-_\.]+')


def redact_sensitive_fields(logger, method_name, event_dict):
    """Scrub credentials, tokens and session cookies from any value in the event dict"""

    def scrub(key, v):
        if isinstance(key, str) and key.lower() in SENSITIVE_KEYS:
            return "REDACTED"
        if isinstance(v, str):
            v = _COOKIE_PATTERN.sub(r'\1REDACTED', v)
            v = _BEARER_PATTERN.sub(r'\1REDACTED', v)
            return v
        if isinstance(v, list):
            return [scrub(None, x) for x in v]
        if isinstance(v, dict):
            return {k: scrub(k, vv) for k, vv in v.items()}
        return v

    for k, v in list(event_dict.items()):
        event_dict[k] = scrub(k, v)
    return event_dict


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure structlog with JSON output on top of the standard library"""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            redact_sensitive_fields,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(message)s',  # structlog handles formatting
        handlers=handlers,
    )
