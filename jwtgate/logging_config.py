"""
Logging configuration that keeps bearer tokens out of log output
"""

import logging
import logging.config
import re
from typing import Any, Dict

_BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9\-_=]+(\.[A-Za-z0-9\-_=]+){0,2}")
REDACTED = "***"


class TokenRedactionFilter(logging.Filter):
    """Filter that masks bearer tokens in log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrite the record message with tokens masked. Never drops records."""
        message = record.getMessage()
        redacted = _BEARER_PATTERN.sub(r"\1" + REDACTED, message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with token redaction."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "token_redaction_filter": {
                "()": TokenRedactionFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["token_redaction_filter"]
            }
        },
        "loggers": {
            "jwtgate": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the jwtgate logging configuration."""
    logging.config.dictConfig(get_logging_config(level.upper()))
