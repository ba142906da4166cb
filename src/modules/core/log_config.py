"""structlog + stdlib logging setup.

``configure_structlog`` wires structlog to the stdlib ``logging`` tree and
``build_logging_config`` returns the ``LOGGING`` dict Django applies at
startup.  Both share the same pre-chain so that records emitted through
``logging.getLogger`` and through ``structlog.get_logger`` render as the
same single-line JSON, carrying the request ``correlation_id`` bound by
``CorrelationIdMiddleware``.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List

import structlog

MASK = "***MASKED***"

SENSITIVE_PATTERN = re.compile(
    r"\b(\d{3}\.?\d{3}\.?\d{3}-?\d{2})\b"  # CPF
    r"|\b(\d{2}\.?\d{3}\.?\d{3}/?\d{4}-?\d{2})\b"  # CNPJ
    r"|(password|passwd|secret|token|authorization|api[_-]?key)"
    r"""([=:]\s*["']?)([^\s,}"']+)""",
    re.IGNORECASE,
)


def mask_sensitive_data(_, __, event_dict):
    """Processor masking documents, credentials and API keys in string values."""
    for key, value in list(event_dict.items()):
        if isinstance(value, str):
            event_dict[key] = SENSITIVE_PATTERN.sub(MASK, value)
    return event_dict


def shared_processors() -> List[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        mask_sensitive_data,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_structlog() -> None:
    structlog.configure(
        processors=[
            *shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def build_logging_config(level: str) -> Dict[str, Any]:
    """Return a ``dictConfig`` emitting JSON to stdout at *level*.

    Django's own loggers stay at INFO (``django.server`` at WARNING) so
    a DEBUG application level does not flood the output with SQL.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processors": [
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
                "foreign_pre_chain": shared_processors(),
            },
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "json"},
        },
        "root": {"handlers": ["console"], "level": level},
        "loggers": {
            "django": {"handlers": ["console"], "level": "INFO", "propagate": False},
            "django.server": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }
