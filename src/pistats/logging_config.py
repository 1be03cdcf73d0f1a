"""Logging setup. Log records go to stderr, stdout is left to the status line."""

import logging
from logging.config import dictConfig
from typing import Any

from pistats.settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_configured = False


class MetricFormatter(logging.Formatter):
    """Appends the ``metric`` and ``label`` extras, when a record carries them."""

    context_keys = ("metric", "label")

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in self.context_keys
            if getattr(record, key, None) is not None
        )
        return f"{message} | {context}" if context else message


def build_logging_config(level: str | int) -> dict[str, Any]:
    """The dictConfig schema for a single stderr handler at level."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "metric": {
                "()": MetricFormatter,
                "fmt": LOG_FORMAT,
                "datefmt": "%Y-%m-%dT%H:%M:%S",
            }
        },
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "metric",
            }
        },
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(level: str | int | None = None) -> None:
    """Install the stderr handler on first call; later calls are ignored."""
    global _configured
    if _configured:
        return
    dictConfig(build_logging_config(level if level is not None else get_settings().log_level))
    _configured = True
