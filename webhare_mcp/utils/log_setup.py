"""Logging configuration for the stdio server.

stdout carries the MCP protocol, so log records always go to stderr. In
'file' mode they are also appended to a log file, with any JSON object or
array in the message re-indented for reading.
"""

import json
import logging
import re
import sys
from typing import Optional

from ..config.settings import WebHareSettings

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "webhare_mcp"
HEARTBEAT_MARKER = "Heartbeat:"
ISO_DATEFMT = "%Y-%m-%dT%H:%M:%S"

_JSON_FRAGMENT = re.compile(r"(\{.*\}|\[.*\])", re.DOTALL)


class HeartbeatFilter(logging.Filter):
    """Drop heartbeat messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        return HEARTBEAT_MARKER not in record.getMessage()


class PrettyJsonFormatter(logging.Formatter):
    """Formatter that pretty-prints a JSON fragment embedded in the message."""

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.message = pretty_json_message(record.message)
        return super().formatMessage(record)


def pretty_json_message(message: str) -> str:
    """Re-indent the first JSON object/array in a message, if it parses."""
    match = _JSON_FRAGMENT.search(message)
    if not match:
        return message

    fragment = match.group(0)
    try:
        parsed = json.loads(fragment)
    except ValueError:
        return message

    return message.replace(fragment, "\n" + json.dumps(parsed, indent=2), 1)


def configure_logging(settings: WebHareSettings) -> Optional[logging.FileHandler]:
    """
    Configure the package logger.

    Args:
        settings: Provides log mode, file and level

    Returns:
        The file handler in 'file' mode, None otherwise
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))
    stderr_handler.addFilter(HeartbeatFilter())
    package_logger.addHandler(stderr_handler)

    if settings.log_mode != "file" or settings.log_file is None:
        return None

    try:
        file_handler = logging.FileHandler(settings.log_file, mode="a", encoding="utf-8")
    except OSError as e:
        logger.warning(f"Failed to open log file {settings.log_file}, logging to stderr only: {e}")
        return None

    file_handler.setFormatter(PrettyJsonFormatter("%(asctime)s: %(message)s", datefmt=ISO_DATEFMT))
    file_handler.addFilter(HeartbeatFilter())
    package_logger.addHandler(file_handler)
    return file_handler
