"""Logging setup with command-ID injection.

Call :func:`setup_logging` once at process startup to configure the
root logger with a JSON or plain-text formatter and a filter that
attaches the current command name and ID to every log record.
"""

from __future__ import annotations

import datetime
import json
import logging
import sys
import traceback
from typing import Any

from openstack_provisioning.observability.correlation import get_command_id, get_command_name

_TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(command)s:%(command_id)s] %(message)s"


class CommandContextFilter(logging.Filter):
    """Inject ``command`` and ``command_id`` into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.command = get_command_name() or "-"
        record.command_id = get_command_id() or "-"
        return True


class ConnectorJsonFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Output schema::

        {
            "timestamp": "2025-06-15T12:34:56.789012+00:00",
            "level": "INFO",
            "logger": "openstack_provisioning.session",
            "message": "[openstack] Authenticated as admin (tenant=demo)",
            "command": "create",
            "command_id": "3f2a9c0d1b7e",
            "exception": null
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        exc_text: str | None = None
        if record.exc_info and record.exc_info[0] is not None:
            exc_text = "".join(
                traceback.format_exception(*record.exc_info),
            )

        payload: dict[str, Any] = {
            "timestamp": (
                datetime.datetime.fromtimestamp(
                    record.created,
                    tz=datetime.UTC,
                ).isoformat()
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "command": getattr(record, "command", ""),
            "command_id": getattr(record, "command_id", ""),
            "exception": exc_text,
        }
        return json.dumps(payload, default=str)


def setup_logging(level: int | str = logging.INFO, *, json_output: bool = False) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level:
        Minimum log level (default ``logging.INFO``).
    json_output:
        Emit one JSON object per line instead of plain text.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if json_output:
        handler.setFormatter(ConnectorJsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    handler.addFilter(CommandContextFilter())

    root.addHandler(handler)

    # keystoneauth and openstacksdk are chatty at INFO
    for noisy in ("keystoneauth", "openstack", "urllib3"):
        logging.getLogger(noisy).setLevel(max(root.level, logging.WARNING))
