"""Ordered log of human-readable error messages for one command."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from openstack_provisioning.exceptions import ConnectorError

logger = logging.getLogger(__name__)


class ErrorLog:
    """Messages accumulated while a command runs.

    Adding a message never raises; the caller decides whether the
    command also reports failure.
    """

    def __init__(self) -> None:
        self._messages: list[str] = []

    def add(self, message: str) -> None:
        logger.warning("%s", message)
        self._messages.append(message)

    def record(self, error: ConnectorError) -> None:
        """Append the message of *error*, falling back to its class name."""
        self.add(str(error) or type(error).__name__)

    def clear(self) -> None:
        self._messages.clear()

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._messages))

    def __len__(self) -> int:
        return len(self._messages)
