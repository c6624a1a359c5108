"""Per-command correlation IDs.

Every public connector command runs inside :func:`command_scope`, which
stores the command name and a fresh ID in :class:`~contextvars.ContextVar`
objects so log records can be tied back to a single invocation.
"""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

command_id_var: ContextVar[str] = ContextVar("command_id", default="")
command_name_var: ContextVar[str] = ContextVar("command_name", default="")


def get_command_id() -> str:
    """Return the ID of the command currently running."""
    return command_id_var.get()


def get_command_name() -> str:
    """Return the name of the command currently running."""
    return command_name_var.get()


@contextmanager
def command_scope(name: str) -> Generator[str, None, None]:
    """Bind a new command ID and *name* for the duration of the block."""
    command_id = uuid.uuid4().hex[:12]
    id_token = command_id_var.set(command_id)
    name_token = command_name_var.set(name)
    try:
        yield command_id
    finally:
        command_name_var.reset(name_token)
        command_id_var.reset(id_token)
