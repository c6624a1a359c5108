"""Logging and command correlation."""

from openstack_provisioning.observability.correlation import command_scope, get_command_id
from openstack_provisioning.observability.logging import setup_logging

__all__ = ["command_scope", "get_command_id", "setup_logging"]
