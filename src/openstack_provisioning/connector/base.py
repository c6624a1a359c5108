"""Abstract base for provisioning connectors.

A connector is driven by a host platform: ``connect()`` hands over the
credentials, then one lifecycle command runs per call.  Commands never
raise; they return a boolean (or ``None`` for ``get_plans``) and leave
their diagnostics in :attr:`ProvisioningConnector.errors`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from openstack_provisioning.error_log import ErrorLog
from openstack_provisioning.schemas import AccountDetails, ProductOptions

if TYPE_CHECKING:
    from openstack_provisioning.schemas import Credentials, PlanOption


@dataclass
class ConnectorState:
    """Everything the connector knows about one managed instance."""

    credentials: Credentials | None = None
    product: ProductOptions = field(default_factory=ProductOptions)
    account: AccountDetails = field(default_factory=AccountDetails)
    veid: str | None = None


class ProvisioningConnector(ABC):
    """Interface implemented by every provisioning connector."""

    def __init__(self, state: ConnectorState | None = None) -> None:
        self.state = state or ConnectorState()
        self.errors = ErrorLog()

    def add_error(self, message: str) -> None:
        """Append *message* to the error log."""
        self.errors.add(message)

    @abstractmethod
    def connect(self, credentials: Credentials) -> bool:
        """Store credentials for later commands.  Must not perform I/O."""

    @abstractmethod
    def test_connection(self) -> bool:
        """Authenticate only and report whether it worked."""

    @abstractmethod
    def create(self) -> bool:
        """Provision a new instance from the configured product and account."""

    @abstractmethod
    def suspend(self) -> bool:
        """Suspend the instance identified by ``state.veid``."""

    @abstractmethod
    def unsuspend(self) -> bool:
        """Resume the instance identified by ``state.veid``."""

    @abstractmethod
    def terminate(self) -> bool:
        """Delete the instance identified by ``state.veid``."""

    @abstractmethod
    def get_plans(self) -> list[PlanOption] | None:
        """Return the selectable server sizes, or ``None`` on failure."""
