"""OpenStack provisioning connector for billing and automation platforms."""

from __future__ import annotations

__version__ = "0.1.0"

from openstack_provisioning.connector import (
    ConnectorState,
    OpenStackConnector,
    ProvisioningConnector,
)
from openstack_provisioning.exceptions import (
    AuthenticationError,
    ConnectorError,
    ImageNotFoundError,
    InitiationError,
    PreconditionError,
    ProviderOperationError,
)
from openstack_provisioning.schemas import Credentials, PlanOption

__all__ = [
    "AuthenticationError",
    "ConnectorError",
    "ConnectorState",
    "Credentials",
    "ImageNotFoundError",
    "InitiationError",
    "OpenStackConnector",
    "PlanOption",
    "PreconditionError",
    "ProviderOperationError",
    "ProvisioningConnector",
    "__version__",
]
