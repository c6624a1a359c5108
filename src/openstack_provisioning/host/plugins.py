"""Connector discovery via Python entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Any

from openstack_provisioning.connector.base import ProvisioningConnector
from openstack_provisioning.exceptions import ConnectorNotFoundError

logger = logging.getLogger(__name__)

#: Entry-point group scanned for connectors.
CONNECTOR_GROUP = "openstack_provisioning.connectors"


@dataclass(frozen=True)
class ConnectorInfo:
    """Metadata about a discovered connector."""

    name: str
    module: str
    enabled: bool = True
    error: str | None = None
    obj: Any = None


def _get_entry_points(group: str) -> list[Any]:
    """Load entry points for a group."""
    return list(entry_points(group=group))


def discover_connectors() -> dict[str, ConnectorInfo]:
    """Scan entry points and return connectors keyed by name.

    Failed imports and objects that are not :class:`ProvisioningConnector`
    subclasses are logged as warnings and recorded with ``enabled=False``
    plus the error message.
    """
    found: dict[str, ConnectorInfo] = {}

    for ep in _get_entry_points(CONNECTOR_GROUP):
        try:
            loaded = ep.load()
            if not (isinstance(loaded, type) and issubclass(loaded, ProvisioningConnector)):
                raise TypeError(f"{ep.value} is not a ProvisioningConnector")
            found[ep.name] = ConnectorInfo(name=ep.name, module=str(ep.value), obj=loaded)
            logger.debug("Loaded connector %s from %s", ep.name, ep.value)
        except Exception as exc:
            found[ep.name] = ConnectorInfo(
                name=ep.name,
                module=str(ep.value),
                enabled=False,
                error=str(exc),
            )
            logger.warning("Failed to load connector %s: %s", ep.name, exc)

    logger.info("Discovered %d connectors", len(found))
    return found


def load_connector(name: str, **kwargs: Any) -> ProvisioningConnector:
    """Instantiate the connector registered as *name*."""
    info = discover_connectors().get(name)
    if info is None:
        raise ConnectorNotFoundError(f"No connector registered as {name!r}")
    if not info.enabled:
        raise ConnectorNotFoundError(
            f"Connector {name!r} failed to load: {info.error}",
            details={"module": info.module},
        )
    connector: ProvisioningConnector = info.obj(**kwargs)
    return connector
