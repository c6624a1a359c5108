"""Tests for openstack_provisioning.host.plugins — connector discovery."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from openstack_provisioning.connector.openstack import OpenStackConnector
from openstack_provisioning.exceptions import ConnectorNotFoundError
from openstack_provisioning.host.plugins import (
    CONNECTOR_GROUP,
    ConnectorInfo,
    _get_entry_points,
    discover_connectors,
    load_connector,
)

_PATCH = "openstack_provisioning.host.plugins._get_entry_points"


def _ep(name: str, value: str, loaded: object = None, error: Exception | None = None) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    ep.value = value
    if error is not None:
        ep.load.side_effect = error
    else:
        ep.load.return_value = loaded
    return ep


class TestConnectorInfo:
    def test_defaults(self) -> None:
        info = ConnectorInfo(name="c", module="m")
        assert info.enabled is True
        assert info.error is None
        assert info.obj is None

    def test_frozen(self) -> None:
        info = ConnectorInfo(name="c", module="m")
        with pytest.raises(AttributeError):
            info.name = "other"  # type: ignore[misc]


class TestGetEntryPoints:
    def test_queries_group(self) -> None:
        fake = [SimpleNamespace(name="openstack")]
        with patch("openstack_provisioning.host.plugins.entry_points", return_value=fake) as ep:
            assert _get_entry_points(CONNECTOR_GROUP) == fake
        ep.assert_called_once_with(group="openstack_provisioning.connectors")


class TestDiscoverConnectors:
    def test_loads_connector_classes(self) -> None:
        eps = [_ep("openstack", "pkg.mod:OpenStackConnector", OpenStackConnector)]
        with patch(_PATCH, return_value=eps):
            found = discover_connectors()

        assert found["openstack"].enabled is True
        assert found["openstack"].obj is OpenStackConnector

    def test_import_failure_recorded(self) -> None:
        eps = [_ep("broken", "pkg.broken:Thing", error=ImportError("no module named pkg"))]
        with patch(_PATCH, return_value=eps):
            found = discover_connectors()

        assert found["broken"].enabled is False
        assert found["broken"].error == "no module named pkg"

    def test_non_connector_rejected(self) -> None:
        eps = [_ep("odd", "pkg.odd:thing", loaded=object())]
        with patch(_PATCH, return_value=eps):
            found = discover_connectors()

        assert found["odd"].enabled is False
        assert "is not a ProvisioningConnector" in (found["odd"].error or "")

    def test_empty(self) -> None:
        with patch(_PATCH, return_value=[]):
            assert discover_connectors() == {}


class TestLoadConnector:
    def test_instantiates_with_kwargs(self, mock_openstack: MagicMock) -> None:
        eps = [_ep("openstack", "pkg.mod:OpenStackConnector", OpenStackConnector)]
        sessions = MagicMock()
        with patch(_PATCH, return_value=eps):
            connector = load_connector("openstack", sessions=sessions)

        assert isinstance(connector, OpenStackConnector)
        assert connector._sessions is sessions

    def test_unknown_name(self) -> None:
        with patch(_PATCH, return_value=[]), pytest.raises(ConnectorNotFoundError, match="'nope'"):
            load_connector("nope")

    def test_disabled_connector(self) -> None:
        eps = [_ep("broken", "pkg.broken:Thing", error=ImportError("boom"))]
        with patch(_PATCH, return_value=eps), pytest.raises(ConnectorNotFoundError, match="boom"):
            load_connector("broken")
