"""Shared test fixtures for openstack_provisioning."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from openstack_provisioning.connector.openstack import OpenStackConnector
from openstack_provisioning.schemas import Credentials
from openstack_provisioning.settings import ConnectorSettings

# ---------------------------------------------------------------------------
# SDK object factories
# ---------------------------------------------------------------------------


def make_flavor(
    flavor_id: str = "2",
    name: str = "m1.small",
    vcpus: int = 2,
    ram: int = 2048,
    disk: int = 20,
) -> MagicMock:
    flv = MagicMock()
    flv.id = flavor_id
    flv.name = name
    flv.vcpus = vcpus
    flv.ram = ram
    flv.disk = disk
    return flv


def make_image(image_id: str, name: str | None) -> MagicMock:
    img = MagicMock()
    img.id = image_id
    img.name = name
    return img


def make_server(server_id: Any = "srv-001", admin_password: Any = "s3cr3t") -> MagicMock:
    srv = MagicMock()
    srv.id = server_id
    srv.admin_password = admin_password
    return srv


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        username="admin",
        password="secret",
        auth_url="https://keystone.example.com:5000/v3",
        tenant_name="demo",
    )


@pytest.fixture
def mock_conn() -> MagicMock:
    """An authenticated-looking connection with a populated compute proxy."""
    conn = MagicMock()
    conn.has_service.return_value = True
    conn.compute.images.return_value = [
        make_image("img-centos", "CentOS 9"),
        make_image("img-ubuntu", "Ubuntu 22.04"),
        make_image("img-ubuntu-old", "Ubuntu 20.04"),
    ]
    conn.compute.get_flavor.return_value = make_flavor()
    conn.compute.flavors.return_value = [
        make_flavor(),
        make_flavor(flavor_id="3", name="m1.medium", vcpus=2, ram=4096, disk=40),
    ]
    conn.compute.create_server.return_value = make_server()
    return conn


@pytest.fixture
def mock_openstack(monkeypatch: pytest.MonkeyPatch, mock_conn: MagicMock) -> MagicMock:
    """Patch the openstack SDK reference on the session module."""
    mock_os = MagicMock()
    mock_os.connect.return_value = mock_conn

    import openstack_provisioning.session as session_mod

    monkeypatch.setattr(session_mod, "openstack", mock_os)
    return mock_os


@pytest.fixture
def settings() -> ConnectorSettings:
    return ConnectorSettings(api_timeout=5.0, connect_retries=1)


@pytest.fixture
def connector(
    mock_openstack: MagicMock,
    credentials: Credentials,
    settings: ConnectorSettings,
) -> OpenStackConnector:
    """A connector that already went through connect()."""
    conn = OpenStackConnector(settings=settings)
    conn.connect(credentials)
    return conn
