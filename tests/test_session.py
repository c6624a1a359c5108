"""Tests for openstack_provisioning.session — SessionManager."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from openstack_provisioning.exceptions import AuthenticationError, InitiationError
from openstack_provisioning.schemas import Credentials
from openstack_provisioning.session import SessionManager

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from openstack_provisioning.settings import ConnectorSettings


class TestInitiate:
    def test_builds_connection_without_authorizing(
        self,
        mock_openstack: MagicMock,
        mock_conn: MagicMock,
        credentials: Credentials,
        settings: ConnectorSettings,
    ) -> None:
        outcome = SessionManager(settings).initiate(credentials)

        assert outcome.ok
        assert outcome.value is mock_conn
        mock_conn.authorize.assert_not_called()

    def test_passes_credentials_and_settings(
        self,
        mock_openstack: MagicMock,
        credentials: Credentials,
        settings: ConnectorSettings,
    ) -> None:
        SessionManager(settings).initiate(credentials)

        kw = mock_openstack.connect.call_args.kwargs
        assert kw["auth_url"] == "https://keystone.example.com:5000/v3"
        assert kw["username"] == "admin"
        assert kw["password"] == "secret"
        assert kw["project_name"] == "demo"
        assert kw["region_name"] == "RegionOne"
        assert kw["api_timeout"] == 5.0
        assert kw["connect_retries"] == 1
        assert kw["load_yaml_config"] is False
        assert kw["load_envvars"] is False

    def test_missing_credentials(self, mock_openstack: MagicMock) -> None:
        outcome = SessionManager().initiate(None)

        assert not outcome.ok
        assert isinstance(outcome.error, InitiationError)
        mock_openstack.connect.assert_not_called()

    @pytest.mark.parametrize("url", ["", "keystone.example.com", "ftp://keystone/v3"])
    def test_malformed_auth_url(self, mock_openstack: MagicMock, url: str) -> None:
        outcome = SessionManager().initiate(Credentials(auth_url=url))

        assert isinstance(outcome.error, InitiationError)
        assert "invalid authentication URL" in str(outcome.error)
        mock_openstack.connect.assert_not_called()

    def test_sdk_refuses_connection(
        self,
        mock_openstack: MagicMock,
        credentials: Credentials,
    ) -> None:
        mock_openstack.connect.side_effect = ValueError("bad interface")

        outcome = SessionManager().initiate(credentials)

        assert isinstance(outcome.error, InitiationError)
        assert str(outcome.error) == "Unable to initiate the connection: bad interface"


class TestAuthenticate:
    def test_success_holds_connection(
        self,
        mock_openstack: MagicMock,
        mock_conn: MagicMock,
        credentials: Credentials,
    ) -> None:
        sessions = SessionManager()
        outcome = sessions.authenticate(credentials)

        assert outcome.ok
        mock_conn.authorize.assert_called_once()
        assert sessions.connection is mock_conn

    def test_rejected_credentials(
        self,
        mock_openstack: MagicMock,
        mock_conn: MagicMock,
        credentials: Credentials,
    ) -> None:
        mock_conn.authorize.side_effect = RuntimeError("401 Unauthorized")
        sessions = SessionManager()

        outcome = sessions.authenticate(credentials)

        assert isinstance(outcome.error, AuthenticationError)
        assert str(outcome.error) == "Unable to authenticate to OpenStack: 401 Unauthorized"
        assert sessions.connection is None
        mock_conn.close.assert_called_once()

    def test_initiation_failure_skips_handshake(
        self,
        mock_openstack: MagicMock,
        mock_conn: MagicMock,
    ) -> None:
        outcome = SessionManager().authenticate(Credentials(auth_url="nope"))

        assert isinstance(outcome.error, InitiationError)
        mock_conn.authorize.assert_not_called()

    def test_reauthenticates_every_call(
        self,
        mock_openstack: MagicMock,
        mock_conn: MagicMock,
        credentials: Credentials,
    ) -> None:
        sessions = SessionManager()
        sessions.authenticate(credentials)
        sessions.authenticate(credentials)

        assert mock_openstack.connect.call_count == 2
        assert mock_conn.authorize.call_count == 2
        # the first connection is closed before the second is built
        assert mock_conn.close.call_count == 1


class TestRelease:
    def test_release_closes_connection(
        self,
        mock_openstack: MagicMock,
        mock_conn: MagicMock,
        credentials: Credentials,
    ) -> None:
        sessions = SessionManager()
        sessions.authenticate(credentials)

        sessions.release()

        mock_conn.close.assert_called_once()
        assert sessions.connection is None

    def test_release_noop_when_not_connected(self) -> None:
        sessions = SessionManager()
        sessions.release()
        assert sessions.connection is None

    def test_close_failure_is_logged_not_raised(
        self,
        mock_openstack: MagicMock,
        mock_conn: MagicMock,
        credentials: Credentials,
    ) -> None:
        mock_conn.close.side_effect = OSError("socket already closed")
        sessions = SessionManager()
        sessions.authenticate(credentials)

        sessions.release()

        assert sessions.connection is None
