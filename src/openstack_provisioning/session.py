"""Authenticated OpenStack sessions built from host credentials.

A session lives for one command: :meth:`SessionManager.authenticate`
builds and authorizes a fresh ``openstack.connection.Connection`` and
:meth:`SessionManager.release` closes it once the command returns.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import openstack
import openstack.connection
from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from openstack_provisioning.exceptions import AuthenticationError, InitiationError
from openstack_provisioning.outcome import Outcome
from openstack_provisioning.settings import COMPUTE_REGION, ConnectorSettings

if TYPE_CHECKING:
    from openstack_provisioning.schemas import Credentials

logger = logging.getLogger(__name__)

_AUTH_URL = TypeAdapter(AnyHttpUrl)


class SessionManager:
    """Produces authenticated provider handles from credentials."""

    def __init__(self, settings: ConnectorSettings | None = None) -> None:
        self._settings = settings or ConnectorSettings()
        self._conn: openstack.connection.Connection | None = None

    @property
    def connection(self) -> openstack.connection.Connection | None:
        """The handle authenticated for the current command, if any."""
        return self._conn

    # ------------------------------------------------------------------
    # initiate
    # ------------------------------------------------------------------

    def initiate(self, credentials: Credentials | None) -> Outcome[Any]:
        """Build an SDK connection without touching the network."""
        if credentials is None:
            return Outcome.failure(
                InitiationError("Unable to initiate the connection: no connection details"),
            )

        try:
            _AUTH_URL.validate_python(credentials.auth_url)
        except ValidationError:
            return Outcome.failure(
                InitiationError(
                    "Unable to initiate the connection: invalid authentication URL "
                    f"{credentials.auth_url!r}",
                    details={"auth_url": credentials.auth_url},
                ),
            )

        try:
            conn = openstack.connect(
                auth_url=credentials.auth_url,
                username=credentials.username,
                password=credentials.password,
                project_name=credentials.tenant_name,
                user_domain_name=self._settings.user_domain_name,
                project_domain_name=self._settings.project_domain_name,
                region_name=COMPUTE_REGION,
                interface=self._settings.interface,
                api_timeout=self._settings.api_timeout,
                connect_retries=self._settings.connect_retries,
                load_yaml_config=False,
                load_envvars=False,
            )
        except Exception as exc:
            logger.debug("[openstack] Connection setup failed", exc_info=True)
            return Outcome.failure(InitiationError(f"Unable to initiate the connection: {exc}"))

        return Outcome.success(conn)

    # ------------------------------------------------------------------
    # authenticate
    # ------------------------------------------------------------------

    def authenticate(self, credentials: Credentials | None) -> Outcome[Any]:
        """Initiate a connection and perform the Keystone handshake."""
        self.release()

        initiated = self.initiate(credentials)
        if not initiated.ok:
            return initiated

        conn = initiated.value
        try:
            conn.authorize()
        except Exception as exc:
            _close_quietly(conn)
            return Outcome.failure(
                AuthenticationError(f"Unable to authenticate to OpenStack: {exc}"),
            )

        assert credentials is not None
        logger.info(
            "[openstack] Authenticated as %s (tenant=%s)",
            credentials.username,
            credentials.tenant_name,
        )
        self._conn = conn
        return Outcome.success(conn)

    def release(self) -> None:
        """Close the current connection, if any."""
        if self._conn is not None:
            _close_quietly(self._conn)
            self._conn = None


def _close_quietly(conn: Any) -> None:
    try:
        conn.close()
    except Exception as exc:
        logger.warning("[openstack] Failed to close connection: %s", exc)
