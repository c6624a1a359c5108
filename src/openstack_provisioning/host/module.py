"""Host platform adapter.

Translates what a billing platform hands a hosting module (app details
keyed ``username``/``password``/``field1``/``field2``, product options,
account details, verb names such as ``Create``) into calls on a
:class:`~openstack_provisioning.connector.base.ProvisioningConnector`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from openstack_provisioning.connector.openstack import OpenStackConnector
from openstack_provisioning.host.manifest import APP_FIELD_KEYS, MANIFEST, ModuleManifest
from openstack_provisioning.schemas import AccountDetails, Credentials, ProductOptions

if TYPE_CHECKING:
    from collections.abc import Mapping

    from openstack_provisioning.connector.base import ProvisioningConnector

logger = logging.getLogger(__name__)


def credentials_from_app_details(app_details: Mapping[str, Any]) -> Credentials:
    """Map host app fields to :class:`Credentials`; missing keys become ``""``."""
    values = {
        attr: str(app_details.get(key) or "")
        for attr, key in APP_FIELD_KEYS.items()
    }
    return Credentials(**values)


class HostModule:
    """One module instance per service the host manages."""

    manifest: ModuleManifest = MANIFEST

    def __init__(self, connector: ProvisioningConnector | None = None) -> None:
        self.connector = connector or OpenStackConnector()

    # ------------------------------------------------------------------
    # host -> connector state
    # ------------------------------------------------------------------

    def connect(self, app_details: Mapping[str, Any]) -> bool:
        """Store the app's connection details.  Always succeeds, never does I/O."""
        return self.connector.connect(credentials_from_app_details(app_details))

    def set_product_options(self, options: Mapping[str, Any]) -> None:
        flavor = options.get("flavor")
        self.connector.state.product = ProductOptions(
            flavor=str(flavor) if flavor not in (None, "") else None,
        )

    def set_account_details(self, details: Mapping[str, Any]) -> None:
        self.connector.state.account = AccountDetails.model_validate(
            {key: details.get(key) for key in MANIFEST.account_fields},
        )

    @property
    def veid(self) -> str | None:
        return self.connector.state.veid

    @veid.setter
    def veid(self, value: str | None) -> None:
        self.connector.state.veid = value or None

    @property
    def account_details(self) -> dict[str, Any]:
        """Account values for the host to persist after a command."""
        return self.connector.state.account.model_dump()

    @property
    def errors(self) -> list[str]:
        return self.connector.errors.messages

    # ------------------------------------------------------------------
    # commands
    # ------------------------------------------------------------------

    def call(self, command: str) -> bool:
        """Run a host verb listed in the manifest (``Create``, ``Suspend`` ...)."""
        if command not in self.manifest.commands:
            self.connector.add_error(f"Unknown command {command!r}")
            return False
        logger.debug("Dispatching host command %s", command)
        handler = getattr(self, command.lower())
        result: bool = handler()
        return result

    def test_connection(self) -> bool:
        return self.connector.test_connection()

    def create(self) -> bool:
        return self.connector.create()

    def suspend(self) -> bool:
        return self.connector.suspend()

    def unsuspend(self) -> bool:
        return self.connector.unsuspend()

    def terminate(self) -> bool:
        return self.connector.terminate()

    def get_plans(self) -> list[list[str]] | bool:
        """Plans as ``[id, label]`` pairs for a loadable option, or ``False``."""
        plans = self.connector.get_plans()
        if plans is None:
            return False
        return [[plan.id, plan.label] for plan in plans]
