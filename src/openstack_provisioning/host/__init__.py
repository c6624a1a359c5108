"""Host platform integration."""

from openstack_provisioning.host.manifest import MANIFEST, ModuleManifest
from openstack_provisioning.host.module import HostModule, credentials_from_app_details
from openstack_provisioning.host.plugins import discover_connectors, load_connector

__all__ = [
    "MANIFEST",
    "HostModule",
    "ModuleManifest",
    "credentials_from_app_details",
    "discover_connectors",
    "load_connector",
]
