"""Provisioning connectors."""

from openstack_provisioning.connector.base import ConnectorState, ProvisioningConnector
from openstack_provisioning.connector.openstack import OpenStackConnector

__all__ = ["ConnectorState", "OpenStackConnector", "ProvisioningConnector"]
