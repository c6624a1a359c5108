"""Connector configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

#: Compute service type and region every command is scoped to.
COMPUTE_SERVICE_TYPE = "compute"
COMPUTE_REGION = "RegionOne"

#: Case-sensitive substring selecting the boot image for new servers.
IMAGE_NAME_MATCH = "Ubuntu"


class ConnectorSettings(BaseSettings):
    """Runtime knobs for the OpenStack connector.

    All values can be overridden via environment variables prefixed
    with ``OSPROV_``, e.g. ``OSPROV_API_TIMEOUT=10``.  Credentials are
    never read from here; the host supplies them through ``connect()``.
    """

    model_config = SettingsConfigDict(env_prefix="OSPROV_", extra="ignore")

    # -- SDK connection -------------------------------------------------------

    api_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds.",
    )
    connect_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries on transient connection failures.",
    )
    user_domain_name: str = "Default"
    project_domain_name: str = "Default"
    interface: Literal["public", "internal", "admin"] = "public"

    # -- Logging --------------------------------------------------------------

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False
