"""Module metadata the host platform reads when loading the connector."""

from __future__ import annotations

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Field descriptions
# ---------------------------------------------------------------------------


class ProductOptionField(BaseModel):
    """A product setting the host renders in the product configuration."""

    name: str
    type: str = "input"
    loader: str | None = Field(
        default=None,
        description="Connector method that fills a 'loadable' option.",
    )


class ModuleManifest(BaseModel):
    """Static description of the module."""

    name: str
    version: str
    description: str
    commands: list[str]
    server_fields: dict[str, str] = Field(
        default_factory=dict,
        description="Host app field key -> label shown in the app settings.",
    )
    product_options: list[ProductOptionField] = Field(default_factory=list)
    account_fields: list[str] = Field(default_factory=list)


#: Host app field keys carrying each credential.
APP_FIELD_KEYS: dict[str, str] = {
    "username": "username",
    "password": "password",
    "auth_url": "field1",
    "tenant_name": "field2",
}

MANIFEST = ModuleManifest(
    name="OpenStack",
    version="0.1",
    description="OpenStack module for HostBill",
    commands=["Create", "Suspend", "Unsuspend", "Terminate"],
    server_fields={
        "username": "Username",
        "password": "Password",
        APP_FIELD_KEYS["auth_url"]: "Authentication URL",
        APP_FIELD_KEYS["tenant_name"]: "Tenant Name",
    },
    product_options=[ProductOptionField(name="flavor", type="loadable", loader="get_plans")],
    account_fields=["username", "password", "domain"],
)
