"""Pydantic models exchanged between the host and the connector."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Host-supplied inputs
# ---------------------------------------------------------------------------


class Credentials(BaseModel):
    """Connection details for one OpenStack project.

    Stored exactly as the host supplied them; nothing is validated until
    the first authenticated command.
    """

    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = Field(default="", repr=False)
    auth_url: str = ""
    tenant_name: str = ""


class ProductOptions(BaseModel):
    """Product configuration chosen in the host (the selected plan)."""

    flavor: str | None = None


class AccountDetails(BaseModel):
    """Per-account values the host stores alongside the service.

    ``domain`` names the server; ``password`` receives the admin password
    generated by the provider on create.
    """

    domain: str | None = None
    username: str | None = None
    password: str | None = Field(default=None, repr=False)


# ---------------------------------------------------------------------------
# Provider-derived outputs
# ---------------------------------------------------------------------------


class PlanOption(BaseModel):
    """One selectable server size."""

    id: str
    label: str


class CreatedServer(BaseModel):
    """The fields of a create response the host needs to persist."""

    id: str = Field(min_length=1)
    admin_password: str = Field(min_length=1, repr=False)
