"""CLI credential loading with layered precedence."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

_CONFIG_DIR = Path.home() / ".osprov"
_CONFIG_FILE = _CONFIG_DIR / "config.toml"


@dataclass(frozen=True)
class CliConfig:
    """Resolved CLI configuration."""

    auth_url: str = ""
    username: str = ""
    password: str = ""
    tenant: str = ""
    profile: str = "default"

    def app_details(self) -> dict[str, str]:
        """The values in the shape a host passes to ``connect()``."""
        return {
            "username": self.username,
            "password": self.password,
            "field1": self.auth_url,
            "field2": self.tenant,
        }


def _load_toml(path: Path | None = None) -> dict[str, Any]:
    """Read a TOML config file, returning {} if absent or malformed."""
    target = path or _CONFIG_FILE
    if not target.is_file():
        return {}
    try:
        return tomllib.loads(target.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError, PermissionError) as e:
        import warnings

        warnings.warn(f"Failed to parse {target}: {e}", stacklevel=2)
        return {}


def _profile_values(data: dict[str, Any], profile: str) -> dict[str, Any]:
    """Extract a profile section from parsed TOML data."""
    section = data.get(profile)
    if isinstance(section, dict):
        return section
    return {}


def load_config(
    *,
    auth_url: str | None = None,
    username: str | None = None,
    password: str | None = None,
    tenant: str | None = None,
    profile: str | None = None,
    config_path: Path | None = None,
) -> CliConfig:
    """Build config with precedence: CLI flags > env vars > TOML file > defaults."""
    effective_profile = profile or os.environ.get("OSPROV_PROFILE", "default")

    toml_data = _load_toml(config_path)
    file_vals = _profile_values(toml_data, effective_profile)

    def _resolve(flag: str | None, env_key: str, file_key: str) -> str:
        if flag is not None:
            return flag
        env = os.environ.get(env_key)
        if env is not None:
            return env
        file_val = file_vals.get(file_key)
        if isinstance(file_val, str):
            return file_val
        return ""

    return CliConfig(
        auth_url=_resolve(auth_url, "OSPROV_AUTH_URL", "auth_url"),
        username=_resolve(username, "OSPROV_USERNAME", "username"),
        password=_resolve(password, "OSPROV_PASSWORD", "password"),
        tenant=_resolve(tenant, "OSPROV_TENANT", "tenant"),
        profile=effective_profile,
    )
