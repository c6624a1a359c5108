"""Exception hierarchy for the provisioning connector.

All exceptions inherit from ConnectorError so callers can catch
connector-level errors with a single except clause.  Inside the
connector these are carried as :class:`~openstack_provisioning.outcome.Outcome`
failures and never raised past a public command.
"""

from __future__ import annotations

from typing import Any


class ConnectorError(Exception):
    """Base exception for all connector errors."""

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        self.details = details or {}
        super().__init__(message)


# =============================================================================
# Session Errors
# =============================================================================


class InitiationError(ConnectorError):
    """Raised when the provider client cannot be constructed."""


class AuthenticationError(ConnectorError):
    """Raised when the provider rejects the credentials or the handshake fails."""


# =============================================================================
# Operation Errors
# =============================================================================


class ProviderOperationError(ConnectorError):
    """Raised when a compute call fails or returns an unusable body."""

    def __init__(
        self,
        message: str = "",
        *,
        operation: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.operation = operation
        super().__init__(message, details=details)


class PreconditionError(ProviderOperationError):
    """Raised when a command is missing state it needs (instance ID, flavor, name)."""


class ImageNotFoundError(ProviderOperationError):
    """Raised when no image matches the image selector."""

    def __init__(
        self,
        message: str = "",
        *,
        pattern: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.pattern = pattern
        super().__init__(message, operation="create", details=details)


# =============================================================================
# Discovery Errors
# =============================================================================


class ConnectorNotFoundError(ConnectorError):
    """Raised when no connector is registered under the requested name."""
