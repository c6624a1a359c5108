"""Explicit success / failure values returned by connector phases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from openstack_provisioning.exceptions import ConnectorError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Result of one phase: either a value or the error that stopped it."""

    value: T | None = None
    error: ConnectorError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: ConnectorError) -> Outcome[T]:
        return cls(error=error)
