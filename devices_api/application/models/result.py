"""Result wrapper returned by application services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from devices_api.domain.entities.errors import DomainError

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Expected failures (not found, duplicate, rule violations) travel as the
    ``error`` value instead of being raised, so callers branch on the error
    kind explicitly.
    """

    value: Optional[T] = None
    error: Optional[DomainError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> ServiceResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: DomainError) -> ServiceResult[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
