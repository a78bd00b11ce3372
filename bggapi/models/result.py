"""Discriminated result wrapper for API calls."""

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from ..services.errors import BggError

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """The outcome of an API call: either a value or a ``BggError``."""
    value: T | None = None
    error: "BggError | None" = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @property
    def is_failure(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: "BggError") -> "ApiResult[T]":
        return cls(error=error)

    @classmethod
    async def capture(cls, call: Awaitable[T]) -> "ApiResult[T]":
        """Await an API call and wrap its outcome.

        Only ``BggError`` is captured; anything else propagates.
        """
        from ..services.errors import BggError

        try:
            return cls.success(await call)
        except BggError as e:
            return cls.failure(e)
