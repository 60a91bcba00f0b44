"""Success/failure container returned by the election service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from votechain.exceptions import VotechainError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[VotechainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def code(self) -> str | None:
        return self.error.code if self.error is not None else None

    @classmethod
    def success(cls, value: T | None = None) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: VotechainError) -> Result[T]:
        return cls(error=error)

    def unwrap(self) -> T | None:
        """Return the value, or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
