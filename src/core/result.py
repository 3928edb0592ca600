"""Result types for railway-oriented use cases.

Use cases return a ``Result`` instead of raising for expected failures, so
routes can map error codes to HTTP statuses explicitly.

Usage:
    if user is None:
        return Return.err(Error("USER_NOT_FOUND", "User not found"))
    return Return.ok(user)
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Error:
    """Machine-readable code plus a message that is safe to show to a client."""

    code: str
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[Error] = None

    def is_ok(self) -> bool:
        return self.error is None

    def is_err(self) -> bool:
        return self.error is not None


class Return:
    """Factory for Result values"""

    @staticmethod
    def ok(value: T) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
