"""Common schemas used across the data layer."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class ReadResult(Generic[T]):
    """Outcome of a read operation.

    On failure `data` still holds an empty default (empty list or None) so
    callers that only want data can use it directly, while `ok` and `error`
    let them tell "no data" apart from "read failed".
    """

    data: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Check if the read succeeded."""
        return self.error is None

    @classmethod
    def success(cls, data: T) -> "ReadResult[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: str, default: T) -> "ReadResult[T]":
        return cls(data=default, error=error)
