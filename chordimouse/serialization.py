"""Common interface for objects stored as bytes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar

T = TypeVar("T", bound="Serializable")


class DeserializationError(ValueError):
    """Raised when bytes cannot be turned back into an object."""


class Serializable(ABC):
    """An object that can be written to and read from bytes."""

    __slots__ = ()

    def serialized_size(self) -> int:
        """Number of bytes that to_bytes() produces."""
        return len(self.to_bytes())

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Serialize the object."""

    @classmethod
    @abstractmethod
    def from_bytes(cls: type[T], data: bytes) -> T:
        """Build an object from bytes, raising DeserializationError on bad input."""