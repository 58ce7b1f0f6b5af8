"""Persistent storage of serialized objects in a directory."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import TypeVar

from chordimouse.serialization import DeserializationError, Serializable

T = TypeVar("T", bound=Serializable)


class FileStore:
    """Files addressed by absolute-style names such as "/config" under a root directory."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, name: str) -> Path:
        relative = PurePosixPath(name.lstrip("/"))
        if not relative.parts or ".." in relative.parts:
            raise ValueError(f"invalid file name: {name!r}")
        return self._root.joinpath(*relative.parts)

    def save_bytes(self, name: str, data: bytes) -> None:
        """Replace the file's contents with data."""
        path = self._path(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(bytes(data))

    def load_bytes(self, name: str) -> bytes | None:
        """File contents, or None when the file does not exist."""
        try:
            return self._path(name).read_bytes()
        except FileNotFoundError:
            return None

    def save(self, name: str, obj: Serializable) -> None:
        self.save_bytes(name, obj.to_bytes())

    def load(self, name: str, cls: type[T]) -> T | None:
        """Deserialize the file, or None when it is missing, empty or unreadable."""
        data = self.load_bytes(name)
        if not data:
            return None
        try:
            return cls.from_bytes(data)
        except DeserializationError:
            return None