"""Joystick centre calibration."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from chordimouse.serialization import DeserializationError, Serializable

_FORMAT = struct.Struct("<II")
_UINT32_MAX = 0xFFFFFFFF


@dataclass
class Calibration(Serializable):
    """Raw ADC values of the joystick at rest."""

    center_x: int = 0
    center_y: int = 0

    def __post_init__(self) -> None:
        for name in ("center_x", "center_y"):
            value = getattr(self, name)
            if not 0 <= value <= _UINT32_MAX:
                raise ValueError(f"{name} out of range: {value}")

    def serialized_size(self) -> int:
        return _FORMAT.size

    def to_bytes(self) -> bytes:
        return _FORMAT.pack(self.center_x, self.center_y)

    @classmethod
    def from_bytes(cls, data: bytes) -> Calibration:
        if len(data) < _FORMAT.size:
            raise DeserializationError(
                f"calibration needs {_FORMAT.size} bytes, got {len(data)}"
            )
        center_x, center_y = _FORMAT.unpack_from(data)
        return cls(center_x, center_y)