"""Global device settings, stored as JSON."""

from __future__ import annotations

import json
import math
import struct
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from chordimouse.serialization import DeserializationError, Serializable

CONFIG_VERSION = 1
MAX_BUFFSIZE = 512

_UINT32 = (0, 0xFFFFFFFF)
_UINT16 = (0, 0xFFFF)
_UINT8 = (0, 0xFF)
_INT8 = (-128, 127)

_FLOAT32 = struct.Struct("<f")


def _to_float32(value: float) -> float:
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _format_float32(value: float) -> str:
    """Shortest decimal text that reads back as the same single-precision value."""
    narrowed = _to_float32(value)
    if not math.isfinite(narrowed):
        return "null"
    for precision in range(1, 10):
        text = f"{narrowed:.{precision}g}"
        if _to_float32(float(text)) == narrowed:
            return text
    return repr(narrowed)


def _as_int(value: Any, bounds: tuple[int, int]) -> int:
    """Convert a JSON value to an integer of the given range, 0 if it does not fit."""
    low, high = bounds
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return value if low <= value <= high else 0
    if isinstance(value, float) and math.isfinite(value):
        truncated = int(value)
        return truncated if low <= truncated <= high else 0
    return 0


def _as_float(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return _to_float32(float(value))
    return 0.0


def _reject_constant(name: str) -> Any:
    raise ValueError(f"unsupported JSON constant {name}")


@dataclass
class Config(Serializable):
    """Global settings; every field defaults to the factory value."""

    MAX_BUFFSIZE = MAX_BUFFSIZE

    version: int = CONFIG_VERSION
    chord_scan_timeout_ms: int = 150
    deep_sleep_timeout_ms: int = 30 * 60 * 1000
    light_sleep_timeout_ms: int = 30 * 1000
    joystick_x_deadband: int = 5
    joystick_y_deadband: int = 5
    mouse_negative_gain: int = 2
    tx_power: int = 4
    connection_interval_min: int = 6
    connection_interval_max: int = 9
    mouse_report_interval_ms: int = 10
    mickey_scale: float = 0.045

    def __post_init__(self) -> None:
        self.mickey_scale = _to_float32(self.mickey_scale)

    def to_json_dict(self) -> dict[str, Any]:
        """Settings as a JSON object, keys in wire order."""
        return {
            "version": CONFIG_VERSION,
            "chord_timeout": self.chord_scan_timeout_ms,
            "deepsleep_timeout": self.deep_sleep_timeout_ms,
            "lightsleep_timeout": self.light_sleep_timeout_ms,
            "joy_x_deadband": self.joystick_x_deadband,
            "joy_y_deadband": self.joystick_y_deadband,
            "mouse_negative_gain": self.mouse_negative_gain,
            "mickey_scale": self.mickey_scale,
            "tx_power": self.tx_power,
            "conn_interval_min": self.connection_interval_min,
            "conn_interval_max": self.connection_interval_max,
            "repo_ms": self.mouse_report_interval_ms,
        }

    @classmethod
    def from_json_dict(cls, data: Any) -> Config:
        """Read settings from a JSON value; missing or unfitting values become zero."""
        if not isinstance(data, Mapping):
            data = {}
        get = data.get
        return cls(
            version=_as_int(get("version"), _UINT32),
            chord_scan_timeout_ms=_as_int(get("chord_timeout"), _UINT32),
            deep_sleep_timeout_ms=_as_int(get("deepsleep_timeout"), _UINT32),
            light_sleep_timeout_ms=_as_int(get("lightsleep_timeout"), _UINT32),
            joystick_x_deadband=_as_int(get("joy_x_deadband"), _UINT8),
            joystick_y_deadband=_as_int(get("joy_y_deadband"), _UINT8),
            mouse_negative_gain=_as_int(get("mouse_negative_gain"), _UINT8),
            mickey_scale=_as_float(get("mickey_scale")),
            tx_power=_as_int(get("tx_power"), _INT8),
            connection_interval_min=_as_int(get("conn_interval_min"), _UINT16),
            connection_interval_max=_as_int(get("conn_interval_max"), _UINT16),
            mouse_report_interval_ms=_as_int(get("repo_ms"), _UINT32),
        )

    def serialized_size(self) -> int:
        return len(self.to_bytes())

    def to_bytes(self) -> bytes:
        members = []
        for key, value in self.to_json_dict().items():
            text = _format_float32(value) if isinstance(value, float) else str(int(value))
            members.append(f'"{key}":{text}')
        return ("{" + ",".join(members) + "}").encode("utf-8")

    @classmethod
    def from_bytes(cls, data: bytes) -> Config:
        try:
            text = bytes(data).decode("utf-8").lstrip()
        except UnicodeDecodeError as exc:
            raise DeserializationError("config is not valid UTF-8") from exc
        if not text:
            raise DeserializationError("config is empty")
        decoder = json.JSONDecoder(parse_constant=_reject_constant)
        try:
            value, _ = decoder.raw_decode(text)
        except ValueError as exc:
            raise DeserializationError(f"invalid config JSON: {exc}") from exc
        return cls.from_json_dict(value)