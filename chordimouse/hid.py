"""HID mouse and keyboard reports sent to the host."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Protocol, Union, runtime_checkable

KEYBOARD_REPORT_KEYS = 6


class MouseButton(IntFlag):
    LEFT = 0x01
    RIGHT = 0x02
    MIDDLE = 0x04
    BACKWARD = 0x08
    FORWARD = 0x10


class Modifier(IntEnum):
    NONE = 0x00
    LEFT_CTRL = 0x01
    LEFT_SHIFT = 0x02
    LEFT_ALT = 0x04
    LEFT_GUI = 0x08
    RIGHT_CTRL = 0x10
    RIGHT_SHIFT = 0x20
    RIGHT_ALT = 0x40
    RIGHT_GUI = 0x80


@runtime_checkable
class HidSink(Protocol):
    """Where the layers send their mouse and keyboard actions."""

    def mouse_move(self, x: int, y: int) -> None: ...

    def mouse_h_scroll(self, move: int) -> None: ...

    def mouse_v_scroll(self, move: int) -> None: ...

    def mouse_press(self, button: MouseButton) -> None: ...

    def mouse_release(self, button: MouseButton) -> None: ...

    def key_press(self, scancode: int, modifier: int = Modifier.NONE) -> None: ...

    def key_release(self, modifier: int = Modifier.NONE) -> None: ...


@dataclass(frozen=True)
class MouseMoveReport:
    x: int
    y: int


@dataclass(frozen=True)
class MouseScrollReport:
    amount: int


@dataclass(frozen=True)
class MousePanReport:
    amount: int


@dataclass(frozen=True)
class MouseButtonPressReport:
    button: MouseButton


@dataclass(frozen=True)
class MouseButtonReleaseReport:
    button: MouseButton


@dataclass(frozen=True)
class KeyboardReport:
    modifier: int
    keycodes: tuple[int, ...]


Report = Union[
    MouseMoveReport,
    MouseScrollReport,
    MousePanReport,
    MouseButtonPressReport,
    MouseButtonReleaseReport,
    KeyboardReport,
]


def _int8(name: str, value: int) -> int:
    if not -128 <= value <= 127:
        raise ValueError(f"{name} out of int8 range: {value}")
    return int(value)


def _uint8(name: str, value: int) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} out of uint8 range: {value}")
    return int(value)


@dataclass
class RecordingHid:
    """HID sink that keeps every report it would send, in order."""

    reports: list[Report] = field(default_factory=list)

    def mouse_move(self, x: int, y: int) -> None:
        self.reports.append(MouseMoveReport(_int8("x", x), _int8("y", y)))

    def mouse_h_scroll(self, move: int) -> None:
        self.reports.append(MousePanReport(_int8("move", move)))

    def mouse_v_scroll(self, move: int) -> None:
        self.reports.append(MouseScrollReport(_int8("move", move)))

    def mouse_press(self, button: MouseButton) -> None:
        self.reports.append(MouseButtonPressReport(MouseButton(button)))

    def mouse_release(self, button: MouseButton) -> None:
        self.reports.append(MouseButtonReleaseReport(MouseButton(button)))
        # Hosts only act on the release once a movement report follows it.
        self.mouse_move(0, 0)

    def key_press(self, scancode: int, modifier: int = Modifier.NONE) -> None:
        keys = (_uint8("scancode", scancode),) + (0,) * (KEYBOARD_REPORT_KEYS - 1)
        self.reports.append(KeyboardReport(_uint8("modifier", modifier), keys))

    def key_release(self, modifier: int = Modifier.NONE) -> None:
        keys = (0,) * KEYBOARD_REPORT_KEYS
        self.reports.append(KeyboardReport(_uint8("modifier", modifier), keys))