"""Digital buttons, analogue joystick axes, a millisecond clock and waiting helpers."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

ADC_FULL_SCALE = 1024


class Clock:
    """Monotonic time source counted from the moment the clock is created."""

    def __init__(self) -> None:
        self._origin_ns = time.monotonic_ns()

    def _elapsed_ns(self) -> int:
        return time.monotonic_ns() - self._origin_ns

    def millis(self) -> int:
        """Milliseconds since the clock was created."""
        return self._elapsed_ns() // 1_000_000

    def micros(self) -> int:
        """Microseconds since the clock was created."""
        return self._elapsed_ns() // 1_000

    def sleep_ms(self, ms: int) -> None:
        """Block for the given number of milliseconds."""
        time.sleep(ms / 1000)


@dataclass
class Button:
    """Push button wired to a pull-up input: a low level means pressed."""

    pin: int
    read_level: Callable[[], int]

    def is_pressed(self) -> bool:
        return not self.read_level()


@dataclass
class Axis:
    """One joystick axis read through a 10-bit ADC, optionally inverted."""

    pin: int
    read_adc: Callable[[], int]
    inverse: bool = False

    def value(self) -> int:
        raw = self.read_adc()
        return ADC_FULL_SCALE - raw if self.inverse else raw


@dataclass
class Joystick:
    """Two axes and a push button."""

    x_axis: Axis
    y_axis: Axis
    button: Button

    def x(self) -> int:
        return self.x_axis.value()

    def y(self) -> int:
        return self.y_axis.value()

    def is_button_pressed(self) -> bool:
        return self.button.is_pressed()


def wait_condition(
    condition: Callable[[], bool],
    timeout_ms: int = 0,
    interval_ms: int = 1,
    clock: Clock | None = None,
) -> bool:
    """Poll until condition holds; False if timeout_ms (0 means never) passes first."""
    clock = clock if clock is not None else Clock()
    start = clock.millis()
    while not condition():
        if timeout_ms > 0 and clock.millis() - start > timeout_ms:
            return False
        clock.sleep_ms(interval_ms)
    return True