"""State trackers for buttons, joystick axes and idle time."""

from __future__ import annotations

from typing import Protocol

from chordimouse.hardware import Clock

AXIS_MAX_VALUE = 1023
AXIS_MIN_VALUE = 0
AXIS_THRESHOLD = (AXIS_MAX_VALUE - AXIS_MIN_VALUE) // 4

_UINT32_MASK = 0xFFFFFFFF


class PressSource(Protocol):
    def is_pressed(self) -> bool: ...


class ValueSource(Protocol):
    def value(self) -> int: ...


class EdgeDetector:
    """Detects press and release edges of a button between updates."""

    def __init__(self, button: PressSource) -> None:
        self._button = button
        self._previous = False
        self._rising = False
        self._falling = False

    def update(self) -> None:
        current = self._button.is_pressed()
        self._rising = current and not self._previous
        self._falling = not current and self._previous
        self._previous = current

    def is_rising(self) -> bool:
        return self._rising

    def is_falling(self) -> bool:
        return self._falling

    def is_pressed(self) -> bool:
        return self._previous


class ClickDetector:
    """Distinguishes a click (press then release) from a long press."""

    LONG_PRESS_MS = 5000

    def __init__(self, button: PressSource, clock: Clock | None = None) -> None:
        self._button = button
        self._clock = clock if clock is not None else Clock()
        self._previous = False
        self._current = False
        self._press_start_ms = 0

    def update(self) -> None:
        self._previous = self._current
        self._current = self._button.is_pressed()
        if not self._previous and self._current:
            self._press_start_ms = self._clock.millis()

    def reset(self) -> None:
        self._previous = False
        self._current = False
        self._press_start_ms = 0

    def is_long_pressed(self) -> bool:
        if not self._current:
            return False
        return self._clock.millis() - self._press_start_ms > self.LONG_PRESS_MS

    def is_clicked(self) -> bool:
        return self._previous and not self._current


class AxisDetector:
    """Tracks a joystick axis relative to its calibrated centre."""

    def __init__(self, axis: ValueSource, dead_band: int = 5) -> None:
        self._axis = axis
        self._dead_band = dead_band
        self._center = 0
        self._value = 0
        self._previous_value = 0
        self._up = False
        self._down = False
        self._was_up = False
        self._was_down = False

    def calibrate(self, calibrated: int = 0) -> None:
        """Set the centre; 0 takes the axis's current value."""
        self._center = self._axis.value() if calibrated == 0 else calibrated
        self._previous_value = self._center
        self._value = self._center

    def update(self) -> None:
        self._previous_value = self._value
        self._value = self._axis.value()
        self._was_up = self._up
        self._was_down = self._down
        # Thresholds are unsigned 32-bit quantities on the device.
        upper = (self._center + AXIS_THRESHOLD) & _UINT32_MASK
        lower = (self._center - AXIS_THRESHOLD) & _UINT32_MASK
        self._up = self._value > upper
        self._down = self._value < lower

    def move(self) -> int:
        """Signed offset of the last reading from the centre."""
        return self._value - self._center

    def value(self) -> int:
        return self._value

    def is_moving(self) -> bool:
        return abs(self.move()) > self._dead_band

    def is_up(self) -> bool:
        return self._up

    def is_down(self) -> bool:
        return self._down

    def is_center(self) -> bool:
        return not self._up and not self._down

    def is_rising_up(self) -> bool:
        return not self._was_up and self._up

    def is_falling_up(self) -> bool:
        return self._was_up and not self._up

    def is_rising_down(self) -> bool:
        return not self._was_down and self._down

    def is_falling_down(self) -> bool:
        return self._was_down and not self._down


class SleepTimer:
    """Decides when the device has been idle long enough to sleep."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock if clock is not None else Clock()
        self._start_ms = 0

    def should_enter_sleep(self, timeout_ms: int) -> bool:
        if self._start_ms == 0:
            self._start_ms = self._clock.millis()
            return False
        return self._clock.millis() - self._start_ms > timeout_ms

    def reset(self) -> None:
        self._start_ms = self._clock.millis()