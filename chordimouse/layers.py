"""Keyboard and mouse layers turning button and joystick input into HID reports."""

from __future__ import annotations

import copy
from typing import Protocol

from chordimouse.calibration import Calibration
from chordimouse.cursor import NegativeInertiaStrategy, Sampler
from chordimouse.detectors import AxisDetector, EdgeDetector
from chordimouse.events import Event, Input
from chordimouse.hardware import Clock, Joystick
from chordimouse.hid import HidSink, Modifier, MouseButton
from chordimouse.key_profile import KeyProfiles

SCROLL_INTERVAL_MS = 150
DEFAULT_REPORT_INTERVAL_MS = 10


class PressSource(Protocol):
    def is_pressed(self) -> bool: ...


class KeyboardLayer:
    """Sends keys for chords of the five buttons; the joystick acts as modifiers and Fn."""

    def __init__(
        self,
        button1: PressSource,
        button2: PressSource,
        button3: PressSource,
        button4: PressSource,
        middle_button1: PressSource,
        joystick: Joystick,
        hid: HidSink,
        clock: Clock | None = None,
    ) -> None:
        self._clock = clock if clock is not None else Clock()
        self._hid = hid
        self._buttons = [
            (EdgeDetector(button1), Input.BUTTON_1),
            (EdgeDetector(button2), Input.BUTTON_2),
            (EdgeDetector(button3), Input.BUTTON_3),
            (EdgeDetector(button4), Input.BUTTON_4),
            (EdgeDetector(middle_button1), Input.MIDDLE_BUTTON_1),
        ]
        self._joystick_x = AxisDetector(joystick.x_axis)
        self._joystick_y = AxisDetector(joystick.y_axis)
        self._profiles = KeyProfiles()
        self._previous_modifier = int(Modifier.NONE)

    def calibrate(self, calibration: Calibration) -> None:
        self._joystick_x.calibrate(calibration.center_x)
        self._joystick_y.calibrate(calibration.center_y)

    def set_key_profiles(self, profiles: KeyProfiles) -> None:
        self._profiles = copy.deepcopy(profiles)

    def _update_buttons(self) -> None:
        for detector, _ in self._buttons:
            detector.update()

    def scan_chord(self, timeout_ms: int) -> tuple[Input, Event]:
        """Collect every button pressed until the timeout; any release ends the scan at once."""
        start = self._clock.millis()
        chord = Input(0)
        event = Event(0)

        self._update_buttons()
        while self._clock.millis() - start < timeout_ms:
            if any(detector.is_falling() for detector, _ in self._buttons):
                return chord, Event.RELEASE
            for detector, bit in self._buttons:
                if detector.is_pressed():
                    chord |= bit
                    event = Event.PRESS
            self._update_buttons()
        return chord, event

    def _scan_modifier(self) -> int:
        self._joystick_y.update()
        self._joystick_x.update()
        modifier = int(Modifier.NONE)
        if self._joystick_y.is_down():
            modifier |= Modifier.LEFT_CTRL
        if self._joystick_y.is_up():
            modifier |= Modifier.LEFT_ALT
        if self._joystick_x.is_down():
            modifier |= Modifier.LEFT_SHIFT
        return modifier

    def action(self, chord: int, event: int) -> bool:
        """Send the report for a scanned chord; True if anything was sent."""
        modifier = self._scan_modifier()
        profile = self._profiles[1 if self._joystick_x.is_up() else 0]
        sent = False

        if event == Event.RELEASE:
            self._hid.key_release(modifier)
            sent = True
        elif profile.exists(chord):
            self._hid.key_press(profile.scancode(chord), modifier)
            sent = True
        elif self._previous_modifier != modifier:
            self._hid.key_press(0, modifier)
            sent = True

        self._previous_modifier = modifier
        return sent


class MouseLayer:
    """Moves the cursor with the joystick, scrolls with the middle button held, clicks with buttons."""

    def __init__(
        self,
        button1: PressSource,
        button2: PressSource,
        button3: PressSource,
        button4: PressSource,
        middle_button1: PressSource,
        joystick: Joystick,
        hid: HidSink,
        clock: Clock | None = None,
    ) -> None:
        self._clock = clock if clock is not None else Clock()
        self._hid = hid
        self._clicks = [
            (EdgeDetector(button1), MouseButton.LEFT),
            (EdgeDetector(button2), MouseButton.RIGHT),
            (EdgeDetector(button3), MouseButton.BACKWARD),
            (EdgeDetector(button4), MouseButton.FORWARD),
        ]
        self._middle_button1 = EdgeDetector(middle_button1)
        self._joystick_x = AxisDetector(joystick.x_axis)
        self._joystick_y = AxisDetector(joystick.y_axis)
        self._strategy = NegativeInertiaStrategy()
        self._sampler = Sampler(DEFAULT_REPORT_INTERVAL_MS, self._strategy, self._clock)
        self._last_scroll_ms = 0

    def calibrate(self, calibration: Calibration) -> None:
        self._joystick_x.calibrate(calibration.center_x)
        self._joystick_y.calibrate(calibration.center_y)

    def configure(self, gain: int, scale: float, report_interval_ms: int) -> None:
        self._strategy.gain = gain
        self._strategy.mickey_scale = scale
        self._sampler.interval_ms = report_interval_ms
        self._sampler.reset()

    def action(self) -> bool:
        """Scan the inputs and send mouse reports; True if there was any activity."""
        sent = False

        self._middle_button1.update()
        self._joystick_x.update()
        self._joystick_y.update()

        move = self._sampler.move_cursor(self._joystick_x.move(), self._joystick_y.move())

        if self._middle_button1.is_pressed():
            if self._clock.millis() - self._last_scroll_ms >= SCROLL_INTERVAL_MS and move.y != 0:
                self._hid.mouse_v_scroll(max(-128, min(127, -move.y)))
                self._last_scroll_ms = self._clock.millis()
            return True

        if move.x != 0 or move.y != 0:
            self._hid.mouse_move(move.x, move.y)
            sent = True

        for detector, button in self._clicks:
            detector.update()
            if detector.is_rising():
                self._hid.mouse_press(button)
                sent = True
            if detector.is_falling():
                self._hid.mouse_release(button)
                sent = True

        return sent