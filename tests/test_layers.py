import pytest

from chordimouse.calibration import Calibration
from chordimouse.config_manager import HidKey, default_key_profiles
from chordimouse.events import Event, Input
from chordimouse.hardware import Axis, Button, Joystick
from chordimouse.hid import (
    KeyboardReport,
    Modifier,
    MouseButton,
    MouseButtonPressReport,
    MouseButtonReleaseReport,
    MouseMoveReport,
    MouseScrollReport,
    RecordingHid,
)
from chordimouse.layers import KeyboardLayer, MouseLayer

CENTER = 512
NAMES = ("b1", "b2", "b3", "b4", "mid", "joy")


class FakeClock:
    def __init__(self, ms=0, step_ms=0):
        self.ms = ms
        self.step_ms = step_ms

    def millis(self):
        now = self.ms
        self.ms += self.step_ms
        return now

    def micros(self):
        return self.ms * 1000

    def sleep_ms(self, ms):
        self.ms += ms


class Rig:
    def __init__(self):
        self.levels = {name: 1 for name in NAMES}
        self.adc = {"x": CENTER, "y": CENTER}
        self.buttons = [Button(i, self._reader(name)) for i, name in enumerate(NAMES[:5])]
        self.joystick = Joystick(
            Axis(10, lambda: self.adc["x"]),
            Axis(11, lambda: self.adc["y"]),
            Button(12, self._reader("joy")),
        )

    def _reader(self, name):
        return lambda: self.levels[name]

    def press(self, *names):
        for name in names:
            self.levels[name] = 0

    def release(self, *names):
        for name in names:
            self.levels[name] = 1


def keyboard():
    rig = Rig()
    hid = RecordingHid()
    layer = KeyboardLayer(*rig.buttons, rig.joystick, hid, FakeClock(step_ms=1))
    layer.calibrate(Calibration(CENTER, CENTER))
    layer.set_key_profiles(default_key_profiles())
    return rig, hid, layer


def blank(key=0, modifier=0):
    return KeyboardReport(modifier, (int(key), 0, 0, 0, 0, 0))


def test_scan_single_button():
    rig, _, layer = keyboard()
    rig.press("b1")
    assert layer.scan_chord(20) == (Input.BUTTON_1, Event.PRESS)


def test_scan_chord_of_two_buttons():
    rig, _, layer = keyboard()
    rig.press("b1", "b2")
    assert layer.scan_chord(20) == (Input.BUTTON_1 | Input.BUTTON_2, Event.PRESS)


def test_scan_nothing_pressed():
    _, _, layer = keyboard()
    chord, event = layer.scan_chord(20)
    assert chord == 0
    assert not event


def test_scan_with_zero_timeout_reports_nothing():
    rig, _, layer = keyboard()
    rig.press("b3")
    chord, event = layer.scan_chord(0)
    assert chord == 0
    assert not event


def test_scan_reports_release():
    rig, _, layer = keyboard()
    rig.press("b1")
    layer.scan_chord(20)
    rig.release("b1")
    assert layer.scan_chord(20) == (0, Event.RELEASE)


def test_action_sends_chord_key():
    _, hid, layer = keyboard()
    assert layer.action(Input.BUTTON_1 | Input.BUTTON_2, Event.PRESS) is True
    assert hid.reports == [blank(HidKey.A)]


def test_action_release_sends_empty_report():
    _, hid, layer = keyboard()
    assert layer.action(0, Event.RELEASE) is True
    assert hid.reports == [blank()]


def test_action_fn_layer_when_joystick_right():
    rig, hid, layer = keyboard()
    rig.adc["x"] = 1000
    layer.action(Input.BUTTON_1, Event.PRESS)
    assert hid.reports == [blank(HidKey.ENTER)]


@pytest.mark.parametrize(
    "axis,value,modifier",
    [("y", 0, Modifier.LEFT_CTRL), ("y", 1000, Modifier.LEFT_ALT), ("x", 0, Modifier.LEFT_SHIFT)],
)
def test_modifier_change_sent_once(axis, value, modifier):
    rig, hid, layer = keyboard()
    rig.adc[axis] = value
    assert layer.action(0, 0) is True
    assert layer.action(0, 0) is False
    assert hid.reports == [blank(0, modifier)]


def test_modifier_applies_to_chord():
    rig, hid, layer = keyboard()
    rig.adc["x"] = 0
    layer.action(Input.BUTTON_2, Event.PRESS)
    assert hid.reports == [blank(HidKey.C, Modifier.LEFT_SHIFT)]


def test_idle_action_sends_nothing():
    _, hid, layer = keyboard()
    assert layer.action(0, 0) is False
    assert hid.reports == []


def test_set_key_profiles_copies():
    _, hid, layer = keyboard()
    profiles = default_key_profiles()
    layer.set_key_profiles(profiles)
    profiles[0].set_chord(Input.BUTTON_1, HidKey.Q)
    layer.action(Input.BUTTON_1, Event.PRESS)
    assert hid.reports == [blank(HidKey.Z)]


def mouse(start_ms=0):
    rig = Rig()
    hid = RecordingHid()
    clock = FakeClock(start_ms)
    layer = MouseLayer(*rig.buttons, rig.joystick, hid, clock)
    layer.calibrate(Calibration(CENTER, CENTER))
    layer.configure(2, 0.045, 10)
    return rig, hid, layer, clock


def test_mouse_idle():
    _, hid, layer, clock = mouse()
    clock.ms += 20
    assert layer.action() is False
    assert hid.reports == []


@pytest.mark.parametrize(
    "name,button",
    [("b1", MouseButton.LEFT), ("b2", MouseButton.RIGHT), ("b3", MouseButton.BACKWARD), ("b4", MouseButton.FORWARD)],
)
def test_mouse_click(name, button):
    rig, hid, layer, _ = mouse()
    rig.press(name)
    assert layer.action() is True
    assert hid.reports == [MouseButtonPressReport(button)]
    rig.release(name)
    assert layer.action() is True
    assert hid.reports[1:] == [MouseButtonReleaseReport(button), MouseMoveReport(0, 0)]


def test_mouse_move_follows_joystick():
    rig, hid, layer, clock = mouse()
    rig.adc["x"] = 1000
    clock.ms += 20
    assert layer.action() is True
    assert len(hid.reports) == 1
    report = hid.reports[0]
    assert isinstance(report, MouseMoveReport)
    assert report.x > 0
    assert report.y == 0


def test_mouse_scroll_with_middle_button():
    rig, hid, layer, clock = mouse(start_ms=200)
    rig.press("mid")
    rig.adc["y"] = 1000
    clock.ms += 20
    assert layer.action() is True
    assert len(hid.reports) == 1
    assert isinstance(hid.reports[0], MouseScrollReport)
    assert hid.reports[0].amount < 0


def test_mouse_scroll_is_rate_limited():
    rig, hid, layer, clock = mouse(start_ms=200)
    rig.press("mid")
    rig.adc["y"] = 1000
    clock.ms += 20
    layer.action()
    clock.ms += 20
    assert layer.action() is True
    assert len(hid.reports) == 1


def test_middle_button_held_without_movement_counts_as_action():
    rig, hid, layer, clock = mouse(start_ms=200)
    rig.press("mid")
    clock.ms += 20
    assert layer.action() is True
    assert hid.reports == []