# chordimouse

Device logic for a one-handed chord keyboard that is also a joystick
mouse. The package holds the parts that do not depend on a particular
microcontroller:

- detecting button edges and joystick deflection
- scanning chords
- the negative-inertia cursor acceleration curve
- key profiles
- the stored configuration formats

The hardware is reached through small objects. `Button` and `Axis` wrap a
callable that reads a pin level or an ADC value. `Joystick` combines two
axes and a button. `Clock` supplies time. Any `HidSink` receives the mouse
and keyboard reports. The same code therefore runs against real input
readers or against simulated ones.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `chordimouse.events`
  - `Input`: bit flags for the buttons and joystick directions. A chord is a combination of these flags.
  - `Event`: `PRESS` and `RELEASE`.
- `chordimouse.serialization`
  - `Serializable`: the base class, with `to_bytes()`, `from_bytes()` and `serialized_size()`.
  - `DeserializationError`: raised on bad input.
- `chordimouse.calibration`
  - `Calibration`: the joystick centre (`center_x`, `center_y`), stored as two little-endian 32-bit unsigned integers.
- `chordimouse.config`
  - `Config`: the global settings, stored as compact JSON. The settings are the chord scan timeout, the light and deep sleep timeouts, the joystick dead bands, the mouse gain, mickey scale and report interval, the TX power and the connection intervals.
  - `to_json_dict()` and `from_json_dict()` convert to and from the JSON object. A missing value, or one that does not fit its field, becomes zero.
- `chordimouse.key_profile`
  - `KeyProfile`: maps chords to HID scancodes. `scancode()` returns 0 for a chord that is not mapped.
  - `KeyProfiles`: holds two profiles. Index 0 is the normal layer and index 1 is the Fn layer. The class also reads and writes their binary format.
- `chordimouse.storage`
  - `FileStore`: saves and loads raw bytes or any `Serializable` under names such as `"/config"`, inside a root directory.
  - `load()` returns `None` when a file is missing, empty or cannot be deserialized.
- `chordimouse.hardware`
  - `Clock`, `Button` (pull-up: a low level means pressed), `Axis` (10-bit ADC, can be inverted) and `Joystick`.
  - `wait_condition()`: polls a condition until it holds or a timeout passes.
- `chordimouse.detectors`
  - `EdgeDetector`: press and release edges.
  - `ClickDetector`: clicks and long presses of 5 seconds or more.
  - `AxisDetector`: the axis offset from its calibrated centre, and up/down states with a threshold of a quarter of the range.
  - `SleepTimer`: idle timeout.
- `chordimouse.config_manager`
  - `ConfigManager`: loads the config, key profiles and calibration from a `FileStore`. On first start it writes the defaults. The default calibration is the joystick's present position.
  - `default_key_profiles()`: the built-in layout.
  - `HidKey`: the usage IDs that the built-in layout uses.
- `chordimouse.hid`
  - `MouseButton` and `Modifier`.
  - `HidSink`: the protocol for report targets.
  - `RecordingHid`: a sink that records every report in `reports`.
- `chordimouse.cursor`
  - `NegativeInertiaStrategy`, `transfer_function()` and `magnitude()`.
  - `Sampler`: integrates velocity over time and releases whole mickeys once per report interval.
- `chordimouse.layers`
  - `KeyboardLayer`: turns chords into key reports. Holding the joystick down adds Ctrl, up adds Alt and left adds Shift. Pushing it right selects the Fn profile.
  - `MouseLayer`: joystick movement, vertical scrolling while the middle button is held, and left, right, back and forward clicks.

## Example

Press button 1 on a simulated device and send the chord:

```python
from chordimouse.calibration import Calibration
from chordimouse.config_manager import default_key_profiles
from chordimouse.hardware import Axis, Button, Joystick
from chordimouse.hid import RecordingHid
from chordimouse.layers import KeyboardLayer

levels = {6: 1, 7: 1, 8: 1, 9: 1, 10: 1, 2: 1}  # pull-up inputs: 1 is released


def button(pin):
    return Button(pin, lambda: levels[pin])


joystick = Joystick(Axis(0, lambda: 512), Axis(1, lambda: 512), button(2))
hid = RecordingHid()
layer = KeyboardLayer(button(6), button(8), button(9), button(10), button(7), joystick, hid)
layer.calibrate(Calibration(512, 512))
layer.set_key_profiles(default_key_profiles())

levels[6] = 0  # press button 1
chord, event = layer.scan_chord(20)
layer.action(chord, event)
print(hid.reports[-1])  # KeyboardReport(modifier=0, keycodes=(29, 0, 0, 0, 0, 0))
```

Settings round-trip through their stored forms:

```python
from chordimouse.config import Config
from chordimouse.key_profile import KeyProfiles

config = Config.from_bytes(Config().to_bytes())
profiles = KeyProfiles.from_bytes(KeyProfiles().to_bytes())
print(config.chord_scan_timeout_ms)  # 150
```

## What this package does not do

The package has no radio or Bluetooth link. The only `HidSink` it provides
is `RecordingHid`, which records reports instead of sending them.

It does not drive the status LED. It does not manage power: `SleepTimer`
only reports when the idle timeout has passed.

It has no main loop and no command line. An application combines the
layers, the `ConfigManager` and a `HidSink` of its own.