"""Loading, defaulting and saving of the device's persistent settings."""

from __future__ import annotations

import copy
from enum import IntEnum
from typing import Protocol

from chordimouse.calibration import Calibration
from chordimouse.config import Config
from chordimouse.events import Input
from chordimouse.key_profile import KeyProfile, KeyProfiles
from chordimouse.storage import FileStore

CONFIG_FILENAME = "/config"
CALIBRATION_FILENAME = "/calib"
KEY_PROFILE_FILENAME = "/key_profiles"


class HidKey(IntEnum):
    """Keyboard usage IDs used by the default key profiles."""

    NONE = 0x00
    A = 0x04
    B = 0x05
    C = 0x06
    D = 0x07
    E = 0x08
    F = 0x09
    G = 0x0A
    H = 0x0B
    I = 0x0C  # noqa: E741
    J = 0x0D
    K = 0x0E
    L = 0x0F
    M = 0x10
    N = 0x11
    O = 0x12  # noqa: E741
    P = 0x13
    Q = 0x14
    R = 0x15
    S = 0x16
    T = 0x17
    U = 0x18
    V = 0x19
    W = 0x1A
    X = 0x1B
    Y = 0x1C
    Z = 0x1D
    ENTER = 0x28
    ESCAPE = 0x29
    BACKSPACE = 0x2A
    TAB = 0x2B
    SPACE = 0x2C
    GRAVE = 0x35
    DELETE = 0x4C


_B1 = Input.BUTTON_1
_B2 = Input.BUTTON_2
_B3 = Input.BUTTON_3
_B4 = Input.BUTTON_4
_MB = Input.MIDDLE_BUTTON_1

# Every chord of the five buttons that the defaults assign, in table order.
_CHORDS = (
    _B1,
    _B2,
    _B3,
    _B4,
    _MB,
    _B1 | _B2,
    _B1 | _B3,
    _B1 | _B4,
    _B1 | _MB,
    _B2 | _B3,
    _B2 | _B4,
    _B2 | _MB,
    _B3 | _B4,
    _B3 | _MB,
    _B4 | _MB,
    _B1 | _B2 | _B3,
    _B1 | _B2 | _B4,
    _B1 | _B2 | _MB,
    _B1 | _B3 | _B4,
    _B1 | _B3 | _MB,
    _B1 | _B4 | _MB,
    _B2 | _B3 | _B4,
    _B2 | _B3 | _MB,
    _B2 | _B4 | _MB,
    _B3 | _B4 | _MB,
    _B1 | _B2 | _B3 | _B4,
)

_NORMAL_KEYS = (
    HidKey.Z, HidKey.C, HidKey.V, HidKey.S, HidKey.F,
    HidKey.A, HidKey.B, HidKey.D, HidKey.N, HidKey.P,
    HidKey.E, HidKey.G, HidKey.H, HidKey.I, HidKey.J,
    HidKey.K, HidKey.L, HidKey.M, HidKey.O, HidKey.Q,
    HidKey.R, HidKey.T, HidKey.U, HidKey.W, HidKey.X,
    HidKey.Y,
)

_FN_KEYS = (
    HidKey.ENTER, HidKey.SPACE, HidKey.TAB, HidKey.BACKSPACE, HidKey.GRAVE,
    HidKey.DELETE,
    *([HidKey.NONE] * 19),
    HidKey.ESCAPE,
)


def _profile(keys: tuple[HidKey, ...]) -> KeyProfile:
    return KeyProfile((int(chord), int(key)) for chord, key in zip(_CHORDS, keys))


def default_key_profiles() -> KeyProfiles:
    """Factory key profiles: index 0 is the normal layer, index 1 the Fn layer."""
    return KeyProfiles([_profile(_NORMAL_KEYS), _profile(_FN_KEYS)])


class JoystickReader(Protocol):
    def x(self) -> int: ...

    def y(self) -> int: ...


class ConfigManager:
    """Holds the current settings and keeps them in step with the file store."""

    def __init__(self, store: FileStore, joystick: JoystickReader) -> None:
        self._store = store
        self._joystick = joystick
        self._config = Config()
        self._key_profiles = KeyProfiles()
        self._calibration = Calibration(0, 0)

    @property
    def config(self) -> Config:
        return self._config

    @property
    def key_profiles(self) -> KeyProfiles:
        return self._key_profiles

    @property
    def calibration(self) -> Calibration:
        return self._calibration

    def init(self) -> None:
        """Load every setting; a missing or unreadable one is defaulted and saved."""
        config = self._store.load(CONFIG_FILENAME, Config)
        if config is None:
            self.save_config(Config())
        else:
            self._config = config

        profiles = self._store.load(KEY_PROFILE_FILENAME, KeyProfiles)
        if profiles is None:
            self.save_key_profiles(default_key_profiles())
        else:
            self._key_profiles = profiles

        calibration = self._store.load(CALIBRATION_FILENAME, Calibration)
        if calibration is None:
            # Calibrate with the joystick's present position.
            self.save_calibration(Calibration(self._joystick.x(), self._joystick.y()))
        else:
            self._calibration = calibration

    def save_config(self, config: Config) -> None:
        self._config = copy.deepcopy(config)
        self._store.save(CONFIG_FILENAME, config)

    def save_key_profiles(self, profiles: KeyProfiles) -> None:
        self._key_profiles = copy.deepcopy(profiles)
        self._store.save(KEY_PROFILE_FILENAME, profiles)

    def save_calibration(self, calibration: Calibration) -> None:
        self._calibration = copy.deepcopy(calibration)
        self._store.save(CALIBRATION_FILENAME, calibration)