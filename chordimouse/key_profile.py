"""Chord to HID scancode tables."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Iterator, Mapping

from chordimouse.serialization import DeserializationError, Serializable

_COUNT = struct.Struct("<H")
_ENTRY = struct.Struct("<HB")

ENTRY_SIZE = _ENTRY.size
PROFILE_COUNT = 2


def _check(chord: int, scancode: int) -> None:
    if not 0 <= chord <= 0xFFFF:
        raise ValueError(f"chord out of range: {chord}")
    if not 0 <= scancode <= 0xFF:
        raise ValueError(f"scancode out of range: {scancode}")


class KeyProfile(Serializable):
    """Map from a chord (bits of Input) to a HID scancode."""

    ENTRY_SIZE = ENTRY_SIZE
    MAX_SIZE = _COUNT.size + ENTRY_SIZE * 30

    def __init__(
        self, chords: Mapping[int, int] | Iterable[tuple[int, int]] = ()
    ) -> None:
        self._map: dict[int, int] = {}
        pairs = chords.items() if isinstance(chords, Mapping) else chords
        for chord, scancode in pairs:
            _check(chord, scancode)
            self._map.setdefault(chord, scancode)

    def set_chord(self, chord: int, scancode: int) -> None:
        _check(chord, scancode)
        self._map[chord] = scancode

    def exists(self, chord: int) -> bool:
        return chord in self._map

    def scancode(self, chord: int) -> int:
        """Scancode for the chord, 0 when the chord is not mapped."""
        return self._map.get(chord, 0)

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[int]:
        return iter(self._map)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyProfile):
            return NotImplemented
        return self._map == other._map

    def __repr__(self) -> str:
        return f"KeyProfile({self._map!r})"

    def serialized_size(self) -> int:
        return _COUNT.size + ENTRY_SIZE * len(self._map)

    def to_bytes(self) -> bytes:
        entries = b"".join(_ENTRY.pack(c, s) for c, s in self._map.items())
        return _COUNT.pack(len(self._map)) + entries

    @classmethod
    def from_bytes(cls, data: bytes) -> KeyProfile:
        view = memoryview(data)
        if len(view) < _COUNT.size:
            raise DeserializationError("key profile is too short")
        (count,) = _COUNT.unpack_from(view)
        end = _COUNT.size + count * ENTRY_SIZE
        if end > len(view):
            raise DeserializationError(
                f"key profile declares {count} entries but data is too short"
            )
        profile = cls()
        for chord, scancode in _ENTRY.iter_unpack(view[_COUNT.size:end]):
            profile._map[chord] = scancode
        return profile


class KeyProfiles(Serializable):
    """Fixed set of key profiles: index 0 is normal, index 1 is the Fn layer."""

    PROFILE_COUNT = PROFILE_COUNT
    MAX_SIZE = 1 + KeyProfile.MAX_SIZE * PROFILE_COUNT

    def __init__(self, profiles: Iterable[KeyProfile] = ()) -> None:
        given = list(profiles)
        if len(given) > PROFILE_COUNT:
            raise ValueError(f"at most {PROFILE_COUNT} profiles, got {len(given)}")
        self._profiles = given + [KeyProfile() for _ in range(PROFILE_COUNT - len(given))]

    def __getitem__(self, index: int) -> KeyProfile:
        return self._profiles[index]

    def __setitem__(self, index: int, profile: KeyProfile) -> None:
        if not isinstance(profile, KeyProfile):
            raise TypeError("expected a KeyProfile")
        self._profiles[index] = profile

    def __len__(self) -> int:
        return len(self._profiles)

    def __iter__(self) -> Iterator[KeyProfile]:
        return iter(self._profiles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyProfiles):
            return NotImplemented
        return self._profiles == other._profiles

    def __repr__(self) -> str:
        return f"KeyProfiles({self._profiles!r})"

    def serialized_size(self) -> int:
        return 1 + sum(profile.serialized_size() for profile in self._profiles)

    def to_bytes(self) -> bytes:
        body = b"".join(profile.to_bytes() for profile in self._profiles)
        return bytes([len(self._profiles)]) + body

    @classmethod
    def from_bytes(cls, data: bytes) -> KeyProfiles:
        view = memoryview(data)
        if not view:
            raise DeserializationError("key profiles are empty")
        count = view[0]
        if count > PROFILE_COUNT:
            raise DeserializationError(f"too many key profiles: {count}")
        offset = 1
        profiles = []
        for _ in range(count):
            profile = KeyProfile.from_bytes(view[offset:])
            profiles.append(profile)
            offset += profile.serialized_size()
        return cls(profiles)