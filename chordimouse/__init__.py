"""Chord keyboard and joystick mouse device logic: input detection, cursor movement, key profiles and settings storage."""

__version__ = "0.1.0"