"""Cursor movement computed from joystick deflection with a negative-inertia transfer function."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from chordimouse.hardware import Clock

Z_MAX = 255
RAW_MAX = 512
OUT_MAX = 255

_UINT32_MASK = 0xFFFFFFFF
_INT8_MIN = -128
_INT8_MAX = 127
_RESIDUAL_DECAY = 0.95


def _div_trunc(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def _int32(value: int) -> int:
    value &= _UINT32_MASK
    return value - (1 << 32) if value >= (1 << 31) else value


def _int8_clamped(value: float) -> int:
    return max(_INT8_MIN, min(_INT8_MAX, int(value)))


@dataclass(frozen=True)
class MoveCursor:
    """Cursor movement of one report, in mickeys."""

    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Velocity:
    """Cursor speed in mickeys per second."""

    x: float = 0.0
    y: float = 0.0


def magnitude(x: int, y: int) -> int:
    """Approximate length of the (x, y) push, capped at Z_MAX."""
    ax, ay = abs(x), abs(y)
    z = ax + ay - (2 * min(ax, ay)) // 3
    return min(z, Z_MAX)


def transfer_function(zi: int, scale: float) -> float:
    """Mickeys per second for an inertia-corrected magnitude."""
    if zi <= 3:
        return 0.0
    if zi <= 10:
        return 18.0 * scale
    if zi <= 16:
        return 56.0 * scale
    if zi <= 19:
        return (zi - 15) * 56.0 * scale
    if zi <= 30:
        return (zi - 1) * 16.0 * scale
    if zi <= 38:
        return (zi - 11) * 25.0 * scale
    if zi <= 49:
        return 704.0 * scale
    if zi <= 200:
        return (zi - 40.0) * 74.0 * scale
    return zi * 80.0 * scale


def _axis_velocity(move: int, speed: float, zi: int, zi_abs: int) -> float:
    if zi_abs == 0:
        return 0.0
    ratio = speed / zi_abs
    return move * (-ratio if zi < 0 else ratio)


class VelocityStrategy(Protocol):
    def velocity(self, move_x: int, move_y: int) -> Velocity: ...


@dataclass
class NegativeInertiaStrategy:
    """Speed from the push magnitude, overshooting on changes of force."""

    gain: int = 6
    mickey_scale: float = 50.0 / Z_MAX
    _z0: int = field(default=0, init=False, repr=False)
    _initialized: bool = field(default=False, init=False, repr=False)

    def velocity(self, move_x: int, move_y: int) -> Velocity:
        """Velocity for a raw axis offset in the range -512..512."""
        x = _div_trunc(move_x * OUT_MAX + RAW_MAX // 2, RAW_MAX)
        y = _div_trunc(move_y * OUT_MAX + RAW_MAX // 2, RAW_MAX)

        z = magnitude(x, y)
        if z == 0:
            return Velocity(0.0, 0.0)

        if not self._initialized:
            self._z0 = z
            self._initialized = True

        zi = _int32((z - self._z0) * self.gain + z)
        self._z0 = z

        zi_abs = abs(zi)
        speed = transfer_function(zi_abs, self.mickey_scale)
        return Velocity(
            _axis_velocity(x, speed, zi, zi_abs),
            _axis_velocity(y, speed, zi, zi_abs),
        )


class Sampler:
    """Integrates velocity over time and releases whole mickeys every interval."""

    def __init__(
        self,
        interval_ms: int,
        strategy: VelocityStrategy | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.interval_ms = interval_ms
        self._strategy = strategy if strategy is not None else NegativeInertiaStrategy()
        self._clock = clock if clock is not None else Clock()
        self._distance_x = 0.0
        self._distance_y = 0.0
        self._last_sampled_us = 0
        self._last_interval_ms = 0

    @property
    def strategy(self) -> VelocityStrategy:
        return self._strategy

    def reset(self) -> None:
        """Restart the sampling and reporting timers from now."""
        self._last_sampled_us = self._clock.micros()
        self._last_interval_ms = self._clock.millis()

    def update(self, x: int, y: int) -> None:
        """Add the distance covered since the previous sample."""
        now = self._clock.micros()
        velocity = self._strategy.velocity(x, y)
        delta_t = ((now - self._last_sampled_us) & _UINT32_MASK) / 1_000_000
        self._distance_x += velocity.x * delta_t
        self._distance_y += velocity.y * delta_t
        self._last_sampled_us = now

    def move_cursor(self, x: int, y: int) -> MoveCursor:
        """Sample, then return the whole movement if an interval has passed."""
        self.update(x, y)

        now = self._clock.millis()
        if ((now - self._last_interval_ms) & _UINT32_MASK) < self.interval_ms:
            return MoveCursor(0, 0)

        move = MoveCursor(_int8_clamped(self._distance_x), _int8_clamped(self._distance_y))
        self._last_interval_ms = now

        # Keep the fractional remainder, but let it fade so it cannot drift.
        self._distance_x = (self._distance_x - move.x) * _RESIDUAL_DECAY
        self._distance_y = (self._distance_y - move.y) * _RESIDUAL_DECAY
        return move