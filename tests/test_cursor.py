import pytest
from hypothesis import given
from hypothesis import strategies as st

from chordimouse.cursor import (
    MoveCursor,
    NegativeInertiaStrategy,
    Sampler,
    Velocity,
    magnitude,
    transfer_function,
)


class FakeClock:
    def __init__(self, ms=0):
        self.ms = ms

    def millis(self):
        return self.ms

    def micros(self):
        return self.ms * 1000

    def sleep_ms(self, ms):
        self.ms += ms


def test_magnitude_of_zero_is_zero():
    assert magnitude(0, 0) == 0


def test_magnitude_single_axis_equals_its_length():
    assert magnitude(40, 0) == 40
    assert magnitude(0, -40) == 40


def test_magnitude_is_capped():
    assert magnitude(1000, 1000) == 255


@given(st.integers(-600, 600), st.integers(-600, 600))
def test_magnitude_symmetric_and_bounded(x, y):
    z = magnitude(x, y)
    assert 0 <= z <= 255
    assert z == magnitude(y, x) == magnitude(-x, y) == magnitude(x, -y)


@pytest.mark.parametrize("zi,expected", [(0, 0.0), (3, 0.0), (4, 18.0), (10, 18.0), (16, 56.0), (49, 704.0)])
def test_transfer_function_table(zi, expected):
    assert transfer_function(zi, 1.0) == pytest.approx(expected)


def test_transfer_function_is_nondecreasing():
    values = [transfer_function(zi, 1.0) for zi in range(0, 1000)]
    assert all(b >= a for a, b in zip(values, values[1:]))


@given(st.integers(0, 2000), st.floats(0.001, 10.0))
def test_transfer_function_scales_linearly(zi, scale):
    assert transfer_function(zi, 2 * scale) == pytest.approx(2 * transfer_function(zi, scale))


def test_velocity_of_no_push_is_zero():
    assert NegativeInertiaStrategy().velocity(0, 0) == Velocity(0.0, 0.0)


def test_velocity_below_dead_zone_is_zero():
    assert NegativeInertiaStrategy().velocity(4, 0) == Velocity(0.0, 0.0)


def test_sudden_release_of_force_reverses_velocity():
    strategy = NegativeInertiaStrategy()
    assert strategy.velocity(512, 0).x > 0
    assert strategy.velocity(100, 0).x < 0


def test_velocity_scales_with_mickey_scale():
    slow = NegativeInertiaStrategy(mickey_scale=0.1).velocity(200, 0)
    fast = NegativeInertiaStrategy(mickey_scale=0.2).velocity(200, 0)
    assert fast.x == pytest.approx(2 * slow.x)


def test_sampler_holds_movement_until_interval():
    clock = FakeClock()
    sampler = Sampler(10, NegativeInertiaStrategy(), clock)
    sampler.reset()
    clock.ms = 5
    assert sampler.move_cursor(512, 0) == MoveCursor(0, 0)


def test_sampler_releases_movement_after_interval():
    clock = FakeClock()
    sampler = Sampler(10, NegativeInertiaStrategy(), clock)
    sampler.reset()
    clock.ms = 5
    sampler.move_cursor(512, 0)
    clock.ms = 20
    move = sampler.move_cursor(512, 0)
    assert move.x > 0
    assert move.y == 0


def test_sampler_without_input_never_moves():
    clock = FakeClock()
    sampler = Sampler(10, clock=clock)
    sampler.reset()
    for _ in range(5):
        clock.ms += 15
        assert sampler.move_cursor(0, 0) == MoveCursor(0, 0)


def test_sampler_update_accumulates_distance():
    clock = FakeClock()
    sampler = Sampler(10, NegativeInertiaStrategy(), clock)
    sampler.reset()
    clock.ms = 10
    sampler.update(0, 512)
    clock.ms = 20
    move = sampler.move_cursor(0, 512)
    assert move.y > 0
    assert move.x == 0


def test_sampler_clamps_to_report_range():
    clock = FakeClock()
    sampler = Sampler(10, NegativeInertiaStrategy(), clock)
    sampler.reset()
    clock.ms = 10_000
    move = sampler.move_cursor(512, -512)
    assert move.x == 127
    assert move.y == -128


def test_sampler_interval_is_adjustable():
    clock = FakeClock()
    sampler = Sampler(10, NegativeInertiaStrategy(), clock)
    sampler.interval_ms = 100
    sampler.reset()
    clock.ms = 50
    assert sampler.move_cursor(512, 0) == MoveCursor(0, 0)
    clock.ms = 100
    assert sampler.move_cursor(512, 0).x > 0