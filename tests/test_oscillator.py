import math

import pytest

from minigames.needle_stop.oscillator import SwingClock, angle_at


def test_centered_at_start_and_half_period():
    assert angle_at(500, 500, 1800) == pytest.approx(90)
    assert angle_at(500 + 900, 500, 1800) == pytest.approx(90)


def test_quarter_periods_hit_the_ends():
    assert angle_at(450, 0, 1800) == pytest.approx(180)
    assert angle_at(1350, 0, 1800) == pytest.approx(0)


@pytest.mark.parametrize("period", [1.0, 250.0, 1800.0, 7777.7])
def test_periodic_and_bounded(period):
    for i in range(50):
        now = 123.0 + i * period / 17.3
        a = angle_at(now, 123.0, period)
        assert 0.0 <= a <= 180.0
        assert angle_at(now + period, 123.0, period) == pytest.approx(a, abs=1e-6)


def test_before_start_time_still_in_range():
    # (now - start) negative still wraps onto the same cycle
    assert angle_at(-450, 0, 1800) == pytest.approx(angle_at(1350, 0, 1800))


def test_matches_sine_shape():
    a = angle_at(300, 0, 1800)
    assert a == pytest.approx(90 + 90 * math.sin(300 / 1800 * 2 * math.pi))


def test_no_drift_far_from_start():
    clock = SwingClock(start_time=0.0, period=1800.0)
    assert clock.angle(1800.0 * 100_000) == pytest.approx(90, abs=1e-6)


def test_rejects_non_positive_period():
    with pytest.raises(ValueError):
        angle_at(10, 0, 0)
    with pytest.raises(ValueError):
        angle_at(10, 0, -5)
