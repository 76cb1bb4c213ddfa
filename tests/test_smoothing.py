import numpy as np
import pytest

from eqisolator.smoothing import LinearSmoothedValue, decibels_to_gain, smooth_step


def test_unity_gain_at_zero_db():
    assert decibels_to_gain(0.0) == 1.0


def test_floor_is_silence():
    assert decibels_to_gain(-100.0) == 0.0
    assert decibels_to_gain(-150.0) == 0.0
    assert decibels_to_gain(-99.0) > 0.0


def test_custom_floor():
    assert decibels_to_gain(-50.0, -40.0) == 0.0
    assert decibels_to_gain(-30.0, -40.0) > 0.0


@pytest.mark.parametrize("a,b", [(6.0, -3.0), (-20.0, -20.0), (12.0, 12.0)])
def test_decibels_add_as_gains_multiply(a, b):
    assert decibels_to_gain(a + b) == pytest.approx(decibels_to_gain(a) * decibels_to_gain(b))


def test_smooth_step_endpoints_and_clamp():
    assert smooth_step(0.0) == 0.0
    assert smooth_step(1.0) == 1.0
    assert smooth_step(-2.0) == 0.0
    assert smooth_step(3.0) == 1.0


@pytest.mark.parametrize("x", [0.1, 0.25, 0.4, 0.5])
def test_smooth_step_symmetry(x):
    assert smooth_step(x) + smooth_step(1.0 - x) == pytest.approx(1.0)


def test_smooth_step_monotonic():
    values = [smooth_step(i / 100) for i in range(101)]
    assert all(b >= a for a, b in zip(values, values[1:]))


def test_linear_ramp_reaches_target():
    sv = LinearSmoothedValue()
    sv.reset(1000.0, 0.01)
    assert sv.steps_to_target == 10
    sv.set_current_and_target_value(0.0)
    sv.set_target_value(2.0)
    assert sv.is_smoothing()
    ramp = sv.next_values(10)
    assert ramp[-1] == 2.0
    assert np.allclose(np.diff(ramp), ramp[0])
    assert not sv.is_smoothing()
    assert sv.next_value() == 2.0


def test_same_target_does_not_restart():
    sv = LinearSmoothedValue()
    sv.reset(1000.0, 0.01)
    sv.set_target_value(4.0)
    sv.next_values(5)
    sv.set_target_value(4.0)
    remaining = sv.next_values(5)
    assert remaining[-1] == 4.0
    assert not sv.is_smoothing()


def test_zero_ramp_jumps():
    sv = LinearSmoothedValue(1.0)
    sv.reset(48000.0, 0.0)
    sv.set_target_value(-6.0)
    assert not sv.is_smoothing()
    assert sv.current_value == -6.0


def test_reset_keeps_target_and_stops_ramp():
    sv = LinearSmoothedValue()
    sv.reset(1000.0, 0.01)
    sv.set_target_value(3.0)
    sv.next_value()
    sv.reset(1000.0, 0.02)
    assert not sv.is_smoothing()
    assert sv.current_value == sv.target_value == 3.0


def test_invalid_reset_raises():
    sv = LinearSmoothedValue()
    with pytest.raises(ValueError):
        sv.reset(0.0, 0.1)
    with pytest.raises(ValueError):
        sv.reset(44100.0, -0.1)


def test_negative_count_raises():
    with pytest.raises(ValueError):
        LinearSmoothedValue().next_values(-1)