import math

import numpy as np
import pytest

from eqisolator.filters import (
    DCBlocker,
    FilterChain,
    IIRFilter,
    dc_blocker_coefficient,
    make_high_pass,
    make_low_pass,
)

FS = 44100.0


def test_low_pass_response_shape():
    c = make_low_pass(FS, 200.0)
    assert c.magnitude_at(0.0, FS) == pytest.approx(1.0)
    assert c.magnitude_at(FS / 2, FS) == pytest.approx(0.0, abs=1e-9)
    assert c.magnitude_at(200.0, FS) == pytest.approx(1 / math.sqrt(2), rel=1e-6)


def test_high_pass_response_shape():
    c = make_high_pass(FS, 3000.0)
    assert c.magnitude_at(0.0, FS) == pytest.approx(0.0, abs=1e-12)
    assert c.magnitude_at(FS / 2, FS) == pytest.approx(1.0)
    assert c.magnitude_at(3000.0, FS) == pytest.approx(c.magnitude_at(3000.0, FS))


@pytest.mark.parametrize("cutoff", [200.0, 750.0, 3000.0])
@pytest.mark.parametrize("freq", [50.0, 500.0, 2000.0, 10000.0])
def test_butterworth_pair_is_power_complementary(cutoff, freq):
    low = make_low_pass(FS, cutoff).magnitude_at(freq, FS)
    high = make_high_pass(FS, cutoff).magnitude_at(freq, FS)
    assert low**2 + high**2 == pytest.approx(1.0, rel=1e-9)


@pytest.mark.parametrize(
    "sample_rate,frequency,q",
    [(0.0, 200.0, 0.7), (FS, 0.0, 0.7), (FS, FS, 0.7), (FS, 200.0, 0.0)],
)
def test_invalid_design_raises(sample_rate, frequency, q):
    with pytest.raises(ValueError):
        make_low_pass(sample_rate, frequency, q)
    with pytest.raises(ValueError):
        make_high_pass(sample_rate, frequency, q)


def test_step_responses_settle():
    ones = np.ones(5000)
    assert IIRFilter(make_low_pass(FS, 200.0)).process(ones)[-1] == pytest.approx(1.0, abs=1e-6)
    assert IIRFilter(make_high_pass(FS, 200.0)).process(ones)[-1] == pytest.approx(0.0, abs=1e-6)


def test_sine_amplitude_matches_response():
    c = make_low_pass(FS, 200.0)
    t = np.arange(8820) / FS
    out = IIRFilter(c).process(np.sin(2 * np.pi * 1000.0 * t))
    assert np.max(np.abs(out[-2000:])) == pytest.approx(c.magnitude_at(1000.0, FS), rel=1e-2)


def test_block_processing_is_continuous():
    rng = np.random.default_rng(1)
    signal = rng.standard_normal(1000)
    whole = IIRFilter(make_high_pass(FS, 750.0)).process(signal)
    split = IIRFilter(make_high_pass(FS, 750.0))
    joined = np.concatenate([split.process(signal[:333]), split.process(signal[333:])])
    assert np.allclose(whole, joined)


def test_reset_clears_state():
    f = IIRFilter(make_low_pass(FS, 750.0))
    signal = np.linspace(-1.0, 1.0, 256)
    first = f.process(signal)
    f.reset()
    assert np.array_equal(f.process(signal), first)


def test_process_rejects_two_dimensional_input():
    with pytest.raises(ValueError):
        IIRFilter(make_low_pass(FS, 200.0)).process(np.zeros((2, 4)))


def test_chain_applies_stages_in_order():
    rng = np.random.default_rng(2)
    signal = rng.standard_normal(512)
    hp, lp = make_high_pass(FS, 200.0), make_low_pass(FS, 750.0)
    chain = FilterChain(IIRFilter(hp), IIRFilter(lp))
    expected = IIRFilter(lp).process(IIRFilter(hp).process(signal))
    assert len(chain) == 2
    assert np.allclose(chain.process(signal), expected)
    chain.reset()
    assert np.allclose(chain.process(signal), expected)


def test_dc_blocker_coefficient_properties():
    assert dc_blocker_coefficient(0.0, FS) == 1.0
    r5 = dc_blocker_coefficient(5.0, FS)
    assert 0.0 < r5 < 1.0
    assert dc_blocker_coefficient(50.0, FS) < r5
    with pytest.raises(ValueError):
        dc_blocker_coefficient(5.0, 0.0)


def test_dc_blocker_removes_constant():
    blocker = DCBlocker(dc_blocker_coefficient(5.0, FS))
    out = blocker.process(np.ones(20000))
    assert out[0] == 1.0
    assert abs(out[-1]) < 1e-4


def test_dc_blocker_continuity_and_reset():
    rng = np.random.default_rng(3)
    signal = rng.standard_normal(400)
    r = dc_blocker_coefficient(5.0, FS)
    whole = DCBlocker(r).process(signal)
    split = DCBlocker(r)
    joined = np.concatenate([split.process(signal[:100]), split.process(signal[100:])])
    assert np.allclose(whole, joined)
    split.reset()
    assert np.allclose(split.process(signal), whole)