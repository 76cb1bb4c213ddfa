"""Second-order IIR filters and a one-pole DC blocker."""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass
from typing import Iterable, Tuple

import numpy as np

BUTTERWORTH_Q = 1.0 / math.sqrt(2.0)
_DENORMAL_LIMIT = 1.0e-8


@dataclass(frozen=True)
class BiquadCoefficients:
    """Biquad coefficients normalised so that a0 is 1."""

    b0: float
    b1: float
    b2: float
    a1: float
    a2: float

    def magnitude_at(self, frequency: float, sample_rate: float) -> float:
        """Magnitude of the frequency response at ``frequency`` Hz."""
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        if frequency < 0:
            raise ValueError("frequency must not be negative")
        z = cmath.exp(-2j * math.pi * frequency / sample_rate)
        numerator = self.b0 + self.b1 * z + self.b2 * z * z
        denominator = 1.0 + self.a1 * z + self.a2 * z * z
        return abs(numerator / denominator)


def _prewarp(sample_rate: float, frequency: float, q: float) -> Tuple[float, float]:
    if sample_rate <= 0:
        raise ValueError("sample rate must be positive")
    if not 0 < frequency <= sample_rate * 0.5:
        raise ValueError("frequency must lie between 0 and the Nyquist frequency")
    if q <= 0:
        raise ValueError("Q must be positive")
    n = 1.0 / math.tan(math.pi * frequency / sample_rate)
    inv_q = 1.0 / q
    c1 = 1.0 / (1.0 + inv_q * n + n * n)
    return n, c1


def make_low_pass(
    sample_rate: float, frequency: float, q: float = BUTTERWORTH_Q
) -> BiquadCoefficients:
    n, c1 = _prewarp(sample_rate, frequency, q)
    inv_q = 1.0 / q
    return BiquadCoefficients(
        c1, c1 * 2.0, c1, c1 * 2.0 * (1.0 - n * n), c1 * (1.0 - inv_q * n + n * n)
    )


def make_high_pass(
    sample_rate: float, frequency: float, q: float = BUTTERWORTH_Q
) -> BiquadCoefficients:
    n, c1 = _prewarp(sample_rate, frequency, q)
    inv_q = 1.0 / q
    return BiquadCoefficients(
        c1, -c1 * 2.0, c1, c1 * 2.0 * (n * n - 1.0), c1 * (1.0 - inv_q * n + n * n)
    )


def _as_signal(samples: Iterable[float]) -> np.ndarray:
    data = np.asarray(samples, dtype=float)
    if data.ndim != 1:
        raise ValueError("samples must be one-dimensional")
    return data


def _snap_to_zero(value: float) -> float:
    return 0.0 if -_DENORMAL_LIMIT <= value <= _DENORMAL_LIMIT else value


class IIRFilter:
    """A biquad in transposed direct form II that keeps its state between blocks."""

    def __init__(self, coefficients: BiquadCoefficients) -> None:
        self.coefficients = coefficients
        self._s1 = 0.0
        self._s2 = 0.0

    def reset(self) -> None:
        self._s1 = self._s2 = 0.0

    def process(self, samples: Iterable[float]) -> np.ndarray:
        data = _as_signal(samples)
        c = self.coefficients
        b0, b1, b2, a1, a2 = c.b0, c.b1, c.b2, c.a1, c.a2
        s1, s2 = self._s1, self._s2
        out = []
        for x in data.tolist():
            y = b0 * x + s1
            s1 = b1 * x - a1 * y + s2
            s2 = b2 * x - a2 * y
            out.append(y)
        self._s1, self._s2 = _snap_to_zero(s1), _snap_to_zero(s2)
        return np.array(out, dtype=float)


class FilterChain:
    """Filters applied one after another."""

    def __init__(self, *filters: IIRFilter) -> None:
        self.filters = tuple(filters)

    def __len__(self) -> int:
        return len(self.filters)

    def __getitem__(self, index: int) -> IIRFilter:
        return self.filters[index]

    def process(self, samples: Iterable[float]) -> np.ndarray:
        data = _as_signal(samples)
        for stage in self.filters:
            data = stage.process(data)
        return data

    def reset(self) -> None:
        for stage in self.filters:
            stage.reset()


def dc_blocker_coefficient(cutoff: float, sample_rate: float) -> float:
    """Pole radius of a one-pole DC blocker with the given cutoff."""
    if sample_rate <= 0:
        raise ValueError("sample rate must be positive")
    if cutoff < 0:
        raise ValueError("cutoff must not be negative")
    return math.exp(-2.0 * math.pi * cutoff / sample_rate)


class DCBlocker:
    """First-order high-pass y[n] = x[n] - x[n-1] + r * y[n-1]."""

    def __init__(self, r: float) -> None:
        self.r = float(r)
        self._prev_x = 0.0
        self._prev_y = 0.0

    def reset(self) -> None:
        self._prev_x = self._prev_y = 0.0

    def process(self, samples: Iterable[float]) -> np.ndarray:
        data = _as_signal(samples)
        r = self.r
        prev_x, prev_y = self._prev_x, self._prev_y
        out = []
        for x in data.tolist():
            y = x - prev_x + r * prev_y
            out.append(y)
            prev_x, prev_y = x, y
        self._prev_x, self._prev_y = prev_x, prev_y
        return np.array(out, dtype=float)