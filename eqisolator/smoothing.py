"""Gain conversion and linear parameter smoothing."""

from __future__ import annotations

import math

import numpy as np


def decibels_to_gain(decibels: float, minus_infinity_db: float = -100.0) -> float:
    """Convert decibels to linear gain; at or below the floor the gain is zero."""
    if decibels > minus_infinity_db:
        return 10.0 ** (decibels * 0.05)
    return 0.0


def smooth_step(x: float) -> float:
    """Cubic ease curve on [0, 1], clamping its input."""
    x = min(max(float(x), 0.0), 1.0)
    return x * x * (3.0 - 2.0 * x)


class LinearSmoothedValue:
    """A value that ramps linearly to its target over a fixed number of steps."""

    def __init__(self, initial_value: float = 0.0) -> None:
        self._current = float(initial_value)
        self._target = float(initial_value)
        self._step = 0.0
        self._countdown = 0
        self._steps_to_target = 0

    def __repr__(self) -> str:
        return (
            f"LinearSmoothedValue(current={self._current}, target={self._target}, "
            f"remaining={self._countdown})"
        )

    @property
    def current_value(self) -> float:
        return self._current

    @property
    def target_value(self) -> float:
        return self._target

    @property
    def steps_to_target(self) -> int:
        return self._steps_to_target

    def reset(self, sample_rate: float, ramp_seconds: float) -> None:
        """Set the ramp length and jump to the current target."""
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        if ramp_seconds < 0:
            raise ValueError("ramp length must not be negative")
        self._steps_to_target = int(math.floor(ramp_seconds * sample_rate))
        self.set_current_and_target_value(self._target)

    def set_current_and_target_value(self, value: float) -> None:
        self._current = self._target = float(value)
        self._countdown = 0

    def set_target_value(self, value: float) -> None:
        value = float(value)
        if value == self._target:
            return
        if self._steps_to_target <= 0:
            self.set_current_and_target_value(value)
            return
        self._target = value
        self._countdown = self._steps_to_target
        self._step = (self._target - self._current) / self._countdown

    def is_smoothing(self) -> bool:
        return self._countdown > 0

    def next_value(self) -> float:
        if not self.is_smoothing():
            return self._target
        self._countdown -= 1
        if self.is_smoothing():
            self._current += self._step
        else:
            self._current = self._target
        return self._current

    def next_values(self, count: int) -> np.ndarray:
        """Advance by ``count`` steps and return every value passed through."""
        if count < 0:
            raise ValueError("count must not be negative")
        return np.fromiter(
            (self.next_value() for _ in range(count)), dtype=float, count=count
        )