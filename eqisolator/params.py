"""Parameter definitions for the four-band isolator EQ."""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Dict, Iterator, Optional, Union

LOW_LOWMID_CROSSOVER_FREQ = 200.0
LOWMID_MID_CROSSOVER_FREQ = 750.0
MID_HIGH_CROSSOVER_FREQ = 3000.0


class Band(Enum):
    """The four frequency bands, in processing order."""

    LOW = ("low", "Low Gain (20-200Hz)", "Low Band Bypass")
    LOW_MID = ("lowmid", "Low-Mid Gain (200-750Hz)", "Low-Mid Band Bypass")
    MID = ("mid", "Mid Gain (750Hz-3kHz)", "Mid Band Bypass")
    HIGH = ("high", "High Gain (3-20kHz)", "High Band Bypass")

    def __init__(self, key: str, gain_name: str, bypass_name: str) -> None:
        self.key = key
        self.gain_name = gain_name
        self.bypass_name = bypass_name

    @property
    def gain_id(self) -> str:
        return f"{self.key}_gain"

    @property
    def bypass_id(self) -> str:
        return f"{self.key}_bypass"


class NormalisableRange:
    """A value range with an optional step interval and skew."""

    def __init__(
        self, start: float, end: float, interval: float = 0.0, skew: float = 1.0
    ) -> None:
        if end <= start:
            raise ValueError("range end must be greater than its start")
        if interval < 0:
            raise ValueError("interval must not be negative")
        if skew <= 0:
            raise ValueError("skew must be positive")
        self.start = float(start)
        self.end = float(end)
        self.interval = float(interval)
        self.skew = float(skew)

    def __repr__(self) -> str:
        return (
            f"NormalisableRange({self.start}, {self.end}, "
            f"interval={self.interval}, skew={self.skew})"
        )

    def clamp(self, value: float) -> float:
        return min(max(float(value), self.start), self.end)

    def snap_to_legal_value(self, value: float) -> float:
        """Round to the nearest interval step and clamp into the range."""
        value = float(value)
        if self.interval > 0:
            value = self.start + self.interval * math.floor(
                (value - self.start) / self.interval + 0.5
            )
        if value <= self.start:
            return self.start
        if value >= self.end:
            return self.end
        return value

    def convert_to_0to1(self, value: float) -> float:
        proportion = (self.clamp(value) - self.start) / (self.end - self.start)
        if self.skew == 1.0:
            return proportion
        return proportion**self.skew

    def convert_from_0to1(self, proportion: float) -> float:
        proportion = min(max(float(proportion), 0.0), 1.0)
        if self.skew != 1.0 and proportion > 0.0:
            proportion = math.exp(math.log(proportion) / self.skew)
        return self.start + (self.end - self.start) * proportion


GAIN_RANGE = NormalisableRange(-100.0, 24.0, 0.1)


def format_gain(value: float) -> str:
    """Format a gain in decibels with one decimal place."""
    return f"{value:.1f} dB"


class FloatParameter:
    """A continuous parameter whose value is kept inside its range."""

    def __init__(
        self,
        parameter_id: str,
        name: str,
        value_range: NormalisableRange,
        default: float,
        string_from_value: Optional[Callable[[float], str]] = None,
    ) -> None:
        self.parameter_id = parameter_id
        self.name = name
        self.range = value_range
        self.default = value_range.clamp(default)
        self._string_from_value = string_from_value
        self._value = self.default

    def __repr__(self) -> str:
        return f"FloatParameter({self.parameter_id!r}, value={self._value})"

    @property
    def value(self) -> float:
        return self._value

    @value.setter
    def value(self, new_value: float) -> None:
        self._value = self.range.clamp(new_value)

    @property
    def normalised(self) -> float:
        return self.range.convert_to_0to1(self._value)

    def set_normalised(self, proportion: float) -> None:
        self._value = self.range.convert_from_0to1(proportion)

    def text(self) -> str:
        if self._string_from_value is not None:
            return self._string_from_value(self._value)
        return f"{self._value:.2f}"


class BoolParameter:
    """An on/off parameter."""

    def __init__(self, parameter_id: str, name: str, default: bool = False) -> None:
        self.parameter_id = parameter_id
        self.name = name
        self.default = bool(default)
        self._value = self.default

    def __repr__(self) -> str:
        return f"BoolParameter({self.parameter_id!r}, value={self._value})"

    @property
    def value(self) -> bool:
        return self._value

    @value.setter
    def value(self, new_value: bool) -> None:
        self._value = bool(new_value)

    def text(self) -> str:
        return "On" if self._value else "Off"


Parameter = Union[FloatParameter, BoolParameter]


class ParameterSet:
    """The gain and bypass parameters of all four bands."""

    def __init__(self) -> None:
        self._gains: Dict[Band, FloatParameter] = {
            band: FloatParameter(
                band.gain_id, band.gain_name, GAIN_RANGE, 0.0, format_gain
            )
            for band in Band
        }
        self._bypasses: Dict[Band, BoolParameter] = {
            band: BoolParameter(band.bypass_id, band.bypass_name, False)
            for band in Band
        }
        self._by_id: Dict[str, Parameter] = {p.parameter_id: p for p in self}

    def __iter__(self) -> Iterator[Parameter]:
        yield from self._gains.values()
        yield from self._bypasses.values()

    def __len__(self) -> int:
        return len(self._gains) + len(self._bypasses)

    def gain(self, band: Band) -> FloatParameter:
        return self._gains[band]

    def bypass(self, band: Band) -> BoolParameter:
        return self._bypasses[band]

    def by_id(self, parameter_id: str) -> Parameter:
        try:
            return self._by_id[parameter_id]
        except KeyError:
            raise KeyError(f"unknown parameter id: {parameter_id!r}") from None

    def all_neutral(self) -> bool:
        """True when every gain is 0 dB and no band is bypassed."""
        return all(p.value == 0.0 for p in self._gains.values()) and not any(
            p.value for p in self._bypasses.values()
        )

    def values(self) -> Dict[str, Union[float, bool]]:
        return {p.parameter_id: p.value for p in self}