"""The four-band isolator: band splitting, smoothed gains and bypasses, state."""

from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np

from .filters import (
    DCBlocker,
    FilterChain,
    IIRFilter,
    dc_blocker_coefficient,
    make_high_pass,
    make_low_pass,
)
from .params import (
    LOW_LOWMID_CROSSOVER_FREQ,
    LOWMID_MID_CROSSOVER_FREQ,
    MID_HIGH_CROSSOVER_FREQ,
    Band,
    FloatParameter,
    ParameterSet,
)
from .smoothing import LinearSmoothedValue, decibels_to_gain, smooth_step
from .state import (
    copy_xml_to_binary,
    get_xml_from_binary,
    state_from_xml,
    state_to_xml,
)

GAIN_RAMP_SECONDS = {
    Band.LOW: 0.160,
    Band.LOW_MID: 0.015,
    Band.MID: 0.012,
    Band.HIGH: 0.010,
}
BYPASS_RAMP_SECONDS = {
    Band.LOW: 0.080,
    Band.LOW_MID: 0.050,
    Band.MID: 0.040,
    Band.HIGH: 0.025,
}
DC_BLOCKER_CUTOFF = 5.0


def _band_chain(band: Band, sample_rate: float) -> FilterChain:
    if band is Band.LOW:
        coeffs = make_low_pass(sample_rate, LOW_LOWMID_CROSSOVER_FREQ)
        return FilterChain(IIRFilter(coeffs), IIRFilter(coeffs))
    if band is Band.LOW_MID:
        return FilterChain(
            IIRFilter(make_high_pass(sample_rate, LOW_LOWMID_CROSSOVER_FREQ)),
            IIRFilter(make_low_pass(sample_rate, LOWMID_MID_CROSSOVER_FREQ)),
        )
    if band is Band.MID:
        return FilterChain(
            IIRFilter(make_high_pass(sample_rate, LOWMID_MID_CROSSOVER_FREQ)),
            IIRFilter(make_low_pass(sample_rate, MID_HIGH_CROSSOVER_FREQ)),
        )
    coeffs = make_high_pass(sample_rate, MID_HIGH_CROSSOVER_FREQ)
    return FilterChain(IIRFilter(coeffs), IIRFilter(coeffs))


class EQIsolatorProcessor:
    """Splits each channel into four bands and mixes them back with per-band gain."""

    name = "EQIsolator4"
    accepts_midi = False
    produces_midi = False
    is_midi_effect = False
    tail_length_seconds = 0.0
    num_programs = 1

    def __init__(self, channels: int = 2) -> None:
        if not self.is_buses_layout_supported(channels, channels):
            raise ValueError("only mono or stereo layouts are supported")
        self.channels = channels
        self.params = ParameterSet()
        self._gain_smoothers = {band: LinearSmoothedValue() for band in Band}
        self._bypass_smoothers = {band: LinearSmoothedValue(1.0) for band in Band}
        self._sample_rate: Optional[float] = None
        self._block_size = 0
        self._chains: List[Dict[Band, FilterChain]] = []
        self._dc_blockers: List[DCBlocker] = []

    def __repr__(self) -> str:
        return (
            f"EQIsolatorProcessor(channels={self.channels}, "
            f"sample_rate={self._sample_rate})"
        )

    @property
    def sample_rate(self) -> Optional[float]:
        return self._sample_rate

    @property
    def is_prepared(self) -> bool:
        return self._sample_rate is not None

    def prepare_to_play(self, sample_rate: float, samples_per_block: int) -> None:
        """Reset smoothing and filters for a new sample rate and block size."""
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        if samples_per_block <= 0:
            raise ValueError("block size must be positive")
        sample_rate = float(sample_rate)
        for band in Band:
            gain = self._gain_smoothers[band]
            gain.reset(sample_rate, GAIN_RAMP_SECONDS[band])
            gain.set_current_and_target_value(self.params.gain(band).value)
            bypass = self._bypass_smoothers[band]
            bypass.reset(sample_rate, BYPASS_RAMP_SECONDS[band])
            bypass.set_current_and_target_value(self._bypass_target(band))

        self._chains = [
            {band: _band_chain(band, sample_rate) for band in Band}
            for _ in range(self.channels)
        ]
        r = dc_blocker_coefficient(DC_BLOCKER_CUTOFF, sample_rate)
        self._dc_blockers = [DCBlocker(r) for _ in range(self.channels)]
        self._sample_rate = sample_rate
        self._block_size = int(samples_per_block)

    def release_resources(self) -> None:
        """Drop the filter state; prepare_to_play must be called again before processing."""
        self._chains = []
        self._dc_blockers = []
        self._sample_rate = None
        self._block_size = 0

    @staticmethod
    def is_buses_layout_supported(input_channels: int, output_channels: int) -> bool:
        """Mono or stereo, with as many inputs as outputs."""
        return output_channels in (1, 2) and input_channels == output_channels

    def _bypass_target(self, band: Band) -> float:
        return 0.0 if self.params.bypass(band).value else 1.0

    def process_block(self, buffer) -> np.ndarray:
        """Process a (channels, samples) block and return the result."""
        if not self.is_prepared:
            raise RuntimeError("prepare_to_play must be called before processing")
        data = np.array(buffer, dtype=float)
        if data.ndim != 2:
            raise ValueError("buffer must be two-dimensional (channels, samples)")
        num_channels, num_samples = data.shape
        if num_channels > self.channels:
            raise ValueError(
                f"buffer has {num_channels} channels, processor has {self.channels}"
            )

        if self.params.all_neutral():
            return data

        for band in Band:
            self._gain_smoothers[band].set_target_value(self.params.gain(band).value)
            self._bypass_smoothers[band].set_target_value(self._bypass_target(band))

        weights = {}
        for band in Band:
            gains = np.array(
                [
                    decibels_to_gain(db)
                    for db in self._gain_smoothers[band].next_values(num_samples)
                ]
            )
            bypasses = np.array(
                [
                    smooth_step(v)
                    for v in self._bypass_smoothers[band].next_values(num_samples)
                ]
            )
            weights[band] = gains * bypasses

        output = np.empty_like(data)
        for channel, (row, chains, dc_blocker) in enumerate(
            zip(data, self._chains, self._dc_blockers)
        ):
            mixed = np.zeros(num_samples)
            for band in Band:
                band_signal = chains[band].process(row)
                if band is Band.LOW:
                    band_signal = dc_blocker.process(band_signal)
                mixed += band_signal * weights[band]
            output[channel] = mixed
        return output

    def get_state_information(self) -> bytes:
        """Return the current parameter values as a binary state block."""
        return copy_xml_to_binary(state_to_xml(self.params.values()))

    def set_state_information(self, data: bytes) -> None:
        """Restore parameters from a state block; unreadable data is ignored."""
        xml_text = get_xml_from_binary(data)
        if xml_text is None:
            return
        try:
            values = state_from_xml(xml_text)
        except ValueError:
            return
        for parameter_id, value in values.items():
            parameter = self.params.by_id(parameter_id)
            if isinstance(parameter, FloatParameter):
                parameter.value = parameter.range.snap_to_legal_value(value)
            else:
                parameter.value = bool(value)