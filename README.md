# eqisolator

A four-band isolator equalizer for floating-point audio. The signal is split
into four bands, and each band has its own gain and its own bypass switch:

| Band    | Range          |
|---------|----------------|
| Low     | 20 Hz – 200 Hz |
| Low-Mid | 200 – 750 Hz   |
| Mid     | 750 Hz – 3 kHz |
| High    | 3 – 20 kHz     |

The crossovers at 200 Hz, 750 Hz and 3 kHz are Butterworth biquad sections run
in pairs. Each band's gain runs from −100 dB to +24 dB; −100 dB silences the
band. Gain and bypass changes are smoothed sample by sample, so moving a
control does not click. The low band also passes through a gentle DC blocker at
about 5 Hz. When every gain is at 0 dB and no band is bypassed, the processor
returns the audio untouched.

## Installation

```
pip install .
```

The only runtime dependency is numpy.

## Usage

```python
import numpy as np
from eqisolator.params import Band
from eqisolator.processor import EQIsolatorProcessor

proc = EQIsolatorProcessor()          # stereo by default; channels=1 for mono
proc.prepare_to_play(48000.0, 512)

proc.params.gain(Band.LOW).value = -100.0   # silence the low band
proc.params.bypass(Band.HIGH).value = True  # mute the high band

buffer = np.random.default_rng(0).standard_normal((2, 512))
out = proc.process_block(buffer)  # new array, one row per channel
```

`process_block` takes a two-dimensional `(channels, samples)` array and returns
the processed result; the input is not modified. Filter and smoothing state is
carried over from one block to the next. Calling it before `prepare_to_play`
(or after `release_resources`) raises `RuntimeError`.

Only mono and stereo layouts with matching input and output are supported.
`EQIsolatorProcessor.is_buses_layout_supported(input_channels, output_channels)`
tells you whether a layout is accepted, and the constructor raises
`ValueError` for any other channel count.

### Parameters

The set of parameters is available as `proc.params` (a `ParameterSet`). Look a
parameter up by band with `gain(band)` and `bypass(band)`, or by its identifier
with `by_id("low_gain")`. The identifiers are:

- `low_gain`, `lowmid_gain`, `mid_gain`, `high_gain`
- `low_bypass`, `lowmid_bypass`, `mid_bypass`, `high_bypass`

Gain values are clamped into the range when set. A gain parameter's `text()`
renders the value with one decimal place, for example `"-3.5 dB"`; a bypass
parameter's `text()` gives `"On"` or `"Off"`. `values()` returns every
parameter as a dictionary keyed by identifier.

### Saving and restoring state

```python
blob = proc.get_state_information()
other = EQIsolatorProcessor()
other.set_state_information(blob)
```

The state is an `EQIsolator4Parameters` XML element stored in a small binary
wrapper. The helpers in `eqisolator.state` (`state_to_xml`, `state_from_xml`,
`copy_xml_to_binary`, `get_xml_from_binary`) work with that format directly.
If the data does not hold a valid state, `set_state_information` changes
nothing. A property missing from the state leaves that parameter as it is, and
restored gains are snapped to the nearest 0.1 dB step.

### Building blocks

- `eqisolator.filters`: biquad low-pass and high-pass design (`make_low_pass`,
  `make_high_pass`, returning `BiquadCoefficients` with a `magnitude_at`
  method), the `IIRFilter`, `FilterChain` and `DCBlocker` classes, and
  `dc_blocker_coefficient`.
- `eqisolator.smoothing`: `LinearSmoothedValue`, `decibels_to_gain` and
  `smooth_step`.
- `eqisolator.params`: `Band`, `NormalisableRange`, `FloatParameter`,
  `BoolParameter`, `ParameterSet` and `format_gain`.

## What this package does not do

It is a processing library only. It has no command-line tool, no graphical
controls, does not read or write audio files, and does not connect to an audio
device or host; you supply the sample blocks and take the results.

## Running the tests

```
pip install ".[test]"
pytest
```