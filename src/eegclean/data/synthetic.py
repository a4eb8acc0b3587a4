"""Synthetic EEG and sinusoid generators used to build test fixtures.

``synthetic_eeg`` sums sinusoids every 0.1 Hz from 0 to 100 Hz with random
phases. Each canonical band can carry a band-power envelope shaped by a
generalized bell function, which is how event-related (de)synchronisation is
simulated.
"""

from __future__ import annotations
import numbers
from typing import Optional, Sequence, Tuple, Union
import numpy as np

from ..errors import InvalidParameterError
from ..utils.logger import get_logger

logger = get_logger(__name__)

BandSpec = Union[float, Sequence[float]]

# Half-open frequency ranges (Hz) that receive a band envelope.
BAND_EDGES = {
    "delta": (1.0, 4.0),
    "theta": (4.0, 8.0),
    "alpha": (8.0, 15.0),
    "beta": (15.0, 30.0),
}
MIN_BAND_POWER = 0.1
MAX_BAND_POWER = 5.0
FREQ_STEP = 0.1
MAX_FREQ = 100.0


def _positive(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or not value > 0:
        raise InvalidParameterError(f"{name} should be a positive number (got {value!r}).")
    return float(value)


def gbell(x: np.ndarray, a: float, b: float, c: float) -> np.ndarray:
    """Generalized bell membership function 1 / (1 + |(x - c) / a| ** (2b))."""
    return 1.0 / (1.0 + np.abs((x - c) / a) ** (2.0 * b))


def band_envelope(name: str, spec: BandSpec, t: np.ndarray) -> np.ndarray:
    """
    Build the gain applied to one band over time.

    Args:
        name: band name, used in messages.
        spec: a scalar (flat envelope of 1) or (start_s, width_s, power).
        t: time vector in seconds.
    """
    if isinstance(spec, numbers.Real) and not isinstance(spec, bool):
        return np.ones_like(t)
    values = list(spec)
    if len(values) != 3:
        raise InvalidParameterError(f"{name} band should be a scalar or (start, width, power).")
    start, width, power = (float(v) for v in values)
    if width <= 0:
        raise InvalidParameterError(f"{name} band width should be positive (got {width}).")
    if power < MIN_BAND_POWER:
        logger.warning("%s band power %.3f below %.1f; set to %.1f", name, power, MIN_BAND_POWER, MIN_BAND_POWER)
        power = MIN_BAND_POWER
    elif power > MAX_BAND_POWER:
        logger.warning("%s band power %.3f above %.1f; set to %.1f", name, power, MAX_BAND_POWER, MAX_BAND_POWER)
        power = MAX_BAND_POWER
    return (power - 1.0) * gbell(t, width / 2.0, 10.0, start + width / 2.0) + 1.0


def synthetic_eeg(
    duration: float = 8.0,
    fs: float = 250.0,
    max_amp: float = 30.0,
    delta: BandSpec = 1,
    theta: BandSpec = 1,
    alpha: BandSpec = 1,
    beta: BandSpec = 1,
    rng: Optional[Union[int, np.random.Generator]] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Generate one channel of synthetic EEG.

    Args:
        duration: length in seconds.
        fs: sampling frequency (Hz).
        max_amp: output is rescaled to [-max_amp, max_amp].
        delta, theta, alpha, beta: scalar for a flat band, or
            (start_s, width_s, power) to modulate the band power around an event.
        rng: seed or numpy Generator for the random phases.

    Returns:
        (signal, time), both shaped (round(duration * fs),).
    """
    duration = _positive("Duration", duration)
    fs = _positive("Sampling rate", fs)
    max_amp = _positive("Maximum amplitude", max_amp)
    rng = np.random.default_rng(rng)

    t = np.arange(int(round(duration * fs))) / fs
    envelopes = {
        name: band_envelope(name, spec, t)
        for name, spec in (("delta", delta), ("theta", theta), ("alpha", alpha), ("beta", beta))
    }

    freqs = np.round(np.arange(0.0, MAX_FREQ + FREQ_STEP / 2, FREQ_STEP), 1)
    out = np.zeros_like(t)
    for f in freqs:
        wave = np.sin(2 * np.pi * f * t + 2 * np.pi * rng.random())
        gain = None
        for name, (low, high) in BAND_EDGES.items():
            # delta is open at its lower edge, like the other bands' upper edges
            if (low < f < high) if name == "delta" else (low <= f < high):
                gain = envelopes[name]
                break
        out += wave if gain is None else gain * wave

    span = out.max() - out.min()
    if span == 0:
        return np.zeros_like(out), t
    return max_amp * (2.0 * (out - out.min()) / span - 1.0), t


def create_sinus(
    signal_length: float, frequency: int, fs: int, phase: float = 0.0
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Pure sinusoid ``sin(2*pi*frequency*t + phase*pi)``.

    Args:
        signal_length: seconds, positive.
        frequency: Hz, positive integer.
        fs: sampling frequency, positive integer.
        phase: phase shift in units of pi, within [0, 2].

    Returns:
        (signal, time)
    """
    signal_length = _positive("Signal length", signal_length)
    for name, value in (("Frequency", frequency), ("Sampling frequency", fs)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value <= 0:
            raise InvalidParameterError(f"{name} should be a positive integer (got {value!r}).")
    if isinstance(phase, bool) or not isinstance(phase, numbers.Real) or not 0 <= phase <= 2:
        raise InvalidParameterError(f"Phase should be between 0 and 2 (got {phase!r}).")
    t = np.arange(int(round(signal_length * fs))) / fs
    return np.sin(2 * np.pi * frequency * t + phase * np.pi), t


def synthetic_multichannel(
    n_channels: int = 4,
    duration: float = 8.0,
    fs: float = 250.0,
    rng: Optional[Union[int, np.random.Generator]] = None,
    **band_kwargs,
) -> Tuple[np.ndarray, np.ndarray]:
    """Stack ``n_channels`` independent synthetic channels into (n_channels, n_samples)."""
    if isinstance(n_channels, bool) or not isinstance(n_channels, numbers.Integral) or n_channels < 1:
        raise InvalidParameterError(f"n_channels should be a positive integer (got {n_channels!r}).")
    rng = np.random.default_rng(rng)
    channels = []
    t = np.empty(0)
    for _ in range(n_channels):
        sig, t = synthetic_eeg(duration=duration, fs=fs, rng=rng, **band_kwargs)
        channels.append(sig)
    return np.stack(channels, axis=0), t
