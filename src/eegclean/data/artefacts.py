"""Artefact injection for building labelled test signals.

``add_artefact(signal, fs, blink=3)`` adds a blink starting at t=3 s to every
channel. Amplitudes follow each channel's maximum absolute amplitude so the
artefact is always clearly visible. Several artefacts can be combined in one
call; they are applied in keyword order.
"""

from __future__ import annotations
import numbers
from typing import Callable, Dict, Optional, Union
import numpy as np

from ..config import validate_sampling_rate
from ..errors import InvalidParameterError
from ..preprocessing.orientation import normalize_orientation
from ..utils.logger import get_logger

logger = get_logger(__name__)

BLINK_DURATION_S = 1.25
MUSCLE_DURATION_S = 1.25
# index of the first sample taken from the 2 s template waveforms
TEMPLATE_OFFSET = 29
# signal power assumed by the white-noise artefact (0 dBW) and its SNR in dB
AWGN_SNR_DB = 1.0 / 1000.0


def _start_sample(kind: str, start_s, fs: float, n_samples: int, tail_s: float) -> int:
    if isinstance(start_s, bool) or not isinstance(start_s, numbers.Real) or start_s < 0:
        raise InvalidParameterError(f"{kind} start time must be a non-negative number of seconds.")
    start = int(round(fs * float(start_s)))
    if start >= n_samples - tail_s * fs:
        raise InvalidParameterError(f"{kind} artefact start time exceeds signal length.")
    return start


def _template_time(fs: float) -> np.ndarray:
    return np.arange(int(round(2 * fs))) / fs


def _blink(x, fs, start_s, rng, amps):
    start = _start_sample("Blink", start_s, fs, x.shape[1], BLINK_DURATION_S)
    length = int(round(BLINK_DURATION_S * fs)) + 1
    n = _template_time(fs)
    f = rng.integers(10, 21, size=5) / 10.0  # 1.0-2.0 Hz
    wave = np.sin(2 * np.pi * f[:, None] * n[None, :] + np.pi * rng.random()).sum(axis=0) / 5.0
    seg = wave[TEMPLATE_OFFSET : TEMPLATE_OFFSET + length]
    x[:, start : start + seg.size] += amps[:, None] * seg[None, :]


def _muscle(x, fs, start_s, rng, amps):
    start = _start_sample("Muscle", start_s, fs, x.shape[1], MUSCLE_DURATION_S)
    length = int(round(MUSCLE_DURATION_S * fs)) + 1
    n = _template_time(fs)
    f = rng.integers(4000, 8001, size=40) / 10.0  # 400-800 Hz
    wave = np.sin(2 * np.pi * f[:, None] * n[None, :] + np.pi * rng.random()).sum(axis=0) / 10.0
    seg = wave[TEMPLATE_OFFSET : TEMPLATE_OFFSET + length]
    x[:, start : start + seg.size] += amps[:, None] * seg[None, :]


def _discont(x, fs, start_s, rng, amps):
    start = _start_sample("Discontinuity", start_s, fs, x.shape[1], 2.25)
    length = int(round(2 * fs)) + 1
    step = np.zeros((x.shape[0], length))
    stop = int(rng.integers(int(round(0.9 * fs)), int(round(2 * fs)) + 1))
    step[:, 4:stop] = 2.0 * amps[:, None]
    x[:, start : start + length] += step[:, : x.shape[1] - start]


def _awgn(x, fs, start_s, rng, amps):
    start = _start_sample("White noise", start_s, fs, x.shape[1], 2.25)
    stop = min(start + int(round(2 * fs)) + 1, x.shape[1])
    noise_power = 10.0 ** (-AWGN_SNR_DB / 10.0)
    x[:, start:stop] += np.sqrt(noise_power) * rng.standard_normal((x.shape[0], stop - start))


def _linear(x, fs, start_s, rng, amps):
    start = _start_sample("Linear", start_s, fs, x.shape[1], 4.25)
    length = int(round(4 * fs)) + 1
    ramp_len = int(rng.integers(int(round(3 * fs)), int(round(4 * fs)) + 1))
    ramp = np.zeros(length)
    peak = float(amps.max())
    ramp[4 : 4 + ramp_len] = np.linspace(-peak, peak, ramp_len)[: length - 4]
    x[:, start : start + length] += ramp[None, : x.shape[1] - start]


def _powerline(x, fs, kind, rng, amps):
    if str(kind) not in ("50", "60"):
        raise InvalidParameterError("Powerline noise must be either '50' or '60'.")
    t = np.arange(x.shape[1]) / fs
    gain = rng.integers(100, 151) / 100.0
    x += gain * amps[:, None] * np.sin(2 * np.pi * float(kind) * t)[None, :]


_INJECTORS: Dict[str, Callable] = {
    "blink": _blink,
    "muscle": _muscle,
    "discont": _discont,
    "awgn": _awgn,
    "linear": _linear,
    "powerline": _powerline,
}


def add_artefact(
    signal: np.ndarray,
    fs: float,
    rng: Optional[Union[int, np.random.Generator]] = None,
    **artefacts,
) -> np.ndarray:
    """
    Return a copy of ``signal`` with the requested artefacts added.

    Args:
        signal: 2-D array, auto-oriented to (n_channels, n_samples).
        fs: sampling frequency (Hz).
        rng: seed or numpy Generator for the random waveform parameters.
        **artefacts: ``blink``, ``muscle``, ``discont``, ``awgn``, ``linear``
            take a start time in seconds; ``powerline`` takes '50' or '60'.

    Returns:
        (n_channels, n_samples) array.

    Raises:
        InvalidParameterError: no artefact given, unknown keyword, or a start
            time too close to the end of the signal.
    """
    fs = validate_sampling_rate(fs)
    if not artefacts:
        raise InvalidParameterError("Not enough input arguments: no artefact requested.")
    unknown = sorted(set(artefacts) - set(_INJECTORS))
    if unknown:
        raise InvalidParameterError(f"Unrecognized parameter(s): {unknown}")
    x = normalize_orientation(signal)
    rng = np.random.default_rng(rng)
    amps = np.abs(x).max(axis=1)
    for kind, value in artefacts.items():
        _INJECTORS[kind](x, fs, value, rng, amps)
        logger.debug("Injected %s artefact (%s)", kind, value)
    return x
