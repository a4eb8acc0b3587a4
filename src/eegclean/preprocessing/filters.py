"""Band-limited power extraction.

Exposes a single helper, ``bandpower(eeg, fs, band=None, freq_range=None, order=6)``,
which band-passes every channel with a causal Butterworth IIR filter and
returns the instantaneous power (squared filtered signal) together with the
filtered signal itself.
"""

from __future__ import annotations
from typing import Dict, Optional, Sequence, Tuple
import numpy as np
from scipy import signal

from ..config import validate_sampling_rate
from ..errors import InvalidParameterError
from ..utils.logger import get_logger
from .orientation import normalize_orientation

logger = get_logger(__name__)

BANDS: Dict[str, Tuple[float, float]] = {
    "delta": (0.5, 4.0),
    "theta": (4.0, 7.0),
    "alpha": (7.5, 13.0),
    "beta": (15.0, 28.0),
    "gamma": (29.0, 48.0),
}


def _resolve_band(band: Optional[str], freq_range: Optional[Sequence[float]], fs: float) -> Tuple[float, float]:
    if band is not None and freq_range is not None:
        raise InvalidParameterError("'band' and 'freq_range' cannot be used at the same time.")
    if band is not None:
        if band not in BANDS:
            raise InvalidParameterError(f"Unknown band {band!r}; choose one of {sorted(BANDS)}.")
        low, high = BANDS[band]
    elif freq_range is not None:
        if len(freq_range) != 2:
            raise InvalidParameterError("freq_range must contain exactly two frequencies.")
        low, high = float(freq_range[0]), float(freq_range[1])
        if low <= 0 or high <= 0:
            raise InvalidParameterError("freq_range values must be positive.")
        if high <= low:
            raise InvalidParameterError("Upper frequency must be bigger than the lower one.")
    else:
        raise InvalidParameterError("One of 'band' or 'freq_range' is required.")
    if high >= fs / 2.0:
        raise InvalidParameterError(f"Upper frequency {high} Hz must be below Nyquist ({fs / 2.0} Hz).")
    return low, high


def bandpower(
    eeg: np.ndarray,
    fs: float,
    band: Optional[str] = None,
    freq_range: Optional[Sequence[float]] = None,
    order: int = 6,
) -> Tuple[np.ndarray, np.ndarray]:
    """Band-pass every channel and square it.

    Args:
        eeg: 2-D array, auto-oriented to (n_channels, n_samples).
        fs: sampling frequency (Hz).
        band: canonical band name (delta, theta, alpha, beta, gamma).
        freq_range: explicit (low, high) cut-offs in Hz; exclusive with ``band``.
        order: band-pass filter order (even; half of it per edge).

    Returns:
        (power, filtered), both shaped (n_channels, n_samples).
    """
    fs = validate_sampling_rate(fs)
    if isinstance(order, bool) or not isinstance(order, int) or order < 2 or order % 2:
        raise InvalidParameterError(f"Filter order must be a positive even integer (got {order!r}).")
    data = normalize_orientation(eeg)
    low, high = _resolve_band(band, freq_range, fs)
    logger.info("Band-pass %.2f-%.2f Hz (order %d)", low, high, order)
    sos = signal.butter(order // 2, [low, high], btype="bandpass", fs=fs, output="sos")
    filtered = signal.sosfilt(sos, data, axis=1)
    return filtered ** 2, filtered
