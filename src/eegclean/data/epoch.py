"""Slice a fixed-length segment out of a longer recording."""

from __future__ import annotations
import numbers
from typing import Optional, Sequence, Union
import numpy as np
import mne

from ..config import validate_sampling_rate
from ..errors import InvalidParameterError, InvalidShapeError
from ..preprocessing.orientation import normalize_orientation
from ..utils.logger import get_logger

logger = get_logger(__name__)

Channels = Optional[Sequence[Union[int, str]]]


def get_epoch(
    recording: Union[np.ndarray, mne.io.BaseRaw],
    start: int,
    *,
    fs: float = 250.0,
    length: float = 8.0,
    channels: Channels = None,
) -> np.ndarray:
    """Return ``length`` seconds of ``recording`` starting at sample ``start``.

    Args:
        recording: (channels, samples) array (auto-oriented) or an MNE Raw;
            for Raw input ``fs`` is read from ``raw.info['sfreq']``.
        start: 1-based index of the first sample of the segment.
        fs: sampling frequency of an array recording (Hz).
        length: segment length in seconds.
        channels: channel indices, or channel names for Raw input (None = all).

    Returns:
        (n_selected_channels, round(fs * length)) array.
    """
    if isinstance(start, bool) or not isinstance(start, numbers.Integral) or start < 1:
        raise InvalidParameterError(f"Index must be a positive integer (got {start!r}).")
    if isinstance(recording, mne.io.BaseRaw):
        fs = float(recording.info["sfreq"])
        picks = list(channels) if channels is not None else None
        data = normalize_orientation(recording.get_data(picks=picks))
    else:
        fs = validate_sampling_rate(fs)
        data = normalize_orientation(recording)
        if channels is not None:
            idx = list(channels)
            if not all(isinstance(c, numbers.Integral) and not isinstance(c, bool) for c in idx):
                raise InvalidParameterError("Array recordings only accept integer channel indices.")
            data = data[idx]
    if isinstance(length, bool) or not isinstance(length, numbers.Real) or length <= 0:
        raise InvalidParameterError(f"Epoch length must be a positive number of seconds (got {length!r}).")

    n_samples = int(round(fs * length))
    first = int(start) - 1
    if first + n_samples > data.shape[1]:
        raise InvalidShapeError(
            f"Epoch [{start}, {start + n_samples}) exceeds the recording length ({data.shape[1]} samples)."
        )
    logger.debug("Epoch of %d samples from sample %d, %d channel(s)", n_samples, start, data.shape[0])
    return data[:, first : first + n_samples].copy()
