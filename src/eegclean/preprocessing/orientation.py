"""Orientation normalisation and boundary validation for multichannel input."""

from __future__ import annotations
from typing import Any
import numpy as np

from ..errors import InvalidShapeError, InvalidValueError


def normalize_orientation(eeg: Any) -> np.ndarray:
    """
    Return ``eeg`` as a float64 (n_channels, n_samples) array.

    Physiological recordings always have far fewer channels than samples, so an
    input with more rows than columns is transposed.

    Args:
        eeg: 2-D array-like, either (channels, samples) or (samples, channels).

    Returns:
        A new array shaped (n_channels, n_samples).

    Raises:
        InvalidShapeError: input is not 2-D, or has fewer than 2 samples per channel.
        InvalidValueError: input contains NaN or infinite samples.
    """
    data = np.array(eeg, dtype=np.float64, copy=True)
    if data.ndim != 2:
        raise InvalidShapeError(f"Input data must have exactly two dimensions (got shape {data.shape}).")
    if np.isnan(data).any():
        raise InvalidValueError("Input data contains NaN's.")
    if not np.isfinite(data).all():
        raise InvalidValueError("Input data contains infinite values.")
    n_rows, n_cols = data.shape
    if n_rows > n_cols:
        data = np.ascontiguousarray(data.T)
    if data.shape[1] < 2:
        raise InvalidShapeError(f"Each channel needs at least 2 samples (got shape {data.shape}).")
    return data
