"""Remix (partially zeroed) components back into channel space."""

from __future__ import annotations
import numpy as np

from ..utils.logger import get_logger

logger = get_logger(__name__)


def reconstruct(mixing: np.ndarray, components: np.ndarray, original: np.ndarray) -> np.ndarray:
    """
    Return ``mixing @ components``, or a copy of ``original`` when there are no components.

    Args:
        mixing: (n_channels, n_components) mixing matrix.
        components: (n_components, n_samples) components.
        original: (n_channels, n_samples) signal the components were estimated from.
    """
    if components.shape[0] == 0:
        logger.warning("No usable components; returning the input signal unchanged.")
        return np.array(original, dtype=np.float64, copy=True)
    return mixing @ components
