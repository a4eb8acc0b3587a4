"""Raw vs cleaned overlay plot, one subplot per channel."""

from __future__ import annotations
import math
from typing import Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt

from ..errors import InvalidShapeError, LayoutCapacityError
from ..utils.logger import get_logger

logger = get_logger(__name__)

MAX_CHANNELS = 16


def grid_layout(n_channels: int) -> Tuple[int, int]:
    """Subplot grid (rows, cols) for ``n_channels``; at most 16 channels fit."""
    half = n_channels / 2
    if half < 2:
        return n_channels, 1
    if half <= 3:
        return math.ceil(half), 2
    if half < 5:
        return 3, 3
    if half <= 8:
        return 4, 4
    raise LayoutCapacityError(f"Too many channels to visualize ({n_channels} > {MAX_CHANNELS}).")


def plot_comparison(
    raw: np.ndarray,
    cleaned: np.ndarray,
    fs: float,
    time: Optional[np.ndarray] = None,
    title: Optional[str] = None,
) -> plt.Figure:
    """
    Overlay raw and cleaned traces for every channel.

    Args:
        raw: (n_channels, n_samples) input signal.
        cleaned: cleaned signal, same shape as ``raw``.
        fs: sampling frequency, used when ``time`` is None.
        time: optional time vector in seconds.
        title: optional figure title.

    Returns:
        The matplotlib Figure; the caller decides whether to show or close it.
    """
    if raw.shape != cleaned.shape:
        raise InvalidShapeError(f"raw {raw.shape} and cleaned {cleaned.shape} shapes differ")
    n_channels, n_samples = raw.shape
    rows, cols = grid_layout(n_channels)
    t = np.arange(n_samples) / fs if time is None else np.asarray(time)

    fig, axes = plt.subplots(rows, cols, figsize=(4 * cols, 2 * rows), sharex=True, squeeze=False)
    for ch, ax in enumerate(axes.ravel()):
        if ch >= n_channels:
            ax.set_visible(False)
            continue
        ax.plot(t, raw[ch], linewidth=0.8, label="raw")
        ax.plot(t, cleaned[ch], linewidth=0.8, label="cleaned")
        ax.set_ylabel(f"ch {ch}")
    axes[0, 0].legend(loc="upper right", fontsize="small")
    if title:
        fig.suptitle(title)
    fig.tight_layout()
    logger.info("Plotted %d channel(s) on a %dx%d grid", n_channels, rows, cols)
    return fig
