"""Turn detected artefact peaks into zeroed windows inside single components."""

from __future__ import annotations
from typing import Mapping
import numpy as np

from ..features.artefact_energy import ArtefactReport
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Window length after the start sample; a fixed sample count, not rescaled with fs.
PAD_SAMPLES = 100
# Earliest sample a window may start at (the first sample of the segment).
MIN_START_SAMPLE = 0


def window_bounds(peak_time: float, width: float, fs: float, n_samples: int) -> tuple[int, int]:
    """
    Return the half-open sample range ``[start, end)`` suppressed for one peak.

    ``start = round(t*fs) - round(w*fs)`` floored at ``MIN_START_SAMPLE`` and
    ``end = start + PAD_SAMPLES``, both clipped to the signal length.
    """
    start = int(round(peak_time * fs)) - int(round(width * fs))
    start = max(start, MIN_START_SAMPLE)
    end = start + PAD_SAMPLES
    return min(start, n_samples), min(end, n_samples)


def suppression_mask(report: ArtefactReport, fs: float, n_samples: int) -> np.ndarray:
    """Binary keep(1)/suppress(0) mask for one component; the union over all its peaks."""
    mask = np.ones(n_samples)
    for t, w in zip(report.peak_times, report.widths):
        start, end = window_bounds(float(t), float(w), fs, n_samples)
        mask[start:end] = 0.0
    return mask


def suppress_windows(
    components: np.ndarray, reports: Mapping[int, ArtefactReport], fs: float
) -> np.ndarray:
    """
    Zero the artefact windows of every noisy component.

    Args:
        components: (n_components, n_samples) array; not modified.
        reports: component index -> ArtefactReport.
        fs: sampling frequency (Hz).

    Returns:
        A new array with each noisy row multiplied by its mask; clean rows are
        copied unchanged.
    """
    out = np.array(components, dtype=np.float64, copy=True)
    n_samples = out.shape[1]
    for idx, report in reports.items():
        if not report.is_noisy:
            continue
        mask = suppression_mask(report, fs, n_samples)
        out[idx] = out[idx] * mask
        logger.debug("Component %d: zeroed %d/%d samples", idx, int((mask == 0).sum()), n_samples)
    return out
