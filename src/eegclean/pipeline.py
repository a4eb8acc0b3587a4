"""Top-level cleaning pipeline: orient -> ICA -> artefact scoring -> suppression -> remix.

Every call owns its arrays; nothing is cached between calls.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, Set
import numpy as np

from .config import CleaningConfig, validate_sampling_rate
from .features.artefact_energy import ArtefactReport, score_components
from .preprocessing.ica import separate_sources
from .preprocessing.orientation import normalize_orientation
from .preprocessing.reconstruction import reconstruct
from .preprocessing.suppression import suppress_windows
from .utils.logger import get_logger

if TYPE_CHECKING:
    from matplotlib.figure import Figure

logger = get_logger(__name__)


@dataclass
class CleaningResult:
    """
    Output of :func:`clean`.

    Attributes:
        cleaned: (n_channels, n_samples) artefact-suppressed signal.
        components: independent components after suppression.
        mixing: (n_channels, n_components) mixing matrix.
        noisy_components: indices of components with at least one artefact peak.
        noise_times: component index -> peak times (s) for noisy components.
        reports: component index -> full ArtefactReport for every component.
        converged: False when ICA returned fewer components than channels
            (or hit its iteration cap) on every attempt.
        n_attempts: FastICA attempts used.
        figure: raw vs cleaned overlay when ``visualize`` was requested, else None.
    """

    cleaned: np.ndarray
    components: np.ndarray
    mixing: np.ndarray
    noisy_components: Set[int] = field(default_factory=set)
    noise_times: Dict[int, np.ndarray] = field(default_factory=dict)
    reports: Dict[int, ArtefactReport] = field(default_factory=dict)
    converged: bool = True
    n_attempts: int = 1
    figure: Optional["Figure"] = None

    @property
    def n_components(self) -> int:
        return int(self.components.shape[0])

    def summary(self) -> Dict[str, Any]:
        """Plain-Python summary suitable for logging or printing."""
        return {
            "shape": list(self.cleaned.shape),
            "n_components": self.n_components,
            "converged": self.converged,
            "n_attempts": self.n_attempts,
            "noisy_components": sorted(self.noisy_components),
            "noise_times": {int(k): np.round(v, 3).tolist() for k, v in sorted(self.noise_times.items())},
        }


def clean(
    eeg: np.ndarray,
    fs: float,
    sensitivity: Optional[int] = None,
    *,
    config: Optional[CleaningConfig] = None,
    **overrides: Any,
) -> CleaningResult:
    """
    Remove transient artefacts from a multichannel EEG segment.

    Args:
        eeg: 2-D array, (channels, samples) or (samples, channels).
        fs: sampling frequency (Hz), positive.
        sensitivity: 1, 2 or 3 (default 3, or the config's value).
        config: optional CleaningConfig; keyword ``overrides`` are applied on top.

    Returns:
        CleaningResult with the cleaned signal and per-component reports.

    Raises:
        InvalidShapeError, InvalidValueError, InvalidParameterError: bad input,
            raised before any computation.
        LayoutCapacityError: ``visualize`` requested for more than 16 channels.
        ConvergenceError: only with ``strict=True``.
    """
    cfg = config or CleaningConfig()
    if sensitivity is not None:
        overrides["sensitivity"] = sensitivity
    cfg = cfg.with_overrides(**overrides)
    fs = validate_sampling_rate(fs)
    data = normalize_orientation(eeg)
    n_channels, n_samples = data.shape
    if cfg.visualize:
        from .viz.comparison import grid_layout

        grid_layout(n_channels)

    logger.info(
        "Cleaning %d channel(s) x %d sample(s) at %.1f Hz (sensitivity=%d)",
        n_channels, n_samples, fs, cfg.sensitivity,
    )
    sep = separate_sources(
        data,
        n_channels,
        max_attempts=cfg.max_attempts,
        random_state=cfg.random_state,
        max_iter=cfg.max_iter,
        tol=cfg.tol,
        strict=cfg.strict,
    )
    reports = score_components(sep.components, fs, cfg.sensitivity, n_jobs=cfg.n_jobs)
    components = suppress_windows(sep.components, reports, fs)
    cleaned = reconstruct(sep.mixing, components, data)

    noisy = {idx for idx, rep in reports.items() if rep.is_noisy}
    result = CleaningResult(
        cleaned=cleaned,
        components=components,
        mixing=sep.mixing,
        noisy_components=noisy,
        noise_times={idx: reports[idx].peak_times for idx in sorted(noisy)},
        reports=reports,
        converged=sep.converged,
        n_attempts=sep.n_attempts,
    )
    logger.info("Cleaning complete: %d/%d component(s) noisy", len(noisy), sep.n_components)

    if cfg.visualize:
        from .viz.comparison import plot_comparison

        result.figure = plot_comparison(data, cleaned, fs, title="Raw vs cleaned EEG")
    return result


def run_from_config(cfg_path: str | Path, eeg: np.ndarray, fs: float, **overrides: Any) -> CleaningResult:
    """
    Load a YAML/JSON config file and clean ``eeg`` with it.

    Args:
        cfg_path: path to a config with a ``cleaning:`` section (or flat keys).
        eeg: 2-D signal.
        fs: sampling frequency (Hz).
        **overrides: config fields overriding the file.
    """
    cfg = CleaningConfig.from_file(cfg_path)
    return clean(eeg, fs, config=cfg, **overrides)
