"""Top-level package for ICA + wavelet EEG artefact cleaning.

Public API:
    clean(eeg, fs, sensitivity=3) -> CleaningResult
"""

from .config import CleaningConfig
from .errors import (
    ConvergenceError,
    EEGCleanError,
    InvalidParameterError,
    InvalidShapeError,
    InvalidValueError,
    LayoutCapacityError,
)
from .pipeline import CleaningResult, clean, run_from_config

__version__ = "0.1.0"

__all__ = [
    "clean",
    "run_from_config",
    "CleaningConfig",
    "CleaningResult",
    "EEGCleanError",
    "InvalidShapeError",
    "InvalidValueError",
    "InvalidParameterError",
    "ConvergenceError",
    "LayoutCapacityError",
]
