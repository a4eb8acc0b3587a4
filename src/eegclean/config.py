"""Run configuration for :func:`eegclean.pipeline.clean`.

``CleaningConfig`` is validated eagerly: constructing one with a bad value, or
building one from a mapping with an unknown key, raises
:class:`~eegclean.errors.InvalidParameterError` before any signal is touched.
"""

from __future__ import annotations
import math
import numbers
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidParameterError
from .utils.config_loader import load_config

# Wavelet time-bandwidth product per sensitivity level; higher sensitivity
# means a narrower analysis window.
SENSITIVITY_TIME_BANDWIDTH: Dict[int, int] = {1: 20, 2: 10, 3: 5}
DEFAULT_SENSITIVITY = 3
DEFAULT_MAX_ATTEMPTS = 21


def validate_sensitivity(value: Any) -> int:
    """Return ``value`` as an int if it is one of 1, 2 or 3."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"Sensitivity must be 1, 2 or 3 (got {value!r}).")
    if not math.isfinite(float(value)) or float(value) != int(value) or int(value) not in SENSITIVITY_TIME_BANDWIDTH:
        raise InvalidParameterError(f"Sensitivity must be 1, 2 or 3 (got {value!r}).")
    return int(value)


def validate_sampling_rate(fs: Any) -> float:
    """Return ``fs`` as a float if it is a finite positive number."""
    if isinstance(fs, bool) or not isinstance(fs, numbers.Real) or not math.isfinite(float(fs)) or float(fs) <= 0:
        raise InvalidParameterError(f"Sampling rate must be a positive number (got {fs!r}).")
    return float(fs)


def _positive_int(name: str, value: Any, allow_none: bool = False) -> Optional[int]:
    if value is None and allow_none:
        return None
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise InvalidParameterError(f"{name} must be a positive integer (got {value!r}).")
    return int(value)


@dataclass(frozen=True)
class CleaningConfig:
    """
    Options controlling one cleaning run.

    Attributes:
        sensitivity: 1, 2 or 3; selects the wavelet time-bandwidth (20, 10, 5).
        visualize: draw the raw vs cleaned comparison after cleaning.
        n_jobs: worker threads for per-component scoring (None = CPU count).
        random_state: seed for the ICA restarts (None = fresh entropy).
        max_attempts: total FastICA attempts before giving up.
        max_iter: FastICA iteration cap per attempt.
        tol: FastICA convergence tolerance.
        strict: raise ConvergenceError instead of proceeding when the
            component count stays short after ``max_attempts``.
    """

    sensitivity: int = DEFAULT_SENSITIVITY
    visualize: bool = False
    n_jobs: Optional[int] = None
    random_state: Optional[int] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    max_iter: int = 1000
    tol: float = 1e-4
    strict: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "sensitivity", validate_sensitivity(self.sensitivity))
        object.__setattr__(self, "n_jobs", _positive_int("n_jobs", self.n_jobs, allow_none=True))
        object.__setattr__(self, "max_attempts", _positive_int("max_attempts", self.max_attempts))
        object.__setattr__(self, "max_iter", _positive_int("max_iter", self.max_iter))
        if self.random_state is not None and (
            isinstance(self.random_state, bool) or not isinstance(self.random_state, numbers.Integral)
        ):
            raise InvalidParameterError(f"random_state must be an integer or None (got {self.random_state!r}).")
        if isinstance(self.tol, bool) or not isinstance(self.tol, numbers.Real) or not self.tol > 0:
            raise InvalidParameterError(f"tol must be a positive number (got {self.tol!r}).")
        for flag in ("visualize", "strict"):
            if not isinstance(getattr(self, flag), bool):
                raise InvalidParameterError(f"{flag} must be a boolean (got {getattr(self, flag)!r}).")

    @property
    def time_bandwidth(self) -> int:
        return SENSITIVITY_TIME_BANDWIDTH[self.sensitivity]

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "CleaningConfig":
        """Build a config from a plain mapping, rejecting unrecognized keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise InvalidParameterError(f"Unrecognized parameter(s): {unknown}")
        return cls(**dict(values))

    @classmethod
    def from_file(cls, path: str | Path) -> "CleaningConfig":
        """Load a YAML/JSON file; a top-level ``cleaning:`` section is used when present."""
        cfg = load_config(path)
        section = cfg.get("cleaning", cfg)
        if not isinstance(section, Mapping):
            raise InvalidParameterError(f"'cleaning' section of {path} must be a mapping")
        return cls.from_mapping(section)

    def with_overrides(self, **overrides: Any) -> "CleaningConfig":
        """Return a copy with ``overrides`` applied (unknown keys rejected)."""
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise InvalidParameterError(f"Unrecognized parameter(s): {unknown}")
        return replace(self, **overrides)
