"""Exception taxonomy raised by the cleaning pipeline and its collaborators.

Boundary errors subclass ``ValueError`` and the convergence failure subclasses
``RuntimeError`` so callers catching the builtin types keep working.
"""

from __future__ import annotations


class EEGCleanError(Exception):
    """Base class for every error raised by eegclean."""


class InvalidShapeError(EEGCleanError, ValueError):
    """Input array is not 2-D or is too short to analyse."""


class InvalidValueError(EEGCleanError, ValueError):
    """Input array contains NaN or infinite samples."""


class InvalidParameterError(EEGCleanError, ValueError):
    """A parameter or configuration key is out of range or unknown."""


class ConvergenceError(EEGCleanError, RuntimeError):
    """Source separation did not reach the requested component count."""


class LayoutCapacityError(EEGCleanError, ValueError):
    """Too many channels for the comparison plot grid."""


__all__ = [
    "EEGCleanError",
    "InvalidShapeError",
    "InvalidValueError",
    "InvalidParameterError",
    "ConvergenceError",
    "LayoutCapacityError",
]
