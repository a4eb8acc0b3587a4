"""Signal-level stages of the cleaning pipeline."""

from .orientation import normalize_orientation
from .ica import SeparationResult, separate_sources
from .suppression import suppress_windows, suppression_mask
from .reconstruction import reconstruct
from .filters import bandpower

__all__ = [
    "normalize_orientation",
    "SeparationResult",
    "separate_sources",
    "suppress_windows",
    "suppression_mask",
    "reconstruct",
    "bandpower",
]
