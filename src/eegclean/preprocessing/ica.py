"""FastICA source separation with a bounded restart loop.

FastICA starts from a random unmixing matrix and can stop short: it may hit
its iteration cap, or whitening may leave some rows unusable. Each attempt is
independent of the previous one; the loop stops at the first attempt that
returns the requested number of components or after ``max_attempts`` tries.
"""

from __future__ import annotations
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np
from sklearn.decomposition import FastICA
from sklearn.exceptions import ConvergenceWarning

from ..config import DEFAULT_MAX_ATTEMPTS
from ..errors import ConvergenceError
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SeparationResult:
    """
    Output of :func:`separate_sources`.

    ``mixing @ components`` reproduces the input signal (channel means
    included) as long as no component has been modified.
    """

    components: np.ndarray  # (n_components, n_samples)
    mixing: np.ndarray  # (n_channels, n_components)
    n_attempts: int
    converged: bool

    @property
    def n_components(self) -> int:
        return int(self.components.shape[0])


def _fit_once(
    eeg: np.ndarray, n_components: int, seed: int, max_iter: int, tol: float
) -> Tuple[np.ndarray, np.ndarray, bool]:
    """Run one FastICA fit; returns (components, mixing, hit_iteration_cap)."""
    ica = FastICA(
        n_components=n_components,
        algorithm="parallel",
        whiten="unit-variance",
        fun="exp",
        max_iter=max_iter,
        tol=tol,
        random_state=seed,
    )
    # Capture sklearn's warnings for this fit only; the process-wide filters stay untouched.
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ConvergenceWarning)
        ica.fit(eeg.T)
    hit_cap = any(issubclass(w.category, ConvergenceWarning) for w in caught)

    unmixing = ica.components_  # (n_components, n_channels), whitening included
    components = unmixing @ eeg
    mixing = np.asarray(ica.mixing_)
    usable = np.isfinite(components).all(axis=1) & np.isfinite(mixing).all(axis=0)
    if not usable.all():
        logger.debug("Dropping %d non-finite component(s)", int((~usable).sum()))
    return components[usable], mixing[:, usable], hit_cap


def separate_sources(
    eeg: np.ndarray,
    n_components: Optional[int] = None,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    random_state: Optional[int] = None,
    max_iter: int = 1000,
    tol: float = 1e-4,
    strict: bool = False,
) -> SeparationResult:
    """
    Decompose ``eeg`` into independent components.

    Args:
        eeg: (n_channels, n_samples) array, already orientation-normalised.
        n_components: components to estimate; defaults to the channel count.
        max_attempts: total FastICA attempts (the first fit included).
        random_state: seed for the generator that draws a fresh seed per attempt.
        max_iter: FastICA iteration cap per attempt.
        tol: FastICA tolerance.
        strict: raise ConvergenceError when the budget runs out instead of
            returning the last attempt.

    Returns:
        SeparationResult holding the components of the successful attempt, or
        of the last attempt when none succeeded (``converged=False``).
    """
    n_channels = eeg.shape[0]
    k = n_channels if n_components is None else int(n_components)
    rng = np.random.default_rng(random_state)

    components = np.empty((0, eeg.shape[1]))
    mixing = np.empty((n_channels, 0))
    attempt = 0
    while attempt < max_attempts:
        attempt += 1
        seed = int(rng.integers(0, 2**31 - 1))
        try:
            components, mixing, hit_cap = _fit_once(eeg, k, seed, max_iter, tol)
        except np.linalg.LinAlgError as exc:
            logger.debug("FastICA attempt %d failed: %s", attempt, exc)
            components, mixing, hit_cap = np.empty((0, eeg.shape[1])), np.empty((n_channels, 0)), True
        if components.shape[0] == k and not hit_cap:
            logger.debug("FastICA converged on attempt %d", attempt)
            return SeparationResult(components, mixing, n_attempts=attempt, converged=True)
        logger.debug(
            "FastICA attempt %d/%d short: %d/%d components, iteration cap hit=%s",
            attempt, max_attempts, components.shape[0], k, hit_cap,
        )

    msg = (
        f"FastICA did not converge to {k} components in {max_attempts} attempts "
        f"(last attempt produced {components.shape[0]})"
    )
    if strict:
        raise ConvergenceError(msg)
    logger.warning("%s; continuing with the last attempt.", msg)
    return SeparationResult(components, mixing, n_attempts=attempt, converged=False)
