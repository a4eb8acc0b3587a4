"""Tests for FastICA source separation and its bounded restart loop."""

from __future__ import annotations
import numpy as np
import pytest

from eegclean.errors import ConvergenceError
from eegclean.preprocessing import ica as ica_mod
from eegclean.preprocessing.ica import separate_sources


def _mixture(n_samples: int = 2000) -> np.ndarray:
    rng = np.random.default_rng(0)
    t = np.arange(n_samples) / 250.0
    sources = np.stack(
        [
            np.sign(np.sin(2 * np.pi * 3 * t)),
            rng.laplace(size=n_samples),
            np.sin(2 * np.pi * 11 * t),
        ]
    )
    mixing = np.array([[1.0, 0.4, 0.3], [0.2, 1.0, 0.5], [0.6, 0.1, 1.0]])
    return mixing @ sources + np.array([[1.0], [-2.0], [0.5]])


def test_separation_shapes_and_exact_remix() -> None:
    eeg = _mixture()
    res = separate_sources(eeg, random_state=0)
    assert res.components.shape == (3, eeg.shape[1])
    assert res.mixing.shape == (3, 3)
    assert res.n_components == 3
    assert 1 <= res.n_attempts <= 21
    # channel means are carried by the components, so the remix is exact
    np.testing.assert_allclose(res.mixing @ res.components, eeg, atol=1e-8)


def test_components_have_unit_variance() -> None:
    res = separate_sources(_mixture(), random_state=1)
    np.testing.assert_allclose(res.components.std(axis=1), 1.0, atol=1e-6)


def test_short_attempts_stop_at_budget(monkeypatch) -> None:
    calls = []

    def short_fit(eeg, k, seed, max_iter, tol):
        calls.append(seed)
        return np.zeros((k - 1, eeg.shape[1])), np.zeros((eeg.shape[0], k - 1)), False

    monkeypatch.setattr(ica_mod, "_fit_once", short_fit)
    res = separate_sources(_mixture(), max_attempts=21, random_state=0)
    assert len(calls) == 21
    assert res.n_attempts == 21
    assert res.converged is False
    assert res.n_components == 2
    # each attempt is a fresh restart
    assert len(set(calls)) > 1


def test_retry_stops_at_first_full_attempt(monkeypatch) -> None:
    outcomes = iter([2, 2, 3])

    def flaky_fit(eeg, k, seed, max_iter, tol):
        n = next(outcomes)
        return np.ones((n, eeg.shape[1])), np.ones((eeg.shape[0], n)), False

    monkeypatch.setattr(ica_mod, "_fit_once", flaky_fit)
    res = separate_sources(_mixture(), random_state=0)
    assert res.n_attempts == 3
    assert res.converged is True


def test_iteration_cap_counts_as_short(monkeypatch) -> None:
    def capped_fit(eeg, k, seed, max_iter, tol):
        return np.ones((k, eeg.shape[1])), np.ones((eeg.shape[0], k)), True

    monkeypatch.setattr(ica_mod, "_fit_once", capped_fit)
    res = separate_sources(_mixture(), max_attempts=4, random_state=0)
    assert res.n_attempts == 4
    assert res.converged is False
    assert res.n_components == 3


def test_strict_mode_raises(monkeypatch) -> None:
    monkeypatch.setattr(
        ica_mod,
        "_fit_once",
        lambda eeg, k, seed, max_iter, tol: (np.zeros((0, eeg.shape[1])), np.zeros((eeg.shape[0], 0)), False),
    )
    with pytest.raises(ConvergenceError):
        separate_sources(_mixture(), max_attempts=3, strict=True)


def test_linalg_failure_gives_empty_result(monkeypatch) -> None:
    def broken_fit(eeg, k, seed, max_iter, tol):
        raise np.linalg.LinAlgError("SVD did not converge")

    monkeypatch.setattr(ica_mod, "_fit_once", broken_fit)
    res = separate_sources(_mixture(), max_attempts=2)
    assert res.n_components == 0
    assert res.mixing.shape == (3, 0)
    assert res.converged is False
