# tests/conftest.py
"""Pytest fixtures for deterministic tests and shared synthetic EEG segments."""

from __future__ import annotations

import os
import random

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from eegclean.data.synthetic import synthetic_multichannel

FS = 250.0


@pytest.fixture(autouse=True, scope="session")
def deterministic_test_env():
    """
    Make tests deterministic:
      - set PYTHONHASHSEED
      - seed python and numpy global generators
    """
    seed = int(os.environ.get("PYTEST_SEED", "42"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    np.random.seed(seed)
    yield


@pytest.fixture
def fs() -> float:
    return FS


@pytest.fixture
def synthetic_segment() -> np.ndarray:
    """8 s, 4-channel synthetic EEG at 250 Hz with unit band powers."""
    eeg, _ = synthetic_multichannel(4, duration=8.0, fs=FS, rng=7)
    return eeg


@pytest.fixture
def sinusoid_mixture() -> np.ndarray:
    """
    Four sinusoidal sources above the artefact band, linearly mixed into four channels.

    Nothing in this signal looks like a transient, so cleaning must leave it intact.
    """
    t = np.arange(2000) / FS
    sources = np.stack([np.sin(2 * np.pi * f * t + p) for f, p in ((30, 0.1), (40, 0.7), (47, 1.3), (55, 2.1))])
    mixing = np.array(
        [
            [1.0, 0.5, 0.2, 0.1],
            [0.3, 1.0, 0.4, 0.2],
            [0.2, 0.3, 1.0, 0.5],
            [0.1, 0.2, 0.3, 1.0],
        ]
    )
    return 10.0 * mixing @ sources
