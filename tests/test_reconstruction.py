"""Tests for remixing components into channel space."""

from __future__ import annotations
import numpy as np

from eegclean.preprocessing.reconstruction import reconstruct


def test_remix_is_matrix_product() -> None:
    rng = np.random.default_rng(1)
    mixing = rng.normal(size=(3, 3))
    comps = rng.normal(size=(3, 50))
    np.testing.assert_allclose(reconstruct(mixing, comps, np.zeros((3, 50))), mixing @ comps)


def test_no_components_returns_original_copy() -> None:
    original = np.arange(12.0).reshape(3, 4)
    out = reconstruct(np.empty((3, 0)), np.empty((0, 4)), original)
    np.testing.assert_array_equal(out, original)
    assert out is not original


def test_short_component_set_still_remixes() -> None:
    mixing = np.ones((3, 2))
    comps = np.ones((2, 5))
    assert reconstruct(mixing, comps, np.zeros((3, 5))).shape == (3, 5)
