"""Tests for orientation normalisation and input validation."""

from __future__ import annotations
import numpy as np
import pytest

from eegclean.errors import InvalidShapeError, InvalidValueError
from eegclean.preprocessing.orientation import normalize_orientation


def test_samples_by_channels_is_transposed() -> None:
    data = np.arange(20.0).reshape(10, 2)
    out = normalize_orientation(data)
    assert out.shape == (2, 10)
    np.testing.assert_array_equal(out, data.T)


def test_channels_by_samples_is_kept_and_copied() -> None:
    data = np.random.randn(3, 100)
    out = normalize_orientation(data)
    np.testing.assert_array_equal(out, data)
    out[0, 0] = 123.0
    assert data[0, 0] != 123.0


def test_square_input_is_not_transposed() -> None:
    data = np.arange(9.0).reshape(3, 3)
    np.testing.assert_array_equal(normalize_orientation(data), data)


@pytest.mark.parametrize("shape", [(100,), (2, 3, 100)])
def test_non_2d_input_rejected(shape) -> None:
    with pytest.raises(InvalidShapeError):
        normalize_orientation(np.zeros(shape))


def test_single_sample_rejected() -> None:
    with pytest.raises(InvalidShapeError):
        normalize_orientation(np.zeros((1, 1)))


def test_nan_rejected() -> None:
    data = np.random.randn(4, 100)
    data[2, 50] = np.nan
    with pytest.raises(InvalidValueError):
        normalize_orientation(data)


def test_inf_rejected() -> None:
    data = np.random.randn(4, 100)
    data[1, 10] = np.inf
    with pytest.raises(InvalidValueError):
        normalize_orientation(data)


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        normalize_orientation(np.zeros(5))
