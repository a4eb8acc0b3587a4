"""Tests for the artefact injector."""

from __future__ import annotations
import numpy as np
import pytest

from eegclean.data.artefacts import add_artefact
from eegclean.errors import InvalidParameterError, InvalidValueError

FS = 250.0


def _base(n_channels: int = 3, n: int = 2000) -> np.ndarray:
    t = np.arange(n) / FS
    return np.stack([(ch + 1) * np.sin(2 * np.pi * 10 * t) for ch in range(n_channels)])


def _changed(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return np.flatnonzero(np.any(a != b, axis=0))


def test_blink_is_local_and_scaled_per_channel() -> None:
    base = _base()
    out = add_artefact(base, FS, rng=0, blink=3)
    idx = _changed(base, out)
    assert idx.min() >= 750
    assert idx.max() <= 750 + int(1.25 * FS)
    diff = out - base
    # amplitude follows the channel maximum
    np.testing.assert_allclose(diff[1], 2 * diff[0], atol=1e-9)


def test_input_not_modified() -> None:
    base = _base()
    copy = base.copy()
    add_artefact(base, FS, rng=0, muscle=2)
    np.testing.assert_array_equal(base, copy)


def test_transposed_input_is_oriented() -> None:
    out = add_artefact(_base().T, FS, rng=0, blink=1)
    assert out.shape == (3, 2000)


@pytest.mark.parametrize(
    "kind,start,window",
    [("muscle", 2.0, (500, 500 + 313)), ("discont", 2.0, (500, 500 + 501)), ("awgn", 1.0, (250, 250 + 501)), ("linear", 1.0, (250, 250 + 1001))],
)
def test_timed_artefacts_stay_in_window(kind, start, window) -> None:
    base = _base()
    out = add_artefact(base, FS, rng=1, **{kind: start})
    idx = _changed(base, out)
    assert idx.size > 0
    assert idx.min() >= window[0] and idx.max() < window[1]


@pytest.mark.parametrize("line", ["50", "60", 50])
def test_powerline_covers_whole_signal(line) -> None:
    base = _base()
    out = add_artefact(base, FS, rng=0, powerline=line)
    diff = out - base
    spectrum = np.abs(np.fft.rfft(diff[0]))
    freqs = np.fft.rfftfreq(diff.shape[1], 1 / FS)
    assert freqs[np.argmax(spectrum)] == pytest.approx(float(line))


def test_combined_artefacts() -> None:
    base = _base()
    out = add_artefact(base, FS, rng=0, blink=1, discont=4)
    idx = _changed(base, out)
    assert idx.min() >= 250 and idx.max() < 1000 + 501


@pytest.mark.parametrize("kwargs", [{}, {"sneeze": 1}, {"blink": 7.5}, {"linear": 5}, {"powerline": "70"}, {"blink": -1}])
def test_invalid_requests(kwargs) -> None:
    with pytest.raises(InvalidParameterError):
        add_artefact(_base(), FS, **kwargs)


def test_nan_rejected() -> None:
    base = _base()
    base[0, 0] = np.nan
    with pytest.raises(InvalidValueError):
        add_artefact(base, FS, blink=1)
