"""Tests for the Morse wavelet filter bank."""

from __future__ import annotations
import numpy as np
import pytest

from eegclean.features.wavelets import MorseFilterBank, morse_peak_frequency, morse_response, scalogram


def test_response_peaks_at_two() -> None:
    beta, gamma = 5.0 / 3.0, 3.0
    w_pk = morse_peak_frequency(beta, gamma)
    grid = np.linspace(0.01, 5, 5000)
    resp = morse_response(grid, beta, gamma)
    assert morse_response(np.array([w_pk]), beta, gamma)[0] == pytest.approx(2.0)
    assert resp.max() <= 2.0 + 1e-9
    assert morse_response(np.array([-1.0, 0.0]), beta, gamma).tolist() == [0.0, 0.0]


@pytest.mark.parametrize("tb", [5, 10, 20])
def test_bank_layout(tb) -> None:
    bank = MorseFilterBank(signal_length=2000, fs=250.0, time_bandwidth=tb)
    assert bank.n_filters > 50
    assert np.all(np.diff(bank.frequencies) < 0)
    assert bank.frequencies[0] < 125.0
    # ten voices per octave
    assert bank.frequencies[0] / bank.frequencies[10] == pytest.approx(2.0)


def test_longer_signals_reach_lower_frequencies() -> None:
    short = MorseFilterBank(signal_length=500, fs=250.0, time_bandwidth=5)
    long = MorseFilterBank(signal_length=4000, fs=250.0, time_bandwidth=5)
    assert long.frequencies[-1] < short.frequencies[-1]
    assert long.n_filters > short.n_filters


def test_unit_sinusoid_at_centre_frequency() -> None:
    bank = MorseFilterBank(signal_length=2000, fs=250.0, time_bandwidth=5)
    f = bank.frequencies[20]
    t = np.arange(2000) / 250.0
    coefs = bank.transform(np.cos(2 * np.pi * f * t))
    assert coefs.shape == (bank.n_filters, 2000)
    assert abs(coefs[20, 1000]) == pytest.approx(1.0, abs=0.05)


def test_transform_rejects_wrong_length() -> None:
    bank = MorseFilterBank(signal_length=100, fs=250.0, time_bandwidth=5)
    with pytest.raises(ValueError):
        bank.transform(np.zeros(99))


def test_scalogram_is_magnitude() -> None:
    x = np.random.default_rng(0).normal(size=512)
    mag, freqs = scalogram(x, 250.0, 10)
    assert mag.shape == (freqs.size, 512)
    assert np.all(mag >= 0)
