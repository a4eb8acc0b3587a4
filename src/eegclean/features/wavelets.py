"""
wavelets.py - continuous wavelet transform with a generalized Morse filter bank.

Public:
- MorseFilterBank(signal_length, fs, time_bandwidth, gamma=3, voices_per_octave=10)
- MorseFilterBank.transform(x) -> complex coefficients (n_freqs, n_samples)
- scalogram(x, fs, time_bandwidth) -> |CWT| (n_freqs, n_samples)

Notes:
- The analysis filters are defined in the frequency domain,
  psi(w) = 2 * (e*gamma/beta)**(beta/gamma) * w**beta * exp(-w**gamma) for w > 0,
  with beta = time_bandwidth / gamma. Their peak value is 2 (L1 normalisation),
  so a unit sinusoid at a filter's centre frequency gives a coefficient of
  magnitude 1.
- Rows are ordered from the highest to the lowest frequency.
- The signal is reflected by half its length on both sides before the FFT to
  limit edge effects; coefficients are cropped back to the signal length.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np
from scipy.optimize import brentq

# Highest analysed frequency: the filter response at Nyquist is this fraction of its peak.
NYQUIST_CUTOFF = 0.5
# Lowest analysed frequency: this many time-domain standard deviations must fit in the signal.
N_STD = 2.0


def morse_peak_frequency(beta: float, gamma: float) -> float:
    """Peak radian frequency of the Morse wavelet at unit scale."""
    return float((beta / gamma) ** (1.0 / gamma))


def morse_response(omega: np.ndarray, beta: float, gamma: float) -> np.ndarray:
    """Frequency response of the L1-normalised Morse wavelet (zero for omega <= 0)."""
    omega = np.asarray(omega, dtype=np.float64)
    out = np.zeros_like(omega)
    pos = omega > 0
    log_amp = np.log(2.0) + (beta / gamma) * (1.0 + np.log(gamma) - np.log(beta))
    w = omega[pos]
    out[pos] = np.exp(log_amp + beta * np.log(w) - w ** gamma)
    return out


def _cutoff_frequency(beta: float, gamma: float, fraction: float) -> float:
    """Radian frequency above the peak where the response falls to ``fraction`` of its peak."""
    w_pk = morse_peak_frequency(beta, gamma)

    def f(w: float) -> float:
        return beta * np.log(w / w_pk) - (w ** gamma - w_pk ** gamma) - np.log(fraction)

    hi = 2.0 * w_pk
    while f(hi) > 0:
        hi *= 2.0
    return float(brentq(f, w_pk, hi))


@dataclass
class MorseFilterBank:
    """
    Generalized Morse wavelet filter bank for a fixed signal length and sampling rate.

    Args:
        signal_length: number of samples of the signals to transform.
        fs: sampling frequency in Hz.
        time_bandwidth: time-bandwidth product P**2; larger values give longer
            wavelets with finer frequency and coarser time resolution.
        gamma: Morse symmetry parameter.
        voices_per_octave: scales per octave.
    """

    signal_length: int
    fs: float
    time_bandwidth: float
    gamma: float = 3.0
    voices_per_octave: int = 10
    scales: np.ndarray = field(init=False, repr=False)
    frequencies: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.signal_length < 2:
            raise ValueError("signal_length must be at least 2")
        if self.time_bandwidth <= self.gamma:
            raise ValueError("time_bandwidth must exceed gamma")
        self.beta = self.time_bandwidth / self.gamma
        self.peak = morse_peak_frequency(self.beta, self.gamma)
        self.scales = self._scales()
        self.frequencies = self.peak / (2.0 * np.pi * self.scales) * self.fs

    def _scales(self) -> np.ndarray:
        # smallest scale: filter response at Nyquist (pi rad/sample) drops to NYQUIST_CUTOFF of peak
        min_scale = _cutoff_frequency(self.beta, self.gamma, NYQUIST_CUTOFF) / np.pi
        # largest scale: N_STD time-domain standard deviations span the signal
        sigma_t = np.sqrt(self.time_bandwidth) / self.peak
        max_scale = max(self.signal_length / (N_STD * sigma_t), min_scale)
        n_octaves = np.log2(max_scale / min_scale)
        n_scales = int(np.floor(n_octaves * self.voices_per_octave)) + 1
        return min_scale * 2.0 ** (np.arange(n_scales) / self.voices_per_octave)

    @property
    def n_filters(self) -> int:
        return int(self.scales.size)

    def _padded(self, x: np.ndarray) -> Tuple[np.ndarray, int]:
        n = x.shape[-1]
        pad = n // 2
        if pad == 0:
            return x, 0
        return np.pad(x, (pad, pad), mode="symmetric"), pad

    def transform(self, x: np.ndarray) -> np.ndarray:
        """
        Continuous wavelet transform of a 1-D signal.

        Args:
            x: (signal_length,) real signal.

        Returns:
            complex array (n_filters, signal_length), highest frequency first.
        """
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self.signal_length:
            raise ValueError(f"expected a 1-D signal of length {self.signal_length}, got shape {x.shape}")
        xp, pad = self._padded(x)
        m = xp.shape[0]
        spectrum = np.fft.fft(xp)
        omega = 2.0 * np.pi * np.fft.fftfreq(m)
        filters = morse_response(self.scales[:, None] * omega[None, :], self.beta, self.gamma)
        coefs = np.fft.ifft(spectrum[None, :] * filters, axis=-1)
        return coefs[:, pad : pad + self.signal_length]


def scalogram(x: np.ndarray, fs: float, time_bandwidth: float) -> Tuple[np.ndarray, np.ndarray]:
    """Return (|CWT| of ``x`` shaped (n_freqs, n_samples), frequencies in Hz)."""
    bank = MorseFilterBank(signal_length=len(x), fs=fs, time_bandwidth=time_bandwidth)
    return np.abs(bank.transform(x)), bank.frequencies
