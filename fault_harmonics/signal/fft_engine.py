from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.fft import rfft

from fault_harmonics.errors import ConfigurationError


@dataclass(frozen=True)
class Spectrum:
    freqs_hz: np.ndarray
    magnitudes: np.ndarray

    @property
    def n_bins(self) -> int:
        return int(self.magnitudes.size)

    @property
    def window_samples(self) -> int:
        return 2 * (self.n_bins - 1)


def bin_frequencies(window_samples: int, sample_rate_hz: float) -> np.ndarray:
    """Bin k sits at k * Fs / L, for k = 0..L/2."""
    # k * Fs / L rounds once; rfftfreq's k / (L * d) can land off exact half-bin ties
    n = int(window_samples)
    return np.arange(n // 2 + 1, dtype=float) * float(sample_rate_hz) / n


def single_sided_spectrum(window: np.ndarray, sample_rate_hz: float) -> Spectrum:
    """
    Single-sided amplitude spectrum of one window.
    Rectangular window, no zero padding: transform length == len(window).
    Magnitudes are |X_k| / L, with bins strictly between DC and Nyquist doubled.
    len(window) must be even, otherwise there is no Nyquist bin to leave undoubled.
    """
    x = np.asarray(window, dtype=float)
    n = int(x.size)
    if n < 2 or n % 2:
        raise ConfigurationError(f"window length must be an even number >= 2, got {n}")
    if not sample_rate_hz > 0:
        raise ConfigurationError(f"sample_rate_hz must be > 0, got {sample_rate_hz}")

    mags = np.abs(rfft(x)) / n
    mags[1:-1] *= 2.0

    return Spectrum(freqs_hz=bin_frequencies(n, sample_rate_hz), magnitudes=mags)
