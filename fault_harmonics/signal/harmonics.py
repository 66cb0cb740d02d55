from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

from fault_harmonics.errors import ConfigurationError
from fault_harmonics.signal.fft_engine import Spectrum


def validate_orders(orders: Iterable[int]) -> tuple[int, ...]:
    out: list[int] = []
    for h in orders:
        try:
            f = float(h)
        except (TypeError, ValueError):
            raise ConfigurationError(f"harmonic orders must be integers, got {h!r}") from None
        if not f.is_integer():
            raise ConfigurationError(f"harmonic orders must be integers, got {h!r}")
        out.append(int(f))
    if not out:
        raise ConfigurationError("at least one harmonic order is required")
    bad = [h for h in out if h <= 0]
    if bad:
        raise ConfigurationError(f"harmonic orders must be positive integers, got {bad}")
    return tuple(out)


def validate_fundamental(fundamental_hz: float) -> float:
    f0 = float(fundamental_hz)
    if not f0 > 0:
        raise ConfigurationError(f"fundamental_hz must be > 0, got {fundamental_hz}")
    return f0


def nearest_bin(freqs_hz: np.ndarray, target_hz: float) -> int:
    """
    Index of the bin closest to target_hz. On a halfway tie the lower index wins.
    Distances within a billionth of a bin of the minimum count as ties, so
    rounding in k * Fs / L cannot flip a tie to the upper bin.
    """
    freqs = np.asarray(freqs_hz, dtype=float)
    dist = np.abs(freqs - float(target_hz))
    spacing = abs(freqs[1] - freqs[0]) if freqs.size > 1 else 0.0
    return int(np.flatnonzero(dist <= dist.min() + 1e-9 * spacing)[0])


def harmonic_bin_index(
    order: int,
    fundamental_hz: float,
    window_samples: int,
    sample_rate_hz: float,
) -> int:
    """
    Closed-form nearest bin for order * f0 on the axis k * Fs / L.
    Halfway positions round down, matching nearest_bin. Targets above
    Nyquist clamp to the last bin (L/2).
    """
    pos = float(order) * float(fundamental_hz) * float(window_samples) / float(sample_rate_hz)
    idx = math.ceil(pos - 0.5)
    return int(min(max(idx, 0), window_samples // 2))


def harmonic_bins(
    orders: Sequence[int],
    fundamental_hz: float,
    window_samples: int,
    sample_rate_hz: float,
) -> np.ndarray:
    return np.array(
        [harmonic_bin_index(h, fundamental_hz, window_samples, sample_rate_hz) for h in orders],
        dtype=np.int64,
    )


def extract_harmonic(spectrum: Spectrum, fundamental_hz: float, order: int) -> float:
    f0 = validate_fundamental(fundamental_hz)
    (h,) = validate_orders([order])
    idx = nearest_bin(spectrum.freqs_hz, h * f0)
    return float(spectrum.magnitudes[idx])


def extract_harmonics(
    spectrum: Spectrum,
    fundamental_hz: float,
    orders: Sequence[int],
) -> np.ndarray:
    f0 = validate_fundamental(fundamental_hz)
    hs = validate_orders(orders)
    idx = [nearest_bin(spectrum.freqs_hz, h * f0) for h in hs]
    return spectrum.magnitudes[idx].astype(float, copy=True)
