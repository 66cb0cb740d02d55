from __future__ import annotations

from typing import Sequence

import numpy as np


def estimate_sample_period(timestamps) -> float:
    """
    Estimate sample period (s) from median timestamp delta.
    Returns 0.0 when there are fewer than two samples.
    """
    t = np.asarray(timestamps, dtype=float)
    if t.size < 2:
        return 0.0
    median_dt = float(np.median(np.diff(t)))
    if median_dt <= 0:
        return 0.0
    return median_dt


def is_uniform(timestamps, rel_tol: float = 1e-3) -> bool:
    """True if every timestamp delta is within rel_tol of the median delta."""
    t = np.asarray(timestamps, dtype=float)
    if t.size < 3:
        return True
    dt = np.diff(t)
    med = float(np.median(dt))
    if med <= 0:
        return False
    return bool(np.all(np.abs(dt - med) <= rel_tol * med))


def nyquist_limited_orders(
    orders: Sequence[int],
    fundamental_hz: float,
    sample_rate_hz: float,
) -> list[int]:
    """
    Harmonic orders whose frequency lies above Fs/2.
    Their magnitudes are read from the Nyquist bin, so they carry no real information.
    """
    nyquist = 0.5 * float(sample_rate_hz)
    return [int(h) for h in orders if float(h) * float(fundamental_hz) > nyquist]
