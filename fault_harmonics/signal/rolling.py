from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

import numpy as np

from fault_harmonics.config import settings
from fault_harmonics.errors import ConfigurationError
from fault_harmonics.signal.fft_engine import single_sided_spectrum
from fault_harmonics.signal.harmonics import harmonic_bins, validate_fundamental, validate_orders
from fault_harmonics.signal.series import ThreePhaseSeries
from fault_harmonics.signal.table import HarmonicTable
from fault_harmonics.signal.validity import estimate_sample_period, is_uniform, nyquist_limited_orders
from fault_harmonics.signal.windows import Window, WindowPlan, WindowSpec
from fault_harmonics.utils.logging import info, progress, warn


def _window_row(
    series: ThreePhaseSeries,
    window: Window,
    sample_rate_hz: float,
    bins: np.ndarray,
) -> np.ndarray:
    """(n_phases, n_orders) magnitudes for one window. Touches nothing outside the window."""
    row = np.empty((len(series.phases), bins.size), dtype=float)
    for p, samples in enumerate(series.phases.values()):
        spectrum = single_sided_spectrum(window.slice(samples), sample_rate_hz)
        row[p] = spectrum.magnitudes[bins]
    return row


def _check_timing(series: ThreePhaseSeries, spec: WindowSpec) -> None:
    if series.n_samples < 3:
        return
    if not is_uniform(series.timestamps):
        warn("Timestamps are not uniformly spaced; window-center times may be uneven.")
    dt = estimate_sample_period(series.timestamps)
    if dt > 0 and abs(dt - spec.sample_period_s) > 1e-3 * spec.sample_period_s:
        warn(
            f"Configured sample period {spec.sample_period_s:g}s differs from "
            f"timestamp spacing {dt:g}s; frequencies follow the configured value."
        )


def analyze_rolling_harmonics(
    series: ThreePhaseSeries,
    spec: Optional[WindowSpec] = None,
    fundamental_hz: Optional[float] = None,
    orders: Optional[Iterable[int]] = None,
    workers: Optional[int] = None,
    progress_every: Optional[int] = None,
) -> HarmonicTable:
    """
    Rolling-window harmonic magnitudes for every phase of `series`.

    Windows start at 0, S, 2S, ... and each yields one row holding the window-center
    time and the single-sided magnitude at h * f0 (nearest bin) for every phase and
    order. Rows come back in window order whatever the number of workers.
    Fewer samples than one window gives an empty table.
    Configuration problems raise before any window is processed.
    """
    spec = spec if spec is not None else settings.window_spec()
    f0 = validate_fundamental(settings.fundamental_hz if fundamental_hz is None else fundamental_hz)
    hs = validate_orders(settings.orders() if orders is None else orders)
    n_workers = int(settings.workers if workers is None else workers)
    if n_workers < 1:
        raise ConfigurationError(f"workers must be >= 1, got {n_workers}")
    every = int(settings.progress_every if progress_every is None else progress_every)
    if every < 1:
        raise ConfigurationError(f"progress_every must be >= 1, got {every}")

    phases = series.phase_names
    plan = WindowPlan.from_spec(series.n_samples, spec)
    total = len(plan)

    info(
        f"Rolling FFT: {series.n_samples} samples, window {spec.window_samples} "
        f"({spec.window_samples * spec.sample_period_s * 1000:.1f} ms), step {spec.step_samples} "
        f"({spec.step_samples * spec.sample_period_s * 1000:.1f} ms), {total} windows"
    )

    if total == 0:
        warn(f"Only {series.n_samples} samples; a window needs {spec.window_samples}. Returning empty table.")
        return HarmonicTable.empty(phases, hs)

    _check_timing(series, spec)

    fs = spec.sample_rate_hz
    over = nyquist_limited_orders(hs, f0, fs)
    if over:
        warn(f"Harmonic orders {over} exceed Nyquist ({fs / 2:g} Hz); reading the Nyquist bin instead.")

    bins = harmonic_bins(hs, f0, spec.window_samples, fs)

    t0 = time.time()
    rows: list[np.ndarray] = []

    def collect(results: Iterable[np.ndarray]) -> None:
        for w, row in enumerate(results, start=1):
            rows.append(row)
            if w % every == 0 or w == total:
                progress(w, total)

    if n_workers == 1:
        collect(_window_row(series, window, fs, bins) for window in plan)
    else:
        with ThreadPoolExecutor(max_workers=n_workers) as pool:
            collect(pool.map(lambda window: _window_row(series, window, fs, bins), plan))

    info(f"FFT analysis complete in {time.time() - t0:.2f}s")
    return HarmonicTable.from_rows(plan.center_times(series.timestamps), rows, phases, hs)
