from __future__ import annotations

import numpy as np
import pandas as pd

from fault_harmonics.signal.table import HarmonicTable


def harmonic_statistics(table: HarmonicTable, fundamental_hz: float | None = None) -> pd.DataFrame:
    """
    Mean / max / min of every (phase, harmonic) column over all windows.
    One row per phase and order, ordered by order then phase.
    An empty table gives NaN statistics.
    """
    records = []
    for h in table.orders:
        for phase in table.phases:
            col = table.harmonic(phase, h)
            if col.size:
                mean, mx, mn = float(np.mean(col)), float(np.max(col)), float(np.min(col))
            else:
                mean = mx = mn = float("nan")
            rec = {"order": h, "phase": phase, "mean": mean, "max": mx, "min": mn}
            if fundamental_hz is not None:
                rec["frequency_hz"] = h * float(fundamental_hz)
            records.append(rec)
    return pd.DataFrame.from_records(records)


def swing_percent(table: HarmonicTable, phase: str, order: int) -> float:
    """
    Peak-to-peak swing of one harmonic over the run, relative to its mean (%).
    Large swings mark windows worth looking at for a fault signature.
    """
    col = table.harmonic(phase, order)
    if col.size == 0:
        return 0.0
    mean = float(np.mean(col))
    if abs(mean) <= 1e-12:
        return 0.0
    return (float(np.max(col)) - float(np.min(col))) / abs(mean) * 100.0
