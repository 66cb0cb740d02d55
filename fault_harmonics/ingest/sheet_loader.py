from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

import numpy as np
import pandas as pd

from fault_harmonics.config import settings
from fault_harmonics.signal.series import ThreePhaseSeries
from fault_harmonics.signal.validity import estimate_sample_period, is_uniform
from fault_harmonics.utils.logging import info, warn

Layout = Literal["auto", "rows", "columns"]

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}

# Common header names (case-insensitive matching)
TIME_CANDIDATES = ["time", "t", "time (s)", "time_s", "timestamp", "seconds", "t(s)"]
PHASE_CANDIDATES = {
    "A": ["phase a", "phase_a", "phasea", "a", "ia", "va", "i_a", "v_a", "l1", "r"],
    "B": ["phase b", "phase_b", "phaseb", "b", "ib", "vb", "i_b", "v_b", "l2", "y", "s"],
    "C": ["phase c", "phase_c", "phasec", "c", "ic", "vc", "i_c", "v_c", "l3"],
}


def _lower_map(cols) -> dict[str, str]:
    return {str(c).strip().lower(): c for c in cols}


def _find_col(cols, candidates: list[str], exclude: set = frozenset()) -> Optional[object]:
    cols_lower = _lower_map([c for c in cols if c not in exclude])
    for cand in candidates:
        key = cand.strip().lower()
        if key in cols_lower:
            return cols_lower[key]
    return None


def _score_col_name(name: str, candidates: list[str]) -> int:
    """Simple scoring: exact match > contains match."""
    n = name.strip().lower()
    score = 0
    for cand in candidates:
        c = cand.strip().lower()
        if n == c:
            score += 10
        elif len(c) > 1 and c in n:
            score += 3
    return score


def _best_match(cols, candidates: list[str], exclude: set = frozenset()) -> Optional[object]:
    best = None
    best_score = 0
    for col in cols:
        if col in exclude:
            continue
        s = _score_col_name(str(col), candidates)
        if s > best_score:
            best_score = s
            best = col
    return best


def _read_raw(path: Path) -> pd.DataFrame:
    """Header-less frame of every cell; header rows and label columns stay as text."""
    if path.suffix.lower() in EXCEL_SUFFIXES:
        return pd.read_excel(path, header=None)
    try:
        df = pd.read_csv(path, header=None, low_memory=False)
    except (pd.errors.ParserError, UnicodeDecodeError):
        df = None

    # Semicolon/tab exports and non-UTF-8 files
    if df is None or df.shape[1] == 1:
        df = pd.read_csv(path, header=None, sep=None, engine="python", encoding="latin1")
    return df


def _to_float(values) -> np.ndarray:
    s = pd.Series(values).astype(str).str.strip().str.replace(",", ".", regex=False)
    return pd.to_numeric(s, errors="coerce").to_numpy(dtype=float)


def _finish(t: np.ndarray, phases: dict[str, np.ndarray], source: Path) -> ThreePhaseSeries:
    # Mixed-type cells (labels, blanks) become NaN; drop those sample positions everywhere
    keep = np.isfinite(t)
    for x in phases.values():
        keep &= np.isfinite(x)
    dropped = int(keep.size - keep.sum())
    if dropped:
        warn(f"{source.name}: dropped {dropped} sample(s) with missing or non-numeric values.")

    series = ThreePhaseSeries(t[keep], {name: x[keep] for name, x in phases.items()})
    if series.n_samples == 0:
        raise ValueError(f"No numeric samples found in {source}")

    info("Data loaded successfully")
    info(f"Number of samples: {series.n_samples}")
    info(f"Time range: {series.timestamps[0]:.4f} s to {series.timestamps[-1]:.4f} s")
    for name, x in series.phases.items():
        info(f"Phase {name} range: {np.min(x):.2f} to {np.max(x):.2f}")

    dt = estimate_sample_period(series.timestamps)
    if dt > 0:
        info(f"Sample period from timestamps: {dt * 1000:.4f} ms ({1.0 / dt:.1f} Hz)")
    if not is_uniform(series.timestamps):
        warn("Timestamp spacing is not uniform; spectral bins assume a fixed sample period.")
    return series


def _rows_to_series(raw: pd.DataFrame, phase_names: tuple[str, ...], source: Path) -> ThreePhaseSeries:
    n_rows = 1 + len(phase_names)
    if raw.shape[0] < n_rows or raw.shape[1] < 2:
        raise ValueError(
            f"Expected at least {n_rows} rows (time + {len(phase_names)} phases) and 2 columns, "
            f"got shape {raw.shape}"
        )

    block = raw.iloc[:n_rows, 1:]
    t = _to_float(block.iloc[0].to_numpy())
    phases = {name: _to_float(block.iloc[i + 1].to_numpy()) for i, name in enumerate(phase_names)}
    return _finish(t, phases, source)


def _columns_to_series(raw: pd.DataFrame, phase_names: tuple[str, ...], source: Path) -> ThreePhaseSeries:
    # First raw row is the header; columns are addressed by position from here on
    cols = [str(c).strip() for c in raw.iloc[0]] if raw.shape[0] else []
    data = raw.iloc[1:]

    if len(cols) < 1 + len(phase_names):
        raise ValueError(
            f"Expected a time column and {len(phase_names)} phase columns.\nColumns found: {cols}"
        )

    ts_col = _find_col(cols, TIME_CANDIDATES) or _best_match(cols, TIME_CANDIDATES)
    used = {ts_col} if ts_col is not None else set()
    found: dict[str, object] = {}
    for name in phase_names:
        candidates = PHASE_CANDIDATES.get(name.upper(), [name.lower(), f"phase {name.lower()}"])
        col = _find_col(cols, candidates, exclude=used) or _best_match(cols, candidates, exclude=used)
        if col is not None:
            found[name] = col
            used.add(col)

    if ts_col is None or len(found) < len(phase_names):
        warn(f"Could not match all columns by name; using column order. Columns found: {cols}")
        ts_pos = 0
        positions = {name: i + 1 for i, name in enumerate(phase_names)}
    else:
        info(
            f"Detected columns: time='{ts_col}', "
            + ", ".join(f"{name}='{col}'" for name, col in found.items())
        )
        ts_pos = cols.index(ts_col)
        positions = {name: cols.index(col) for name, col in found.items()}

    t = _to_float(data.iloc[:, ts_pos].to_numpy())
    phases = {name: _to_float(data.iloc[:, pos].to_numpy()) for name, pos in positions.items()}
    return _finish(t, phases, source)


def load_transposed_sheet(path: str | Path, phase_names: tuple[str, ...] = ("A", "B", "C")) -> ThreePhaseSeries:
    """
    Row-oriented layout: first column holds labels, row 1 is time,
    following rows are one phase each.

        Time     | 0.0000 | 0.0005 | ...
        Phase A  |  12.1  |  11.8  | ...
        Phase B  |  ...
        Phase C  |  ...
    """
    path = Path(path)
    info(f"Loading row-oriented sheet: {path}")
    return _rows_to_series(_read_raw(path), tuple(phase_names), path)


def load_wide_csv(path: str | Path, phase_names: tuple[str, ...] = ("A", "B", "C")) -> ThreePhaseSeries:
    """
    Column-oriented layout with a header row: one time column plus one column per phase.
    Columns are matched by name; unrecognized headers fall back to position
    (first column time, next columns phases in order).
    """
    path = Path(path)
    info(f"Loading column-oriented table: {path}")
    return _columns_to_series(_read_raw(path), tuple(phase_names), path)


def load_series(
    path: str | Path,
    layout: Layout = "auto",
    phase_names: Optional[tuple[str, ...]] = None,
) -> ThreePhaseSeries:
    """
    Load three aligned phase series from a spreadsheet or CSV export.
    layout="auto" treats a sheet that is wider than it is tall as row-oriented.
    The file is parsed once; both layouts work from the same header-less frame.
    """
    names = tuple(phase_names or settings.phases)
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    if layout not in ("auto", "rows", "columns"):
        raise ValueError(f"Unknown layout='{layout}'. Options: ['auto', 'rows', 'columns']")

    info(f"Loading {path}")
    raw = _read_raw(path)
    if layout == "auto":
        layout = "rows" if raw.shape[1] > raw.shape[0] else "columns"
        info(f"Auto-detected {'row' if layout == 'rows' else 'column'}-oriented layout.")

    if layout == "rows":
        return _rows_to_series(raw, names, path)
    return _columns_to_series(raw, names, path)
