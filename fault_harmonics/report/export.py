from __future__ import annotations

from pathlib import Path

from fault_harmonics.signal.table import HarmonicTable
from fault_harmonics.utils.logging import info


def export_csv(table: HarmonicTable, out_path: str | Path, float_format: str = "%.9g") -> Path:
    """
    Delimited-text export: leading time column, then one column per phase x harmonic
    (A_H1..A_H9, B_H1..B_H9, C_H1..C_H9).
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    table.to_dataframe().to_csv(out_path, index=False, float_format=float_format)
    info(f"Wrote {len(table):,} rows to {out_path}")
    return out_path
