from __future__ import annotations

import math
from pathlib import Path

import matplotlib.pyplot as plt

from fault_harmonics.report.summary import ordinal
from fault_harmonics.signal.table import HarmonicTable

PHASE_COLORS = {"A": "r", "B": "g", "C": "b"}


def _color(phase: str) -> str:
    return PHASE_COLORS.get(str(phase).upper(), "k")


def _save(fig, out_path) -> str:
    out_path = str(out_path)
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_path, bbox_inches="tight")
    plt.close(fig)
    return out_path


def plot_fundamental(table: HarmonicTable, out_path: str, fundamental_hz: float) -> str:
    """All phases of the 1st harmonic on one axis."""
    h = table.orders[0]
    fig = plt.figure(figsize=(12, 6), dpi=100)
    ax = fig.add_subplot(111)

    for phase in table.phases:
        ax.plot(table.times, table.harmonic(phase, h), f"{_color(phase)}-", linewidth=2, label=f"Phase {phase}")

    ax.set_xlabel("Time (s)", fontsize=12, fontweight="bold")
    ax.set_ylabel("Magnitude", fontsize=12, fontweight="bold")
    ax.set_title(
        f"{ordinal(h)} Harmonic ({h * fundamental_hz:g} Hz) Evolution Over Time - All Phases",
        fontsize=14,
        fontweight="bold",
    )
    ax.legend(loc="best", fontsize=11)
    ax.grid(True, which="major")
    ax.minorticks_on()
    ax.grid(True, which="minor", alpha=0.25)
    return _save(fig, out_path)


def plot_harmonic_phases(table: HarmonicTable, order: int, out_path: str, fundamental_hz: float) -> str:
    """One stacked panel per phase for a single harmonic order."""
    n = len(table.phases)
    fig, axes = plt.subplots(n, 1, figsize=(12, 8), dpi=100, squeeze=False)

    for ax, phase in zip(axes[:, 0], table.phases):
        ax.plot(table.times, table.harmonic(phase, order), f"{_color(phase)}-", linewidth=1.5)
        ax.set_xlabel("Time (s)", fontsize=11)
        ax.set_ylabel("Magnitude", fontsize=11)
        ax.set_title(
            f"Phase {phase} - {ordinal(order)} Harmonic ({order * fundamental_hz:g} Hz)",
            fontsize=12,
            fontweight="bold",
        )
        ax.grid(True, alpha=0.4)

    return _save(fig, out_path)


def plot_phase_grid(table: HarmonicTable, phase: str, out_path: str, fundamental_hz: float) -> str:
    """Every harmonic of one phase, three panels per row."""
    n = len(table.orders)
    ncols = min(3, n)
    nrows = math.ceil(n / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(14, 9), dpi=100, squeeze=False)
    flat = axes.ravel()

    for ax, h in zip(flat, table.orders):
        ax.plot(table.times, table.harmonic(phase, h), f"{_color(phase)}-", linewidth=1.5)
        ax.set_xlabel("Time (s)", fontsize=10)
        ax.set_ylabel("Magnitude", fontsize=10)
        ax.set_title(f"{ordinal(h)} Harmonic ({h * fundamental_hz:g} Hz)", fontsize=11, fontweight="bold")
        ax.grid(True, alpha=0.4)

    for ax in flat[n:]:
        ax.set_axis_off()

    fig.suptitle(
        f"Phase {phase}: Harmonics {ordinal(table.orders[0])}-{ordinal(table.orders[-1])} Evolution Over Time",
        fontsize=14,
        fontweight="bold",
    )
    return _save(fig, out_path)


def plot_all(table: HarmonicTable, out_dir: str, fundamental_hz: float) -> list[str]:
    """Fundamental overview, per-harmonic phase stacks, and per-phase grids. Returns PNG paths."""
    out = Path(out_dir)
    if table.is_empty:
        return []

    images = [plot_fundamental(table, str(out / "harmonic_1_all_phases.png"), fundamental_hz)]
    for h in table.orders[1:]:
        images.append(plot_harmonic_phases(table, h, str(out / f"harmonic_{h}_phases.png"), fundamental_hz))
    for phase in table.phases:
        images.append(plot_phase_grid(table, phase, str(out / f"phase_{phase}_harmonics.png"), fundamental_hz))
    return images
