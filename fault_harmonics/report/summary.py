from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table

from fault_harmonics.signal.metrics import harmonic_statistics, swing_percent
from fault_harmonics.signal.table import HarmonicTable
from fault_harmonics.signal.windows import WindowSpec
from fault_harmonics.utils.logging import console as default_console


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def print_summary(
    table: HarmonicTable,
    spec: WindowSpec,
    fundamental_hz: float,
    console: Optional[Console] = None,
) -> None:
    """Console version of the harmonic analysis summary: run geometry plus mean/max/min per harmonic."""
    console = console or default_console

    console.rule("[bold]Harmonic analysis summary")
    console.print(f"Window duration: {spec.window_samples * spec.sample_period_s * 1000:.1f} ms")
    console.print(f"Step size: {spec.step_samples * spec.sample_period_s * 1000:.1f} ms")
    console.print(f"Frequency resolution: {spec.resolution_hz:g} Hz")
    console.print(f"Total windows analyzed: {len(table)}")

    if table.is_empty:
        console.print("[yellow]No complete window in the input; nothing to summarize.[/yellow]")
        return

    console.print(f"Time range: {table.times[0]:.4f} s to {table.times[-1]:.4f} s")

    stats = harmonic_statistics(table)
    grid = Table(show_header=True, header_style="bold")
    grid.add_column("Harmonic")
    grid.add_column("Phase")
    grid.add_column("Mean", justify="right")
    grid.add_column("Max", justify="right")
    grid.add_column("Min", justify="right")
    grid.add_column("Swing %", justify="right")

    for rec in stats.itertuples(index=False):
        label = f"{ordinal(rec.order)} ({rec.order * fundamental_hz:g} Hz)" if rec.phase == table.phases[0] else ""
        grid.add_row(
            label,
            str(rec.phase),
            f"{rec.mean:.6f}",
            f"{rec.max:.6f}",
            f"{rec.min:.6f}",
            f"{swing_percent(table, rec.phase, rec.order):.1f}",
        )

    console.print(grid)
