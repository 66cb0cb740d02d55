from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import typer

from fault_harmonics.config import Settings, settings
from fault_harmonics.ingest.sheet_loader import Layout, load_series
from fault_harmonics.report.export import export_csv
from fault_harmonics.report.plots import plot_all
from fault_harmonics.report.summary import print_summary
from fault_harmonics.signal.rolling import analyze_rolling_harmonics
from fault_harmonics.signal.table import HarmonicTable
from fault_harmonics.utils.logging import error, info

app = typer.Typer(add_completion=False)


@dataclass
class PipelineResult:
    table: HarmonicTable
    csv_path: Path
    images: list[str] = field(default_factory=list)


def build_settings(**overrides) -> Settings:
    """Default settings with the non-None overrides applied (and validated)."""
    values = settings.model_dump()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings.model_validate(values)


def run_pipeline(
    input_path: str,
    out_dir: str = "data/outputs",
    layout: Layout = "auto",
    cfg: Optional[Settings] = None,
    plots: bool = True,
    summary: bool = True,
) -> PipelineResult:
    """
    Callable pipeline: load -> rolling harmonics -> CSV (+ plots, console summary).
    Raises exceptions so callers see the real error.
    """
    cfg = cfg or settings
    out_dir_p = Path(out_dir)
    out_dir_p.mkdir(parents=True, exist_ok=True)

    t0 = time.time()
    series = load_series(input_path, layout=layout, phase_names=cfg.phases)
    info(f"Loaded {series.n_samples:,} samples x {len(series.phases)} phases in {time.time() - t0:.2f}s")

    spec = cfg.window_spec()
    table = analyze_rolling_harmonics(
        series,
        spec,
        fundamental_hz=cfg.fundamental_hz,
        orders=cfg.orders(),
        workers=cfg.workers,
        progress_every=cfg.progress_every,
    )

    csv_path = export_csv(table, out_dir_p / "harmonics.csv")

    images: list[str] = []
    if plots:
        images = plot_all(table, str(out_dir_p / "plots"), cfg.fundamental_hz)
        info(f"Saved {len(images)} plot(s) to {out_dir_p / 'plots'}")

    if summary:
        print_summary(table, spec, cfg.fundamental_hz)

    return PipelineResult(table=table, csv_path=csv_path, images=images)


# -------------------------
# Typer CLI wrapper
# -------------------------
@app.command()
def run(
    input_path: str = typer.Argument(..., help="Spreadsheet or CSV with time + phase A/B/C samples"),
    out_dir: str = typer.Option("data/outputs", help="Output folder"),
    layout: str = typer.Option("auto", help="auto|rows|columns"),
    window_samples: Optional[int] = typer.Option(None, help="Window length in samples (even)"),
    step_samples: Optional[int] = typer.Option(None, help="Step between windows in samples"),
    sample_period_s: Optional[float] = typer.Option(None, help="Sampling period in seconds"),
    fundamental_hz: Optional[float] = typer.Option(None, help="Fundamental frequency (Hz)"),
    max_harmonic: Optional[int] = typer.Option(None, help="Highest harmonic order to extract"),
    workers: Optional[int] = typer.Option(None, help="Threads used for window processing"),
    plots: bool = typer.Option(True, help="Write PNG plots"),
):
    try:
        cfg = build_settings(
            window_samples=window_samples,
            step_samples=step_samples,
            sample_period_s=sample_period_s,
            fundamental_hz=fundamental_hz,
            max_harmonic=max_harmonic,
            workers=workers,
        )
        result = run_pipeline(input_path, out_dir=out_dir, layout=layout, cfg=cfg, plots=plots)  # type: ignore[arg-type]
    except (ValueError, FileNotFoundError) as e:
        error(str(e))
        raise typer.Exit(code=1)

    info(f"Harmonic table written: {result.csv_path}")


if __name__ == "__main__":
    app()
