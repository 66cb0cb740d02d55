"""Spreadsheet / CSV ingestion into aligned phase series."""

import numpy as np
import pandas as pd
import pytest

from fault_harmonics.ingest import sheet_loader
from fault_harmonics.ingest.sheet_loader import (
    PHASE_CANDIDATES,
    TIME_CANDIDATES,
    load_series,
    load_transposed_sheet,
    load_wide_csv,
)

TS = 0.0005
N = 40


def _signals():
    t = np.arange(N) * TS
    a = 10 * np.sin(2 * np.pi * 50 * t)
    b = 10 * np.sin(2 * np.pi * 50 * t - 2 * np.pi / 3)
    c = 10 * np.sin(2 * np.pi * 50 * t + 2 * np.pi / 3)
    return t, a, b, c


def _row_frame(gap=None):
    t, a, b, c = _signals()
    b = list(b)
    if gap is not None:
        b[gap] = "n/a"
    rows = [["Time"] + list(t), ["Phase A"] + list(a), ["Phase B"] + list(b), ["Phase C"] + list(c)]
    return pd.DataFrame(rows)


def _check(series):
    t, a, b, c = _signals()
    assert series.n_samples == N
    assert series.phase_names == ("A", "B", "C")
    assert np.allclose(series.timestamps, t)
    assert np.allclose(series["A"], a)
    assert np.allclose(series["B"], b)
    assert np.allclose(series["C"], c)


class TestRowLayout:
    def test_csv(self, tmp_path):
        p = tmp_path / "fault.csv"
        _row_frame().to_csv(p, header=False, index=False)
        _check(load_transposed_sheet(p))

    def test_xlsx_auto(self, tmp_path):
        p = tmp_path / "fault.xlsx"
        _row_frame().to_excel(p, header=False, index=False)
        _check(load_series(p))

    def test_csv_auto(self, tmp_path):
        p = tmp_path / "fault.csv"
        _row_frame().to_csv(p, header=False, index=False)
        _check(load_series(p, layout="auto"))

    def test_non_numeric_cells_dropped(self, tmp_path):
        df = _row_frame(gap=4)
        p = tmp_path / "gap.csv"
        df.to_csv(p, header=False, index=False)
        series = load_transposed_sheet(p)
        assert series.n_samples == N - 1

    def test_too_few_rows(self, tmp_path):
        p = tmp_path / "short.csv"
        _row_frame().iloc[:2].to_csv(p, header=False, index=False)
        with pytest.raises(ValueError):
            load_transposed_sheet(p)


class TestColumnLayout:
    def test_named_columns(self, tmp_path):
        t, a, b, c = _signals()
        p = tmp_path / "wide.csv"
        pd.DataFrame({"Time (s)": t, "Phase A": a, "Phase B": b, "Phase C": c}).to_csv(p, index=False)
        _check(load_series(p))

    def test_columns_in_any_order(self, tmp_path):
        t, a, b, c = _signals()
        p = tmp_path / "wide.csv"
        pd.DataFrame({"Ic": c, "time": t, "Ia": a, "Ib": b}).to_csv(p, index=False)
        _check(load_wide_csv(p))

    def test_unnamed_columns_fall_back_to_position(self, tmp_path):
        t, a, b, c = _signals()
        p = tmp_path / "wide.csv"
        pd.DataFrame({"col0": t, "col1": a, "col2": b, "col3": c}).to_csv(p, index=False)
        _check(load_series(p, layout="columns"))

    def test_short_t_header_is_time_not_phase_c(self, tmp_path):
        t, a, b, c = _signals()
        p = tmp_path / "wide.csv"
        pd.DataFrame({"t": t, "a": a, "b": b, "c": c}).to_csv(p, index=False)
        _check(load_wide_csv(p))

    def test_short_headers_in_any_order(self, tmp_path):
        t, a, b, c = _signals()
        p = tmp_path / "wide.csv"
        pd.DataFrame({"c": c, "a": a, "t": t, "b": b}).to_csv(p, index=False)
        _check(load_series(p, layout="columns"))

    def test_no_name_claimed_by_time_and_a_phase(self):
        time_names = set(TIME_CANDIDATES)
        for names in PHASE_CANDIDATES.values():
            assert time_names.isdisjoint(names)

    def test_tab_separated(self, tmp_path):
        t, a, b, c = _signals()
        p = tmp_path / "export.txt"
        df = pd.DataFrame({"Time": t, "Phase A": a, "Phase B": b, "Phase C": c})
        df.to_csv(p, index=False, sep="\t")
        _check(load_wide_csv(p))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_series(tmp_path / "nope.xlsx")


def test_unknown_layout(tmp_path):
    p = tmp_path / "fault.csv"
    _row_frame().to_csv(p, header=False, index=False)
    with pytest.raises(ValueError):
        load_series(p, layout="diagonal")


@pytest.mark.parametrize("layout", ["rows", "columns"])
def test_auto_layout_reads_file_once(tmp_path, monkeypatch, layout):
    t, a, b, c = _signals()
    p = tmp_path / "fault.csv"
    if layout == "rows":
        _row_frame().to_csv(p, header=False, index=False)
    else:
        pd.DataFrame({"Time": t, "Phase A": a, "Phase B": b, "Phase C": c}).to_csv(p, index=False)

    calls = []
    read_raw = sheet_loader._read_raw

    def counting_read(path):
        calls.append(path)
        return read_raw(path)

    monkeypatch.setattr(sheet_loader, "_read_raw", counting_read)
    _check(load_series(p, layout="auto"))
    assert len(calls) == 1
