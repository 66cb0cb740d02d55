"""Window geometry: counts, boundaries and center timestamps."""

import numpy as np
import pytest

from fault_harmonics.errors import ConfigurationError
from fault_harmonics.signal.windows import Window, WindowPlan, WindowSpec, window_count


class TestWindowCount:
    def test_reference_scenario(self):
        # 1001 samples, 200-sample window, 2-sample step
        assert window_count(1001, 200, 2) == 401

    def test_exact_fit_gives_one_window(self):
        assert window_count(200, 200, 2) == 1

    def test_too_short_gives_zero(self):
        assert window_count(199, 200, 2) == 0
        assert window_count(0, 200, 1) == 0

    @pytest.mark.parametrize("n", [200, 201, 250, 1000, 1001, 4096])
    @pytest.mark.parametrize("L,S", [(200, 1), (200, 2), (200, 7), (64, 64), (2, 3)])
    def test_matches_formula_and_plan(self, n, L, S):
        expected = (n - L) // S + 1 if n >= L else 0
        plan = WindowPlan(n, L, S)
        windows = list(plan)
        assert window_count(n, L, S) == expected
        assert len(plan) == expected
        assert len(windows) == expected
        if windows:
            # last window fits, the next one would not
            assert windows[-1].stop <= n
            assert windows[-1].start + S + L > n


class TestWindowPlan:
    def test_first_and_last_window_bounds(self):
        plan = WindowPlan(1001, 200, 2)
        first, last = plan[0], plan[-1]
        assert (first.start, first.stop - 1) == (0, 199)
        assert (last.start, last.stop - 1) == (800, 999)

    def test_starts_step_by_s(self):
        plan = WindowPlan(30, 10, 4)
        assert [w.start for w in plan] == [0, 4, 8, 12, 16, 20]
        assert np.array_equal(plan.starts(), np.array([0, 4, 8, 12, 16, 20]))

    def test_restartable(self):
        plan = WindowPlan(500, 200, 3)
        assert list(plan) == list(plan)

    def test_centers(self):
        plan = WindowPlan(1001, 200, 2)
        c = plan.centers()
        assert c[0] == 100
        assert c[-1] == 900
        assert np.all(c == plan.starts() + 100)

    def test_center_times_lookup(self):
        t = np.arange(1001) * 0.0005
        plan = WindowPlan(1001, 200, 2)
        ct = plan.center_times(t)
        assert ct.shape == (401,)
        assert np.array_equal(ct, t[np.arange(401) * 2 + 100])
        assert np.all(np.diff(ct) > 0)

    def test_exact_fit_center(self):
        plan = WindowPlan(200, 200, 5)
        assert len(plan) == 1
        assert plan[0].center == 100

    def test_empty_plan(self):
        plan = WindowPlan(150, 200, 2)
        assert list(plan) == []
        assert plan.center_times(np.arange(150, dtype=float)).size == 0

    def test_index_out_of_range(self):
        plan = WindowPlan(210, 200, 5)
        with pytest.raises(IndexError):
            plan[3]

    def test_window_slice_is_view(self):
        x = np.arange(20, dtype=float)
        w = Window(start=4, length=6)
        s = w.slice(x)
        assert np.array_equal(s, np.arange(4, 10, dtype=float))
        assert np.shares_memory(s, x)

    def test_rejects_bad_step(self):
        with pytest.raises(ConfigurationError):
            WindowPlan(100, 10, 0)


class TestWindowSpec:
    def test_defaults_and_derived(self):
        spec = WindowSpec(window_samples=200, step_samples=2, sample_period_s=0.0005)
        assert spec.sample_rate_hz == pytest.approx(2000.0)
        assert spec.resolution_hz == pytest.approx(10.0)

    @pytest.mark.parametrize(
        "L,S,Ts",
        [(1, 1, 0.001), (0, 1, 0.001), (201, 2, 0.0005), (200, 0, 0.0005), (200, 2, 0.0), (200, 2, -1.0)],
    )
    def test_invalid(self, L, S, Ts):
        with pytest.raises(ConfigurationError):
            WindowSpec(window_samples=L, step_samples=S, sample_period_s=Ts)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            WindowSpec(window_samples=3, step_samples=1, sample_period_s=1.0)
