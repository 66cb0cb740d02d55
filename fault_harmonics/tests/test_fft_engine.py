"""Single-sided amplitude spectrum of one window."""

import numpy as np
import pytest

from fault_harmonics.errors import ConfigurationError
from fault_harmonics.signal.fft_engine import bin_frequencies, single_sided_spectrum

FS = 2000.0
L = 200


def _t(n=L, fs=FS):
    return np.arange(n) / fs


def test_length_and_frequency_axis():
    spec = single_sided_spectrum(np.zeros(L), FS)
    assert spec.magnitudes.shape == (L // 2 + 1,)
    assert spec.freqs_hz.shape == (L // 2 + 1,)
    assert np.allclose(spec.freqs_hz, np.arange(L // 2 + 1) * FS / L)
    assert spec.window_samples == L
    assert spec.freqs_hz[-1] == pytest.approx(FS / 2)


def test_bin_aligned_sine_recovers_amplitude():
    x = 2.0 * np.sin(2 * np.pi * 50.0 * _t())
    spec = single_sided_spectrum(x, FS)
    assert spec.magnitudes[5] == pytest.approx(2.0, abs=1e-9)
    others = np.delete(spec.magnitudes, 5)
    assert np.all(others < 1e-9)


@pytest.mark.parametrize("k,amp,phase", [(1, 1.0, 0.0), (7, 3.5, 0.4), (33, 0.25, -1.2), (99, 10.0, 2.0)])
def test_amplitude_round_trip_any_aligned_bin(k, amp, phase):
    f = k * FS / L
    x = amp * np.cos(2 * np.pi * f * _t() + phase)
    spec = single_sided_spectrum(x, FS)
    assert spec.magnitudes[k] == pytest.approx(amp, rel=1e-9)


def test_dc_window_only_dc_bin():
    spec = single_sided_spectrum(np.full(L, 3.0), FS)
    assert spec.magnitudes[0] == pytest.approx(3.0)
    assert np.all(spec.magnitudes[1:] < 1e-12)


def test_nyquist_bin_not_doubled():
    x = np.cos(np.pi * np.arange(L))  # +1, -1, +1, ...
    spec = single_sided_spectrum(x, FS)
    assert spec.magnitudes[-1] == pytest.approx(1.0)
    assert np.all(spec.magnitudes[:-1] < 1e-12)


def test_matches_full_dft_scaling():
    rng = np.random.default_rng(3)
    x = rng.normal(size=L)
    ref = np.abs(np.fft.fft(x))[: L // 2 + 1] / L
    ref[1:-1] *= 2.0
    spec = single_sided_spectrum(x, FS)
    assert np.allclose(spec.magnitudes, ref, atol=1e-12, rtol=0.0)


def test_no_taper_applied():
    # With a taper the aligned tone would leak into neighbours
    x = np.sin(2 * np.pi * 100.0 * _t())
    spec = single_sided_spectrum(x, FS)
    assert spec.magnitudes[9] < 1e-12
    assert spec.magnitudes[11] < 1e-12


def test_input_not_modified():
    x = np.linspace(-1, 1, L)
    before = x.copy()
    single_sided_spectrum(x, FS)
    assert np.array_equal(x, before)


@pytest.mark.parametrize("n", [0, 1, 3, 199])
def test_odd_or_short_window_rejected(n):
    with pytest.raises(ConfigurationError):
        single_sided_spectrum(np.zeros(n), FS)


def test_bad_sample_rate_rejected():
    with pytest.raises(ConfigurationError):
        single_sided_spectrum(np.zeros(L), 0.0)


def test_bin_frequencies():
    f = bin_frequencies(8, 80.0)
    assert np.allclose(f, [0.0, 10.0, 20.0, 30.0, 40.0])
