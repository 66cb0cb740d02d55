from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from fault_harmonics.errors import ConfigurationError, InputShapeError


@dataclass(frozen=True)
class WindowSpec:
    """
    Window geometry for one analysis run.
    window_samples must be even so the single-sided spectrum has a Nyquist bin.
    """
    window_samples: int
    step_samples: int
    sample_period_s: float

    def __post_init__(self):
        if self.window_samples < 2:
            raise ConfigurationError(f"window_samples must be >= 2, got {self.window_samples}")
        if self.window_samples % 2:
            raise ConfigurationError(f"window_samples must be even, got {self.window_samples}")
        if self.step_samples < 1:
            raise ConfigurationError(f"step_samples must be >= 1, got {self.step_samples}")
        if not self.sample_period_s > 0:
            raise ConfigurationError(f"sample_period_s must be > 0, got {self.sample_period_s}")

    @property
    def sample_rate_hz(self) -> float:
        return 1.0 / self.sample_period_s

    @property
    def resolution_hz(self) -> float:
        """Spacing between spectral bins (Fs / L)."""
        return self.sample_rate_hz / self.window_samples


@dataclass(frozen=True)
class Window:
    start: int
    length: int

    @property
    def stop(self) -> int:
        return self.start + self.length

    @property
    def center(self) -> int:
        return self.start + self.length // 2

    def slice(self, samples: np.ndarray) -> np.ndarray:
        return samples[self.start:self.stop]


def window_count(n_samples: int, window_samples: int, step_samples: int) -> int:
    if n_samples < window_samples:
        return 0
    return (n_samples - window_samples) // step_samples + 1


class WindowPlan:
    """
    Start indices 0, S, 2S, ... for every window that fits inside N samples.
    Iterating twice yields the same windows; nothing is cached or consumed.
    """

    def __init__(self, n_samples: int, window_samples: int, step_samples: int):
        if window_samples < 2:
            raise ConfigurationError(f"window_samples must be >= 2, got {window_samples}")
        if step_samples < 1:
            raise ConfigurationError(f"step_samples must be >= 1, got {step_samples}")
        self.n_samples = int(max(n_samples, 0))
        self.window_samples = int(window_samples)
        self.step_samples = int(step_samples)

    @classmethod
    def from_spec(cls, n_samples: int, spec: WindowSpec) -> "WindowPlan":
        return cls(n_samples, spec.window_samples, spec.step_samples)

    def __len__(self) -> int:
        return window_count(self.n_samples, self.window_samples, self.step_samples)

    def __iter__(self) -> Iterator[Window]:
        for i in range(len(self)):
            yield Window(start=i * self.step_samples, length=self.window_samples)

    def __getitem__(self, i: int) -> Window:
        n = len(self)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"window index {i} out of range for {n} windows")
        return Window(start=i * self.step_samples, length=self.window_samples)

    def starts(self) -> np.ndarray:
        return np.arange(len(self), dtype=np.int64) * self.step_samples

    def centers(self) -> np.ndarray:
        return self.starts() + self.window_samples // 2

    def center_times(self, timestamps: np.ndarray) -> np.ndarray:
        t = np.asarray(timestamps, dtype=float)
        if t.size != self.n_samples:
            raise InputShapeError(
                f"timestamps has {t.size} entries, plan was built for {self.n_samples} samples"
            )
        return t[self.centers()]
