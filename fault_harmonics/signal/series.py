from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

import numpy as np

from fault_harmonics.errors import InputShapeError


def _frozen(a) -> np.ndarray:
    arr = np.array(a, dtype=float, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, init=False, eq=False)
class ThreePhaseSeries:
    """
    Aligned per-phase samples sharing one timestamp vector.
    Arrays are copied and made read-only on construction; the phase mapping is read-only too.
    """
    timestamps: np.ndarray
    phases: Mapping[str, np.ndarray]

    def __init__(self, timestamps, phases: Mapping[str, object]):
        t = _frozen(timestamps)
        if t.ndim != 1:
            raise InputShapeError(f"timestamps must be 1-D, got shape {t.shape}")
        if not phases:
            raise InputShapeError("at least one phase series is required")

        out: dict[str, np.ndarray] = {}
        for name, samples in phases.items():
            x = _frozen(samples)
            if x.ndim != 1:
                raise InputShapeError(f"phase {name}: samples must be 1-D, got shape {x.shape}")
            out[str(name)] = x

        lengths = {name: x.size for name, x in out.items()}
        if len(set(lengths.values())) > 1:
            raise InputShapeError(f"phase series have unequal lengths: {lengths}")

        n = next(iter(lengths.values()))
        if n != t.size:
            raise InputShapeError(
                f"timestamps has {t.size} entries but phase series have {n} samples"
            )
        if t.size > 1 and not np.all(np.diff(t) > 0):
            raise InputShapeError("timestamps must be strictly increasing")

        object.__setattr__(self, "timestamps", t)
        object.__setattr__(self, "phases", MappingProxyType(out))

    @classmethod
    def from_arrays(cls, timestamps, phase_a, phase_b, phase_c) -> "ThreePhaseSeries":
        return cls(timestamps, {"A": phase_a, "B": phase_b, "C": phase_c})

    @classmethod
    def sampled(cls, phases: Mapping[str, object], sample_period_s: float, t0: float = 0.0) -> "ThreePhaseSeries":
        """Build the timestamp vector t0 + k * Ts for already-uniform samples."""
        n = len(next(iter(phases.values()))) if phases else 0
        return cls(t0 + np.arange(n, dtype=float) * float(sample_period_s), phases)

    @property
    def n_samples(self) -> int:
        return int(self.timestamps.size)

    @property
    def phase_names(self) -> tuple[str, ...]:
        return tuple(self.phases.keys())

    @property
    def sample_period_s(self) -> float:
        if self.timestamps.size < 2:
            return 0.0
        return float(np.median(np.diff(self.timestamps)))

    def __getitem__(self, phase: str) -> np.ndarray:
        return self.phases[phase]

    def __len__(self) -> int:
        return self.n_samples
