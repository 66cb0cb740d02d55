from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd


def column_name(phase: str, order: int) -> str:
    return f"{phase}_H{order}"


@dataclass(frozen=True, eq=False)
class HarmonicTable:
    """
    One row per analysis window, in window order.

    times:      window-center timestamps, shape (n_windows,)
    magnitudes: shape (n_windows, n_phases, n_orders); axis 1 follows `phases`,
                axis 2 follows `orders`
    Flattened column order is phase first, then harmonic order ascending:
    A_H1..A_H9, B_H1..B_H9, C_H1..C_H9.
    """
    times: np.ndarray
    magnitudes: np.ndarray
    phases: tuple[str, ...]
    orders: tuple[int, ...]

    def __post_init__(self):
        t = np.array(self.times, dtype=float, copy=True)
        m = np.array(self.magnitudes, dtype=float, copy=True)
        expected = (t.size, len(self.phases), len(self.orders))
        if m.shape != expected:
            raise ValueError(f"magnitudes shape {m.shape} does not match {expected}")
        t.setflags(write=False)
        m.setflags(write=False)
        object.__setattr__(self, "times", t)
        object.__setattr__(self, "magnitudes", m)
        object.__setattr__(self, "phases", tuple(str(p) for p in self.phases))
        object.__setattr__(self, "orders", tuple(int(h) for h in self.orders))

    @classmethod
    def empty(cls, phases: Sequence[str], orders: Sequence[int]) -> "HarmonicTable":
        return cls(
            times=np.empty(0, dtype=float),
            magnitudes=np.empty((0, len(phases), len(orders)), dtype=float),
            phases=tuple(phases),
            orders=tuple(orders),
        )

    @classmethod
    def from_rows(
        cls,
        times: Sequence[float],
        rows: Sequence[np.ndarray],
        phases: Sequence[str],
        orders: Sequence[int],
    ) -> "HarmonicTable":
        if len(rows) == 0:
            return cls.empty(phases, orders)
        return cls(
            times=np.asarray(times, dtype=float),
            magnitudes=np.stack(rows),
            phases=tuple(phases),
            orders=tuple(orders),
        )

    def __len__(self) -> int:
        return int(self.times.size)

    @property
    def is_empty(self) -> bool:
        return self.times.size == 0

    def columns(self) -> list[str]:
        return ["time"] + [column_name(p, h) for p in self.phases for h in self.orders]

    def phase(self, name: str) -> np.ndarray:
        """(n_windows, n_orders) magnitudes for one phase."""
        return self.magnitudes[:, self.phases.index(name), :]

    def harmonic(self, phase: str, order: int) -> np.ndarray:
        return self.magnitudes[:, self.phases.index(phase), self.orders.index(order)]

    def row(self, i: int) -> tuple[float, np.ndarray]:
        return float(self.times[i]), self.magnitudes[i]

    def to_dataframe(self) -> pd.DataFrame:
        flat = self.magnitudes.reshape(len(self), len(self.phases) * len(self.orders))
        return pd.DataFrame(np.column_stack([self.times, flat]), columns=self.columns())
