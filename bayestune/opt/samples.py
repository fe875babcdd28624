"""Append-only store of observed (x, y) samples."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Tuple
import numpy as np
import pandas as pd


@dataclass(frozen=True)
class Sample:
    x: np.ndarray
    y: float


class SampleStore:
    """Observed samples in insertion order.

    EN: Samples are never mutated after insertion; only clear() shrinks the store.
    JP: 追加後のサンプルは変更しません。縮小は clear() のみです。
    """

    def __init__(self, dim: int):
        self.dim = int(dim)
        self._samples: List[Sample] = []

    def add(self, x, y) -> None:
        xv = np.array(x, dtype=float).reshape(-1)
        if xv.shape != (self.dim,):
            raise ValueError(f"sample x must have {self.dim} coordinates, got {xv.size}")
        yv = np.asarray(y, dtype=float).reshape(-1)
        if yv.size != 1:
            raise ValueError(f"sample y must be a scalar or length-1 vector, got {yv.size} values")
        xv.setflags(write=False)
        self._samples.append(Sample(x=xv, y=float(yv[0])))

    def clear(self) -> None:
        self._samples.clear()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return (X, Y) with shapes (n, d) and (n, 1)."""
        n = len(self._samples)
        X = np.empty((n, self.dim), dtype=float)
        Y = np.empty((n, 1), dtype=float)
        for i, s in enumerate(self._samples):
            X[i] = s.x
            Y[i, 0] = s.y
        return X, Y

    def best(self) -> Sample:
        if not self._samples:
            raise ValueError("no samples recorded")
        return max(self._samples, key=lambda s: s.y)

    def to_frame(self) -> pd.DataFrame:
        X, Y = self.as_arrays()
        df = pd.DataFrame(X, columns=[f"x{j}" for j in range(self.dim)])
        df["y"] = Y[:, 0]
        return df
