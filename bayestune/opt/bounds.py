"""Search-space bounds and restart samplers.

English:
    A search space is an ordered list of closed intervals, one per dimension.
    It decides both where restart points are drawn and which proposed points
    are feasible.

日本語:
    探索空間は次元ごとの閉区間の列です。リスタート初期点の生成範囲と
    提案点の実行可能性の両方を決めます。
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union
import numpy as np


@dataclass(frozen=True)
class Bound:
    low: float
    high: float


BoundLike = Union[Bound, Tuple[float, float], Sequence[float]]


def as_bound(b: BoundLike) -> Bound:
    if isinstance(b, Bound):
        return Bound(float(b.low), float(b.high))
    low, high = b
    return Bound(float(low), float(high))


class SearchSpace:
    """Immutable box [low_i, high_i] for i in 0..d-1."""

    def __init__(self, bounds: Iterable[BoundLike]):
        bs = tuple(as_bound(b) for b in bounds)
        if not bs:
            raise ValueError("search space needs at least one dimension")
        for i, b in enumerate(bs):
            if not (np.isfinite(b.low) and np.isfinite(b.high)):
                raise ValueError(f"bound {i} is not finite: ({b.low}, {b.high})")
            if b.low > b.high:
                raise ValueError(f"bound {i} has low > high: ({b.low}, {b.high})")
        self._bounds = bs
        self._lower = np.array([b.low for b in bs], dtype=float)
        self._upper = np.array([b.high for b in bs], dtype=float)
        self._lower.setflags(write=False)
        self._upper.setflags(write=False)

    @property
    def bounds(self) -> Tuple[Bound, ...]:
        return self._bounds

    @property
    def dim(self) -> int:
        return len(self._bounds)

    @property
    def lower(self) -> np.ndarray:
        return self._lower

    @property
    def upper(self) -> np.ndarray:
        return self._upper

    def __len__(self) -> int:
        return self.dim

    def __iter__(self):
        return iter(self._bounds)

    def __repr__(self) -> str:
        pairs = ", ".join(f"({b.low}, {b.high})" for b in self._bounds)
        return f"SearchSpace([{pairs}])"

    def check_dim(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        if x.shape[-1:] != (self.dim,):
            raise ValueError(f"expected trailing dimension {self.dim}, got shape {x.shape}")
        return x

    def contains(self, x: np.ndarray) -> bool:
        # EN: nan / inf coordinates are never feasible.
        # JP: nan / inf を含む点は常に範囲外とみなします。
        x = self.check_dim(x)
        if not np.all(np.isfinite(x)):
            return False
        return bool(np.all(x >= self._lower) and np.all(x <= self._upper))


class UniformSampler:
    """One independent uniform generator per dimension.

    EN:
        Child generators are spawned from a single SeedSequence so draws are
        reproducible for a seed and independent across dimensions.

    JP:
        1つのSeedSequenceから次元ごとの乱数生成器を派生させます。
        シードを固定すれば再現可能です。
    """

    def __init__(self, space: SearchSpace, seed: int | None = None):
        self.space = space
        children = np.random.SeedSequence(seed).spawn(space.dim)
        self._gens: List[np.random.Generator] = [np.random.default_rng(s) for s in children]

    def draw(self) -> np.ndarray:
        return np.array(
            [g.uniform(b.low, b.high) for g, b in zip(self._gens, self.space.bounds)],
            dtype=float,
        )

    def draw_many(self, n: int) -> np.ndarray:
        xs = np.empty((n, self.space.dim), dtype=float)
        for i in range(n):
            xs[i] = self.draw()
        return xs
