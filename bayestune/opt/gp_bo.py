"""Bayesian Optimization with Gaussian Processes.

English:
    `BayesianOptimization` is the sequential driver:
    - add_sample(x, y) records one observation
    - next_sample() refits the GP on every sample and proposes the next x
      by maximizing Expected Improvement with multi-start L-BFGS
    - clear() drops the history (e.g. before a new campaign)

    `bayes_opt_maximize` / `bayes_opt_minimize` run a full loop against a
    Python objective.

日本語:
    `BayesianOptimization` は逐次型のドライバです。
    - add_sample(x, y): 観測を1件追加
    - next_sample(): 全サンプルでGPを再学習し、EI最大化で次の点を提案
    - clear(): 履歴を破棄

    `bayes_opt_maximize` / `bayes_opt_minimize` は目的関数に対する
    一連のループを実行します。

Usage is single-threaded: do not call add_sample()/clear() while a
next_sample() call is in flight.
"""

from __future__ import annotations
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional
import logging
import numpy as np

from ..config import BOConfig
from .acquisition import expected_improvement
from .bounds import BoundLike, SearchSpace, UniformSampler
from .proposer import LocationProposer
from .samples import SampleStore
from .surrogate import GaussianProcessSurrogate, Surrogate

logger = logging.getLogger(__name__)


class BayesianOptimization:
    """Propose the next point to evaluate for a maximization problem.

    Parameters
    ----------
    bounds:
        one (low, high) pair or Bound per dimension.
    alpha:
        noise variance of the GP; overrides cfg.alpha when given.
    xi:
        exploration parameter; overrides cfg.xi when given.
    cfg:
        remaining settings (restarts, tolerances, seed, parallelism).
    surrogate:
        model to use instead of the default GaussianProcessSurrogate.
    """

    def __init__(
        self,
        bounds: Iterable[BoundLike],
        alpha: Optional[float] = None,
        xi: Optional[float] = None,
        cfg: Optional[BOConfig] = None,
        surrogate: Optional[Surrogate] = None,
    ):
        cfg = cfg or BOConfig()
        if alpha is not None:
            cfg = replace(cfg, alpha=float(alpha))
        if xi is not None:
            cfg = replace(cfg, xi=float(xi))
        self.cfg = cfg

        self.space = SearchSpace(bounds)
        self.d = self.space.dim
        self.sampler = UniformSampler(self.space, seed=cfg.random_seed)
        self.samples = SampleStore(self.d)
        self.surrogate = surrogate or GaussianProcessSurrogate(alpha=cfg.alpha)
        self.proposer = LocationProposer(self.space, self.surrogate, self.sampler, cfg)
        self._fitted = False

    @property
    def xi(self) -> float:
        return self.cfg.xi

    def add_sample(self, x, y) -> None:
        self.samples.add(x, y)
        self._fitted = False

    def clear(self) -> None:
        self.samples.clear()
        self._fitted = False

    def __len__(self) -> int:
        return len(self.samples)

    def fit(self) -> np.ndarray:
        """Fit the surrogate on all samples and return the sample matrix X."""
        if len(self.samples) == 0:
            raise ValueError("no samples: call add_sample() at least once before next_sample()")
        X, Y = self.samples.as_arrays()
        self.surrogate.fit(X, Y)
        self._fitted = True
        return X

    def next_sample(self) -> np.ndarray:
        X = self.fit()
        logger.debug("proposing from %d samples with %d restarts", X.shape[0], self.cfg.n_restarts)
        return self.proposer.propose(X)

    def expected_improvement(self, X: np.ndarray) -> np.ndarray:
        """EI at X; refits the surrogate first if samples changed since the last fit."""
        X = self.space.check_dim(np.atleast_2d(X))
        if not self._fitted:
            self.fit()
        x_sample, _ = self.samples.as_arrays()
        return expected_improvement(X, x_sample, self.surrogate, self.cfg.xi)


def bayes_opt_maximize(
    objective: Callable[[np.ndarray], float],
    bounds: List[BoundLike],
    n_init: int = 3,
    n_iter: int = 15,
    cfg: Optional[BOConfig] = None,
) -> Dict[str, object]:
    """Maximize objective(x) with Bayesian optimization.

    Parameters
    ----------
    objective:
        function taking x (shape [d]) and returning a scalar score.
    bounds:
        list of Bound(low, high) or (low, high) for each dimension.
    n_init:
        number of random warm-start points (at least 1).
    n_iter:
        number of BO iterations.
    """
    if n_init < 1:
        raise ValueError("n_init must be >= 1")
    bo = BayesianOptimization(bounds, cfg=cfg)

    for x in bo.sampler.draw_many(n_init):
        bo.add_sample(x, float(objective(x)))

    for it in range(n_iter):
        x_next = bo.next_sample()
        y_next = float(objective(x_next))
        bo.add_sample(x_next, y_next)
        logger.debug("iteration %d: x=%s y=%.6g", it, x_next, y_next)

    X, Y = bo.samples.as_arrays()
    y = Y[:, 0]
    best_idx = int(np.argmax(y))
    return {
        "x_best": X[best_idx].tolist(),
        "y_best": float(y[best_idx]),
        "X": X.tolist(),
        "y": y.tolist(),
    }


def bayes_opt_minimize(
    objective: Callable[[np.ndarray], float],
    bounds: List[BoundLike],
    n_init: int = 3,
    n_iter: int = 15,
    cfg: Optional[BOConfig] = None,
) -> Dict[str, object]:
    """Minimize objective(x); same loop as bayes_opt_maximize on -objective."""
    out = bayes_opt_maximize(lambda x: -float(objective(x)), bounds, n_init=n_init, n_iter=n_iter, cfg=cfg)
    return {
        "x_best": out["x_best"],
        "y_best": -out["y_best"],
        "X": out["X"],
        "y": [-v for v in out["y"]],
    }
