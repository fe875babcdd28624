"""Multi-start local search for the next sample location.

English:
    Maximize EI by minimizing f(x) = -EI(x) from `n_restarts` random starting
    points with L-BFGS-B. The search box is passed to L-BFGS-B so its line
    search projects trial steps back into the box instead of stepping onto
    an infeasible point. The objective is still wrapped: any point outside the
    search space scores the largest finite float, and finite differences
    step inward at the box faces.

    A restart whose result is not finite or not feasible falls back to its
    own starting point. The best of all restarts is returned, so single poor
    restarts are fine.

日本語:
    f(x) = -EI(x) をランダム初期点からのL-BFGS-Bで複数回最小化し、最良の点を
    返します。探索範囲はL-BFGS-Bに渡し、範囲外の点には有限の最大値を
    ペナルティとして与えます。不正な結果のリスタートは初期点を採用します。
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging
import numpy as np
from joblib import Parallel, delayed
from scipy.optimize import minimize

from ..config import BOConfig
from .acquisition import expected_improvement
from .bounds import SearchSpace, UniformSampler
from .surrogate import Surrogate

logger = logging.getLogger(__name__)

PENALTY = np.finfo(float).max


@dataclass(frozen=True)
class RestartResult:
    index: int
    x0: np.ndarray
    x: np.ndarray
    fun: float
    n_iter: int
    converged: bool


class LocationProposer:
    """Find argmax EI inside the search space via penalized multi-start L-BFGS."""

    def __init__(
        self,
        space: SearchSpace,
        surrogate: Surrogate,
        sampler: UniformSampler,
        cfg: BOConfig = BOConfig(),
    ):
        self.space = space
        self.surrogate = surrogate
        self.sampler = sampler
        self.cfg = cfg

    def bounded_objective(self, x: np.ndarray, x_sample: np.ndarray) -> float:
        if not self.space.contains(x):
            return PENALTY
        return -float(expected_improvement(x[None, :], x_sample, self.surrogate, self.cfg.xi)[0])

    def objective_and_grad(self, x: np.ndarray, x_sample: np.ndarray) -> Tuple[float, np.ndarray]:
        x = np.asarray(x, dtype=float)
        f0 = self.bounded_objective(x, x_sample)
        grad = self.surrogate.approx_gradient(
            x,
            lambda v: self.bounded_objective(v, x_sample),
            f0,
            step=self.cfg.fd_step,
            lower=self.space.lower,
            upper=self.space.upper,
        )
        return f0, grad

    def _restart(self, index: int, x0: np.ndarray, x_sample: np.ndarray) -> RestartResult:
        res = minimize(
            self.objective_and_grad,
            x0,
            args=(x_sample,),
            jac=True,
            method="L-BFGS-B",
            bounds=list(zip(self.space.lower, self.space.upper)),
            options={"gtol": self.cfg.epsilon, "maxiter": self.cfg.max_iterations},
        )
        # EN: non-convergence is not an error; keep the final iterate.
        # JP: 収束しなくても最終反復点を使います。
        x = np.asarray(res.x, dtype=float)
        fun = float(res.fun)
        converged = bool(res.success)
        if not (np.isfinite(fun) and fun < PENALTY and self.space.contains(x)):
            # EN: unusable result; the feasible start point stands in for it.
            # JP: 不正な結果は実行可能な初期点で置き換えます。
            x = x0.copy()
            fun = self.bounded_objective(x0, x_sample)
            converged = False
        return RestartResult(
            index=index,
            x0=x0,
            x=x,
            fun=fun,
            n_iter=int(res.get("nit", 0)),
            converged=converged,
        )

    def run_restarts(self, x_sample: np.ndarray, n_restarts: Optional[int] = None) -> List[RestartResult]:
        n = self.cfg.n_restarts if n_restarts is None else int(n_restarts)
        x_sample = self.space.check_dim(np.atleast_2d(x_sample))
        # EN: draw every start first so results do not depend on scheduling.
        # JP: 並列実行順に依存しないよう、初期点は先にまとめて生成します。
        starts = [self.sampler.draw() for _ in range(n)]
        if self.cfg.n_jobs == 1 or n <= 1:
            return [self._restart(i, x0, x_sample) for i, x0 in enumerate(starts)]
        return Parallel(n_jobs=self.cfg.n_jobs, prefer="threads")(
            delayed(self._restart)(i, x0, x_sample) for i, x0 in enumerate(starts)
        )

    def propose(self, x_sample: np.ndarray, n_restarts: Optional[int] = None) -> np.ndarray:
        """Return the best point found across all restarts."""
        results = self.run_restarts(x_sample, n_restarts)

        best: Optional[RestartResult] = None
        for r in results:
            logger.debug(
                "restart %d: f=%.6g iters=%d converged=%s x=%s", r.index, r.fun, r.n_iter, r.converged, r.x
            )
            if not (np.isfinite(r.fun) and r.fun < PENALTY and self.space.contains(r.x)):
                continue
            if best is None or (r.fun, r.index) < (best.fun, best.index):
                best = r

        if best is None:
            logger.warning("no restart reached a feasible point in %s; returning zeros", self.space)
            return np.zeros(self.space.dim, dtype=float)

        logger.debug("proposed x=%s with EI=%.6g", best.x, -best.fun)
        return best.x.copy()
