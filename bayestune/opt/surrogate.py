"""Surrogate models behind a narrow fit / predict contract.

English:
    The proposer and the acquisition function only talk to `Surrogate`:
      - fit(X, Y) on the full sample matrix
      - predict(X) -> mean, or (mean, std) with return_std=True
      - approx_gradient(x, f, f0): forward-difference gradient of any scalar
        function, reusing the already computed value f0 = f(x)
    Subclass it to plug in a different model (other kernels, other regressors).

日本語:
    提案器と獲得関数は `Surrogate` のインターフェースのみを使います。
    別のカーネルや回帰モデルはサブクラスで差し替えられます。
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Optional
import logging
import numpy as np
from sklearn.gaussian_process import GaussianProcessRegressor
from sklearn.gaussian_process.kernels import ConstantKernel, Kernel, RBF

logger = logging.getLogger(__name__)

_FMAX = np.finfo(float).max


class Surrogate(ABC):
    """Probabilistic regression model used by the optimizer."""

    @abstractmethod
    def fit(self, X: np.ndarray, Y: np.ndarray) -> "Surrogate":
        ...

    @abstractmethod
    def predict(self, X: np.ndarray, return_std: bool = False):
        ...

    @staticmethod
    def approx_gradient(
        x: np.ndarray,
        f: Callable[[np.ndarray], float],
        f0: float,
        step: float = 1e-8,
        lower: Optional[np.ndarray] = None,
        upper: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """One-sided finite-difference gradient of f at x, seeded with f0 = f(x).

        EN:
            With lower / upper given, each coordinate steps forward, or
            backward when x + step would leave the box; a coordinate that
            cannot move either way (zero-width bound) gets gradient 0.
            Entries that still overflow are clipped to +/- the largest
            finite float.
        JP:
            lower / upper を与えると、箱の外に出ない向きに差分を取ります。
            幅0の次元の勾配は0です。オーバーフローは有限の最大値にクリップします。
        """
        x = np.asarray(x, dtype=float)
        grad = np.zeros_like(x)
        xh = x.copy()
        with np.errstate(over="ignore", invalid="ignore"):
            for i in range(x.size):
                h = step
                if upper is not None and x[i] + h > upper[i]:
                    h = -step
                    if lower is not None and x[i] + h < lower[i]:
                        continue
                xh[i] = x[i] + h
                grad[i] = (f(xh) - f0) / h
                xh[i] = x[i]
        return np.nan_to_num(grad, nan=0.0, posinf=_FMAX, neginf=-_FMAX)


class GaussianProcessSurrogate(Surrogate):
    """scikit-learn GaussianProcessRegressor adapter.

    `alpha` is the observation noise variance added to the kernel diagonal; it
    also keeps duplicated inputs from making the kernel matrix singular.
    Kernel hyperparameters are fit by scikit-learn inside `fit`.
    """

    def __init__(
        self,
        alpha: float = 1e-10,
        kernel: Optional[Kernel] = None,
        optimizer: Optional[str] = "fmin_l_bfgs_b",
        random_state: Optional[int] = None,
    ):
        if kernel is None:
            kernel = ConstantKernel(1.0) * RBF(length_scale=1.0)
        self.alpha = float(alpha)
        self.gp = GaussianProcessRegressor(
            kernel=kernel,
            alpha=self.alpha,
            optimizer=optimizer,
            random_state=random_state,
        )

    @property
    def kernel_(self) -> Kernel:
        return getattr(self.gp, "kernel_", self.gp.kernel)

    def fit(self, X: np.ndarray, Y: np.ndarray) -> "GaussianProcessSurrogate":
        X = np.atleast_2d(np.asarray(X, dtype=float))
        y = np.asarray(Y, dtype=float).reshape(-1)
        if X.shape[0] != y.shape[0]:
            raise ValueError(f"X has {X.shape[0]} rows but Y has {y.shape[0]}")
        self.gp.fit(X, y)
        logger.debug("fitted GP on %d samples, kernel=%s", X.shape[0], self.kernel_)
        return self

    def predict(self, X: np.ndarray, return_std: bool = False):
        X = np.atleast_2d(np.asarray(X, dtype=float))
        if return_std:
            mu, std = self.gp.predict(X, return_std=True)
            return np.asarray(mu, dtype=float).reshape(-1), np.asarray(std, dtype=float).reshape(-1)
        mu = self.gp.predict(X)
        return np.asarray(mu, dtype=float).reshape(-1)
