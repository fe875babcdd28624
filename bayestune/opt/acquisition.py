"""Expected Improvement acquisition.

English:
    EI for maximization (higher is better). The incumbent is the best
    *predicted* mean at already observed inputs rather than the best raw
    observation, which keeps EI well behaved when observations are noisy
    (Brochu, Cora & de Freitas, "A Tutorial on Bayesian Optimization of
    Expensive Cost Functions", sec. 2.4).

日本語:
    最大化問題のEIです。基準値には観測値そのものではなく、観測済み入力での
    予測平均の最大値を使います（ノイズに対して安定）。
"""

from __future__ import annotations
import numpy as np
from scipy.stats import norm

from .surrogate import Surrogate


def expected_improvement(
    X: np.ndarray,
    x_sample: np.ndarray,
    surrogate: Surrogate,
    xi: float = 0.01,
) -> np.ndarray:
    """EI at each row of X given a fitted surrogate.

    Parameters
    ----------
    X:
        candidate points, shape [k, d] (a single point of shape [d] is accepted).
    x_sample:
        inputs observed so far, shape [n, d].
    surrogate:
        fitted model; may be queried anywhere, bounds are not checked here.
    xi:
        exploration parameter.

    Returns
    -------
    EI of shape [k]; exactly 0 where the predictive std is 0.
    """
    X = np.atleast_2d(np.asarray(X, dtype=float))
    x_sample = np.atleast_2d(np.asarray(x_sample, dtype=float))
    if X.shape[1] != x_sample.shape[1]:
        raise ValueError(f"candidate dim {X.shape[1]} != sample dim {x_sample.shape[1]}")

    mu, sigma = surrogate.predict(X, return_std=True)
    mu_sample_opt = float(np.max(surrogate.predict(x_sample)))

    imp = mu - mu_sample_opt - xi
    with np.errstate(divide="ignore", invalid="ignore"):
        z = imp / sigma
        ei = imp * norm.cdf(z) + sigma * norm.pdf(z)
    ei = np.where(sigma != 0.0, ei, 0.0)
    # EN: cancellation in the far left tail can leave tiny negative values.
    # JP: 裾での桁落ちによる微小な負値を0に丸めます。
    return np.maximum(ei, 0.0)
