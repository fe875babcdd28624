"""bayestune package.

English:
    Sequential Bayesian optimization for tuning a few continuous knobs of an
    expensive, noisy objective: a Gaussian process surrogate, Expected
    Improvement, and a multi-start L-BFGS search that proposes the next point.

日本語:
    評価コストの高いノイズ付き目的関数の少数の連続パラメータを調整するための
    逐次ベイズ最適化パッケージです（ガウス過程・Expected Improvement・
    多点スタートL-BFGSによる次点提案）。
"""

from .version import __version__
from .opt.gp_bo import BayesianOptimization

__all__ = ["BayesianOptimization", "__version__"]
