"""Central configuration dataclasses.

English:
    Keep optimizer / tuner settings in one place.

日本語:
    最適化器・チューナーの設定を一箇所で管理します。
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class BOConfig:
    """Bayesian optimization settings.

    EN:
        alpha: noise variance added to the GP kernel diagonal.
        xi: exploration; larger values favor uncertain regions.
        n_restarts: independent L-BFGS runs per proposal.
        epsilon / max_iterations: local minimizer stopping rule.
        n_jobs: restarts run in parallel threads when != 1.

    JP:
        alpha: カーネル対角に加えるノイズ分散
        xi: 探索度合い（大きいほど不確実な領域を優先）
        n_restarts: 提案ごとのL-BFGS独立実行回数
        n_jobs: 1以外ならリスタートをスレッド並列で実行します。
    """

    alpha: float = 1e-10
    xi: float = 0.01
    n_restarts: int = 25
    epsilon: float = 1e-5     # gradient-norm tolerance
    max_iterations: int = 100
    fd_step: float = 1e-8     # finite-difference step
    n_jobs: int = 1
    random_seed: int = 42


@dataclass(frozen=True)
class TunerConfig:
    """Parameter tuner settings."""

    n_warmup: int = 3       # random samples before the surrogate is used
    max_samples: int = 20
