"""Test configuration.

English:
    Allow running `pytest` without installing the package, and provide small
    surrogate fixtures shared by the tests.

日本語:
    パッケージをインストールしなくても `pytest` が動くように
    import path を調整し、共通のサロゲートを用意します。
"""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

# Repo root contains the `bayestune/` package directory.
ROOT = Path(__file__).resolve().parents[1]

# EN: Add the parent dir so `import bayestune` works.
# JP: `import bayestune` が通るように親ディレクトリを追加。
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sklearn.gaussian_process.kernels import RBF  # noqa: E402

from bayestune.opt.surrogate import GaussianProcessSurrogate, Surrogate  # noqa: E402


class LinearSurrogate(Surrogate):
    """mean = sum(x), std = fixed value; no fitting."""

    def __init__(self, std: float):
        self.std = float(std)

    def fit(self, X, Y):
        return self

    def predict(self, X, return_std=False):
        X = np.atleast_2d(X)
        mu = X.sum(axis=1)
        if return_std:
            return mu, np.full(X.shape[0], self.std)
        return mu


@pytest.fixture
def fixed_gp():
    # EN: unit RBF kernel, no hyperparameter search -> fully predictable posterior.
    # JP: ハイパーパラメータ探索なしの単位RBFカーネル。
    return GaussianProcessSurrogate(alpha=1e-10, kernel=RBF(length_scale=1.0), optimizer=None)


@pytest.fixture
def two_point_samples():
    X = np.array([[0.0], [1.0]])
    Y = np.array([[0.0], [1.0]])
    return X, Y


@pytest.fixture
def linear_surrogate():
    return LinearSurrogate
