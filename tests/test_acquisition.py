import numpy as np
import pytest

from bayestune.opt.acquisition import expected_improvement
from bayestune.opt.surrogate import GaussianProcessSurrogate


def test_zero_std_gives_zero_ei(linear_surrogate):
    model = linear_surrogate(std=0.0)
    X = np.array([[2.0], [0.0], [-3.0]])
    ei = expected_improvement(X, np.array([[0.5]]), model, xi=0.01)
    assert np.all(np.isfinite(ei))
    np.testing.assert_array_equal(ei, 0.0)


def test_matches_closed_form(linear_surrogate):
    from scipy.stats import norm

    model = linear_surrogate(std=0.5)
    X = np.array([[1.0], [0.2]])
    ei = expected_improvement(X, np.array([[0.0], [0.4]]), model, xi=0.1)
    imp = np.array([1.0, 0.2]) - 0.4 - 0.1
    z = imp / 0.5
    expected = imp * norm.cdf(z) + 0.5 * norm.pdf(z)
    np.testing.assert_allclose(ei, expected, rtol=1e-12)


def test_single_point_and_dim_mismatch(linear_surrogate):
    model = linear_surrogate(std=1.0)
    assert expected_improvement(np.array([0.3, 0.3]), np.array([[0.0, 0.0]]), model).shape == (1,)
    with pytest.raises(ValueError):
        expected_improvement(np.array([[0.3]]), np.array([[0.0, 0.0]]), model)


def test_ei_non_negative_on_grid(fixed_gp, two_point_samples):
    X, Y = two_point_samples
    fixed_gp.fit(X, Y)
    grid = np.linspace(-3.0, 4.0, 201)[:, None]
    ei = expected_improvement(grid, X, fixed_gp, xi=0.01)
    assert np.all(np.isfinite(ei))
    assert np.all(ei >= 0.0)


def test_ei_at_samples_below_midpoint(fixed_gp, two_point_samples):
    X, Y = two_point_samples
    fixed_gp.fit(X, Y)
    at_samples = expected_improvement(X, X, fixed_gp, xi=0.01)
    mid = expected_improvement(np.array([[0.5]]), X, fixed_gp, xi=0.01)[0]
    assert mid > 0.0
    assert np.all(at_samples < mid)


def test_ei_invariant_to_sample_insertion_order():
    from sklearn.gaussian_process.kernels import RBF

    from bayestune.config import BOConfig
    from bayestune.opt.gp_bo import BayesianOptimization

    rng = np.random.default_rng(3)
    X = rng.uniform(0.0, 1.0, size=(6, 2))
    y = np.sin(3.0 * X[:, 0]) + X[:, 1]
    perm = rng.permutation(6)

    def build(order):
        gp = GaussianProcessSurrogate(alpha=1e-8, kernel=RBF(0.5), optimizer=None)
        bo = BayesianOptimization([(0.0, 1.0), (0.0, 1.0)], xi=0.01, cfg=BOConfig(), surrogate=gp)
        for i in order:
            bo.add_sample(X[i], y[i])
        return bo

    cand = rng.uniform(0.0, 1.0, size=(20, 2))
    np.testing.assert_allclose(
        build(range(6)).expected_improvement(cand),
        build(perm).expected_improvement(cand),
        rtol=1e-6,
        atol=1e-10,
    )
