import numpy as np
import pytest

from bayestune.opt.bounds import Bound, SearchSpace, UniformSampler


def test_search_space_accepts_pairs_and_bounds():
    space = SearchSpace([(0, 1), Bound(-2.0, 3.0)])
    assert space.dim == 2
    np.testing.assert_array_equal(space.lower, [0.0, -2.0])
    np.testing.assert_array_equal(space.upper, [1.0, 3.0])


def test_search_space_rejects_inverted_and_empty():
    with pytest.raises(ValueError):
        SearchSpace([(0.0, 1.0), (2.0, 1.0)])
    with pytest.raises(ValueError):
        SearchSpace([])


def test_contains_is_closed_and_rejects_nan():
    space = SearchSpace([(0.0, 1.0), (-1.0, 1.0)])
    assert space.contains(np.array([0.0, 1.0]))
    assert space.contains(np.array([1.0, -1.0]))
    assert not space.contains(np.array([1.0 + 1e-12, 0.0]))
    assert not space.contains(np.array([np.nan, 0.0]))
    with pytest.raises(ValueError):
        space.contains(np.array([0.5]))


def test_sampler_draws_inside_bounds():
    space = SearchSpace([(0.0, 1.0), (-5.0, -4.0), (10.0, 1000.0)])
    xs = UniformSampler(space, seed=0).draw_many(500)
    assert xs.shape == (500, 3)
    assert np.all(xs >= space.lower)
    assert np.all(xs <= space.upper)


def test_sampler_is_seeded_and_degenerate_bounds_are_constant():
    space = SearchSpace([(0.0, 1.0), (2.5, 2.5)])
    a = UniformSampler(space, seed=123).draw_many(10)
    b = UniformSampler(space, seed=123).draw_many(10)
    np.testing.assert_array_equal(a, b)
    assert np.all(a[:, 1] == 2.5)
