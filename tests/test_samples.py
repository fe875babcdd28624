import numpy as np
import pytest

from bayestune.opt.samples import SampleStore


def test_as_arrays_keeps_insertion_order():
    store = SampleStore(2)
    store.add([0.1, 0.2], 1.0)
    store.add(np.array([0.3, 0.4]), np.array([2.0]))
    X, Y = store.as_arrays()
    assert X.shape == (2, 2)
    assert Y.shape == (2, 1)
    np.testing.assert_array_equal(X[1], [0.3, 0.4])
    np.testing.assert_array_equal(Y[:, 0], [1.0, 2.0])


def test_add_copies_input():
    store = SampleStore(1)
    x = np.array([0.5])
    store.add(x, 0.0)
    x[0] = 9.0
    assert store.as_arrays()[0][0, 0] == 0.5


def test_add_rejects_bad_shapes():
    store = SampleStore(2)
    with pytest.raises(ValueError):
        store.add([0.1], 1.0)
    with pytest.raises(ValueError):
        store.add([0.1, 0.2], [1.0, 2.0])
    assert len(store) == 0


def test_clear_best_and_frame():
    store = SampleStore(1)
    for x, y in [(0.1, 3.0), (0.2, 5.0), (0.3, 4.0)]:
        store.add([x], y)
    assert store.best().y == 5.0
    df = store.to_frame()
    assert list(df.columns) == ["x0", "y"]
    assert len(df) == 3
    store.clear()
    assert len(store) == 0
    with pytest.raises(ValueError):
        store.best()
