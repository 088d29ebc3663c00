"""
conftest.py
~~~~~~~~~~~

Shared fixtures: small networks and regression data with fixed seeds.
"""

import numpy as np
import pytest

from deepnet.core.builder import NetworkArchitecture, RandomNetworkCreator


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def small_network():
    """5 -> 7 -> 6 -> 2 with mixed activators and an MSE objective."""
    arch = NetworkArchitecture([5, 7, 6, 2], ["logistic", "tanh", "linear"], "mse")
    return RandomNetworkCreator(seed=7).create(arch)


@pytest.fixture
def small_batch(rng):
    X = rng.normal(size=(12, 5))
    y = rng.normal(size=(12, 2))
    return X, y


@pytest.fixture
def regression_data(rng):
    """400 samples of a smooth 5 -> 1 function."""
    X = rng.uniform(-1, 1, size=(400, 5))
    y = np.sin(X @ np.array([1.0, -2.0, 0.5, 1.5, -1.0])).reshape(-1, 1)
    return X, y


@pytest.fixture
def regression_network():
    arch = NetworkArchitecture([5, 8, 1], ["logistic", "linear"], "mse")
    return RandomNetworkCreator(seed=3).create(arch)
