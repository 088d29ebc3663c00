"""Numerical gradient verification for backpropagation correctness."""

import numpy as np


def numerical_gradient(network, X, y, epsilon=1e-5):
    """
    Central-difference gradient of network.objective over the flat
    parameter vector (get_parameter() layout).

    The network's parameters are restored before returning.
    """
    params = network.get_parameter()
    grad = np.zeros_like(params)
    shifted = params.copy()
    try:
        for i in range(params.size):
            shifted[i] = params[i] + epsilon
            network.set_parameter(shifted)
            loss_plus = network.objective(X, y)

            shifted[i] = params[i] - epsilon
            network.set_parameter(shifted)
            loss_minus = network.objective(X, y)

            shifted[i] = params[i]
            grad[i] = (loss_plus - loss_minus) / (2 * epsilon)
    finally:
        network.set_parameter(params)
    return grad


def gradient_check(network, X, y, epsilon=1e-5):
    """
    Returns ||analytic - numerical|| for the network's gradient at (X, y).
    """
    _, analytic = network.gradient(X, y)
    numeric = numerical_gradient(network, X, y, epsilon)
    return float(np.linalg.norm(analytic - numeric))
