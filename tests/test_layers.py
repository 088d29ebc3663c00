"""
test_layers.py
~~~~~~~~~~~~~~

DenseLayer forward pass, local gradients and parameter codec.
"""

import numpy as np
import pytest

from deepnet.core.activations import get_activator
from deepnet.core.errors import ConfigurationError, ShapeMismatchError
from deepnet.core.layers import DenseLayer
from deepnet.core.losses import get_loss


@pytest.fixture
def layer(rng):
    return DenseLayer(3, 2, "logistic", rng=rng)


@pytest.mark.unit
class TestDenseLayerForward:

    def test_shapes_and_initialisation(self, layer):
        assert layer.W.shape == (3, 2)
        assert layer.b.shape == (2,)
        np.testing.assert_array_equal(layer.b, 0.0)
        limit = np.sqrt(6 / 5)
        assert np.all(np.abs(layer.W) <= limit)
        assert layer.active_func is get_activator("logistic")

    def test_predict_is_affine_then_activation(self, layer, rng):
        layer.b[...] = [0.1, -0.2]
        X = rng.normal(size=(4, 3))
        expected = 1 / (1 + np.exp(-(X @ layer.W + layer.b)))
        np.testing.assert_allclose(layer.predict(X), expected)

    def test_single_sample_matches_batch_row(self, layer, rng):
        x = rng.normal(size=3)
        np.testing.assert_allclose(layer.predict(x), layer.predict(x.reshape(1, -1))[0])

    def test_predict_with_activator_returns_pre_activation(self, layer, rng):
        X = rng.normal(size=(4, 3))
        z, a = layer.predict_with_activator(X)
        np.testing.assert_allclose(z, X @ layer.W + layer.b)
        np.testing.assert_allclose(a, layer.predict(X))

    def test_non_positive_dimensions_rejected(self):
        with pytest.raises(ConfigurationError):
            DenseLayer(0, 3)

    @pytest.mark.parametrize("dims", [(2.5, 3), (3, 2.0), (True, 3)])
    def test_non_integer_dimensions_rejected(self, dims):
        with pytest.raises(ConfigurationError):
            DenseLayer(*dims)

    def test_numpy_integer_dimensions_accepted(self):
        layer = DenseLayer(np.int64(3), np.int32(2))
        assert layer.W.shape == (3, 2)
        assert isinstance(layer.input_dim, int)

    def test_unknown_activator_rejected_at_construction(self):
        with pytest.raises(ConfigurationError):
            DenseLayer(2, 2, "swish")


@pytest.mark.unit
class TestDenseLayerBackward:

    def test_loss_attachment(self, layer):
        assert not layer.is_loss_contributor()
        layer.set_loss(get_loss("mse"))
        assert layer.is_loss_contributor()

    def test_loss_gradient_requires_loss(self, layer):
        with pytest.raises(ConfigurationError):
            layer.compute_loss_gradient(np.zeros((2, 2)), np.zeros((2, 2)))

    def test_compute_delta_combines_activation_gradient(self, layer):
        z = np.array([[0.0, 1.0]])
        a = layer.active_func.activate(z)
        upstream = np.array([[2.0, -1.0]])
        np.testing.assert_allclose(layer.compute_delta(z, a, upstream), upstream * a * (1 - a))

    def test_backprop_delta_goes_through_weights(self, layer, rng):
        delta = rng.normal(size=(4, 2))
        propagated = layer.backprop_delta(delta)
        assert propagated.shape == (4, 3)
        np.testing.assert_allclose(propagated, delta @ layer.W.T)

    def test_param_gradient(self, layer, rng):
        X = rng.normal(size=(4, 3))
        delta = rng.normal(size=(4, 2))
        grad_W, grad_b = layer.compute_param_gradient(X, delta)
        assert grad_W.shape == layer.W.shape
        assert grad_b.shape == layer.b.shape
        np.testing.assert_allclose(grad_W, X.T @ delta)
        np.testing.assert_allclose(grad_b, delta.sum(axis=0))


@pytest.mark.unit
class TestDenseLayerParams:

    def test_layout_is_weights_then_bias(self, layer):
        params = layer.get_params()
        assert params.shape == (layer.num_params,) == (8,)
        np.testing.assert_array_equal(params[:6], layer.W.ravel())
        np.testing.assert_array_equal(params[6:], layer.b)

    def test_set_params_copies_values(self, layer):
        params = np.arange(8, dtype=float)
        layer.set_params(params)
        params[0] = 100.0
        np.testing.assert_array_equal(layer.W, [[0, 1], [2, 3], [4, 5]])
        np.testing.assert_array_equal(layer.b, [6, 7])

    def test_set_params_wrong_length(self, layer):
        with pytest.raises(ShapeMismatchError):
            layer.set_params(np.zeros(7))
