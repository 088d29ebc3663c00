"""
test_builder.py
~~~~~~~~~~~~~~~

Architecture validation and random network construction.
"""

import numpy as np
import pytest

from deepnet.core.activations import get_activator
from deepnet.core.builder import NetworkArchitecture, RandomNetworkCreator
from deepnet.core.errors import ConfigurationError
from deepnet.core.losses import MSELoss


@pytest.mark.unit
class TestNetworkArchitecture:

    def test_dict_round_trip(self):
        config = {"layer_sizes": [3, 4, 1], "activator_types": ["tanh", "linear"], "loss": "mse"}
        arch = NetworkArchitecture.from_dict(config)
        assert arch.to_dict() == config
        assert arch.num_layers == 2

    def test_loss_defaults_to_mse(self):
        arch = NetworkArchitecture.from_dict({"layer_sizes": [2, 1], "activator_types": ["linear"]})
        assert arch.loss == "mse"

    def test_missing_keys(self):
        with pytest.raises(ConfigurationError, match="activator_types"):
            NetworkArchitecture.from_dict({"layer_sizes": [2, 1]})

    @pytest.mark.parametrize("sizes,types,loss", [
        ([4], [], "mse"),
        ([4, 0, 1], ["linear", "linear"], "mse"),
        ([4, 2.5, 1], ["linear", "linear"], "mse"),
        ([4, 3, 1], ["linear"], "mse"),
        ([4, 3, 1], ["linear", "softmax"], "mse"),
        ([4, 3, 1], ["linear", "linear"], "hinge"),
    ])
    def test_invalid_architectures(self, sizes, types, loss):
        with pytest.raises(ConfigurationError):
            NetworkArchitecture(sizes, types, loss).validate()


@pytest.mark.unit
class TestRandomNetworkCreator:

    def test_chain_invariant(self):
        sizes = [25, 50, 50, 100, 50, 50, 1]
        types = ["linear"] * 5 + ["logistic"]
        net = RandomNetworkCreator(seed=0).create(NetworkArchitecture(sizes, types, "mse"))

        assert net.get_layer_num() == len(sizes) - 1
        for i in range(net.get_layer_num()):
            layer = net.get_layer(i)
            assert layer.input_dim == layer.W.shape[0] == sizes[i]
            assert layer.output_dim == layer.W.shape[1] == sizes[i + 1]
            assert layer.active_func is get_activator(types[i])
        for left, right in zip(net.layers[:-1], net.layers[1:]):
            assert left.output_dim == right.input_dim

    def test_loss_only_on_last_layer(self):
        net = RandomNetworkCreator(seed=0).create(
            {"layer_sizes": [3, 4, 2], "activator_types": ["relu", "linear"], "loss": "mse"})
        assert isinstance(net.get_layer(-1).loss_func, MSELoss)
        assert not net.get_layer(0).is_loss_contributor()

    def test_biases_start_at_zero(self):
        net = RandomNetworkCreator(seed=0).create(
            NetworkArchitecture([3, 4, 2], ["tanh", "linear"]))
        for layer in net.layers:
            np.testing.assert_array_equal(layer.b, 0.0)
            assert np.any(layer.W != 0.0)

    def test_seed_is_reproducible(self):
        arch = NetworkArchitecture([3, 4, 2], ["tanh", "linear"])
        first = RandomNetworkCreator(seed=42).create(arch).get_parameter()
        second = RandomNetworkCreator(seed=42).create(arch).get_parameter()
        other = RandomNetworkCreator(seed=43).create(arch).get_parameter()
        np.testing.assert_array_equal(first, second)
        assert not np.array_equal(first, other)

    def test_bad_tag_fails_at_build_time(self):
        with pytest.raises(ConfigurationError):
            RandomNetworkCreator().create(NetworkArchitecture([3, 1], ["gelu"]))
