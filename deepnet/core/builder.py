import logging
import numpy as np
from deepnet.core.activations import get_activator
from deepnet.core.errors import ConfigurationError
from deepnet.core.layers import DenseLayer
from deepnet.core.losses import get_loss
from deepnet.core.models import DeepNetwork

logger = logging.getLogger(__name__)


class NetworkArchitecture:
    """
    Plain description of a network.

    Args:
        layer_sizes: [input_dim, hidden_1, ..., output_dim]
        activator_types: one tag per layer, e.g. ["logistic", "linear"]
        loss: loss tag for the last layer, e.g. "mse"
    """
    def __init__(self, layer_sizes, activator_types, loss="mse"):
        self.layer_sizes = list(layer_sizes)
        self.activator_types = list(activator_types)
        self.loss = loss

    @classmethod
    def from_dict(cls, config):
        missing = {"layer_sizes", "activator_types"} - set(config)
        if missing:
            raise ConfigurationError(f"Architecture config is missing {sorted(missing)}")
        return cls(config["layer_sizes"], config["activator_types"], config.get("loss", "mse"))

    def to_dict(self):
        return {
            "layer_sizes": list(self.layer_sizes),
            "activator_types": list(self.activator_types),
            "loss": self.loss,
        }

    def validate(self):
        """
        Checks sizes and resolves every tag, so a bad configuration fails here
        and not on first use.
        """
        if len(self.layer_sizes) < 2:
            raise ConfigurationError("At least an input and an output size are required.")
        for size in self.layer_sizes:
            if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size < 1:
                raise ConfigurationError(f"Layer sizes must be positive integers, got {size!r}")
        if len(self.activator_types) != len(self.layer_sizes) - 1:
            raise ConfigurationError(
                f"{len(self.layer_sizes) - 1} layers need as many activator types, "
                f"got {len(self.activator_types)}"
            )
        activators = [get_activator(tag) for tag in self.activator_types]
        return activators, get_loss(self.loss)

    @property
    def num_layers(self):
        return len(self.layer_sizes) - 1

    def __repr__(self):
        return f"NetworkArchitecture({self.to_dict()!r})"


class RandomNetworkCreator:
    """
    Builds a DeepNetwork with Glorot-uniform weights and zero biases.
    The loss is attached to the last layer only.
    """
    def __init__(self, seed=None):
        self.rng = np.random.default_rng(seed)

    def create(self, architecture):
        if isinstance(architecture, dict):
            architecture = NetworkArchitecture.from_dict(architecture)
        activators, loss_func = architecture.validate()

        network = DeepNetwork()
        sizes = architecture.layer_sizes
        for input_dim, output_dim, active_func in zip(sizes[:-1], sizes[1:], activators):
            network.add_layer(DenseLayer(input_dim, output_dim, active_func, rng=self.rng))
        network.get_layer(-1).set_loss(loss_func)

        logger.debug("Created network %s with %d parameters",
                     sizes, network.num_parameters())
        return network
