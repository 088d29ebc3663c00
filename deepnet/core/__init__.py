from deepnet.core.errors import (
    DeepNetError,
    ConfigurationError,
    ShapeMismatchError,
    EmptyNetworkError,
)
from deepnet.core.base import Activator, Loss, Optimizer
from deepnet.core.activations import Linear, Sigmoid, Tanh, ReLU, get_activator
from deepnet.core.losses import MSELoss, LogCoshLoss, get_loss
from deepnet.core.layers import DenseLayer
from deepnet.core.models import DeepNetwork
from deepnet.core.builder import NetworkArchitecture, RandomNetworkCreator
from deepnet.core.optimizers import SGD, Momentum, Adam
from deepnet.core.trainers import (
    GradientDescentTrainer,
    MiniBatchTrainer,
    ParallelMiniBatchTrainer,
)

__all__ = [
    "DeepNetError",
    "ConfigurationError",
    "ShapeMismatchError",
    "EmptyNetworkError",
    "Activator",
    "Loss",
    "Optimizer",
    "Linear",
    "Sigmoid",
    "Tanh",
    "ReLU",
    "get_activator",
    "MSELoss",
    "LogCoshLoss",
    "get_loss",
    "DenseLayer",
    "DeepNetwork",
    "NetworkArchitecture",
    "RandomNetworkCreator",
    "SGD",
    "Momentum",
    "Adam",
    "GradientDescentTrainer",
    "MiniBatchTrainer",
    "ParallelMiniBatchTrainer",
]
