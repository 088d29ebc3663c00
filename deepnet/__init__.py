"""
deepnet
~~~~~~~

Feed-forward dense networks with exact backpropagation over a flat
parameter vector.
"""

from deepnet.core import (
    ConfigurationError,
    DeepNetError,
    DeepNetwork,
    DenseLayer,
    EmptyNetworkError,
    NetworkArchitecture,
    RandomNetworkCreator,
    ShapeMismatchError,
)

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "DeepNetError",
    "DeepNetwork",
    "DenseLayer",
    "EmptyNetworkError",
    "NetworkArchitecture",
    "RandomNetworkCreator",
    "ShapeMismatchError",
]
