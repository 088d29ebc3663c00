import numpy as np
from deepnet.core.base import Activator
from deepnet.core.errors import ConfigurationError

# tag -> shared instance
_ACTIVATORS = {}


def register_activator(*tags):
    """
    Class decorator: instantiates the activator once and maps every tag
    to that single shared instance.
    """
    def wrap(cls):
        instance = cls()
        for tag in tags:
            _ACTIVATORS[tag.lower()] = instance
        cls.name = tags[0]
        return cls
    return wrap


def get_activator(tag):
    """
    Resolves a configuration tag (e.g. "linear", "logistic") to an activator.
    Raises ConfigurationError for unknown tags.
    """
    if isinstance(tag, Activator):
        return tag
    try:
        return _ACTIVATORS[str(tag).lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown activator type '{tag}'. Known: {sorted(_ACTIVATORS)}"
        ) from None


def available_activators():
    return sorted(_ACTIVATORS)


@register_activator("linear", "identity")
class Linear(Activator):
    """
    Linear (Identity) Activation.
    Used typically for the output layer in regression problems.
    """
    def activate(self, z):
        return z

    def gradient(self, z, a):
        # Derivative is 1
        return np.ones_like(z)


@register_activator("logistic", "sigmoid")
class Sigmoid(Activator):
    """
    Standard Sigmoid Activation Function.
    Formula: f(x) = 1 / (1 + exp(-x))
    Range: (0, 1)
    """
    def activate(self, z):
        # exp overflows past |x| ~ 709
        z = np.clip(z, -500, 500)
        return 1 / (1 + np.exp(-z))

    def gradient(self, z, a):
        # Derivative: f(x) * (1 - f(x))
        return a * (1 - a)


@register_activator("tanh")
class Tanh(Activator):
    """
    Hyperbolic Tangent Activation.
    Formula: f(x) = tanh(x)
    Range: (-1, 1)
    """
    def activate(self, z):
        return np.tanh(z)

    def gradient(self, z, a):
        # Derivative: 1 - tanh^2(x)
        return 1 - a ** 2


@register_activator("relu")
class ReLU(Activator):
    """
    Rectified Linear Unit.
    Formula: f(x) = max(0, x)
    Range: [0, inf)
    """
    def activate(self, z):
        return np.maximum(0, z)

    def gradient(self, z, a):
        # Derivative: 1 if x > 0 else 0
        return (z > 0).astype(np.float64)
