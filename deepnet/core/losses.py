import numpy as np
from deepnet.core.base import Loss
from deepnet.core.errors import ConfigurationError, ShapeMismatchError

_LOSSES = {}


def register_loss(*tags):
    def wrap(cls):
        instance = cls()
        for tag in tags:
            _LOSSES[tag.lower()] = instance
        cls.name = tags[0]
        return cls
    return wrap


def get_loss(tag):
    """
    Resolves a configuration tag (e.g. "mse") to a shared loss instance.
    Raises ConfigurationError for unknown tags.
    """
    if isinstance(tag, Loss):
        return tag
    try:
        return _LOSSES[str(tag).lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown loss type '{tag}'. Known: {sorted(_LOSSES)}"
        ) from None


def available_losses():
    return sorted(_LOSSES)


def _align_target(y_pred, y_true):
    """Reshapes the target to the prediction's shape, refusing silent broadcasts."""
    y_pred = np.asarray(y_pred, dtype=np.float64)
    y_true = np.asarray(y_true, dtype=np.float64)
    if y_true.size != y_pred.size:
        raise ShapeMismatchError(
            f"Target has {y_true.size} entries, prediction has {y_pred.size} "
            f"(shapes {y_true.shape} vs {y_pred.shape})"
        )
    if y_pred.size == 0:
        raise ShapeMismatchError("Loss of an empty prediction is undefined")
    return y_pred, y_true.reshape(y_pred.shape)


@register_loss("mse")
class MSELoss(Loss):
    """
    Mean Squared Error (L2 Loss).
    Standard loss for regression problems.
    Formula: L = mean((y_pred - y_true)^2), averaged over every entry.
    """
    def loss(self, y_pred, y_true):
        y_pred, y_true = _align_target(y_pred, y_true)
        return float(np.mean((y_pred - y_true) ** 2))

    def gradient(self, y_pred, y_true):
        """
        Gradient of MSE: (2 / N) * (y_pred - y_true)
        N is the total element count (batch_size * output_dim).
        """
        y_pred, y_true = _align_target(y_pred, y_true)
        return (2.0 / y_pred.size) * (y_pred - y_true)


@register_loss("logcosh")
class LogCoshLoss(Loss):
    """
    Robust Loss Function (Log-Hyperbolic Cosine).

    - For small x: log(cosh(x)) is approx x^2 / 2 (Like MSE).
    - For large x: log(cosh(x)) is approx |x| - log(2) (Like L1 / MAE).

    The gradient is tanh(x) / N. It saturates at +-1/N, so outliers
    do not produce large gradients.
    """
    def loss(self, y_pred, y_true):
        y_pred, y_true = _align_target(y_pred, y_true)
        error = np.abs(y_pred - y_true)
        # log(cosh(e)) without overflowing cosh
        return float(np.mean(error + np.log1p(np.exp(-2 * error)) - np.log(2.0)))

    def gradient(self, y_pred, y_true):
        y_pred, y_true = _align_target(y_pred, y_true)
        return np.tanh(y_pred - y_true) / y_pred.size
