import numpy as np
from deepnet.core.activations import get_activator
from deepnet.core.errors import ConfigurationError, ShapeMismatchError


class DenseLayer:
    """
    Fully connected layer: A = f(X @ W + b).

    W has shape (input_dim, output_dim) and b has shape (output_dim,), so a
    batch is laid out one sample per row. The terminal layer of a network
    also owns the loss function.
    """
    def __init__(self, input_dim, output_dim, active_func="linear", rng=None):
        for dim in (input_dim, output_dim):
            if isinstance(dim, bool) or not isinstance(dim, (int, np.integer)) or dim < 1:
                raise ConfigurationError(
                    f"Layer dimensions must be positive integers, got {input_dim}x{output_dim}"
                )
        self.input_dim = int(input_dim)
        self.output_dim = int(output_dim)
        self.active_func = get_activator(active_func)
        self.loss_func = None
        self.name = self.__class__.__name__

        limit = np.sqrt(6 / (input_dim + output_dim))
        uniform = rng.uniform if rng is not None else np.random.uniform
        self.W = uniform(-limit, limit, (self.input_dim, self.output_dim))
        self.b = np.zeros(self.output_dim)

    def predict(self, X):
        """Works for a batch (n, input_dim) and for a single sample (input_dim,)."""
        return self.active_func.activate(X @ self.W + self.b)

    def predict_with_activator(self, X):
        """Same as predict, but also returns the pre-activation Z."""
        z = X @ self.W + self.b
        return z, self.active_func.activate(z)

    def is_loss_contributor(self):
        return self.loss_func is not None

    def set_loss(self, loss_func):
        self.loss_func = loss_func

    def compute_loss_gradient(self, output, y):
        if self.loss_func is None:
            raise ConfigurationError("The layer is not assigned with a loss function.")
        return self.loss_func.gradient(output, y)

    def compute_delta(self, z, a, loss_gradient):
        """
        Local error signal: dLoss/dZ = dLoss/dA * f'(Z).
        """
        return loss_gradient * self.active_func.gradient(z, a)

    def backprop_delta(self, delta):
        """
        Pushes this layer's delta through W.
        The result is dLoss/dA of the previous layer (or of the network input).
        """
        return delta @ self.W.T

    def compute_param_gradient(self, layer_input, delta):
        grad_W = layer_input.T @ delta
        grad_b = delta.sum(axis=0)
        return grad_W, grad_b

    # --- flat parameter codec ---

    @property
    def num_params(self):
        return (self.input_dim + 1) * self.output_dim

    def get_params(self):
        return np.concatenate([self.W.ravel(), self.b.ravel()])

    def set_params(self, params):
        params = np.asarray(params, dtype=np.float64).ravel()
        if params.size != self.num_params:
            raise ShapeMismatchError(
                f"{self.name} expects {self.num_params} parameters, got {params.size}"
            )
        w_size = self.W.size
        self.W[...] = params[:w_size].reshape(self.W.shape)
        self.b[...] = params[w_size:]

    def __repr__(self):
        return (f"<{self.name} {self.input_dim}->{self.output_dim} "
                f"{self.active_func.name}>")
