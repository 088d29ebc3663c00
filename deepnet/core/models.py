import logging
import numpy as np
from deepnet.core.errors import ConfigurationError, EmptyNetworkError, ShapeMismatchError
from deepnet.core.layers import DenseLayer

logger = logging.getLogger(__name__)


class DeepNetwork:
    """
    Main Model Class.
    An ordered chain of DenseLayers with the loss attached to the last one.

    Capabilities:
    - Prediction for batches (one sample per row) and single samples.
    - Forward pass recording (Z, A) per layer.
    - Backpropagation producing (dW, db) per layer.
    - Flat parameter get/set, sharing one layout with gradient().

    gradient() and objective() never modify the network, so workers may call
    them concurrently on a shared snapshot. Only set_parameter() mutates.
    """
    def __init__(self, layers=None):
        self.layers = []
        for layer in layers or []:
            self.add_layer(layer)

    # --- structure ---

    def add_layer(self, layer):
        """Appends a layer to the chain."""
        if not isinstance(layer, DenseLayer):
            raise TypeError("Object must be a deepnet.core.layers.DenseLayer")
        self.layers.append(layer)

    def remove_layer(self, index):
        del self.layers[index]

    def get_layer(self, index):
        return self.layers[index]

    def get_layer_num(self):
        return len(self.layers)

    def num_parameters(self):
        return sum(layer.num_params for layer in self.layers)

    # --- validation ---

    def _check_not_empty(self):
        if not self.layers:
            raise EmptyNetworkError("The network has no layers.")

    def _check_input(self, X):
        self._check_not_empty()
        X = np.asarray(X, dtype=np.float64)
        input_dim = self.layers[0].input_dim
        if X.ndim not in (1, 2) or X.shape[-1] != input_dim:
            raise ShapeMismatchError(
                f"Input of shape {X.shape} does not match input dimension {input_dim}"
            )
        return X

    def _check_loss(self):
        *hidden, last = self.layers
        if not last.is_loss_contributor():
            raise ConfigurationError(
                "The last layer has no loss function; call set_loss() first."
            )
        if any(layer.is_loss_contributor() for layer in hidden):
            raise ConfigurationError("Only the last layer may own a loss function.")

    def _prepare_batch(self, X, y):
        """Promotes X to a 2-D batch and y to (batch, output_dim)."""
        X = np.atleast_2d(self._check_input(X))
        y = np.atleast_1d(np.asarray(y, dtype=np.float64))
        self._check_loss()
        n_samples = X.shape[0]
        if n_samples == 0:
            raise ShapeMismatchError("Cannot evaluate the objective on an empty batch")
        output_dim = self.layers[-1].output_dim
        # a lone sample may come with a flat (output_dim,) target
        single_flat_target = n_samples == 1 and y.ndim == 1
        if y.shape[0] != n_samples and not single_flat_target:
            raise ShapeMismatchError(
                f"Target of shape {y.shape} does not match {n_samples} input rows"
            )
        if y.size != n_samples * output_dim:
            raise ShapeMismatchError(
                f"Target of shape {y.shape} does not match output shape "
                f"({n_samples}, {output_dim})"
            )
        return X, y.reshape(n_samples, output_dim)

    # --- forward ---

    def predict(self, X):
        """
        Passes X through all layers sequentially.
        X may be a batch (n, input_dim) or one sample (input_dim,).
        """
        out = self._check_input(X)
        for layer in self.layers:
            out = layer.predict(out)
        return out

    def feed_forward(self, X):
        """
        Runs the chain once and records (pre-activation, post-activation)
        for every layer.
        """
        X = np.atleast_2d(self._check_input(X))
        record = []
        layer_input = X
        for layer in self.layers:
            z, a = layer.predict_with_activator(layer_input)
            record.append((z, a))
            layer_input = a
        logger.debug("Feed forward finished over %d layers", len(record))
        return record

    # --- backward ---

    def back_propagate(self, X, y, forward_record):
        """
        Walks the chain from last to first layer.

        Delta of the last layer:  loss'(A_last, y) * f'_last(Z_last, A_last)
        Delta of layer i:         (Delta_{i+1} @ W_{i+1}.T) * f'_i(Z_i, A_i)

        Returns one (dW, db) pair per layer, in chain order.
        """
        X, y = self._prepare_batch(X, y)
        if len(forward_record) != len(self.layers):
            raise ShapeMismatchError(
                f"Forward record has {len(forward_record)} entries for "
                f"{len(self.layers)} layers"
            )

        gradients = [None] * len(self.layers)
        delta = None
        downstream = None
        for i in reversed(range(len(self.layers))):
            layer = self.layers[i]
            z, a = forward_record[i]
            layer_input = forward_record[i - 1][1] if i > 0 else X

            if downstream is None:
                upstream_gradient = layer.compute_loss_gradient(a, y)
            else:
                upstream_gradient = downstream.backprop_delta(delta)

            delta = layer.compute_delta(z, a, upstream_gradient)
            gradients[i] = layer.compute_param_gradient(layer_input, delta)
            downstream = layer

        logger.debug("Back propagation finished over %d layers", len(gradients))
        return gradients

    # --- objective ---

    def objective(self, X, y):
        """Loss of the last layer evaluated on the network output."""
        X, y = self._prepare_batch(X, y)
        output = self.predict(X)
        return self.layers[-1].loss_func.loss(output, y)

    def gradient(self, X, y):
        """
        Returns:
            (loss, flat_gradient) where flat_gradient follows the
            get_parameter() layout.
        """
        X, y = self._prepare_batch(X, y)
        forward_record = self.feed_forward(X)
        pairs = self.back_propagate(X, y, forward_record)
        output = forward_record[-1][1]
        loss = self.layers[-1].loss_func.loss(output, y)
        return loss, self._pack(pairs)

    # --- flat parameter codec ---

    def _pack(self, pairs):
        """Concatenates (W, b) pairs into one vector: per layer, W row-major then b."""
        flat = np.zeros(self.num_parameters())
        start_idx = 0
        for W, b in pairs:
            flat[start_idx:start_idx + W.size] = W.ravel()
            start_idx += W.size
            flat[start_idx:start_idx + b.size] = b.ravel()
            start_idx += b.size
        return flat

    def get_parameter(self):
        return self._pack((layer.W, layer.b) for layer in self.layers)

    def set_parameter(self, parameter):
        """
        Writes a flat vector (get_parameter() layout) into every layer's W and b.
        """
        parameter = np.asarray(parameter, dtype=np.float64).ravel()
        total = self.num_parameters()
        if parameter.size != total:
            raise ShapeMismatchError(
                f"Network has {total} parameters, got a vector of {parameter.size}"
            )
        start_idx = 0
        for layer in self.layers:
            n_params = layer.num_params
            layer.set_params(parameter[start_idx:start_idx + n_params])
            start_idx += n_params

    def summary(self):
        """Prints and returns a summary of the model architecture."""
        lines = [
            "-" * 60,
            f"{'Layer (type)':<30} {'Shape / Params':<30}",
            "=" * 60,
        ]
        for layer in self.layers:
            shape = f"{layer.input_dim}->{layer.output_dim} {layer.active_func.name}"
            lines.append(f"{layer.name:<30} {f'{shape} | {layer.num_params}':<30}")
        lines.append("=" * 60)
        lines.append(f"Total Trainable Parameters: {self.num_parameters()}")
        loss_func = self.layers[-1].loss_func if self.layers else None
        lines.append(f"Loss: {loss_func.name if loss_func else 'None'}")
        lines.append("-" * 60)
        text = "\n".join(lines)
        print(text)
        return text

    def __repr__(self):
        return f"<DeepNetwork layers={self.layers!r}>"
