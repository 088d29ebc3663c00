import logging
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from tqdm import tqdm  # For progress bars

from deepnet.core.errors import ShapeMismatchError
from deepnet.core.optimizers import SGD

logger = logging.getLogger(__name__)


class GradientDescentTrainer:
    """
    Full-batch gradient descent.

    Trainers only talk to the network through get_parameter(), gradient()
    and set_parameter(); the update rule itself lives in the optimizer.

    Args:
        optimizer: Update rule (defaults to SGD(lr=0.001)).
        max_epochs: Number of passes over the training set.
        decay_rate: Learning rate multiplier applied after every epoch.
        verbose: Show tqdm progress bars.
    """
    mode_name = "GD"

    def __init__(self, optimizer=None, max_epochs=10, decay_rate=1.0, verbose=False):
        if max_epochs < 1:
            raise ValueError(f"max_epochs must be >= 1, got {max_epochs}")
        if decay_rate <= 0:
            raise ValueError(f"decay_rate must be > 0, got {decay_rate}")
        self.optimizer = optimizer if optimizer is not None else SGD(lr=0.001)
        self.max_epochs = max_epochs
        self.decay_rate = decay_rate
        self.verbose = verbose

    def _batches(self, n_samples, epoch):
        """Yields index arrays, one per parameter update."""
        yield np.arange(n_samples)

    def _step_gradient(self, network, X, y):
        return network.gradient(X, y)

    def _step(self, network, X, y):
        loss, grad = self._step_gradient(network, X, y)
        params = network.get_parameter()
        network.set_parameter(self.optimizer.update(params, grad))
        return loss

    def train(self, network, X, y, validation_data=None):
        """
        Main Training Loop.

        Args:
            network: DeepNetwork, updated in place.
            X, y: Training data, one sample per row.
            validation_data: Tuple (X_val, y_val) or None.
        Returns:
            History dict {'loss': [...], 'val_loss': [...]} with the full-set
            objective after every epoch.
        """
        X = np.atleast_2d(np.asarray(X, dtype=np.float64))
        y = np.asarray(y, dtype=np.float64)
        if y.ndim == 0 or y.shape[0] != X.shape[0]:
            raise ShapeMismatchError(
                f"Got {X.shape[0]} input rows but target of shape {y.shape}"
            )

        n_samples = len(X)
        history = {'loss': [], 'val_loss': []}
        base_lr = self.optimizer.lr

        logger.info("Starting Training | Mode: %s | Epochs: %d | Samples: %d",
                    self.mode_name, self.max_epochs, n_samples)
        start_time = time.time()

        try:
            for epoch in range(self.max_epochs):
                self.optimizer.lr = base_lr * self.decay_rate ** epoch

                batches = list(self._batches(n_samples, epoch))
                if self.verbose:
                    pbar = tqdm(batches, desc=f"Epoch {epoch+1}/{self.max_epochs}", unit="batch")
                else:
                    pbar = batches  # Silent iterator

                for idx in pbar:
                    batch_loss = self._step(network, X[idx], y[idx])
                    if self.verbose:
                        pbar.set_postfix({'batch_loss': f"{batch_loss:.5f}"})

                train_loss = network.objective(X, y)
                history['loss'].append(train_loss)

                val_msg = ""
                if validation_data is not None:
                    X_val, y_val = validation_data
                    val_loss = network.objective(X_val, y_val)
                    history['val_loss'].append(val_loss)
                    val_msg = f" | Val Loss: {val_loss:.6f}"

                logger.info("Epoch %d finished. Train Loss: %.6f%s",
                            epoch + 1, train_loss, val_msg)
        finally:
            self.optimizer.lr = base_lr

        logger.info("Training Complete. Time: %.2fs", time.time() - start_time)
        return history


class MiniBatchTrainer(GradientDescentTrainer):
    """
    Stochastic gradient descent over mini-batches.
    One parameter update per batch; rows are reshuffled every epoch.
    """
    mode_name = "SGD"

    def __init__(self, optimizer=None, max_epochs=10, decay_rate=1.0,
                 batch_size=32, shuffle=True, seed=None, verbose=False):
        super().__init__(optimizer, max_epochs, decay_rate, verbose)
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.batch_size = batch_size
        self.shuffle = shuffle
        self.rng = np.random.default_rng(seed)

    @property
    def step_size(self):
        return self.batch_size

    def _batches(self, n_samples, epoch):
        # Shuffle indices instead of data to keep original X intact
        indices = np.arange(n_samples)
        if self.shuffle:
            self.rng.shuffle(indices)
        step = self.step_size
        for start in range(0, n_samples, step):
            yield indices[start:start + step]


class ParallelMiniBatchTrainer(MiniBatchTrainer):
    """
    Multi-threaded mini-batch descent.

    Every step takes thread_num * batch_per_thread rows and splits them across
    worker threads. Each worker calls network.gradient() on the same,
    unmodified parameters; the coordinating thread averages the gradients
    (weighted by rows) and performs the single set_parameter() call.
    """
    mode_name = "MT-SGD"

    def __init__(self, optimizer=None, max_epochs=10, decay_rate=1.0,
                 thread_num=2, batch_per_thread=20, shuffle=True, seed=None, verbose=False):
        if thread_num < 1:
            raise ValueError(f"thread_num must be >= 1, got {thread_num}")
        if batch_per_thread < 1:
            raise ValueError(f"batch_per_thread must be >= 1, got {batch_per_thread}")
        super().__init__(optimizer, max_epochs, decay_rate,
                         batch_size=thread_num * batch_per_thread,
                         shuffle=shuffle, seed=seed, verbose=verbose)
        self.thread_num = thread_num
        self.batch_per_thread = batch_per_thread
        self._executor = None

    def _step_gradient(self, network, X, y):
        parts = [part for part in np.array_split(np.arange(len(X)), self.thread_num)
                 if part.size > 0]
        results = list(self._executor.map(
            lambda part: network.gradient(X[part], y[part]), parts))

        weights = np.array([part.size for part in parts], dtype=np.float64) / len(X)
        loss = sum(w * part_loss for w, (part_loss, _) in zip(weights, results))
        grad = sum(w * part_grad for w, (_, part_grad) in zip(weights, results))
        return loss, grad

    def train(self, network, X, y, validation_data=None):
        with ThreadPoolExecutor(max_workers=self.thread_num) as executor:
            self._executor = executor
            try:
                return super().train(network, X, y, validation_data)
            finally:
                self._executor = None
