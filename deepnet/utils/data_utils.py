import os

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt


class DataHandler:
    """
    Utility class for matrix files, dataset splits and training plots.
    """

    @staticmethod
    def load_matrix(filepath):
        """
        Loads a whitespace separated text matrix (one row per line).
        Returns:
            np.array: 2-D float64 array.
        """
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"Matrix file not found: {filepath}")
        df = pd.read_csv(filepath, sep=r"\s+", header=None, dtype=np.float64,
                         float_precision="round_trip")
        return df.to_numpy()

    @staticmethod
    def save_matrix(filepath, matrix):
        """Writes a matrix in the format read by load_matrix. Vectors become one column."""
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.ndim == 1:
            matrix = matrix.reshape(-1, 1)
        pd.DataFrame(matrix).to_csv(filepath, sep=" ", header=False, index=False,
                                    float_format="%.17g")

    @staticmethod
    def train_test_split(X, y, train_ratio=0.7, shuffle=False, seed=None):
        """
        Splits data into training and testing sets.
        Row order is kept unless shuffle is True.
        """
        if not 0 < train_ratio < 1:
            raise ValueError(f"train_ratio must be in (0, 1), got {train_ratio}")
        num_samples = len(X)
        indices = np.arange(num_samples)

        if shuffle:
            np.random.default_rng(seed).shuffle(indices)
            X = X[indices]
            y = y[indices]

        train_size = int(num_samples * train_ratio)

        X_train, X_test = X[:train_size], X[train_size:]
        y_train, y_test = y[:train_size], y[train_size:]

        return X_train, X_test, y_train, y_test

    @staticmethod
    def plot_history(history, filepath, title="Loss vs Epochs"):
        """
        Saves the loss curve of a trainer history
        ({'loss': [...], 'val_loss': [...]}) to filepath.
        """
        train = history.get("loss", [])
        val = history.get("val_loss", [])

        fig, ax = plt.subplots()
        if len(train) > 0:
            ax.plot(np.arange(1, len(train) + 1), train, label="train loss")
        if len(val) > 0:
            ax.plot(np.arange(1, len(val) + 1), val, label="val loss")
        ax.set_xlabel("Epoch")
        ax.set_ylabel("Objective")
        ax.set_title(title)
        if len(train) > 0 or len(val) > 0:
            ax.legend()
        fig.tight_layout()
        fig.savefig(filepath, dpi=120)
        plt.close(fig)
        return filepath
