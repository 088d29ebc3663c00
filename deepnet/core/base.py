from abc import ABC, abstractmethod


class Activator(ABC):
    """
    Abstract Base Class for pointwise nonlinearities.
    Activators are stateless: one instance may be shared by many layers.
    """

    # Tag used by the registry and by summaries
    name = None

    @abstractmethod
    def activate(self, z):
        """
        Applies the nonlinearity elementwise.
        Args:
            z: Pre-activation values (matrix or vector).
        Returns:
            Activated values, same shape as z.
        """
        pass

    @abstractmethod
    def gradient(self, z, a):
        """
        Elementwise derivative of the activation w.r.t its input.

        Args:
            z: Pre-activation values.
            a: Already activated values (activate(z)). Closed forms such as
               the logistic derivative a * (1 - a) use this directly.
        Returns:
            Derivative values, same shape as z.
        """
        pass

    def __repr__(self):
        return f"<{self.__class__.__name__}>"


class Loss(ABC):
    """
    Abstract Base Class for loss functions.
    """

    name = None

    @abstractmethod
    def loss(self, y_pred, y_true):
        """
        Computes the scalar loss value.
        """
        pass

    @abstractmethod
    def gradient(self, y_pred, y_true):
        """
        Computes the gradient of the loss w.r.t the network output (y_pred).
        This starts the Backpropagation process.
        """
        pass

    def __repr__(self):
        return f"<{self.__class__.__name__}>"


class Optimizer(ABC):
    """
    Abstract Base Class for update rules on the flat parameter vector.
    """

    def __init__(self, lr=0.01):
        self.lr = lr

    @abstractmethod
    def update(self, params, grads):
        """
        Performs a parameter update step.
        Args:
            params: Current flat parameter vector.
            grads: Gradient of the objective, same layout as params.
        Returns:
            The updated parameter vector (params is left untouched).
        """
        pass

    def reset(self):
        """Clears any accumulated state (velocities, moments)."""
        pass
