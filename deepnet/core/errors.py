class DeepNetError(Exception):
    """Base class for every error raised by deepnet."""


class ConfigurationError(DeepNetError, RuntimeError):
    """
    The network is not set up for the requested call.
    e.g. an unknown activator tag, or objective() with no loss attached.
    """


class ShapeMismatchError(DeepNetError, ValueError):
    """
    Input, target or parameter shapes disagree with the network.
    """


class EmptyNetworkError(DeepNetError, RuntimeError):
    """The layer chain has no layers."""
