from deepnet.utils.data_utils import DataHandler
from deepnet.utils.gradient_check import gradient_check, numerical_gradient

__all__ = ["DataHandler", "gradient_check", "numerical_gradient"]
