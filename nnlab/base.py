# pylint: disable=missing-docstring
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import numpy as np


# pylint: disable=invalid-name line-too-long
class NetLayer(ABC):
    """
    Contract shared by every network layer.

    A layer is an immutable description of a transformation. It never owns its
    parameters: each call receives a view of shape ``param_shape()`` borrowed
    from a buffer owned by the caller.
    """

    @abstractmethod
    def forward(self, inputs: np.ndarray, params: np.ndarray) -> np.ndarray:
        """
        :param inputs: numpy array of shape (N, I) with N being the number of samples and I the input dimension
        :param params: parameter view of shape param_shape()
        :return: numpy array of shape (N, O)
        """
        raise NotImplementedError

    @abstractmethod
    def back_input(self, out_grad: np.ndarray, inputs: np.ndarray, params: np.ndarray) -> np.ndarray:
        """
        :param out_grad: gradient of the loss with respect to this layer's output, shape (N, O)
        :param inputs: the input given to forward, shape (N, I)
        :param params: parameter view of shape param_shape()
        :return: gradient of the loss with respect to inputs, shape (N, I)
        """
        raise NotImplementedError

    @abstractmethod
    def back_params(self, out_grad: np.ndarray, inputs: np.ndarray, params: np.ndarray) -> np.ndarray:
        """
        :param out_grad: gradient of the loss with respect to this layer's output, shape (N, O)
        :param inputs: the input given to forward, shape (N, I)
        :param params: parameter view of shape param_shape()
        :return: gradient of the loss with respect to params, shape param_shape()
        """
        raise NotImplementedError

    @abstractmethod
    def default_params(self, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """
        :param rng: random generator used for initialisation
        :return: flat numpy array of length num_params() holding the initial parameters
        """
        raise NotImplementedError

    @abstractmethod
    def param_shape(self) -> Tuple[int, int]:
        """
        :return: (rows, cols) the flat parameters are reshaped into
        """
        raise NotImplementedError

    def num_params(self) -> int:
        rows, cols = self.param_shape()
        return rows * cols

    def get_config(self) -> Dict[str, Any]:
        """
        Get the constructor configuration of this layer.

        :return: Dictionary with a "type" key plus the keyword arguments needed to rebuild the layer.
        """
        raise NotImplementedError
