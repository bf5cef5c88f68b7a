"""
Neural network layers implementation.
"""
import operator

import numpy as np

from ..base import NetLayer
from ..common.utils import as_matrix, check_shape
from ..exceptions import ShapeError
from ..log import get_logger
from .activations import ACTIVATIONS

logger = get_logger(__name__)


def _with_bias_column(x):
    """Append a column of ones to ``x`` (bias trick)."""
    return np.hstack([x, np.ones((x.shape[0], 1))])


class Linear(NetLayer):
    """
    Fully connected layer with optional bias term.

    The parameters are a matrix of weights of size I x O where I is the input
    dimension (plus one row for the bias weights when bias is enabled) and O
    the output dimension.
    """

    __slots__ = ("_input_size", "_output_size", "_has_bias")

    def __init__(self, input_size, output_size, bias=True):
        """
        Args:
            input_size (int): Number of input features, excluding the bias
            output_size (int): Number of output features
            bias (bool): Whether to include a bias term
        """
        input_size = operator.index(input_size)
        output_size = operator.index(output_size)
        if input_size < 1 or output_size < 1:
            raise ValueError(
                f"Linear layer sizes must be positive, got "
                f"input_size={input_size}, output_size={output_size}")
        has_bias = bool(bias)
        object.__setattr__(self, "_input_size", input_size + (1 if has_bias else 0))
        object.__setattr__(self, "_output_size", output_size)
        object.__setattr__(self, "_has_bias", has_bias)

    @classmethod
    def without_bias(cls, input_size, output_size):
        """Construct a Linear layer without a bias term."""
        return cls(input_size, output_size, bias=False)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def input_size(self):
        """Number of parameter rows, including the bias row."""
        return self._input_size

    @property
    def output_size(self):
        """Number of output features."""
        return self._output_size

    @property
    def has_bias(self):
        """Whether the last parameter row holds bias weights."""
        return self._has_bias

    @property
    def n_features(self):
        """Number of input columns expected by forward."""
        return self._input_size - 1 if self._has_bias else self._input_size

    def _check_params(self, operation, params):
        params = np.asarray(params)
        check_shape(f"Linear.{operation} params", self.param_shape(), params.shape)
        return params

    def forward(self, inputs, params):
        """
        Forward pass: inputs.dot(params), with the bias column appended first
        when bias is enabled.

        Args:
            inputs (ndarray): Input data of shape (N, n_features)
            params (ndarray): Parameter view of shape param_shape()

        Returns:
            ndarray: Output of shape (N, output_size)
        """
        inputs = as_matrix(inputs, "Linear.forward inputs")
        params = self._check_params("forward", params)
        if inputs.shape[1] + (1 if self._has_bias else 0) != params.shape[0]:
            raise ShapeError("Linear.forward inputs",
                             (inputs.shape[0], self.n_features), inputs.shape)
        if self._has_bias:
            return _with_bias_column(inputs) @ params
        return inputs @ params

    def back_input(self, out_grad, inputs, params):
        """
        Gradient with respect to the input: out_grad.dot(params.T).

        The bias row of the parameters is dropped before transposing since
        the bias has no input dimension to receive a gradient.

        Returns:
            ndarray: Gradient of shape (N, n_features)
        """
        out_grad = as_matrix(out_grad, "Linear.back_input out_grad")
        inputs = as_matrix(inputs, "Linear.back_input inputs")
        params = self._check_params("back_input", params)
        check_shape("Linear.back_input inputs",
                    (inputs.shape[0], self.n_features), inputs.shape)
        check_shape("Linear.back_input out_grad",
                    (inputs.shape[0], self._output_size), out_grad.shape)
        if self._has_bias:
            return out_grad @ params[:-1].T
        return out_grad @ params.T

    def back_params(self, out_grad, inputs, params):
        """
        Gradient with respect to the parameters: inputs.T.dot(out_grad), using
        the bias-augmented inputs when bias is enabled.

        Returns:
            ndarray: Gradient of shape param_shape()
        """
        out_grad = as_matrix(out_grad, "Linear.back_params out_grad")
        inputs = as_matrix(inputs, "Linear.back_params inputs")
        self._check_params("back_params", params)
        check_shape("Linear.back_params out_grad",
                    (inputs.shape[0], self._output_size), out_grad.shape)
        check_shape("Linear.back_params inputs",
                    (inputs.shape[0], self.n_features), inputs.shape)
        if self._has_bias:
            return _with_bias_column(inputs).T @ out_grad
        return inputs.T @ out_grad

    def default_params(self, rng=None):
        """
        Xavier/Glorot initialization: zero mean gaussian with variance
        2 / (input_size + output_size).

        Args:
            rng (np.random.Generator, optional): Random number generator

        Returns:
            ndarray: Flat array of input_size * output_size weights, row-major
        """
        if rng is None:
            rng = np.random.default_rng()
        std = np.sqrt(2.0 / (self._input_size + self._output_size))
        logger.debug("linear_params_initialized", shape=self.param_shape(), std=float(std))
        return rng.normal(0.0, std, size=self._input_size * self._output_size)

    def param_shape(self):
        return (self._input_size, self._output_size)

    def get_config(self):
        return {
            "type": "linear",
            "input_size": self.n_features,
            "output_size": self._output_size,
            "bias": self._has_bias,
        }

    def __eq__(self, other):
        if not isinstance(other, Linear):
            return NotImplemented
        return (self._input_size, self._output_size, self._has_bias) == \
            (other._input_size, other._output_size, other._has_bias)

    def __hash__(self):
        return hash((Linear, self._input_size, self._output_size, self._has_bias))

    def __repr__(self):
        return (f"Linear(input_size={self.n_features}, "
                f"output_size={self._output_size}, bias={self._has_bias})")


class ActivationLayer(NetLayer):
    """
    Parameterless layer applying an activation function elementwise.

    Works for any object with ``func`` and ``func_grad`` methods.
    """

    __slots__ = ("_activation",)

    def __init__(self, activation):
        if not (callable(getattr(activation, "func", None))
                and callable(getattr(activation, "func_grad", None))):
            raise TypeError(
                f"activation must provide func and func_grad, got {activation!r}")
        object.__setattr__(self, "_activation", activation)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def activation(self):
        """The wrapped activation function."""
        return self._activation

    def forward(self, inputs, params=None):
        """Apply the activation to every entry of ``inputs``; params are ignored."""
        inputs = as_matrix(inputs, "ActivationLayer.forward inputs")
        return np.asarray(self._activation.func(inputs), dtype=float)

    def back_input(self, out_grad, inputs, params=None):
        """Chain rule for a pointwise function: out_grad * func_grad(inputs)."""
        out_grad = as_matrix(out_grad, "ActivationLayer.back_input out_grad")
        inputs = as_matrix(inputs, "ActivationLayer.back_input inputs")
        check_shape("ActivationLayer.back_input out_grad", inputs.shape, out_grad.shape)
        return out_grad * np.asarray(self._activation.func_grad(inputs), dtype=float)

    def back_params(self, out_grad, inputs, params=None):
        return np.zeros((0, 0))

    def default_params(self, rng=None):
        return np.zeros(0)

    def param_shape(self):
        return (0, 0)

    def get_config(self):
        """Only catalog activations can be described by a config."""
        name = getattr(self._activation, "name", None)
        cls = ACTIVATIONS.get(name)
        if cls is None or cls() != self._activation:
            raise NotImplementedError(
                f"{self._activation!r} is not a catalog activation and cannot be described by a config")
        return {"type": name}

    def __eq__(self, other):
        if not isinstance(other, ActivationLayer):
            return NotImplemented
        return self._activation == other._activation

    def __hash__(self):
        return hash((ActivationLayer, self._activation))

    def __repr__(self):
        return f"ActivationLayer({self._activation!r})"
