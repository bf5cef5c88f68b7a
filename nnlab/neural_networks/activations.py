"""
Elementwise activation functions.

Each function works on scalars and on numpy arrays of any shape and never
modifies its argument. ``ActivationLayer`` turns any of them into a layer.
"""
import numpy as np


class ActivationFunc:
    """Base class for elementwise activation functions."""

    name = None

    def func(self, x):
        """Apply the activation."""
        raise NotImplementedError

    def func_grad(self, x):
        """Derivative of the activation evaluated at ``x``."""
        raise NotImplementedError

    def func_inv(self, x):
        """Inverse of the activation."""
        raise NotImplementedError(f"{type(self).__name__} has no inverse")

    def as_layer(self):
        """Wrap this function in a parameterless layer."""
        # pylint: disable=import-outside-toplevel
        from .layers import ActivationLayer
        return ActivationLayer(self)

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"{type(self).__name__}()"


class Sigmoid(ActivationFunc):
    """Logistic sigmoid."""

    name = "sigmoid"

    def func(self, x):
        # Clip input to prevent overflow
        x_clipped = np.clip(x, -500, 500)
        return 1 / (1 + np.exp(-x_clipped))

    def func_grad(self, x):
        s = self.func(x)
        return s * (1 - s)

    def func_inv(self, x):
        return np.log(x / (1 - x))


class Identity(ActivationFunc):
    """Identity activation, used for linear output layers."""

    name = "identity"

    def func(self, x):
        return np.array(x, dtype=float, copy=True)

    def func_grad(self, x):
        return np.ones_like(x, dtype=float)

    def func_inv(self, x):
        return np.array(x, dtype=float, copy=True)


class Exp(ActivationFunc):
    """Exponential activation."""

    name = "exp"

    def func(self, x):
        return np.exp(x)

    def func_grad(self, x):
        return np.exp(x)

    def func_inv(self, x):
        return np.log(x)


class Tanh(ActivationFunc):
    """Hyperbolic tangent."""

    name = "tanh"

    def func(self, x):
        return np.tanh(x)

    def func_grad(self, x):
        return 1 - np.tanh(x) ** 2

    def func_inv(self, x):
        return np.arctanh(x)


class ReLU(ActivationFunc):
    """Rectified linear unit. The derivative at 0 is taken as 0."""

    name = "relu"

    def func(self, x):
        return np.maximum(x, 0)

    def func_grad(self, x):
        return (np.asarray(x) > 0).astype(float)


class ScalarActivation(ActivationFunc):
    """
    Activation built from a pair of plain scalar functions.

    Useful for functions written against the ``math`` module, which do not
    accept arrays.

    Args:
        func (callable): f(x) for a single float
        func_grad (callable): f'(x) for a single float
        name (str, optional): Name reported in configs and repr
    """

    def __init__(self, func, func_grad, name=None):
        self._func = func
        self._func_grad = func_grad
        self._vfunc = np.vectorize(func, otypes=[float])
        self._vfunc_grad = np.vectorize(func_grad, otypes=[float])
        self.name = name or getattr(func, "__name__", "scalar")

    def func(self, x):
        return self._vfunc(x)

    def func_grad(self, x):
        return self._vfunc_grad(x)

    def __eq__(self, other):
        return (isinstance(other, ScalarActivation)
                and self._func is other._func
                and self._func_grad is other._func_grad)

    def __hash__(self):
        return hash((self._func, self._func_grad))

    def __repr__(self):
        return f"ScalarActivation(name={self.name!r})"


ACTIVATIONS = {
    "sigmoid": Sigmoid,
    "identity": Identity,
    "exp": Exp,
    "tanh": Tanh,
    "relu": ReLU,
}


def get_activation(name, **kwargs):
    """
    Factory function to get activation function instances.

    Args:
        name (str): Activation name ('sigmoid', 'identity', 'exp', 'tanh', 'relu')
        **kwargs: Constructor arguments

    Returns:
        ActivationFunc instance
    """
    try:
        cls = ACTIVATIONS[name]
    except KeyError:
        raise ValueError(f"Unknown activation: {name}") from None
    return cls(**kwargs)
