import numpy as np

from ..exceptions import ShapeError


def as_matrix(x, name="input"):
    """Return ``x`` as a 2-D float array, raising ShapeError for any other rank."""
    arr = np.asarray(x, dtype=float)
    if arr.ndim != 2:
        raise ShapeError(f"{name} must be a 2D matrix", "(rows, cols)", arr.shape)
    return arr


def check_shape(operation, expected, actual):
    """Raise ShapeError unless ``actual`` equals ``expected``."""
    if tuple(actual) != tuple(expected):
        raise ShapeError(operation, tuple(expected), tuple(actual))


def numerical_gradient(f, x, eps=1e-6):
    """
    Central finite-difference gradient of a scalar function.

    Args:
        f (callable): Function mapping an array shaped like ``x`` to a scalar
        x (ndarray): Point at which to differentiate (left untouched)
        eps (float): Perturbation size

    Returns:
        ndarray: Array shaped like ``x`` with d f / d x for every entry
    """
    x = np.array(x, dtype=float)
    grad = np.zeros_like(x)
    for idx in np.ndindex(x.shape):
        orig = x[idx]
        x[idx] = orig + eps
        f_plus = f(x)
        x[idx] = orig - eps
        f_minus = f(x)
        x[idx] = orig
        grad[idx] = (f_plus - f_minus) / (2 * eps)
    return grad


def check_layer_gradients(layer, inputs, params, eps=1e-6):
    """
    Compare a layer's analytic gradients with finite differences.

    The loss is the sum of the layer's outputs, so the gradient flowing into
    the layer is a matrix of ones.

    Returns:
        tuple: (max abs error of back_input, max abs error of back_params)
    """
    inputs = as_matrix(inputs)
    params = np.asarray(params, dtype=float).reshape(layer.param_shape())
    out_grad = np.ones_like(layer.forward(inputs, params))

    analytic_in = layer.back_input(out_grad, inputs, params)
    numeric_in = numerical_gradient(lambda x: layer.forward(x, params).sum(), inputs, eps)
    input_err = float(np.max(np.abs(analytic_in - numeric_in), initial=0.0))

    analytic_params = layer.back_params(out_grad, inputs, params)
    numeric_params = numerical_gradient(lambda p: layer.forward(inputs, p).sum(), params, eps)
    param_err = float(np.max(np.abs(analytic_params - numeric_params), initial=0.0))

    return input_err, param_err
