"""Layer abstraction for feed-forward neural networks."""

from .base import NetLayer
from .exceptions import NnlabError, ShapeError
from .neural_networks import (
    Linear,
    ActivationLayer,
    ParamArena,
    get_activation,
    get_layer
)

__version__ = "0.1.0"

__all__ = [
    'NetLayer',
    'NnlabError',
    'ShapeError',
    'Linear',
    'ActivationLayer',
    'ParamArena',
    'get_activation',
    'get_layer'
]
