"""
Neural network layers: the layer contract, concrete layers and parameter storage.
"""
from ..base import NetLayer
from .layers import (
    Linear,
    ActivationLayer
)
from .activations import (
    ActivationFunc,
    Sigmoid,
    Identity,
    Exp,
    Tanh,
    ReLU,
    ScalarActivation,
    get_activation
)
from .params import (ParamArena, ParamSlot)
from .config import (
    get_layer,
    layer_from_config,
    build_layers
)

__all__ = [
    'NetLayer',
    'Linear',
    'ActivationLayer',
    'ActivationFunc',
    'Sigmoid',
    'Identity',
    'Exp',
    'Tanh',
    'ReLU',
    'ScalarActivation',
    'get_activation',
    'ParamArena',
    'ParamSlot',
    'get_layer',
    'layer_from_config',
    'build_layers'
]
