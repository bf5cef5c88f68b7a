"""
Build layers from names and configuration dictionaries.
"""
from .activations import ACTIVATIONS, get_activation
from .layers import ActivationLayer, Linear


def get_layer(name, **kwargs):
    """
    Factory function to get layer instances.

    Args:
        name (str): 'linear' or any activation name ('sigmoid', 'tanh', 'relu', ...)
        **kwargs: Layer-specific parameters (input_size, output_size, bias for 'linear')

    Returns:
        NetLayer instance
    """
    if name == "linear":
        return Linear(**kwargs)
    if name in ACTIVATIONS:
        return ActivationLayer(get_activation(name, **kwargs))
    raise ValueError(f"Unknown layer: {name}")


def layer_from_config(config):
    """
    Rebuild a layer from the dictionary returned by its ``get_config``.

    Args:
        config (dict): Must contain a "type" key

    Returns:
        NetLayer instance
    """
    if not isinstance(config, dict):
        raise TypeError(f"config must be a dict, got {type(config).__name__}")
    if "type" not in config:
        raise ValueError("config is missing the 'type' key")
    params = {k: v for k, v in config.items() if k != "type"}
    return get_layer(config["type"], **params)


def build_layers(configs):
    """
    Build a list of layers.

    Args:
        configs (list): Layer names or config dictionaries, in network order

    Returns:
        list: Layers in the same order
    """
    layers = []
    for config in configs:
        if isinstance(config, str):
            layers.append(get_layer(config))
        else:
            layers.append(layer_from_config(config))
    return layers
