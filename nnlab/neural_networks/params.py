"""
Flat parameter storage shared by a sequence of layers.
"""
from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from ..base import NetLayer
from ..common.utils import check_shape
from ..exceptions import ShapeError
from ..log import get_logger

logger = get_logger(__name__)


class ParamSlot(NamedTuple):
    """Where one layer's parameters live inside the flat buffer."""

    offset: int
    shape: Tuple[int, int]

    @property
    def size(self) -> int:
        return self.shape[0] * self.shape[1]


class ParamArena:
    """
    Contiguous parameter buffer plus a per-layer ``(offset, shape)`` index.

    The arena owns the buffer; layers only ever see read-only views of their
    slot. Updating the buffer between passes is up to the caller.

    Args:
        layers: Layers in network order
        buffer: Flat array holding every layer's parameters back to back
    """

    def __init__(self, layers: Sequence[NetLayer], buffer):
        self.layers = tuple(layers)
        slots = []
        offset = 0
        for layer in self.layers:
            shape = tuple(layer.param_shape())
            slots.append(ParamSlot(offset, shape))
            offset += layer.num_params()
        self.slots = tuple(slots)

        buffer = np.asarray(buffer, dtype=float)
        if buffer.ndim != 1 or buffer.size != offset:
            raise ShapeError("ParamArena buffer", (offset,), buffer.shape)
        self.buffer = buffer

    @classmethod
    def from_layers(cls, layers: Sequence[NetLayer],
                    rng: Optional[np.random.Generator] = None) -> "ParamArena":
        """
        Build an arena holding every layer's default parameters.

        Args:
            layers: Layers in network order
            rng: Random generator shared by all layers, in order

        Returns:
            ParamArena with a freshly allocated buffer
        """
        if rng is None:
            rng = np.random.default_rng()
        chunks = [np.asarray(layer.default_params(rng), dtype=float).ravel()
                  for layer in layers]
        buffer = np.concatenate(chunks) if chunks else np.zeros(0)
        if buffer.size == 0:
            logger.warning("param_arena_empty", n_layers=len(chunks))
        logger.debug("param_arena_built", n_layers=len(chunks), n_params=int(buffer.size))
        return cls(layers, buffer)

    def __len__(self) -> int:
        return int(self.buffer.size)

    def view(self, index: int) -> np.ndarray:
        """Read-only view of layer ``index``'s parameters, shaped ``param_shape()``."""
        slot = self.slots[index]
        view = self.buffer[slot.offset:slot.offset + slot.size].reshape(slot.shape)
        view.flags.writeable = False
        return view

    def views(self) -> List[np.ndarray]:
        return [self.view(i) for i in range(len(self.slots))]

    def pack(self, grads: Sequence[np.ndarray]) -> np.ndarray:
        """
        Flatten per-layer parameter gradients into one vector laid out like the buffer.

        Args:
            grads: One gradient matrix per layer, each shaped like its slot

        Returns:
            ndarray: Flat gradient of length len(self)
        """
        if len(grads) != len(self.slots):
            raise ShapeError("ParamArena.pack grads", (len(self.slots),), (len(grads),))
        flat = np.zeros(len(self))
        for slot, grad in zip(self.slots, grads):
            grad = np.asarray(grad, dtype=float)
            check_shape("ParamArena.pack grad", slot.shape, grad.shape)
            flat[slot.offset:slot.offset + slot.size] = grad.ravel()
        return flat

    def __repr__(self):
        return f"ParamArena(n_layers={len(self.layers)}, n_params={len(self)})"
