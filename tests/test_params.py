"""
Unit Tests for ParamArena

Also drives a small stack of layers forward and backward through the arena,
the way a network would.
"""

import numpy as np
import pytest
from structlog.testing import capture_logs

from nnlab import ActivationLayer, Linear, ParamArena, ShapeError
from nnlab.common.utils import numerical_gradient
from nnlab.neural_networks import ParamSlot, Sigmoid, Tanh


@pytest.fixture
def layers():
    return [Linear(3, 4), ActivationLayer(Sigmoid()),
            Linear.without_bias(4, 2), ActivationLayer(Tanh())]


def _forward_backward(layers, arena, x):
    """Return (loss, per-layer param grads) with loss = sum of final outputs."""
    views = arena.views()
    inputs = []
    out = x
    for layer, params in zip(layers, views):
        inputs.append(out)
        out = layer.forward(out, params)

    grad = np.ones_like(out)
    param_grads = [None] * len(layers)
    for i in reversed(range(len(layers))):
        param_grads[i] = layers[i].back_params(grad, inputs[i], views[i])
        grad = layers[i].back_input(grad, inputs[i], views[i])
    return out.sum(), param_grads


class TestArenaLayout:
    """Offsets, shapes and buffer size."""

    def test_slots(self, rng, layers):
        arena = ParamArena.from_layers(layers, rng)
        assert arena.slots == (
            ParamSlot(0, (4, 4)),
            ParamSlot(16, (0, 0)),
            ParamSlot(16, (4, 2)),
            ParamSlot(24, (0, 0)),
        )
        assert len(arena) == 24
        assert arena.slots[2].size == 8

    def test_views_match_param_shapes(self, rng, layers):
        arena = ParamArena.from_layers(layers, rng)
        for layer, view in zip(layers, arena.views()):
            assert view.shape == layer.param_shape()

    def test_view_is_window_into_buffer(self, rng, layers):
        arena = ParamArena.from_layers(layers, rng)
        np.testing.assert_array_equal(arena.view(2).ravel(), arena.buffer[16:24])
        arena.buffer[16] = 123.0
        assert arena.view(2)[0, 0] == 123.0

    def test_views_are_read_only(self, rng, layers):
        arena = ParamArena.from_layers(layers, rng)
        view = arena.view(0)
        with pytest.raises(ValueError):
            view[0, 0] = 1.0
        arena.buffer[0] = 1.0
        assert arena.buffer.flags.writeable

    def test_same_seed_same_buffer(self, layers):
        first = ParamArena.from_layers(layers, np.random.default_rng(3))
        second = ParamArena.from_layers(layers, np.random.default_rng(3))
        np.testing.assert_array_equal(first.buffer, second.buffer)

    def test_adopts_existing_buffer(self, layers):
        arena = ParamArena(layers, np.arange(24.0))
        np.testing.assert_array_equal(arena.view(0)[1], [4.0, 5.0, 6.0, 7.0])

    def test_wrong_buffer_length(self, layers):
        with pytest.raises(ShapeError):
            ParamArena(layers, np.zeros(23))

    def test_empty_arena(self):
        with capture_logs() as logs:
            arena = ParamArena.from_layers([ActivationLayer(Sigmoid())])
        assert len(arena) == 0
        assert arena.view(0).shape == (0, 0)
        assert any(entry["event"] == "param_arena_empty" for entry in logs)


class TestArenaPack:
    """Flattening per-layer gradients."""

    def test_pack_layout(self, layers):
        arena = ParamArena(layers, np.zeros(24))
        grads = [np.full((4, 4), 1.0), np.zeros((0, 0)),
                 np.full((4, 2), 2.0), np.zeros((0, 0))]
        flat = arena.pack(grads)
        np.testing.assert_array_equal(flat[:16], 1.0)
        np.testing.assert_array_equal(flat[16:], 2.0)

    def test_pack_rejects_wrong_shape(self, layers):
        arena = ParamArena(layers, np.zeros(24))
        grads = [np.zeros((4, 4)), np.zeros((0, 0)), np.zeros((2, 4)), np.zeros((0, 0))]
        with pytest.raises(ShapeError):
            arena.pack(grads)

    def test_pack_rejects_wrong_count(self, layers):
        arena = ParamArena(layers, np.zeros(24))
        with pytest.raises(ShapeError):
            arena.pack([np.zeros((4, 4))])


class TestStackGradients:
    """Backprop through several layers against finite differences of the whole buffer."""

    def test_whole_buffer_gradient(self, rng, layers):
        arena = ParamArena.from_layers(layers, rng)
        x = rng.normal(size=(5, 3))
        _, param_grads = _forward_backward(layers, arena, x)
        analytic = arena.pack(param_grads)

        def loss(buffer):
            return _forward_backward(layers, ParamArena(layers, buffer), x)[0]

        numeric = numerical_gradient(loss, arena.buffer)
        np.testing.assert_allclose(analytic, numeric, atol=1e-4)

    def test_logs_construction(self, rng, layers):
        with capture_logs() as logs:
            ParamArena.from_layers(layers, rng)
        built = [entry for entry in logs if entry["event"] == "param_arena_built"]
        assert built and built[0]["n_params"] == 24
        assert sum(entry["event"] == "linear_params_initialized" for entry in logs) == 2
