"""Shared fixtures for nnlab tests."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded generator so initialisation is reproducible."""
    return np.random.default_rng(1234)
