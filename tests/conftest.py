"""Shared fixtures for affine43 tests."""

import math

import numpy as np
import pytest

from affine43 import chain, rotation_axis_angle, scale, translation


@pytest.fixture
def rng():
    """Seeded generator so random matrices are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def rigid_matrix():
    """Rotation about a skewed axis followed by a translation."""
    return chain(rotation_axis_angle(0.7, 1.0, 2.0, -0.5), translation(3.0, -4.0, 5.0))


@pytest.fixture
def affine_matrix():
    """Non-uniform scale, rotation, shear and translation combined."""
    shear = np.array(
        [1.0, 0.4, 0.0, 0.0, 0.0, 1.0, 0.2, 0.0, 0.0, 0.0, 1.0, 0.0], dtype=np.float64
    )
    return chain(
        scale(2.0, -0.5, 3.0),
        shear,
        rotation_axis_angle(math.pi / 5, 0.0, 1.0, 1.0),
        translation(1.5, 2.5, -7.0),
    )
