"""
4x3 affine matrix module.

Provides constructors, composition, inversion and batched operations over flat
12-element row-major matrices, backed by Numba kernels.
"""

from affine43.matrix.api import (
    Matrix43,
    as_matrix,
    chain,
    clone,
    decompose_batched,
    from_values,
    identity,
    invert,
    invert_rigid,
    multiply,
    multiply_batched,
    random,
    rotation_axis_angle,
    rotation_pitch,
    rotation_roll,
    rotation_yaw,
    scale,
    transform_points,
    translation,
    zero,
)

__all__ = [
    "Matrix43",
    "as_matrix",
    "from_values",
    "clone",
    "identity",
    "zero",
    "translation",
    "scale",
    "rotation_yaw",
    "rotation_pitch",
    "rotation_roll",
    "rotation_axis_angle",
    "random",
    "multiply",
    "chain",
    "invert_rigid",
    "invert",
    "multiply_batched",
    "decompose_batched",
    "transform_points",
]
