"""
4x3 Affine Matrix Algebra

Matrices are flat float64 arrays of 12 scalars, row-major, standing for the top
three rows of a 4x4 homogeneous transform whose fourth row is (0, 0, 0, 1):

    [ m0  m1  m2  m3  ]      x-row, translation x
    [ m4  m5  m6  m7  ]      y-row, translation y
    [ m8  m9  m10 m11 ]      z-row, translation z

Every function returns a freshly allocated array and never mutates its inputs.

Functions:
- Constructors: identity, zero, translation, scale, rotation_yaw/pitch/roll,
                rotation_axis_angle, random, from_values, clone
- Composition: multiply, chain
- Inversion: invert_rigid (orthonormal fast path), invert (general, None if singular)
- Batched: multiply_batched, decompose_batched, transform_points
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray

from affine43.constants import (
    AXIS_EPSILON,
    DEFAULT_RANDOM_MAX,
    DEFAULT_RANDOM_MIN,
    MATRIX_DTYPE,
    MATRIX_SIZE,
    SKEW_EPSILON,
)
from affine43.matrix.kernels import (
    decompose_batched_numba,
    invert_numba,
    invert_rigid_numba,
    multiply_batched_numba,
    multiply_numba,
    multiply_single_numba,
)
from affine43.validators import (
    check_matrix,
    validate_matrix,
    validate_matrix_batch,
    validate_ordered,
)

logger = logging.getLogger(__name__)

# Type aliases for better readability (Python 3.12+ syntax)
type Matrix43 = NDArray[np.float64]
type MatrixLike = Matrix43 | list[float] | tuple[float, ...]


def _new(values: list[float] | tuple[float, ...]) -> Matrix43:
    return np.array(values, dtype=MATRIX_DTYPE)


# ============================================================================
# Conversion
# ============================================================================


@validate_matrix("values")
def as_matrix(values: MatrixLike) -> Matrix43:
    """
    Convert a 12-element sequence into a matrix array.

    Args:
        values: List, tuple or array of 12 numbers in row-major order

    Returns:
        New float64 array [12]

    Raises:
        ValueError: If values does not hold exactly 12 scalars
    """
    return np.array(values, dtype=MATRIX_DTYPE)


def from_values(
    m11: float, m12: float, m13: float, m14: float,
    m21: float, m22: float, m23: float, m24: float,
    m31: float, m32: float, m33: float, m34: float,
) -> Matrix43:
    """Build a matrix from its 12 entries, given row by row."""
    return _new((m11, m12, m13, m14, m21, m22, m23, m24, m31, m32, m33, m34))


@validate_matrix("m")
def clone(m: MatrixLike) -> Matrix43:
    """Return an independent copy of a matrix."""
    return np.array(m, dtype=MATRIX_DTYPE)


# ============================================================================
# Constructors
# ============================================================================


def identity() -> Matrix43:
    """Return the identity matrix."""
    return _new((
        1.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
    ))


def zero() -> Matrix43:
    """Return the all-zero matrix."""
    return np.zeros(MATRIX_SIZE, dtype=MATRIX_DTYPE)


def translation(x: float, y: float, z: float) -> Matrix43:
    """Return a translation by (x, y, z)."""
    return _new((
        1.0, 0.0, 0.0, x,
        0.0, 1.0, 0.0, y,
        0.0, 0.0, 1.0, z,
    ))


def scale(x: float = 1.0, y: float | None = None, z: float | None = None) -> Matrix43:
    """
    Return a scale matrix.

    Missing factors cascade: y defaults to x, and z defaults to the resolved y.
    So scale(2) is uniform and scale(2, 3) scales z by 3.

    Args:
        x: Scale along x (also the default for y)
        y: Scale along y (also the default for z)
        z: Scale along z

    Returns:
        Diagonal matrix [12]
    """
    if y is None:
        y = x
    if z is None:
        z = y
    return _new((
          x, 0.0, 0.0, 0.0,
        0.0,   y, 0.0, 0.0,
        0.0, 0.0,   z, 0.0,
    ))


def rotation_yaw(angle: float) -> Matrix43:
    """Return a right-handed rotation of `angle` radians about the z axis."""
    c = math.cos(angle)
    s = math.sin(angle)
    return _new((
          c,  -s, 0.0, 0.0,
          s,   c, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
    ))


def rotation_pitch(angle: float) -> Matrix43:
    """Return a right-handed rotation of `angle` radians about the y axis."""
    c = math.cos(angle)
    s = math.sin(angle)
    return _new((
          c, 0.0,   s, 0.0,
        0.0, 1.0, 0.0, 0.0,
         -s, 0.0,   c, 0.0,
    ))


def rotation_roll(angle: float) -> Matrix43:
    """Return a right-handed rotation of `angle` radians about the x axis."""
    c = math.cos(angle)
    s = math.sin(angle)
    return _new((
        1.0, 0.0, 0.0, 0.0,
        0.0,   c,  -s, 0.0,
        0.0,   s,   c, 0.0,
    ))


def rotation_axis_angle(angle: float, x: float, y: float, z: float) -> Matrix43:
    """
    Return a rotation of `angle` radians about the axis (x, y, z) (Rodrigues).

    The axis is normalized first. An axis shorter than AXIS_EPSILON has no
    direction, so the identity is returned instead of dividing by ~zero.

    Args:
        angle: Rotation angle in radians
        x: Axis x component
        y: Axis y component
        z: Axis z component

    Returns:
        Rotation matrix [12]

    Example:
        >>> rotation_axis_angle(math.pi / 2, 0, 0, 1)  # same as rotation_yaw(pi/2)
    """
    length = math.sqrt(x * x + y * y + z * z)
    if length < AXIS_EPSILON:
        logger.debug("[Matrix] Degenerate rotation axis (length=%g), using identity", length)
        return identity()

    x /= length
    y /= length
    z /= length

    c = math.cos(angle)
    s = math.sin(angle)
    t = 1.0 - c
    xy = x * y * t
    xz = x * z * t
    yz = y * z * t

    return _new((
        x * x * t + c,  xy - s * z,     xz + s * y,     0.0,
        xy + s * z,     y * y * t + c,  yz - s * x,     0.0,
        xz - s * y,     yz + s * x,     z * z * t + c,  0.0,
    ))


@validate_ordered("min_value", "max_value")
def random(
    min_value: float = DEFAULT_RANDOM_MIN,
    max_value: float = DEFAULT_RANDOM_MAX,
    rng: np.random.Generator | None = None,
) -> Matrix43:
    """
    Return a matrix whose 12 entries are independent uniform draws in [min, max).

    Intended for tests and fuzzing.

    Args:
        min_value: Lower bound (inclusive)
        max_value: Upper bound (exclusive)
        rng: Optional numpy Generator for reproducible draws

    Returns:
        Random matrix [12]
    """
    if rng is None:
        rng = np.random.default_rng()
    return rng.uniform(min_value, max_value, MATRIX_SIZE).astype(MATRIX_DTYPE, copy=False)


# ============================================================================
# Composition
# ============================================================================


@validate_matrix("a", 0)
@validate_matrix("b", 1)
def multiply(a: MatrixLike, b: MatrixLike) -> Matrix43:
    """
    Compose two matrices: the result applies b first, then a.

    Args:
        a: Outer transform [12]
        b: Inner transform [12]

    Returns:
        a * b [12]

    Note:
        Matrix multiplication is not commutative.
    """
    out = np.empty(MATRIX_SIZE, dtype=MATRIX_DTYPE)
    multiply_numba(
        np.asarray(a, dtype=MATRIX_DTYPE), np.asarray(b, dtype=MATRIX_DTYPE), out
    )
    return out


def chain(*matrices: MatrixLike) -> Matrix43:
    """
    Compose matrices in transform order: the first argument is applied first.

    chain(m1, m2, m3) == multiply(m3, multiply(m2, m1))

    Args:
        *matrices: One or more matrices [12]

    Returns:
        Composed matrix [12]

    Raises:
        ValueError: If called without any matrix

    Example:
        >>> # scale, then spin, then move
        >>> m = chain(scale(2), rotation_yaw(0.5), translation(10, 0, 0))
    """
    if not matrices:
        raise ValueError("chain() requires at least one matrix")

    for i, m in enumerate(matrices):
        check_matrix(m, f"matrices[{i}]")

    result = np.array(matrices[0], dtype=MATRIX_DTYPE)
    out = np.empty(MATRIX_SIZE, dtype=MATRIX_DTYPE)
    for m in matrices[1:]:
        multiply_numba(np.asarray(m, dtype=MATRIX_DTYPE), result, out)
        result, out = out, result
    return result


# ============================================================================
# Inversion
# ============================================================================


@validate_matrix("m")
def invert_rigid(m: MatrixLike) -> Matrix43:
    """
    Invert a rigid transform (rotation + translation only).

    Fast path: the linear block is transposed and the translation becomes -R^T t.
    The linear block MUST be orthonormal (no scale, skew or reflection); this is
    not checked and other input silently yields a wrong result. Use invert() for
    general matrices.

    Args:
        m: Rigid matrix [12]

    Returns:
        Inverse matrix [12]
    """
    out = np.empty(MATRIX_SIZE, dtype=MATRIX_DTYPE)
    invert_rigid_numba(np.asarray(m, dtype=MATRIX_DTYPE), out)
    return out


@validate_matrix("m")
def invert(m: MatrixLike) -> Matrix43 | None:
    """
    Invert any affine matrix whose linear block is non-singular.

    Handles scale, skew and reflection using the cofactor/adjugate method.

    Args:
        m: Matrix [12]

    Returns:
        Inverse matrix [12], or None if the determinant is exactly zero.
        Callers must check for None before using the result.

    Example:
        >>> inv = invert(scale(1, 1, 0))
        >>> inv is None
        True
    """
    out = np.empty(MATRIX_SIZE, dtype=MATRIX_DTYPE)
    if not invert_numba(np.asarray(m, dtype=MATRIX_DTYPE), out):
        logger.debug("[Matrix] Singular linear block, matrix is not invertible")
        return None
    return out


# ============================================================================
# Batched Operations
# ============================================================================


@validate_matrix_batch("a", 0)
def multiply_batched(a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Compose a stack of matrices with another stack or with one matrix.

    Args:
        a: Outer transforms [N, 12]
        b: Inner transforms [N, 12], or a single matrix [12] applied to all

    Returns:
        Products [N, 12]
    """
    a = np.ascontiguousarray(a, dtype=MATRIX_DTYPE)
    b = np.ascontiguousarray(b, dtype=MATRIX_DTYPE)
    out = np.empty_like(a)

    if b.shape == (MATRIX_SIZE,):
        multiply_single_numba(a, b, out)
    elif b.shape == a.shape:
        multiply_batched_numba(a, b, out)
    else:
        raise ValueError(
            f"b must have shape {a.shape} or ({MATRIX_SIZE},), got {b.shape}"
        )
    return out


@validate_matrix_batch("matrices", 0)
def decompose_batched(matrices: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Decompose a stack of matrices for a 2D renderer in one pass.

    Args:
        matrices: Matrices [N, 12]

    Returns:
        Array [N, 8] with columns (rotation, skew_x, skew_y, scale_x, scale_y, x, y, z),
        see affine43.constants.DECOMPOSED_COLUMNS
    """
    matrices = np.ascontiguousarray(matrices, dtype=MATRIX_DTYPE)
    out = np.empty((matrices.shape[0], 8), dtype=MATRIX_DTYPE)
    decompose_batched_numba(matrices, SKEW_EPSILON, out)
    return out


@validate_matrix("m")
def transform_points(m: MatrixLike, points: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Apply a matrix to Nx3 points.

    Uses NumPy's BLAS-optimized matmul on the 3x3 block plus the translation
    column, avoiding homogeneous coordinates.

    Args:
        m: Matrix [12]
        points: Points [N, 3] or a single point [3]

    Returns:
        Transformed points with the same shape as the input
    """
    rows = np.asarray(m, dtype=MATRIX_DTYPE).reshape(3, 4)
    points = np.asarray(points, dtype=MATRIX_DTYPE)
    if points.shape[-1] != 3:
        raise ValueError(f"points must have shape [N, 3] or [3], got {points.shape}")

    R = rows[:, :3]
    t = rows[:, 3]
    return points @ R.T + t
