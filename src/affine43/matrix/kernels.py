"""
Numba-optimized kernels for 4x3 affine matrix operations.

Provides JIT-compiled kernels for multiplication, inversion and 2D
decomposition of flat 12-element row-major matrices, plus prange-parallel
batched versions for [N, 12] stacks.

Note: decomposition and inversion kernels are compiled without fastmath so that
branch thresholds and the exact-zero determinant test behave like IEEE doubles.
"""

from __future__ import annotations

import math

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

# ============================================================================
# Composition
# ============================================================================


@njit(cache=True, nogil=True)
def multiply_numba(
    a: NDArray[np.float64], b: NDArray[np.float64], out: NDArray[np.float64]
) -> None:
    """
    Compose two 4x3 matrices: out = a * b (b is applied first).

    The translation column picks up a's linear part applied to b's translation
    plus a's own translation; the implicit (0, 0, 0, 1) row is preserved.

    Args:
        a: Left matrix [12]
        b: Right matrix [12]
        out: Output matrix [12] (pre-allocated, must not alias a or b)
    """
    for r in range(3):
        i = r * 4
        a0 = a[i]
        a1 = a[i + 1]
        a2 = a[i + 2]
        out[i] = a0 * b[0] + a1 * b[4] + a2 * b[8]
        out[i + 1] = a0 * b[1] + a1 * b[5] + a2 * b[9]
        out[i + 2] = a0 * b[2] + a1 * b[6] + a2 * b[10]
        out[i + 3] = a0 * b[3] + a1 * b[7] + a2 * b[11] + a[i + 3]


@njit(parallel=True, cache=True, nogil=True)
def multiply_batched_numba(
    a: NDArray[np.float64], b: NDArray[np.float64], out: NDArray[np.float64]
) -> None:
    """
    Compose two stacks of matrices element-wise.

    Args:
        a: Left matrices [N, 12]
        b: Right matrices [N, 12]
        out: Output array [N, 12] (pre-allocated)
    """
    N = a.shape[0]
    for n in prange(N):
        multiply_numba(a[n], b[n], out[n])


@njit(parallel=True, cache=True, nogil=True)
def multiply_single_numba(
    a: NDArray[np.float64], b: NDArray[np.float64], out: NDArray[np.float64]
) -> None:
    """
    Compose every matrix of a stack with one right-hand matrix.

    Args:
        a: Left matrices [N, 12]
        b: Single right matrix [12]
        out: Output array [N, 12] (pre-allocated)
    """
    N = a.shape[0]
    for n in prange(N):
        multiply_numba(a[n], b, out[n])


# ============================================================================
# Inversion
# ============================================================================


@njit(cache=True, nogil=True)
def invert_rigid_numba(a: NDArray[np.float64], out: NDArray[np.float64]) -> None:
    """
    Invert a rigid transform: transpose the linear block, translation = -R^T t.

    Only valid when the 3x3 linear block is orthonormal; this is not checked.

    Args:
        a: Rigid matrix [12]
        out: Output matrix [12] (pre-allocated)
    """
    tx = a[3]
    ty = a[7]
    tz = a[11]
    for r in range(3):
        i = r * 4
        out[i] = a[r]
        out[i + 1] = a[r + 4]
        out[i + 2] = a[r + 8]
        out[i + 3] = -a[r] * tx - a[r + 4] * ty - a[r + 8] * tz


@njit(cache=True, nogil=True)
def invert_numba(a: NDArray[np.float64], out: NDArray[np.float64]) -> bool:
    """
    Invert any affine 4x3 matrix with a non-singular linear block.

    Uses cofactors of the linear block and the determinant expansion of the
    augmented matrix for the translation column, then scales by 1/det.

    Args:
        a: Matrix [12]
        out: Output matrix [12] (pre-allocated)

    Returns:
        False if the determinant is exactly zero (out is left partially written)
    """
    out[0] = a[5] * a[10] - a[9] * a[6]
    out[4] = -a[4] * a[10] + a[8] * a[6]
    out[8] = a[4] * a[9] - a[8] * a[5]

    det = a[0] * out[0] + a[1] * out[4] + a[2] * out[8]
    if det == 0.0:
        return False

    out[1] = -a[1] * a[10] + a[9] * a[2]
    out[5] = a[0] * a[10] - a[8] * a[2]
    out[9] = -a[0] * a[9] + a[8] * a[1]
    out[2] = a[1] * a[6] - a[5] * a[2]
    out[6] = -a[0] * a[6] + a[4] * a[2]
    out[10] = a[0] * a[5] - a[4] * a[1]

    out[3] = (
        -a[1] * a[6] * a[11]
        + a[1] * a[7] * a[10]
        + a[5] * a[2] * a[11]
        - a[5] * a[3] * a[10]
        - a[9] * a[2] * a[7]
        + a[9] * a[3] * a[6]
    )
    out[7] = (
        a[0] * a[6] * a[11]
        - a[0] * a[7] * a[10]
        - a[4] * a[2] * a[11]
        + a[4] * a[3] * a[10]
        + a[8] * a[2] * a[7]
        - a[8] * a[3] * a[6]
    )
    out[11] = (
        -a[0] * a[5] * a[11]
        + a[0] * a[7] * a[9]
        + a[4] * a[1] * a[11]
        - a[4] * a[3] * a[9]
        - a[8] * a[1] * a[7]
        + a[8] * a[3] * a[5]
    )

    inv_det = 1.0 / det
    for i in range(12):
        out[i] *= inv_det
    return True


# ============================================================================
# 2D Decomposition (PixiJS Matrix.decompose convention)
# ============================================================================


@njit(cache=True, nogil=True)
def decompose_2d_numba(
    a: float, b: float, c: float, d: float, skew_epsilon: float
) -> tuple[float, float, float, float, float]:
    """
    Split a projected 2x2 block into rotation, skew and scale.

    Args:
        a, b: Projected x-basis
        c, d: Projected y-basis
        skew_epsilon: Threshold on |skew_x + skew_y| for the pure-rotation branch

    Returns:
        (rotation, skew_x, skew_y, scale_x, scale_y)
    """
    skew_x = -math.atan2(-c, d)
    skew_y = math.atan2(b, a)

    if abs(skew_x + skew_y) < skew_epsilon:
        rotation = skew_y
        if a < 0.0 and d >= 0.0:
            if rotation <= 0.0:
                rotation += math.pi
            else:
                rotation -= math.pi
        skew_x = 0.0
        skew_y = 0.0
    else:
        # Shear present: rotation is not separated out
        rotation = 0.0

    scale_x = math.sqrt(a * a + b * b)
    scale_y = math.sqrt(c * c + d * d)
    return rotation, skew_x, skew_y, scale_x, scale_y


@njit(parallel=True, cache=True, nogil=True)
def decompose_batched_numba(
    m: NDArray[np.float64], skew_epsilon: float, out: NDArray[np.float64]
) -> None:
    """
    Decompose a stack of matrices.

    Args:
        m: Matrices [N, 12]
        skew_epsilon: Pure-rotation threshold
        out: Output [N, 8] as (rotation, skew_x, skew_y, scale_x, scale_y, x, y, z)
    """
    N = m.shape[0]
    for n in prange(N):
        rotation, skew_x, skew_y, scale_x, scale_y = decompose_2d_numba(
            m[n, 0], m[n, 4], m[n, 1], m[n, 5], skew_epsilon
        )
        out[n, 0] = rotation
        out[n, 1] = skew_x
        out[n, 2] = skew_y
        out[n, 3] = scale_x
        out[n, 4] = scale_y
        out[n, 5] = m[n, 3]
        out[n, 6] = m[n, 7]
        out[n, 7] = m[n, 11]
