"""
2D decomposition of 4x3 matrices for renderers without a 3D matrix type.

The projected 2x2 block is split into rotation, skew and scale following the
PixiJS ``Matrix.decompose`` convention, so matrices handed to a PixiJS-style
scene graph render identically.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from affine43.constants import CANVAS_SLOTS, DEPTH_SLOT, SKEW_EPSILON
from affine43.matrix.api import MatrixLike
from affine43.matrix.kernels import decompose_2d_numba
from affine43.validators import validate_matrix


@dataclass(frozen=True, slots=True)
class Decomposed2D:
    """
    2D transform parameters recovered from a matrix.

    Attributes:
        rotation: Rotation in radians (0.0 whenever shear is present)
        skew_x: Skew along x in radians (0.0 in the pure-rotation case)
        skew_y: Skew along y in radians (0.0 in the pure-rotation case)
        scale_x: Length of the projected x-basis (never negative)
        scale_y: Length of the projected y-basis (never negative)
        x: Translation x
        y: Translation y
        z: Depth (translation z), None unless requested
    """

    rotation: float
    skew_x: float
    skew_y: float
    scale_x: float
    scale_y: float
    x: float
    y: float
    z: float | None = None

    @property
    def has_skew(self) -> bool:
        """True if the decomposition took the shear branch."""
        return self.skew_x != 0.0 or self.skew_y != 0.0


def decompose_2d(a: float, b: float, c: float, d: float, tx: float, ty: float) -> Decomposed2D:
    """
    Decompose a 2D affine transform in canvas (a, b, c, d, e, f) order.

    Algorithm:
        skew_x = -atan2(-c, d), skew_y = atan2(b, a)
        If |skew_x + skew_y| < 1e-8 the transform is a pure rotation: rotation is
        skew_y, shifted by +/-pi when a < 0 and d >= 0 (a flip folded into the
        angle), and skew is reported as (0, 0). Otherwise the shear is reported
        verbatim and rotation is 0; rotation and skew are not separated.
        Scales are the lengths of the two basis columns, so reflections are lost.

    Args:
        a, b: Projected x-basis
        c, d: Projected y-basis
        tx, ty: Translation

    Returns:
        Decomposed2D with z left as None

    Example:
        >>> decompose_2d(0.0, 1.0, -1.0, 0.0, 5.0, 0.0).rotation  # pi / 2
        1.5707963267948966
    """
    rotation, skew_x, skew_y, scale_x, scale_y = decompose_2d_numba(
        float(a), float(b), float(c), float(d), SKEW_EPSILON
    )
    return Decomposed2D(
        rotation=rotation,
        skew_x=skew_x,
        skew_y=skew_y,
        scale_x=scale_x,
        scale_y=scale_y,
        x=float(tx),
        y=float(ty),
    )


@validate_matrix("m")
def decompose_matrix(m: MatrixLike, with_depth: bool = False) -> Decomposed2D:
    """
    Decompose the 2D projection of a matrix.

    Uses the same slots as the canvas adapter: (m[0], m[4], m[1], m[5], m[3], m[7]).

    Args:
        m: Matrix [12]
        with_depth: If True, also report m[11] (translation z) as depth

    Returns:
        Decomposed2D
    """
    result = decompose_2d(*(m[i] for i in CANVAS_SLOTS))
    if not with_depth:
        return result

    return replace(result, z=float(m[DEPTH_SLOT]))
