"""
TransformChain: Composable transform builder with matrix pre-composition.

This module provides a fluent API for listing 3D transforms in the order they
should be applied and compiling them into a single 4x3 matrix with chain().

Key Features:
- Elementary steps (translate, scale, yaw, pitch, roll, rotate) plus arbitrary matrices
- Optional center point for rotation/scaling steps
- Lazy compilation with dirty-flag caching
- Direct hand-off to the canvas and scene-node adapters
"""

from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any, Self

import numpy as np

from affine43.adapters import apply_to_canvas, apply_to_node, apply_to_node_with_depth
from affine43.matrix.api import (
    Matrix43,
    MatrixLike,
    as_matrix,
    chain,
    identity,
    invert,
    rotation_axis_angle,
    rotation_pitch,
    rotation_roll,
    rotation_yaw,
    scale,
    translation,
)
from affine43.protocols import DrawingContext, SceneNode

logger = logging.getLogger(__name__)

type Vec3 = tuple[float, float, float] | list[float] | np.ndarray


def _around(m: Matrix43, center: Vec3 | None) -> Matrix43:
    """Move the origin of m to center: T(center) * m * T(-center)."""
    if center is None:
        return m
    cx, cy, cz = (float(v) for v in center)
    return chain(translation(-cx, -cy, -cz), m, translation(cx, cy, cz))


class TransformChain:
    """
    Composable transform builder with matrix pre-composition.

    Steps are applied to points in the order they are added, so
    ``TransformChain().scale(2).translate(1, 0, 0)`` scales first, then moves.

    Supported Steps:
    - translate: Translation in 3D space
    - scale: Uniform or per-axis scaling (same defaulting as affine43.scale)
    - yaw / pitch / roll: Elementary rotations about z / y / x
    - rotate: Rotation about an arbitrary axis
    - then: Any 4x3 matrix
    - set_center: Default center point for subsequent rotation/scaling

    Example:
        >>> m = (TransformChain()
        ...     .scale(2.0)
        ...     .yaw(np.pi / 4)
        ...     .translate(100, 50, 3)
        ...     .get_matrix()
        ... )
    """

    __slots__ = (
        "_steps",
        "_compiled_matrix",
        "_center",
        "_is_dirty",
    )

    def __init__(self):
        """Initialize an empty chain (the identity transform)."""
        self._steps: list[tuple[str, Matrix43]] = []
        self._compiled_matrix: Matrix43 | None = None
        self._center: tuple[float, float, float] | None = None
        self._is_dirty: bool = True

        logger.info("[TransformChain] Initialized")

    def _add(self, name: str, m: Matrix43) -> Self:
        self._steps.append((name, m))
        self._is_dirty = True
        return self

    def _center_for(self, center: Vec3 | None) -> Vec3 | None:
        return center if center is not None else self._center

    def translate(self, x: float, y: float, z: float = 0.0) -> Self:
        """
        Add a translation.

        Args:
            x, y, z: Offset (z defaults to 0 for 2D use)

        Returns:
            Self for method chaining
        """
        return self._add("translate", translation(x, y, z))

    def scale(
        self,
        x: float = 1.0,
        y: float | None = None,
        z: float | None = None,
        center: Vec3 | None = None,
    ) -> Self:
        """
        Add a scaling step. y defaults to x and z to the resolved y.

        Args:
            x, y, z: Scale factors
            center: Optional fixed point of the scaling

        Returns:
            Self for method chaining
        """
        return self._add("scale", _around(scale(x, y, z), self._center_for(center)))

    def yaw(self, angle: float, center: Vec3 | None = None) -> Self:
        """Add a rotation of `angle` radians about z. Returns self."""
        return self._add("yaw", _around(rotation_yaw(angle), self._center_for(center)))

    def pitch(self, angle: float, center: Vec3 | None = None) -> Self:
        """Add a rotation of `angle` radians about y. Returns self."""
        return self._add("pitch", _around(rotation_pitch(angle), self._center_for(center)))

    def roll(self, angle: float, center: Vec3 | None = None) -> Self:
        """Add a rotation of `angle` radians about x. Returns self."""
        return self._add("roll", _around(rotation_roll(angle), self._center_for(center)))

    def rotate(self, angle: float, axis: Vec3, center: Vec3 | None = None) -> Self:
        """
        Add a rotation about an arbitrary axis.

        Args:
            angle: Rotation angle in radians
            axis: Rotation axis (normalized internally; a zero axis adds no rotation)
            center: Optional point the axis passes through

        Returns:
            Self for method chaining

        Example:
            >>> TransformChain().rotate(np.pi / 2, (0, 0, 1))  # same as .yaw(np.pi / 2)
        """
        ax, ay, az = (float(v) for v in axis)
        m = rotation_axis_angle(angle, ax, ay, az)
        return self._add("rotate", _around(m, self._center_for(center)))

    def then(self, m: MatrixLike) -> Self:
        """
        Add an arbitrary matrix as the next step.

        Args:
            m: Matrix [12]

        Returns:
            Self for method chaining
        """
        return self._add("matrix", as_matrix(m))

    def set_center(self, center: Vec3) -> Self:
        """
        Set a center point for subsequent rotation/scaling steps.

        Args:
            center: Center point [3]

        Returns:
            Self for method chaining
        """
        if not isinstance(center, (np.ndarray, list, tuple)):
            raise TypeError(f"center must be array-like, got {type(center)}")
        if len(center) != 3:
            raise ValueError(f"center must have 3 components, got {len(center)}")

        self._center = tuple(float(v) for v in center)
        return self

    def compile(self) -> Self:
        """
        Compose all steps into a single matrix.

        Returns:
            Self for method chaining
        """
        if not self._is_dirty and self._compiled_matrix is not None:
            logger.debug("[TransformChain] Already compiled, skipping")
            return self

        logger.debug("[TransformChain] Compiling %d steps", len(self._steps))

        if self._steps:
            self._compiled_matrix = chain(*(m for _, m in self._steps))
        else:
            self._compiled_matrix = identity()
        self._is_dirty = False

        logger.debug("[TransformChain] Compilation complete")
        return self

    def get_matrix(self) -> Matrix43:
        """
        Get the compiled matrix, compiling first if needed.

        Returns:
            A copy of the composed matrix [12]
        """
        if self._is_dirty or self._compiled_matrix is None:
            self.compile()
        return self._compiled_matrix.copy()

    def inverse(self) -> Matrix43 | None:
        """
        Invert the composed transform.

        Returns:
            Inverse matrix [12], or None if the chain collapses a dimension
        """
        return invert(self.get_matrix())

    def apply_to_canvas(self, context: DrawingContext) -> None:
        """Set the composed transform on a drawing context."""
        apply_to_canvas(context, self.get_matrix())

    def apply_to_node(self, node: SceneNode, with_depth: bool = False) -> None:
        """
        Write the composed transform onto a scene node.

        Args:
            node: Scene node
            with_depth: If True, also store the z translation in node.z
        """
        if with_depth:
            apply_to_node_with_depth(node, self.get_matrix())
        else:
            apply_to_node(node, self.get_matrix())

    def is_identity(self) -> bool:
        """
        Check if this chain has no steps.

        This is a structural check: a chain of steps that cancel out, or a
        single translate(0, 0, 0), still reports False. Compare get_matrix()
        against identity() for a numeric check.

        Returns:
            True if no steps were added, False otherwise
        """
        return not self._steps

    def reset(self) -> Self:
        """
        Reset the chain, clearing all steps.

        Returns:
            Self for method chaining
        """
        self._steps = []
        self._compiled_matrix = None
        self._center = None
        self._is_dirty = True
        logger.debug("[TransformChain] Reset")
        return self

    def copy(self) -> Self:
        """
        Create a deep copy of the chain.

        Returns:
            New TransformChain instance with copied state
        """
        return deepcopy(self)

    def __copy__(self) -> Self:
        """Shallow copy (creates deep copy for safety)."""
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        """Deep copy implementation."""
        new_obj = self.__class__()
        new_obj._steps = [(name, m.copy()) for name, m in self._steps]
        new_obj._compiled_matrix = (
            self._compiled_matrix.copy() if self._compiled_matrix is not None else None
        )
        new_obj._center = self._center
        new_obj._is_dirty = self._is_dirty
        return new_obj

    @property
    def is_compiled(self) -> bool:
        """Check if the chain is compiled."""
        return not self._is_dirty and self._compiled_matrix is not None

    @property
    def step_names(self) -> list[str]:
        """Names of the steps in application order."""
        return [name for name, _ in self._steps]

    def __repr__(self) -> str:
        """String representation of the chain."""
        status = "compiled" if self.is_compiled else "not compiled"
        return f"TransformChain({len(self)} steps) [{status}]"

    def __len__(self) -> int:
        """Number of steps in the chain."""
        return len(self._steps)
