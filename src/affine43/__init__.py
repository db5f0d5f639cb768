"""
affine43 - 4x3 affine matrices for 2.5D rendering

Minimal transform algebra for drawing 3D scenes on 2D surfaces (HTML-canvas
style contexts, PixiJS-style scene graphs). Matrices are flat arrays of 12
floats, row-major; the fourth row is always (0, 0, 0, 1) and never stored.

Features:
- Constructors: identity, zero, translation, scale, yaw/pitch/roll, axis-angle, random
- Composition: multiply (b first, then a) and chain (left to right in transform order)
- Inversion: invert_rigid (orthonormal fast path), invert (general, None if singular)
- 2D decomposition compatible with PixiJS Matrix.decompose
- Adapters: canvas set_transform, scene-node fields, depth sorting by z
- Numba-compiled kernels, including batched multiply/decompose for [N, 12] stacks
- Fluent TransformChain builder

Example - Free functions:
    >>> import math
    >>> from affine43 import chain, scale, rotation_yaw, translation, apply_to_node
    >>>
    >>> # Scale, then spin 30 degrees, then move: first argument is applied first
    >>> m = chain(scale(2), rotation_yaw(math.pi / 6), translation(100, 50, 3))
    >>> apply_to_node(sprite, m)

Example - Depth sorting:
    >>> for child, m in zip(container.children, matrices):
    ...     apply_to_node_with_depth(child, m)
    >>> sort_by_depth(container)

Example - Builder:
    >>> from affine43 import TransformChain
    >>>
    >>> TransformChain().scale(2).yaw(0.5).translate(100, 50).apply_to_canvas(ctx)
"""

__version__ = "0.1.0"

# Rendering adapters
from affine43.adapters import (
    apply_decomposed,
    apply_to_canvas,
    apply_to_node,
    apply_to_node_with_depth,
    sort_by_depth,
)

# 2D decomposition
from affine43.decompose import Decomposed2D, decompose_2d, decompose_matrix

# Diagnostics
from affine43.diagnostics import FormatOptions, node_to_string, round_value, to_string

# Matrix algebra
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

# Builder
from affine43.pipeline import TransformChain

# Protocols
from affine43.protocols import DrawingContext, SceneNode

# Scene node
from affine43.scene import Node, Point

__all__ = [
    # Version
    "__version__",
    # Types
    "Matrix43",
    "Decomposed2D",
    "Node",
    "Point",
    "FormatOptions",
    # Protocols
    "DrawingContext",
    "SceneNode",
    # Constructors
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
    # Composition and inversion
    "multiply",
    "chain",
    "invert_rigid",
    "invert",
    # Batched
    "multiply_batched",
    "decompose_batched",
    "transform_points",
    # Decomposition
    "decompose_2d",
    "decompose_matrix",
    # Adapters
    "apply_to_canvas",
    "apply_to_node",
    "apply_to_node_with_depth",
    "apply_decomposed",
    "sort_by_depth",
    # Builder
    "TransformChain",
    # Diagnostics
    "round_value",
    "to_string",
    "node_to_string",
]
