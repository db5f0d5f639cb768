"""
Rendering adapters: hand a 4x3 matrix to a 2D drawing context or scene node.

Three entry points share the canvas slot order (m[0], m[4], m[1], m[5], m[3], m[7]):
- apply_to_canvas(): raw set_transform() call on a drawing context
- apply_to_node(): decomposed rotation/skew/scale/position written onto a node
- apply_to_node_with_depth(): same, plus node.z = m[11] for sort_by_depth()
"""

from __future__ import annotations

import logging
from operator import attrgetter

from affine43.constants import CANVAS_SLOTS
from affine43.decompose import Decomposed2D, decompose_matrix
from affine43.matrix.api import MatrixLike
from affine43.protocols import DrawingContext, SceneNode
from affine43.validators import validate_matrix

logger = logging.getLogger(__name__)


@validate_matrix("m", 1)
def apply_to_canvas(context: DrawingContext, m: MatrixLike) -> None:
    """
    Set a drawing context's transform from a matrix.

    Args:
        context: Object with set_transform(a, b, c, d, e, f)
        m: Matrix [12]

    Example:
        >>> apply_to_canvas(ctx, chain(rotation_yaw(0.3), translation(100, 50, 0)))
    """
    context.set_transform(*(float(m[i]) for i in CANVAS_SLOTS))


def apply_decomposed(node: SceneNode, decomposed: Decomposed2D) -> None:
    """
    Write decomposed transform values onto a node in place.

    node.z is only written when the decomposition carries a depth.
    """
    node.rotation = decomposed.rotation
    node.skew.x = decomposed.skew_x
    node.skew.y = decomposed.skew_y
    node.scale.x = decomposed.scale_x
    node.scale.y = decomposed.scale_y
    node.position.x = decomposed.x
    node.position.y = decomposed.y
    if decomposed.z is not None:
        node.z = decomposed.z


@validate_matrix("m", 1)
def apply_to_node(node: SceneNode, m: MatrixLike) -> None:
    """
    Decompose a matrix and write rotation, skew, scale and position onto a node.

    Args:
        node: Scene node with rotation, skew.{x,y}, scale.{x,y}, position.{x,y}
        m: Matrix [12]
    """
    apply_decomposed(node, decompose_matrix(m))


@validate_matrix("m", 1)
def apply_to_node_with_depth(node: SceneNode, m: MatrixLike) -> None:
    """
    Like apply_to_node(), and also store m[11] (translation z) in node.z.

    Args:
        node: Scene node
        m: Matrix [12]
    """
    apply_decomposed(node, decompose_matrix(m, with_depth=True))


def sort_by_depth(node: SceneNode) -> None:
    """
    Sort node.children in place by ascending z (stable).

    Every child must have had its depth set by apply_to_node_with_depth().

    Args:
        node: Container whose children are reordered

    Raises:
        ValueError: If a child has no z value
    """
    children = node.children
    for i, child in enumerate(children):
        if getattr(child, "z", None) is None:
            raise ValueError(
                f"children[{i}] has no depth; call apply_to_node_with_depth() on every "
                f"child before sort_by_depth()"
            )

    children.sort(key=attrgetter("z"))
    logger.debug("[Adapters] Sorted %d children by depth", len(children))
