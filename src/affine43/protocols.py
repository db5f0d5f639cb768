"""
Protocol definitions for the external rendering collaborators.

affine43 does not own a drawing surface or a scene graph; it only writes to
objects that match these structural interfaces.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DrawingContext(Protocol):
    """
    Protocol for a 2D drawing context (HTML canvas style).

    The six parameters follow the canvas (a, b, c, d, e, f) convention:
    x-scale, y-skew, x-skew, y-scale, x-translate, y-translate.
    """

    def set_transform(self, a: float, b: float, c: float, d: float, e: float, f: float) -> Any:
        """Replace the current transform of the context."""
        ...


class Vec2Like(Protocol):
    """Mutable pair of x/y fields (PixiJS ObservablePoint style)."""

    x: float
    y: float


class SceneNode(Protocol):
    """
    Protocol for a scene-graph node (PixiJS DisplayObject style).

    Adapters write rotation, skew, scale, position and optionally z; depth
    sorting reorders children in place. No other fields are touched.
    """

    rotation: float
    skew: Vec2Like
    scale: Vec2Like
    position: Vec2Like
    children: list[Any]
