"""
Minimal scene node for use with the adapters.

Any object matching affine43.protocols.SceneNode works with the adapters; this
dataclass is provided for callers without a scene graph of their own, and is
what the diagnostics decompose into.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Point:
    """Mutable x/y pair."""

    x: float = 0.0
    y: float = 0.0


@dataclass(slots=True)
class Node:
    """
    Scene node with PixiJS-style transform fields.

    Attributes:
        rotation: Rotation in radians
        skew: Skew angles in radians
        scale: Scale factors
        position: Translation
        z: Depth for draw-order sorting (None until set by a depth adapter)
        children: Ordered child nodes
        name: Optional label for debugging
    """

    rotation: float = 0.0
    skew: Point = field(default_factory=Point)
    scale: Point = field(default_factory=lambda: Point(1.0, 1.0))
    position: Point = field(default_factory=Point)
    z: float | None = None
    children: list[Node] = field(default_factory=list)
    name: str = ""

    def add_child(self, child: Node) -> Node:
        """Append a child and return it."""
        self.children.append(child)
        return child
