"""
Example: Drawing a small 3D scene on a 2D surface.

Demonstrates how to use affine43 for:
- Building transforms with free functions and with TransformChain
- Driving a canvas-style drawing context
- Writing transforms onto scene nodes and sorting them by depth
- Inverting transforms and printing diagnostics
"""

import logging
import math

from affine43 import (
    Node,
    TransformChain,
    apply_to_canvas,
    apply_to_node_with_depth,
    chain,
    invert,
    multiply,
    node_to_string,
    rotation_axis_angle,
    rotation_yaw,
    scale,
    sort_by_depth,
    to_string,
    translation,
)

# Configure logging to see library debug messages
logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")


class PrintingContext:
    """Stand-in for a canvas 2D context."""

    def set_transform(self, a, b, c, d, e, f):
        print(f"  ctx.setTransform({a:.3f}, {b:.3f}, {c:.3f}, {d:.3f}, {e:.3f}, {f:.3f})")


def example_1_free_functions():
    """Example 1: Compose matrices with chain()."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Free Functions")
    print("=" * 70)

    # Scale, then spin 30 degrees, then move (first argument applied first)
    m = chain(scale(2.0), rotation_yaw(math.pi / 6), translation(100.0, 50.0, 3.0))
    print(to_string(m))

    print("\nDecomposition:")
    print(node_to_string(m))

    apply_to_canvas(PrintingContext(), m)


def example_2_builder():
    """Example 2: Same transform with TransformChain, rotating about a center."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: TransformChain")
    print("=" * 70)

    pipeline = (
        TransformChain()
        .scale(2.0)
        .yaw(math.pi / 6, center=(50.0, 50.0, 0.0))
        .translate(100.0, 50.0, 3.0)
    )
    print(pipeline)
    pipeline.apply_to_canvas(PrintingContext())
    print(pipeline)


def example_3_depth_sorting():
    """Example 3: Position nodes in 3D and sort them for drawing."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Depth Sorting")
    print("=" * 70)

    container = Node(name="root")
    camera = rotation_axis_angle(0.4, 1.0, 1.0, 0.0)

    for i, z in enumerate((4.0, -2.0, 1.0, 0.5)):
        sprite = container.add_child(Node(name=f"sprite{i}"))
        apply_to_node_with_depth(sprite, multiply(camera, translation(10.0 * i, 0.0, z)))

    print("Before:", [(c.name, round(c.z, 2)) for c in container.children])
    sort_by_depth(container)
    print("After: ", [(c.name, round(c.z, 2)) for c in container.children])


def example_4_inversion():
    """Example 4: Map screen coordinates back through a transform."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Inversion")
    print("=" * 70)

    m = chain(scale(2.0, 2.0, 0.0), translation(10.0, 0.0, 0.0))
    inv = invert(m)
    if inv is None:
        print("Flattened transform has no inverse (z scale is 0)")

    m = chain(scale(2.0), translation(10.0, 0.0, 0.0))
    inv = invert(m)
    print(to_string(multiply(inv, m)))


if __name__ == "__main__":
    example_1_free_functions()
    example_2_builder()
    example_3_depth_sorting()
    example_4_inversion()
