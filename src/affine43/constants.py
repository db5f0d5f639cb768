"""
Constants and default values for affine43.

Centralizes magic numbers and configuration defaults for better maintainability.
"""

from __future__ import annotations

import numpy as np

# =============================================================================
# Matrix Layout
# =============================================================================

# 4x3 row-major storage, the implicit fourth row is always (0, 0, 0, 1)
MATRIX_ROWS = 3
MATRIX_COLS = 4
MATRIX_SIZE = MATRIX_ROWS * MATRIX_COLS  # 12 scalars
MATRIX_DTYPE = np.float64

# Slots handed to a 2D renderer: (a, b, c, d, e, f) in canvas order
CANVAS_SLOTS = (0, 4, 1, 5, 3, 7)
DEPTH_SLOT = 11  # z translation

# =============================================================================
# Numerical Thresholds
# =============================================================================

AXIS_EPSILON = 1e-8  # Rotation axis shorter than this is treated as no rotation
SKEW_EPSILON = 1e-8  # |skew_x + skew_y| below this means pure rotation (PixiJS)

# =============================================================================
# Diagnostics Defaults
# =============================================================================

DEFAULT_DECIMALS = 2
MAX_DECIMALS = 15  # float64 carries ~15-17 significant digits
DEFAULT_SEPARATOR = ", "
DEFAULT_NEWLINE = "\n"

# =============================================================================
# Random Matrix Defaults
# =============================================================================

DEFAULT_RANDOM_MIN = 0.0
DEFAULT_RANDOM_MAX = 1.0

# Columns produced by batched decomposition
DECOMPOSED_COLUMNS = ("rotation", "skew_x", "skew_y", "scale_x", "scale_y", "x", "y", "z")
