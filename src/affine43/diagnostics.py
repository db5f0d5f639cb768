"""
Human-readable rendering of matrices and their 2D decompositions for debugging.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from affine43.constants import (
    DEFAULT_DECIMALS,
    DEFAULT_NEWLINE,
    DEFAULT_SEPARATOR,
    MATRIX_SIZE,
    MAX_DECIMALS,
)
from affine43.decompose import decompose_matrix
from affine43.matrix.api import MatrixLike
from affine43.validators import validate_matrix


@dataclass(frozen=True)
class FormatOptions:
    """
    Formatting options for matrix and decomposition strings.

    Attributes:
        separator: String placed between values
        newline: String placed between rows (e.g. "<br />" for HTML)
        decimals: Decimal places kept by round_value()
    """

    separator: str = DEFAULT_SEPARATOR
    newline: str = DEFAULT_NEWLINE
    decimals: int = DEFAULT_DECIMALS

    def __post_init__(self):
        """Validate formatting options."""
        if not isinstance(self.separator, str):
            raise TypeError(f"separator must be str, got {type(self.separator).__name__}")
        if not isinstance(self.newline, str):
            raise TypeError(f"newline must be str, got {type(self.newline).__name__}")
        if not 0 <= self.decimals <= MAX_DECIMALS:
            raise ValueError(f"decimals={self.decimals} must be between 0 and {MAX_DECIMALS}")


def round_value(x: float, decimals: int = DEFAULT_DECIMALS) -> float:
    """
    Round to a number of decimals by scale, round half up, unscale.

    This is a plain floating-point formula, not decimal rounding: values that
    are not exactly representable can land on the "wrong" side of the half.

    Args:
        x: Value to round
        decimals: Decimal places to keep

    Returns:
        Rounded value (NaN and infinities are returned unchanged)

    Example:
        >>> round_value(0.125)   # half rounds up
        0.13
        >>> round_value(1.005)   # 1.005 * 100 == 100.49999999999999
        1.0
    """
    if not math.isfinite(x):
        return x
    r = 10.0**decimals
    return math.floor(x * r + 0.5) / r


def _format_number(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    # Integral values print without a fractional part, and -0 as 0
    if x.is_integer():
        return str(int(x))
    return repr(x)


def _resolve(
    separator: str, newline: str, options: FormatOptions | None
) -> FormatOptions:
    if options is not None:
        return options
    return FormatOptions(separator=separator, newline=newline)


@validate_matrix("m")
def to_string(
    m: MatrixLike,
    separator: str = DEFAULT_SEPARATOR,
    newline: str = DEFAULT_NEWLINE,
    options: FormatOptions | None = None,
) -> str:
    """
    Render a matrix as four rows of rounded values, including the implicit 0 0 0 1 row.

    Each stored row ends with a trailing separator before the newline.

    Args:
        m: Matrix [12]
        separator: Value separator (default ", ")
        newline: Row separator (default "\\n")
        options: FormatOptions overriding separator, newline and decimals

    Returns:
        Formatted string

    Example:
        >>> print(to_string(translation(1.234, 0, 0)))
        1, 0, 0, 1.23, 
        0, 1, 0, 0, 
        0, 0, 1, 0, 
        0, 0, 0, 1
    """
    opts = _resolve(separator, newline, options)
    sp = opts.separator

    rows = []
    for start in range(0, MATRIX_SIZE, 4):
        values = (
            _format_number(round_value(float(v), opts.decimals)) for v in m[start : start + 4]
        )
        rows.append(sp.join(values) + sp + opts.newline)
    rows.append(sp.join(("0", "0", "0", "1")))
    return "".join(rows)


@validate_matrix("m")
def node_to_string(
    m: MatrixLike,
    separator: str = DEFAULT_SEPARATOR,
    newline: str = DEFAULT_NEWLINE,
    options: FormatOptions | None = None,
) -> str:
    """
    Render the 2D decomposition a scene node would receive from a matrix.

    Args:
        m: Matrix [12]
        separator: Separator between values on one line
        newline: Line separator
        options: FormatOptions overriding separator, newline and decimals

    Returns:
        Three lines: scale, skew and rotation

    Example:
        >>> print(node_to_string(scale(2, 3)))
        scale.x=2, scale.y=3
        skew.x=0, skew.y=0
        rotation=0
    """
    opts = _resolve(separator, newline, options)
    d = decompose_matrix(m)

    def fmt(value: float) -> str:
        return _format_number(round_value(value, opts.decimals))

    return (
        f"scale.x={fmt(d.scale_x)}{opts.separator}scale.y={fmt(d.scale_y)}{opts.newline}"
        f"skew.x={fmt(d.skew_x)}{opts.separator}skew.y={fmt(d.skew_y)}{opts.newline}"
        f"rotation={fmt(d.rotation)}"
    )
