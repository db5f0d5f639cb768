"""
Validation decorators for affine43.

Provides reusable precondition checks for the matrix functions so that wrong-length
input fails loudly instead of producing garbage.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

import numpy as np

from affine43.constants import MATRIX_SIZE

# Python 3.12+ type alias for callables
type F = Callable[..., Any]

_MISSING = object()


def _get_arg(args: tuple, kwargs: dict, param_name: str, param_index: int) -> Any:
    """Fetch a parameter by position or keyword, or _MISSING if not supplied."""
    if len(args) > param_index:
        return args[param_index]
    return kwargs.get(param_name, _MISSING)


def _is_numeric(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return np.issubdtype(value.dtype, np.integer) or np.issubdtype(value.dtype, np.floating)
    return all(isinstance(v, (int, float, np.integer, np.floating)) for v in value)


def check_matrix(value: Any, param_name: str = "matrix") -> None:
    """
    Check that value is a flat sequence of 12 real numbers.

    Args:
        value: Candidate matrix (list, tuple or 1D ndarray)
        param_name: Name used in error messages

    Raises:
        ValueError: If the value does not hold exactly 12 scalars in one dimension
        TypeError: If the value is not a sequence or holds non-numeric entries
    """
    if isinstance(value, np.ndarray):
        shape = value.shape
    else:
        try:
            shape = (len(value),)
        except TypeError:
            raise TypeError(
                f"{param_name} must be a sequence of {MATRIX_SIZE} numbers, "
                f"got {type(value).__name__}"
            ) from None

    if shape != (MATRIX_SIZE,):
        raise ValueError(
            f"{param_name} must hold exactly {MATRIX_SIZE} values (4x3 row-major), "
            f"got shape {shape}. Build matrices with the affine43 constructors."
        )

    if not _is_numeric(value):
        raise TypeError(f"{param_name} must contain only real numbers")


def validate_matrix(param_name: str = "matrix", param_index: int = 0) -> Callable[[F], F]:
    """
    Decorator for validating a 4x3 matrix argument.

    Args:
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature (default: 0 = first arg)

    Returns:
        Decorated function with shape validation

    Example:
        >>> @validate_matrix("m")
        ... def trace(m):
        ...     return m[0] + m[5] + m[10]
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            value = _get_arg(args, kwargs, param_name, param_index)
            if value is not _MISSING:
                check_matrix(value, param_name)
            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_matrix_batch(param_name: str = "matrices", param_index: int = 0) -> Callable[[F], F]:
    """
    Decorator for validating a stack of matrices shaped [N, 12].

    Args:
        param_name: Name of parameter for error messages
        param_index: Position of parameter in function signature

    Returns:
        Decorated function with batch shape validation
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            value = _get_arg(args, kwargs, param_name, param_index)
            if value is _MISSING:
                return func(*args, **kwargs)

            if not isinstance(value, np.ndarray):
                raise TypeError(
                    f"{param_name} must be a numpy array of shape [N, {MATRIX_SIZE}], "
                    f"got {type(value).__name__}"
                )
            if value.ndim != 2 or value.shape[1] != MATRIX_SIZE:
                raise ValueError(
                    f"{param_name} must have shape [N, {MATRIX_SIZE}], got {value.shape}. "
                    f"Use np.stack() on individual matrices."
                )

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def validate_ordered(low_name: str, high_name: str) -> Callable[[F], F]:
    """
    Decorator for validating that one numeric parameter does not exceed another.

    Bounds are resolved against the function signature, so defaults take part
    in the check (``uniform(5.0)`` fails when the upper default is 1.0).

    Args:
        low_name: Name of the lower bound parameter
        high_name: Name of the upper bound parameter

    Returns:
        Decorated function with ordering validation

    Example:
        >>> @validate_ordered("min_value", "max_value")
        ... def uniform(min_value=0.0, max_value=1.0):
        ...     ...
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            bound = signature.bind(*args, **kwargs)
            bound.apply_defaults()
            low = bound.arguments[low_name]
            high = bound.arguments[high_name]

            for name, value in ((low_name, low), (high_name, high)):
                if not isinstance(value, (int, float, np.integer, np.floating)):
                    raise TypeError(
                        f"{name} must be a number, got {type(value).__name__}. "
                        f"Provide a numeric value (int or float)."
                    )

            if low > high:
                raise ValueError(f"{low_name}={low} must not exceed {high_name}={high}")

            return func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator
