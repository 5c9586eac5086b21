"""
Core math modules для matcalc

Численные параметры и примитивы, общие для движка матриц.
"""

from matcalc.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_ABS,
    EPS_PIVOT,
    # Size limits
    MATRIX_LIMIT_ERROR,
    MATRIX_LIMIT_WARNING,
    # Display
    DISPLAY_PRECISION,
    DISPLAY_WIDTH,
    # Float checks
    is_valid_float,
    is_zero,
    snap_to_zero,
    # Validation
    validate_dimension,
    validate_finite,
)

__all__ = [
    # Epsilon constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_PIVOT",
    # Size limits
    "MATRIX_LIMIT_ERROR",
    "MATRIX_LIMIT_WARNING",
    # Display
    "DISPLAY_PRECISION",
    "DISPLAY_WIDTH",
    # Float checks
    "is_valid_float",
    "is_zero",
    "snap_to_zero",
    # Validation
    "validate_dimension",
    "validate_finite",
]
