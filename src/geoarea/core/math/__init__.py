"""
Core math modules для geoarea

Численные примитивы для угловых вычислений с гарантией стабильности.
"""

from geoarea.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_CALC,
    EPS_FLOAT_COMPARE_ABS,
    EPS_MACHINE,
    HALF_PI,
    POLE_EPS,
    TWO_PI,
    # Checks
    is_pole,
    is_valid_float,
    is_zero,
    # Angles
    clamp,
    normalize_longitude_positive,
    # Validation
    validate_in_range,
    validate_positive,
)

__all__ = [
    # Numerical Safeguards — Epsilon constants
    "EPS_CALC",
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_MACHINE",
    "HALF_PI",
    "POLE_EPS",
    "TWO_PI",
    # Numerical Safeguards — Checks
    "is_pole",
    "is_valid_float",
    "is_zero",
    # Numerical Safeguards — Angles
    "clamp",
    "normalize_longitude_positive",
    # Numerical Safeguards — Validation
    "validate_in_range",
    "validate_positive",
]
