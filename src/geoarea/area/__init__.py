"""
Area engine — знаковая площадь колец на сфере и эллипсоиде.
"""

from .accumulator import (
    AreaAccumulator,
    AreaConfig,
    AreaModel,
    AreaResult,
    AreaState,
    polygon_area,
    ring_area,
    wraparound_sum,
)
from .azimuth import (
    AndoyerAzimuth,
    AzimuthBackend,
    AzimuthConvergenceError,
    AzimuthResult,
    AzimuthStrategy,
    ThomasAzimuth,
    VincentyAzimuth,
    get_azimuth_strategy,
)
from .ellipsoidal_correction import (
    EllipsoidalCorrectionStrategy,
    c4_coefficients,
    ellipsoidal_correction,
    ellipsoidal_correction_term,
)
from .meridian_crossing import (
    CrossingCounter,
    CrossingMeridian,
    MeridianCrossingTracker,
    crosses_meridian,
)
from .spherical_excess import (
    LongSegmentNotSupported,
    SphericalExcessStrategy,
    spherical_excess,
)

__all__ = [
    # Accumulator
    "AreaAccumulator",
    "AreaConfig",
    "AreaModel",
    "AreaResult",
    "AreaState",
    "polygon_area",
    "ring_area",
    "wraparound_sum",
    # Azimuth
    "AndoyerAzimuth",
    "AzimuthBackend",
    "AzimuthConvergenceError",
    "AzimuthResult",
    "AzimuthStrategy",
    "ThomasAzimuth",
    "VincentyAzimuth",
    "get_azimuth_strategy",
    # Ellipsoidal correction
    "EllipsoidalCorrectionStrategy",
    "c4_coefficients",
    "ellipsoidal_correction",
    "ellipsoidal_correction_term",
    # Meridian crossing
    "CrossingCounter",
    "CrossingMeridian",
    "MeridianCrossingTracker",
    "crosses_meridian",
    # Spherical excess
    "LongSegmentNotSupported",
    "SphericalExcessStrategy",
    "spherical_excess",
]
