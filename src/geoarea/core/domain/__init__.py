"""
Domain models and value objects.

Contains geographic points, ring segments and spheroid definitions.
"""

from geoarea.core.domain.point import GeoPoint, Segment
from geoarea.core.domain.ring import (
    as_points,
    distinct_vertex_count,
    is_explicitly_closed,
    iter_segments,
    reverse_ring,
    to_radians,
)
from geoarea.core.domain.spheroid import (
    EARTH_MEAN_RADIUS_M,
    WGS84,
    WGS84_A,
    WGS84_F,
    Spheroid,
    SpheroidConstants,
    sphere,
    unit_sphere,
)

__all__ = [
    # Point model
    "GeoPoint",
    "Segment",
    # Ring helpers
    "as_points",
    "distinct_vertex_count",
    "is_explicitly_closed",
    "iter_segments",
    "reverse_ring",
    "to_radians",
    # Spheroid model
    "EARTH_MEAN_RADIUS_M",
    "WGS84",
    "WGS84_A",
    "WGS84_F",
    "Spheroid",
    "SpheroidConstants",
    "sphere",
    "unit_sphere",
]
