"""
Тесты для Ellipsoidal Correction (ряд Karney)

Проверяемые инварианты:
1. e² = 0 → поправка 0
2. series_order ∈ {1, 2}, иначе ValueError
3. Экваториальная геодезическая → поправка 0
4. Обратный сегмент → поправка меняет знак
5. Порядки 1 и 2 отличаются на O(f²)
"""

import math

import pytest

from geoarea.area.azimuth import ThomasAzimuth, VincentyAzimuth
from geoarea.area.ellipsoidal_correction import (
    SUPPORTED_SERIES_ORDERS,
    EllipsoidalCorrectionStrategy,
    c4_coefficients,
    ellipsoidal_correction,
    ellipsoidal_correction_term,
    validate_series_order,
)
from geoarea.core.domain import WGS84, WGS84_F, GeoPoint, SpheroidConstants, sphere


@pytest.fixture
def wgs84_constants():
    return SpheroidConstants.from_spheroid(WGS84)


def _deg(lon: float, lat: float) -> GeoPoint:
    return GeoPoint(math.radians(lon), math.radians(lat))


# =============================================================================
# ТЕСТЫ: коэффициенты ряда
# =============================================================================


class TestSeriesCoefficients:
    """Тесты c4_coefficients / validate_series_order."""

    def test_supported_orders(self):
        assert SUPPORTED_SERIES_ORDERS == (1, 2)
        for order in SUPPORTED_SERIES_ORDERS:
            validate_series_order(order)

    @pytest.mark.parametrize("order", [0, 3, -1])
    def test_unsupported_order_rejected(self, order):
        with pytest.raises(ValueError, match="series_order"):
            validate_series_order(order)

    def test_coefficient_count(self):
        assert len(c4_coefficients(0.0067, 0.003, 1)) == 2
        assert len(c4_coefficients(0.0067, 0.003, 2)) == 3

    def test_spherical_limit(self):
        """e'² = k² = 0: C40 = 2/3, остальные 0."""
        c40, c41, c42 = c4_coefficients(0.0, 0.0, 2)
        assert c40 == pytest.approx(2.0 / 3.0)
        assert c41 == 0.0
        assert c42 == 0.0

    def test_orders_share_leading_terms(self):
        ep2 = 0.0067
        k2 = 0.004
        first = c4_coefficients(ep2, k2, 1)
        second = c4_coefficients(ep2, k2, 2)
        assert first[0] == pytest.approx(second[0], rel=1e-4)
        assert first[1] == pytest.approx(second[1], rel=1e-1)


# =============================================================================
# ТЕСТЫ: поправка сегмента
# =============================================================================


class TestEllipsoidalCorrection:
    """Тесты ellipsoidal_correction."""

    def test_sphere_gives_zero(self):
        constants = SpheroidConstants.from_spheroid(sphere(6371000.0))
        result = ellipsoidal_correction(
            _deg(0, 10), _deg(1, 20), ThomasAzimuth(), constants
        )
        assert result == 0.0

    def test_equatorial_geodesic_gives_zero(self, wgs84_constants):
        result = ellipsoidal_correction(
            _deg(0, 0), _deg(1, 0), ThomasAzimuth(), wgs84_constants
        )
        assert result == pytest.approx(0.0, abs=1e-15)

    def test_equatorial_azimuth_term_is_zero(self, wgs84_constants):
        """α1 = α2 = 90° на экваторе: cos(α0) = 0 → член 0."""
        term = ellipsoidal_correction_term(
            math.pi / 2, math.pi / 2, 0.0, 0.0, wgs84_constants
        )
        assert term == pytest.approx(0.0, abs=1e-30)

    def test_nonzero_and_bounded(self, wgs84_constants):
        result = ellipsoidal_correction(
            _deg(0, 10), _deg(1, 20), ThomasAzimuth(), wgs84_constants
        )
        assert result != 0.0
        assert abs(result) < wgs84_constants.e2

    def test_reversed_segment_negates(self, wgs84_constants):
        p1 = _deg(0, 10)
        p2 = _deg(1, 20)
        forward = ellipsoidal_correction(p1, p2, VincentyAzimuth(), wgs84_constants)
        backward = ellipsoidal_correction(p2, p1, VincentyAzimuth(), wgs84_constants)
        assert backward == pytest.approx(-forward, rel=1e-2)

    def test_series_orders_agree(self, wgs84_constants):
        p1 = _deg(0, 10)
        p2 = _deg(1, 20)
        first = ellipsoidal_correction(p1, p2, ThomasAzimuth(), wgs84_constants, 1)
        second = ellipsoidal_correction(p1, p2, ThomasAzimuth(), wgs84_constants, 2)
        assert abs(first - second) <= 10 * WGS84_F**2 * abs(second)

    def test_invalid_order_rejected(self, wgs84_constants):
        with pytest.raises(ValueError, match="series_order"):
            ellipsoidal_correction(
                _deg(0, 10), _deg(1, 20), ThomasAzimuth(), wgs84_constants, 3
            )


class TestEllipsoidalCorrectionStrategy:
    def test_matches_function(self, wgs84_constants):
        strategy = EllipsoidalCorrectionStrategy(ThomasAzimuth(), wgs84_constants, 1)
        p1 = _deg(5, 45)
        p2 = _deg(6, 46)
        assert strategy.apply(p1, p2) == ellipsoidal_correction(
            p1, p2, ThomasAzimuth(), wgs84_constants, 1
        )

    def test_invalid_order_rejected_at_init(self, wgs84_constants):
        with pytest.raises(ValueError):
            EllipsoidalCorrectionStrategy(ThomasAzimuth(), wgs84_constants, 4)
