"""
Тесты для Azimuth strategies (Andoyer / Thomas / Vincenty)

Проверяемые инварианты:
1. На сфере (f = 0) все решатели дают точные сферические азимуты
2. Совпадающие точки → (0, 0)
3. Vincenty воспроизводит эталонный пример (Flinders Peak → Buninyong)
4. Andoyer и Thomas аппроксимируют Vincenty с точностью своего порядка по f
5. Vincenty без сходимости → AzimuthConvergenceError
"""

import math

import pytest

from geoarea.area.azimuth import (
    AndoyerAzimuth,
    AzimuthBackend,
    AzimuthConvergenceError,
    AzimuthResult,
    ThomasAzimuth,
    VincentyAzimuth,
    get_azimuth_strategy,
)
from geoarea.core.domain import WGS84, unit_sphere


ALL_STRATEGIES = [AndoyerAzimuth(), ThomasAzimuth(), VincentyAzimuth()]


def _dms(deg: float, minutes: float, seconds: float) -> float:
    sign = -1.0 if deg < 0 else 1.0
    return sign * (abs(deg) + minutes / 60.0 + seconds / 3600.0)


def _deg360(rad: float) -> float:
    return math.degrees(rad) % 360.0


# Vincenty (1975), Flinders Peak → Buninyong
FLINDERS_PEAK = (math.radians(_dms(144, 25, 29.52440)), math.radians(_dms(-37, 57, 3.72030)))
BUNINYONG = (math.radians(_dms(143, 55, 35.38390)), math.radians(_dms(-37, 39, 10.15610)))
FLINDERS_AZIMUTH_DEG = _dms(306, 52, 5.37)
BUNINYONG_AZIMUTH_DEG = _dms(307, 10, 25.07)  # азимут движения в P2


# =============================================================================
# ТЕСТЫ: сфера
# =============================================================================


class TestSphericalLimit:
    """При f = 0 решатели сводятся к сферической тригонометрии."""

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: type(s).__name__)
    def test_equator_to_mid_latitude(self, strategy):
        """(0°, 0°) → (90°E, 45°N): α1 = 45°, α2 = 90°."""
        result = strategy.apply(0.0, 0.0, math.pi / 2, math.pi / 4, unit_sphere())

        assert result.azimuth == pytest.approx(math.pi / 4, abs=1e-12)
        assert result.reverse_azimuth == pytest.approx(math.pi / 2, abs=1e-12)

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: type(s).__name__)
    def test_due_north(self, strategy):
        result = strategy.apply(0.3, 0.1, 0.3, 0.5, unit_sphere())

        assert result.azimuth == pytest.approx(0.0, abs=1e-12)
        assert result.reverse_azimuth == pytest.approx(0.0, abs=1e-12)

    def test_reverse_direction_on_sphere(self):
        """Азимут P2 → P1 в P2 = reverse_azimuth(P1 → P2) + π."""
        strategy = VincentyAzimuth()
        forward = strategy.apply(0.1, 0.2, 0.7, 0.5, unit_sphere())
        backward = strategy.apply(0.7, 0.5, 0.1, 0.2, unit_sphere())

        diff = (backward.azimuth - forward.reverse_azimuth) % (2 * math.pi)
        assert diff == pytest.approx(math.pi, abs=1e-12)


# =============================================================================
# ТЕСТЫ: эллипсоид
# =============================================================================


class TestEllipsoidal:
    """Азимуты на WGS84."""

    def test_vincenty_reference_example(self):
        result = VincentyAzimuth().apply(*FLINDERS_PEAK, *BUNINYONG, WGS84)

        assert _deg360(result.azimuth) == pytest.approx(FLINDERS_AZIMUTH_DEG, abs=1e-4)
        assert _deg360(result.reverse_azimuth) == pytest.approx(BUNINYONG_AZIMUTH_DEG, abs=1e-4)

    def test_thomas_close_to_vincenty(self):
        result = ThomasAzimuth().apply(*FLINDERS_PEAK, *BUNINYONG, WGS84)

        assert _deg360(result.azimuth) == pytest.approx(FLINDERS_AZIMUTH_DEG, abs=1e-3)
        assert _deg360(result.reverse_azimuth) == pytest.approx(BUNINYONG_AZIMUTH_DEG, abs=1e-3)

    def test_andoyer_close_to_vincenty(self):
        result = AndoyerAzimuth().apply(*FLINDERS_PEAK, *BUNINYONG, WGS84)

        assert _deg360(result.azimuth) == pytest.approx(FLINDERS_AZIMUTH_DEG, abs=1e-2)
        assert _deg360(result.reverse_azimuth) == pytest.approx(BUNINYONG_AZIMUTH_DEG, abs=1e-2)

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES[1:], ids=lambda s: type(s).__name__)
    def test_quarter_turn_longitude(self, strategy):
        """(0°, 10°) → (90°E, 50°): Δλ = 90°, tan(Δλ) не определён."""
        result = strategy.apply(0.0, math.radians(10.0), math.pi / 2, math.radians(50.0), WGS84)

        assert _deg360(result.azimuth) == pytest.approx(40.5116, abs=1e-3)
        assert _deg360(result.reverse_azimuth) == pytest.approx(96.5910, abs=1e-3)

    def test_thomas_quarter_turn_matches_vincenty(self):
        args = (math.radians(90.0), math.radians(50.0), 0.0, math.radians(10.0), WGS84)
        thomas = ThomasAzimuth().apply(*args)
        vincenty = VincentyAzimuth().apply(*args)

        assert thomas.azimuth == pytest.approx(vincenty.azimuth, abs=1e-12)
        assert thomas.reverse_azimuth == pytest.approx(vincenty.reverse_azimuth, abs=1e-12)

    def test_flattening_shifts_azimuth(self):
        """На эллипсоиде азимут отличается от сферического."""
        spherical = VincentyAzimuth().apply(*FLINDERS_PEAK, *BUNINYONG, unit_sphere())
        ellipsoidal = VincentyAzimuth().apply(*FLINDERS_PEAK, *BUNINYONG, WGS84)

        assert spherical.azimuth != ellipsoidal.azimuth

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: type(s).__name__)
    def test_coincident_points(self, strategy):
        result = strategy.apply(0.5, 0.5, 0.5, 0.5, WGS84)
        assert result == AzimuthResult(0.0, 0.0)

    def test_vincenty_non_convergence_raises(self):
        with pytest.raises(AzimuthConvergenceError, match="did not converge"):
            VincentyAzimuth(max_iter=1).apply(0.0, 0.1, 0.5, 0.3, WGS84)

    def test_convergence_error_is_arithmetic_error(self):
        assert issubclass(AzimuthConvergenceError, ArithmeticError)


# =============================================================================
# ТЕСТЫ: registry
# =============================================================================


class TestRegistry:
    def test_backend_by_enum(self):
        assert isinstance(get_azimuth_strategy(AzimuthBackend.ANDOYER), AndoyerAzimuth)
        assert isinstance(get_azimuth_strategy(AzimuthBackend.THOMAS), ThomasAzimuth)
        assert isinstance(get_azimuth_strategy(AzimuthBackend.VINCENTY), VincentyAzimuth)

    def test_backend_by_string(self):
        assert isinstance(get_azimuth_strategy("VINCENTY"), VincentyAzimuth)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            get_azimuth_strategy("KARNEY")
