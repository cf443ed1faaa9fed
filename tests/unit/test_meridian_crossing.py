"""
Тесты для Meridian Crossing Tracker

Проверяемые инварианты:
1. (179°, 0) → (-179°, 0) пересекает антимеридиан; (10°, 0) → (20°, 0) нет
2. Счётчик монотонно не убывает
3. Кольцо вокруг полюса даёт нечётный счётчик в обоих режимах
4. NaN не вызывает исключений
"""

import math

import pytest

from geoarea.area.meridian_crossing import (
    CrossingCounter,
    CrossingMeridian,
    MeridianCrossingTracker,
    crosses_meridian,
)
from geoarea.core.domain import GeoPoint, iter_segments, to_radians


def _deg(lon: float, lat: float) -> GeoPoint:
    return GeoPoint(math.radians(lon), math.radians(lat))


# =============================================================================
# ТЕСТЫ: crosses_meridian
# =============================================================================


class TestCrossesMeridian:
    """Тесты пороговой эвристики."""

    def test_antimeridian_crossing(self):
        assert crosses_meridian(_deg(179, 0), _deg(-179, 0))
        assert crosses_meridian(_deg(-179, 0), _deg(179, 0))

    def test_no_crossing(self):
        assert not crosses_meridian(_deg(10, 0), _deg(20, 0))
        assert not crosses_meridian(_deg(-1, 0), _deg(1, 0))

    def test_prime_meridian_mode(self):
        assert crosses_meridian(_deg(-1, 0), _deg(1, 0), CrossingMeridian.PRIME)
        assert not crosses_meridian(_deg(179, 0), _deg(-179, 0), CrossingMeridian.PRIME)

    def test_meridional_segment_never_crosses(self):
        for meridian in CrossingMeridian:
            assert not crosses_meridian(_deg(30, 0), _deg(30, 60), meridian)

    def test_nan_no_exception(self):
        assert not crosses_meridian(GeoPoint(float("nan"), 0.0), GeoPoint(1.0, 0.0))

    def test_offsets(self):
        assert CrossingMeridian.ANTIMERIDIAN.offset == math.pi
        assert CrossingMeridian.PRIME.offset == 0.0
        assert CrossingMeridian("PRIME") is CrossingMeridian.PRIME


# =============================================================================
# ТЕСТЫ: MeridianCrossingTracker
# =============================================================================


class TestMeridianCrossingTracker:
    """Тесты счётчика пересечений."""

    def test_default_meridian(self):
        assert MeridianCrossingTracker().meridian is CrossingMeridian.ANTIMERIDIAN

    def test_counts_and_returns(self):
        tracker = MeridianCrossingTracker()
        state = CrossingCounter()

        assert tracker.apply(_deg(10, 0), _deg(20, 0), state) == 0
        assert tracker.apply(_deg(179, 0), _deg(-179, 0), state) == 1
        assert tracker.apply(_deg(-179, 0), _deg(179, 0), state) == 2
        assert state.crossings == 2

    def test_monotonic(self):
        tracker = MeridianCrossingTracker()
        state = CrossingCounter()
        ring = to_radians([(170, 10), (-170, 10), (-170, 20), (170, 20)])

        previous = 0
        for p1, p2 in iter_segments(ring):
            current = tracker.apply(p1, p2, state)
            assert current >= previous
            previous = current

        # кольцо через антимеридиан, но не вокруг полюса
        assert state.crossings == 2

    @pytest.mark.parametrize("meridian", list(CrossingMeridian))
    def test_pole_ring_odd(self, meridian):
        tracker = MeridianCrossingTracker(meridian)
        state = CrossingCounter()
        ring = to_radians([(0, 80), (90, 80), (180, 80), (-90, 80)])

        for p1, p2 in iter_segments(ring):
            tracker.apply(p1, p2, state)

        assert state.crossings == 1
