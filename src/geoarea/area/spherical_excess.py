"""
Spherical Excess — вклад сегмента в площадь на сфере

Трапецеидальная формула: удвоенный сферический избыток трапеции,
ограниченной сегментом, меридианами через его концы и экватором.

ФОРМУЛА:
    t_i = tan(lat_i / 2)
    E12 = 2 · atan( ((t1 + t2) / (1 + t1·t2)) · tan((lon2 - lon1) / 2) )

Свойства:
- Экваториальный сегмент (lat1 = lat2 = 0): E12 = 0
- Меридиональный сегмент (lon1 = lon2): E12 = 0
- Обратный сегмент (P2 → P1): -E12
- tan((lon2 - lon1) / 2) имеет период 2π по разности долгот, поэтому
  сегменты через ±180° не требуют предварительной нормализации

ПОЛЮСА (явная обработка):
- Широта в пределах POLE_EPS от ±π/2: t_i = ±1 точно
  (math.tan(math.pi / 4) даёт 0.9999999999999999)
- Сегмент полюс → противоположный полюс: 1 + t1·t2 = 0 и t1 + t2 = 0,
  вклады северной и южной половин взаимно компенсируются → 0

LONG SEGMENT: режим сегментов длиннее полусферы по долготе не реализован
и отвергается LongSegmentNotSupported.
"""

import math

from geoarea.core.domain.point import GeoPoint
from geoarea.core.math.numerical_safeguards import is_pole


# =============================================================================
# EXCEPTIONS
# =============================================================================


class LongSegmentNotSupported(NotImplementedError):
    """
    Запрошен режим long segment (сегмент охватывает больше полусферы
    по долготе).

    Трапецеидальная формула для такого сегмента неверна, а точного
    решения нет. Вместо молчаливого нуля (потеря площади) режим
    отвергается явно.
    """
    pass


# =============================================================================
# SPHERICAL EXCESS
# =============================================================================


def _tan_half_latitude(lat: float) -> float:
    if is_pole(lat):
        return 1.0 if lat > 0 else -1.0
    return math.tan(lat / 2.0)


def spherical_excess(p1: GeoPoint, p2: GeoPoint, long_segment: bool = False) -> float:
    """
    Удвоенный сферический избыток трапеции сегмента P1 → P2.

    Args:
        p1: Начало сегмента (lon, lat в радианах)
        p2: Конец сегмента (lon, lat в радианах)
        long_segment: Режим сегментов длиннее полусферы (не поддерживается)

    Returns:
        Знаковый вклад сегмента (радианы, единичная сфера)

    Raises:
        LongSegmentNotSupported: если long_segment=True

    Examples:
        >>> spherical_excess(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
        0.0
    """
    if long_segment:
        raise LongSegmentNotSupported(
            "Long segment spherical excess is not implemented; "
            "split segments spanning more than a hemisphere in longitude"
        )

    tan_lat1 = _tan_half_latitude(p1.lat)
    tan_lat2 = _tan_half_latitude(p2.lat)

    denominator = 1.0 + tan_lat1 * tan_lat2
    if denominator == 0.0:
        # полюс → противоположный полюс
        return 0.0

    return 2.0 * math.atan(
        ((tan_lat1 + tan_lat2) / denominator) * math.tan((p2.lon - p1.lon) / 2.0)
    )


class SphericalExcessStrategy:
    """Сферическая часть вклада сегмента (конфигурация long_segment фиксирована)."""

    def __init__(self, long_segment: bool = False):
        if long_segment:
            raise LongSegmentNotSupported(
                "SphericalExcessStrategy does not support long_segment=True"
            )
        self.long_segment = long_segment

    def apply(self, p1: GeoPoint, p2: GeoPoint) -> float:
        return spherical_excess(p1, p2, self.long_segment)
