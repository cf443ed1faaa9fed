"""
Meridian Crossing Tracker — счётчик пересечений опорного меридиана

Кольцо, охватывающее полюс, пересекает любой меридиан нечётное число раз.
Счётчик пересечений одного опорного меридиана (по умолчанию ±180°)
определяет, нужна ли поправка на обход полюса.

ПРАВИЛО (пороговая эвристика, не строгий топологический тест):
    lon' = (lon - offset) - floor((lon - offset) / 2π) · 2π      ∈ [0, 2π)
    crossing ⇔ max(lon') > π  и  min(lon') < π  и  max - min > π

offset = π (ANTIMERIDIAN): опорный меридиан ±180° отображается в 0 ≡ 2π,
    (179°, 0) → (-179°, 0) считается пересечением, (10°, 0) → (20°, 0) не считается.
offset = 0 (PRIME): эвристика без сдвига, опорный меридиан 0°.
Для замкнутого кольца чётность счётчика в обоих режимах совпадает.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Счётчик монотонно не убывает в пределах одного кольца
2. Состояние создаётся на каждое кольцо (reset = новый AreaState)
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from geoarea.core.domain.point import GeoPoint
from geoarea.core.math.numerical_safeguards import normalize_longitude_positive


class CrossingMeridian(str, Enum):
    """Опорный меридиан счётчика пересечений."""

    ANTIMERIDIAN = "ANTIMERIDIAN"
    PRIME = "PRIME"

    @property
    def offset(self) -> float:
        return math.pi if self is CrossingMeridian.ANTIMERIDIAN else 0.0


class CrossingState(Protocol):
    """Любое per-ring состояние с целочисленным полем crossings."""

    crossings: int


@dataclass
class CrossingCounter:
    """Минимальное состояние трекера (без сумм площади)."""

    crossings: int = 0


def crosses_meridian(
    p1: GeoPoint,
    p2: GeoPoint,
    meridian: CrossingMeridian = CrossingMeridian.ANTIMERIDIAN,
) -> bool:
    """
    Пересекает ли сегмент P1 → P2 опорный меридиан (пороговая эвристика).

    Args:
        p1: Начало сегмента (радианы)
        p2: Конец сегмента (радианы)
        meridian: Опорный меридиан

    Returns:
        True если сегмент считается пересекающим опорный меридиан
    """
    offset = meridian.offset
    lon1 = normalize_longitude_positive(p1.lon - offset)
    lon2 = normalize_longitude_positive(p2.lon - offset)

    max_lon = max(lon1, lon2)
    min_lon = min(lon1, lon2)

    return max_lon > math.pi and min_lon < math.pi and max_lon - min_lon > math.pi


class MeridianCrossingTracker:
    """Обновляет счётчик пересечений в per-ring состоянии."""

    def __init__(self, meridian: CrossingMeridian = CrossingMeridian.ANTIMERIDIAN):
        self.meridian = CrossingMeridian(meridian)

    def apply(self, p1: GeoPoint, p2: GeoPoint, state: CrossingState) -> int:
        """
        Учёт сегмента в счётчике.

        Args:
            p1: Начало сегмента
            p2: Конец сегмента
            state: Per-ring состояние (мутируется)

        Returns:
            Текущее значение счётчика после учёта сегмента
        """
        if crosses_meridian(p1, p2, self.meridian):
            state.crossings += 1
        return state.crossings
