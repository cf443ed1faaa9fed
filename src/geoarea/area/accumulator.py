"""
Area Accumulator — знаковая площадь кольца на сфере / эллипсоиде

Один проход по сегментам кольца:
1. Сферический избыток сегмента (SphericalExcessStrategy)
2. Поправка за сжатие (EllipsoidalCorrectionStrategy), только ELLIPSOIDAL
3. Счётчик пересечений опорного меридиана (MeridianCrossingTracker)
4. Поправка на обход полюса по чётности счётчика
5. Масштабирование на c² (авталический радиус²; для сферы c² = R²)

ПОПРАВКА НА ОБХОД ПОЛЮСА:
    crossings нечётно → кольцо охватывает полюс:
        result = 2π · (1 + crossings // 2) - |sum|,  знак минус при sum > 0
    иначе:
        result = sum

Знак площади задаётся направлением обхода, ориентация не выводится:
обход по часовой стрелке в плоскости (lon, lat) даёт положительную площадь.
Внутренние кольца (дыры) ожидаются с противоположной ориентацией.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Кольцо с < 3 различными вершинами → 0.0 (не ошибка)
2. AreaState создаётся на каждое кольцо и не разделяется между вызовами
3. Обратный порядок вершин → площадь меняет знак
4. NaN/Inf из вырожденных входов пропагируются без маскировки
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from geoarea.area.azimuth import AzimuthBackend, get_azimuth_strategy
from geoarea.area.ellipsoidal_correction import (
    EllipsoidalCorrectionStrategy,
    validate_series_order,
)
from geoarea.area.meridian_crossing import CrossingMeridian, MeridianCrossingTracker
from geoarea.area.spherical_excess import SphericalExcessStrategy
from geoarea.core.domain.point import GeoPoint, Segment
from geoarea.core.domain.ring import as_points, distinct_vertex_count, iter_segments
from geoarea.core.domain.spheroid import WGS84, Spheroid, SpheroidConstants
from geoarea.core.math.numerical_safeguards import TWO_PI

logger = logging.getLogger(__name__)


# =============================================================================
# ENUMS
# =============================================================================


class AreaModel(str, Enum):
    """Модель поверхности."""

    SPHERICAL = "SPHERICAL"
    ELLIPSOIDAL = "ELLIPSOIDAL"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class AreaConfig:
    """Конфигурация расчёта площади.

    Фиксируется на время жизни AreaAccumulator: модель, порядок ряда,
    решатель азимутов и опорный меридиан не меняются от вызова к вызову.
    """

    model: AreaModel = AreaModel.ELLIPSOIDAL
    series_order: int = 2
    azimuth: AzimuthBackend = AzimuthBackend.THOMAS
    crossing_meridian: CrossingMeridian = CrossingMeridian.ANTIMERIDIAN
    long_segment: bool = False

    def __post_init__(self) -> None:
        # строки из JSON → enum
        object.__setattr__(self, "model", AreaModel(self.model))
        object.__setattr__(self, "azimuth", AzimuthBackend(self.azimuth))
        object.__setattr__(
            self, "crossing_meridian", CrossingMeridian(self.crossing_meridian)
        )
        validate_series_order(self.series_order)


# =============================================================================
# STATE / RESULT
# =============================================================================


@dataclass
class AreaState:
    """Per-ring состояние обхода."""

    excess_sum: float = 0.0
    correction_sum: float = 0.0
    crossings: int = 0
    segment_count: int = 0

    @property
    def sum(self) -> float:
        return self.excess_sum + self.correction_sum


@dataclass(frozen=True)
class AreaResult:
    """Результат расчёта площади кольца."""

    area: float  # знаковая площадь (единицы c², обычно м²)
    excess_sum: float  # Σ сферических избытков (радианы)
    correction_sum: float  # Σ поправок за сжатие (радианы)
    crossings: int  # пересечения опорного меридиана
    encircles_pole: bool
    segment_count: int


EMPTY_RESULT = AreaResult(
    area=0.0,
    excess_sum=0.0,
    correction_sum=0.0,
    crossings=0,
    encircles_pole=False,
    segment_count=0,
)


def wraparound_sum(raw_sum: float, crossings: int) -> float:
    """
    Поправка суммы вкладов на обход полюса.

    Args:
        raw_sum: Σ вкладов сегментов (радианы, единичная сфера)
        crossings: Число пересечений опорного меридиана

    Returns:
        Скорректированная сумма (радианы)
    """
    if crossings % 2 == 1:
        times = 1 + crossings // 2
        result = TWO_PI * times - abs(raw_sum)
        if raw_sum > 0:
            result = -result
        return result
    return raw_sum


# =============================================================================
# ACCUMULATOR
# =============================================================================


class AreaAccumulator:
    """Знаковая площадь кольца.

    Экземпляр immutable и может разделяться между потоками: всё
    изменяемое состояние живёт в AreaState, создаваемом на каждое кольцо.
    """

    def __init__(
        self,
        config: AreaConfig | None = None,
        spheroid: Spheroid | SpheroidConstants | None = None,
    ):
        """Инициализация.

        Args:
            config: конфигурация (опционально, используется default)
            spheroid: эллипсоид или готовые константы (default: WGS84)

        Raises:
            LongSegmentNotSupported: если config.long_segment=True
        """
        self.config = config or AreaConfig()

        if spheroid is None:
            spheroid = WGS84
        if isinstance(spheroid, SpheroidConstants):
            self.constants = spheroid
        else:
            self.constants = SpheroidConstants.from_spheroid(spheroid)

        self._excess = SphericalExcessStrategy(self.config.long_segment)
        self._tracker = MeridianCrossingTracker(self.config.crossing_meridian)

        self._correction: EllipsoidalCorrectionStrategy | None = None
        if self.config.model == AreaModel.ELLIPSOIDAL:
            self._correction = EllipsoidalCorrectionStrategy(
                get_azimuth_strategy(self.config.azimuth),
                self.constants,
                self.config.series_order,
            )
        elif not self.constants.is_sphere:
            logger.debug(
                "Spherical model on %s: using authalic sphere (c=%.3f)",
                self.constants.spheroid.name,
                self.constants.authalic_radius,
            )

    # -------------------------------------------------------------------------
    # per-segment
    # -------------------------------------------------------------------------

    def new_state(self) -> AreaState:
        return AreaState()

    def apply_segment(self, p1: GeoPoint, p2: GeoPoint, state: AreaState) -> None:
        """Учёт одного сегмента в состоянии кольца.

        Сегменты вдоль меридиана (lon1 == lon2) не дают вклада в суммы,
        но передаются трекеру пересечений.
        """
        state.segment_count += 1

        if p1.lon != p2.lon:
            state.excess_sum += self._excess.apply(p1, p2)
            if self._correction is not None:
                state.correction_sum += self._correction.apply(p1, p2)

        self._tracker.apply(p1, p2, state)

    def result(self, state: AreaState) -> AreaResult:
        """Площадь кольца по накопленному состоянию."""
        encircles_pole = state.crossings % 2 == 1
        area = wraparound_sum(state.sum, state.crossings) * self.constants.c2

        if encircles_pole:
            logger.debug(
                "Ring encircles a pole: crossings=%d, raw_sum=%.15g",
                state.crossings,
                state.sum,
            )

        return AreaResult(
            area=area,
            excess_sum=state.excess_sum,
            correction_sum=state.correction_sum,
            crossings=state.crossings,
            encircles_pole=encircles_pole,
            segment_count=state.segment_count,
        )

    # -------------------------------------------------------------------------
    # per-ring
    # -------------------------------------------------------------------------

    def evaluate(self, ring: Iterable[Sequence[float]]) -> AreaResult:
        """Площадь кольца по вершинам.

        Args:
            ring: Вершины (lon, lat) в радианах; замыкание явное или неявное

        Returns:
            AreaResult со знаковой площадью и диагностикой
        """
        points = as_points(ring)

        if distinct_vertex_count(points) < 3:
            return EMPTY_RESULT

        state = self.new_state()
        for segment in iter_segments(points):
            self.apply_segment(segment.p1, segment.p2, state)

        result = self.result(state)
        logger.debug(
            "Ring area: %d segments, area=%.6f, crossings=%d",
            result.segment_count,
            result.area,
            result.crossings,
        )
        return result

    def evaluate_segments(self, segments: Iterable[Segment]) -> AreaResult:
        """Площадь кольца по готовой последовательности сегментов.

        Сегменты должны образовывать замкнутое кольцо в порядке обхода.
        """
        segments = [Segment(*as_points(segment)) for segment in segments]

        vertices = {p for segment in segments for p in segment}
        if len(vertices) < 3:
            return EMPTY_RESULT

        state = self.new_state()
        for p1, p2 in segments:
            self.apply_segment(p1, p2, state)

        return self.result(state)

    def apply(self, ring: Iterable[Sequence[float]]) -> float:
        """Знаковая площадь кольца (единицы c²)."""
        return self.evaluate(ring).area


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def ring_area(
    ring: Iterable[Sequence[float]],
    config: AreaConfig | None = None,
    spheroid: Spheroid | SpheroidConstants | None = None,
) -> float:
    """
    Знаковая площадь одного кольца.

    Args:
        ring: Вершины (lon, lat) в радианах
        config: Конфигурация (default: AreaConfig())
        spheroid: Эллипсоид (default: WGS84)

    Returns:
        Площадь в единицах c² (м² для WGS84)
    """
    return AreaAccumulator(config, spheroid).apply(ring)


def polygon_area(
    exterior: Iterable[Sequence[float]],
    interiors: Iterable[Iterable[Sequence[float]]] = (),
    config: AreaConfig | None = None,
    spheroid: Spheroid | SpheroidConstants | None = None,
) -> float:
    """
    Площадь полигона: сумма площадей колец.

    Внутренние кольца должны иметь ориентацию, противоположную внешнему,
    тогда их вклад вычитается автоматически.

    Args:
        exterior: Внешнее кольцо
        interiors: Внутренние кольца (дыры)
        config: Конфигурация (default: AreaConfig())
        spheroid: Эллипсоид (default: WGS84)

    Returns:
        Знаковая площадь полигона
    """
    accumulator = AreaAccumulator(config, spheroid)
    total = accumulator.apply(exterior)
    for interior in interiors:
        total += accumulator.apply(interior)
    return total

