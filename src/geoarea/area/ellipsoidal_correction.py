"""
Ellipsoidal Correction — поправка вклада сегмента за сжатие эллипсоида

Karney, Algorithms for geodesics (2011), eq. 58-59, https://arxiv.org/pdf/1109.4448.pdf

Площадь между геодезической и экватором:
    S12 = c² (α2 - α1) + e² a² cos(α0) sin(α0) (I4(σ2) - I4(σ1))
    I4(σ) = Σ C4_l cos((2l + 1) σ)

Сферическую часть даёт spherical_excess; здесь вычисляется вторая часть,
приведённая к единицам сферического избытка (деление на c²), чтобы
складываться с избытком до масштабирования площади на c²:
    correction = (e² a² / c²) · cos(α0) sin(α0) · I12

АЛГОРИТМ:
1. α1, α2 из inverse-решателя азимутов (α2: азимут в P2)
2. cos(β_i) ≈ cos(lat_i) (сферическое приближение приведённой широты)
3. sin(α0) = sin(α1) cos(β1)                     (Clairaut)
   cos(α0) = hypot(cos(α1), sin(α1) sin(β1))     (= √(1 - sin²α0) без потери точности)
4. σ_i = atan2(sin(β_i), cos(α_i) cos(β_i)), т.е. cos(σ_i) = cos(α_i) cos(β_i) / hypot(...);
   cos 3σ, cos 5σ через полиномы Чебышёва от cos(σ)
5. k² = (e' cos(α0))²
6. I12 = Σ_{l=0..order} C4_l (cos((2l+1)σ2) - cos((2l+1)σ1))

Коэффициенты C4_l: рациональные полиномы от e'² и k², переписаны
из разложения Karney без изменений.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. e² = 0 → поправка равна 0 для любых входов
2. series_order ∈ {1, 2}
3. Обратный сегмент (P2 → P1) → поправка меняет знак
4. Экваториальная геодезическая (cos(α0) = 0) → поправка 0
"""

import math
from typing import Final

from geoarea.area.azimuth import AzimuthStrategy
from geoarea.core.domain.point import GeoPoint
from geoarea.core.domain.spheroid import SpheroidConstants


SUPPORTED_SERIES_ORDERS: Final[tuple[int, ...]] = (1, 2)


def validate_series_order(series_order: int) -> None:
    """
    Raises:
        ValueError: если series_order не 1 и не 2
    """
    if series_order not in SUPPORTED_SERIES_ORDERS:
        raise ValueError(
            f"series_order must be one of {SUPPORTED_SERIES_ORDERS}, got {series_order}"
        )


# =============================================================================
# SERIES COEFFICIENTS
# =============================================================================


def c4_coefficients(ep2: float, k2: float, series_order: int) -> tuple[float, ...]:
    """
    Коэффициенты C4_l разложения I4 (Karney 2011).

    Args:
        ep2: e'² (второй эксцентриситет²)
        k2: k² = e'² cos²(α0)
        series_order: 1 → (C40, C41); 2 → (C40, C41, C42)

    Returns:
        Кортеж коэффициентов длины series_order + 1
    """
    validate_series_order(series_order)

    if series_order == 1:
        c40 = ((2.0 / 3.0) - (1.0 / 15.0) * ep2) - ((1.0 / 20.0) - (1.0 / 35.0) * ep2) * k2
        c41 = ((1.0 / 180.0) - (1.0 / 315.0) * ep2) * k2
        return (c40, c41)

    ep4 = ep2 * ep2
    k4 = k2 * k2

    c40 = (
        ((2.0 / 3.0) - (1.0 / 15.0) * ep2 + (4.0 / 105.0) * ep4)
        - ((1.0 / 20.0) - (1.0 / 35.0) * ep2 + (2.0 / 105.0) * ep4) * k2
        + ((1.0 / 42.0) - (1.0 / 63.0) * ep2 + (8.0 / 693.0) * ep4) * k4
    )
    c41 = (
        ((1.0 / 180.0) - (1.0 / 315.0) * ep2 + (2.0 / 945.0) * ep4) * k2
        - ((1.0 / 252.0) - (1.0 / 378.0) * ep2 + (4.0 / 2079.0) * ep4) * k4
    )
    c42 = ((1.0 / 2100.0) - (1.0 / 3150.0) * ep2 + (4.0 / 17325.0) * ep4) * k4

    return (c40, c41, c42)


def _cos_sigma(cos_alp: float, sin_bet: float, cos_bet: float) -> float:
    # cos(atan2(sin β, cos α cos β)); atan2(0, 0) = 0
    x = cos_alp * cos_bet
    norm = math.hypot(sin_bet, x)
    if norm == 0.0:
        return 1.0
    return x / norm


def _odd_multiple_cosines(cos_sigma: float, series_order: int) -> tuple[float, ...]:
    # cos(σ), cos(3σ), cos(5σ)
    c = cos_sigma
    c3 = c * c * c
    cosines = [c, 4.0 * c3 - 3.0 * c]
    if series_order == 2:
        cosines.append(16.0 * c3 * c * c - 20.0 * c3 + 5.0 * c)
    return tuple(cosines)


# =============================================================================
# ELLIPSOIDAL CORRECTION
# =============================================================================


def ellipsoidal_correction_term(
    alp1: float,
    alp2: float,
    lat1: float,
    lat2: float,
    constants: SpheroidConstants,
    series_order: int = 2,
) -> float:
    """
    Сырой член Karney cos(α0) sin(α0) I12 по готовым азимутам.

    Args:
        alp1: Азимут геодезической в P1 (радианы)
        alp2: Азимут геодезической в P2 (радианы)
        lat1: Широта P1 (радианы)
        lat2: Широта P2 (радианы)
        constants: Константы эллипсоида
        series_order: Порядок ряда (1 или 2)

    Returns:
        cos(α0) · sin(α0) · I12 (безразмерный)
    """
    cos_bet1 = math.cos(lat1)
    cos_bet2 = math.cos(lat2)
    sin_bet1 = math.sin(lat1)
    sin_bet2 = math.sin(lat2)

    sin_alp1 = math.sin(alp1)
    cos_alp1 = math.cos(alp1)
    cos_alp2 = math.cos(alp2)

    sin_alp0 = sin_alp1 * cos_bet1
    cos_alp0 = math.hypot(cos_alp1, sin_alp1 * sin_bet1)

    if cos_alp0 == 0.0:
        # геодезическая идёт по экватору
        return 0.0

    cos_sig1 = _cos_sigma(cos_alp1, sin_bet1, cos_bet1)
    cos_sig2 = _cos_sigma(cos_alp2, sin_bet2, cos_bet2)

    k2 = (constants.ep * cos_alp0) ** 2

    coeffs = c4_coefficients(constants.ep2, k2, series_order)
    cosines1 = _odd_multiple_cosines(cos_sig1, series_order)
    cosines2 = _odd_multiple_cosines(cos_sig2, series_order)

    I12 = sum(c * (cos2 - cos1) for c, cos1, cos2 in zip(coeffs, cosines1, cosines2))

    return cos_alp0 * sin_alp0 * I12


def ellipsoidal_correction(
    p1: GeoPoint,
    p2: GeoPoint,
    azimuth_strategy: AzimuthStrategy,
    constants: SpheroidConstants,
    series_order: int = 2,
) -> float:
    """
    Поправка вклада сегмента за сжатие, в единицах сферического избытка.

    Args:
        p1: Начало сегмента (радианы)
        p2: Конец сегмента (радианы)
        azimuth_strategy: Inverse-решатель азимутов
        constants: Константы эллипсоида
        series_order: Порядок ряда (1 или 2)

    Returns:
        (e² a² / c²) · cos(α0) sin(α0) · I12; 0.0 для сферы
    """
    validate_series_order(series_order)

    if constants.e2 == 0.0:
        return 0.0

    azimuths = azimuth_strategy.apply(p1.lon, p1.lat, p2.lon, p2.lat, constants.spheroid)

    term = ellipsoidal_correction_term(
        azimuths.azimuth,
        azimuths.reverse_azimuth,
        p1.lat,
        p2.lat,
        constants,
        series_order,
    )

    return constants.e2 * constants.a2 / constants.c2 * term


class EllipsoidalCorrectionStrategy:
    """
    Поправка за сжатие с фиксированными решателем азимутов, эллипсоидом
    и порядком ряда.
    """

    def __init__(
        self,
        azimuth_strategy: AzimuthStrategy,
        constants: SpheroidConstants,
        series_order: int = 2,
    ):
        validate_series_order(series_order)
        self.azimuth_strategy = azimuth_strategy
        self.constants = constants
        self.series_order = series_order

    def apply(self, p1: GeoPoint, p2: GeoPoint) -> float:
        return ellipsoidal_correction(
            p1, p2, self.azimuth_strategy, self.constants, self.series_order
        )
