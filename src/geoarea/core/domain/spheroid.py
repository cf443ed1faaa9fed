"""
Spheroid / SpheroidConstants — параметры эллипсоида вращения

Spheroid — immutable Pydantic модель определения эллипсоида
(большая полуось, сжатие). SpheroidConstants — производные константы,
вычисляемые один раз на определение и разделяемые read-only всеми
сегментами расчёта (в том числе между потоками).

ФОРМУЛЫ (Karney, Algorithms for geodesics, 2011):
    e²  = f (2 - f)                          первый эксцентриситет²
    e'² = e² / (1 - e²)                      второй эксцентриситет²
    b   = a (1 - f)
    c²  = a²/2 + b²/2 · atanh(e) / e         авталический радиус²  (e > 0)
    c²  = a²                                 (e = 0, сфера)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. 0 ≤ e² < 1 (только сплюснутые эллипсоиды и сфера)
2. e'² = e² / (1 - e²)
"""

import math
from dataclasses import dataclass
from typing import Final

from pydantic import BaseModel, Field

from geoarea.core.math.numerical_safeguards import validate_in_range, validate_positive


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# WGS-84 (NGA)
WGS84_A: Final[float] = 6378137.0
WGS84_F: Final[float] = 1 / 298.257223563

# Средний радиус Земли IUGG (м)
EARTH_MEAN_RADIUS_M: Final[float] = 6371008.8


# =============================================================================
# SPHEROID MODEL
# =============================================================================


class Spheroid(BaseModel):
    """
    Определение эллипсоида вращения.

    flattening = 0 задаёт сферу радиуса semi_major_axis.
    """

    name: str = Field(default="custom", description="Имя эллипсоида")
    semi_major_axis: float = Field(..., gt=0, description="Большая полуось a (м)")
    flattening: float = Field(
        default=0.0, ge=0, lt=1, description="Сжатие f = (a - b) / a"
    )

    model_config = {"frozen": True}

    @property
    def semi_minor_axis(self) -> float:
        """Малая полуось b = a (1 - f)."""
        return self.semi_major_axis * (1.0 - self.flattening)

    @property
    def is_sphere(self) -> bool:
        return self.flattening == 0.0


WGS84: Final[Spheroid] = Spheroid(
    name="WGS84", semi_major_axis=WGS84_A, flattening=WGS84_F
)


def sphere(radius: float = EARTH_MEAN_RADIUS_M, name: str = "sphere") -> Spheroid:
    """Сфера заданного радиуса (f = 0)."""
    return Spheroid(name=name, semi_major_axis=radius, flattening=0.0)


def unit_sphere() -> Spheroid:
    """Единичная сфера: площадь в стерадианах."""
    return sphere(1.0, name="unit_sphere")


# =============================================================================
# SPHEROID CONSTANTS
# =============================================================================


@dataclass(frozen=True)
class SpheroidConstants:
    """Производные константы эллипсоида (read-only)."""

    spheroid: Spheroid
    a2: float  # a²
    e2: float  # e²
    ep2: float  # e'²
    ep: float  # e'
    c2: float  # c² (авталический радиус²)

    def __post_init__(self) -> None:
        validate_positive(self.a2, "a2", eps=0.0)
        validate_in_range(self.e2, "e2", min_value=0.0)
        if self.e2 >= 1.0:
            raise ValueError(f"e2 must be < 1, got {self.e2}")
        expected_ep2 = self.e2 / (1.0 - self.e2)
        if not math.isclose(self.ep2, expected_ep2, rel_tol=1e-12, abs_tol=1e-15):
            raise ValueError(
                f"ep2 must equal e2 / (1 - e2) = {expected_ep2!r}, got {self.ep2!r}"
            )
        validate_positive(self.c2, "c2", eps=0.0)

    @classmethod
    def from_spheroid(cls, spheroid: Spheroid) -> "SpheroidConstants":
        """
        Вычисление констант из определения эллипсоида.

        Args:
            spheroid: Определение эллипсоида

        Returns:
            SpheroidConstants с a², e², e'², e', c²
        """
        a = spheroid.semi_major_axis
        b = spheroid.semi_minor_axis
        f = spheroid.flattening

        a2 = a * a
        e2 = f * (2.0 - f)
        ep2 = e2 / (1.0 - e2)
        ep = math.sqrt(ep2)

        if e2 == 0.0:
            c2 = a2
        else:
            e = math.sqrt(e2)
            c2 = a2 / 2.0 + (b * b / 2.0) * math.atanh(e) / e

        return cls(spheroid=spheroid, a2=a2, e2=e2, ep2=ep2, ep=ep, c2=c2)

    @property
    def authalic_radius(self) -> float:
        return math.sqrt(self.c2)

    @property
    def is_sphere(self) -> bool:
        return self.e2 == 0.0
