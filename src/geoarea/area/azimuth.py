"""
Azimuth strategies — прямой/обратный азимут геодезической

Три взаимозаменяемых inverse-решателя (только азимуты, без расстояния):
- ANDOYER:  поправка первого порядка по f к сферическому решению (дешёвый)
- THOMAS:   поправка второго порядка по f (средний)
- VINCENTY: итерационный inverse Vincenty (1975) (точный, дорогой)

Контракт: apply(lon1, lat1, lon2, lat2, spheroid) -> AzimuthResult
- azimuth:         азимут геодезической в P1 (радианы, от севера по часовой)
- reverse_azimuth: азимут той же геодезической в P2 (направление движения)

Совпадающие точки дают AzimuthResult(0.0, 0.0).
"""

import math
from enum import Enum
from typing import Final, NamedTuple, Protocol

from geoarea.core.domain.spheroid import Spheroid
from geoarea.core.math.numerical_safeguards import EPS_MACHINE, HALF_PI, clamp, is_zero


# =============================================================================
# CONSTANTS
# =============================================================================

# Vincenty: максимум итераций и порог сходимости по λ
VINCENTY_MAX_ITER: Final[int] = 200
VINCENTY_TOL: Final[float] = 1e-12

# Thomas: Q ∝ tan(Δλ) вырождается при Δλ → ±90°, ниже порога |cos Δλ| решает Vincenty
THOMAS_COS_DLON_MIN: Final[float] = 1e-1


# =============================================================================
# TYPES
# =============================================================================


class AzimuthResult(NamedTuple):
    """Азимуты геодезической P1 → P2 (радианы)."""

    azimuth: float
    reverse_azimuth: float


class AzimuthStrategy(Protocol):
    """Inverse-решатель азимутов."""

    def apply(
        self, lon1: float, lat1: float, lon2: float, lat2: float, spheroid: Spheroid
    ) -> AzimuthResult:
        ...


class AzimuthBackend(str, Enum):
    """Выбор inverse-решателя азимутов."""

    ANDOYER = "ANDOYER"
    THOMAS = "THOMAS"
    VINCENTY = "VINCENTY"


class AzimuthConvergenceError(ArithmeticError):
    """
    Итерации Vincenty не сошлись (практически только для почти
    антиподальных точек).
    """
    pass


_COINCIDENT: Final[AzimuthResult] = AzimuthResult(0.0, 0.0)


# =============================================================================
# ANDOYER
# =============================================================================


class AndoyerAzimuth:
    """
    Andoyer-Lambert: сферические азимуты + поправка первого порядка по f.

    Сферические A (в P1) и B (в P2, обратное направление) корректируются
    членами U, V, умноженными на T = d / sin(d).
    """

    def apply(
        self, lon1: float, lat1: float, lon2: float, lat2: float, spheroid: Spheroid
    ) -> AzimuthResult:
        if lon1 == lon2 and lat1 == lat2:
            return _COINCIDENT

        f = spheroid.flattening

        dlon = lon2 - lon1
        sin_dlon = math.sin(dlon)
        cos_dlon = math.cos(dlon)
        sin_lat1 = math.sin(lat1)
        cos_lat1 = math.cos(lat1)
        sin_lat2 = math.sin(lat2)
        cos_lat2 = math.cos(lat2)

        # cos_d может выйти за [-1, 1] из-за округления
        cos_d = clamp(sin_lat1 * sin_lat2 + cos_lat1 * cos_lat2 * cos_dlon, -1.0, 1.0)
        d = math.acos(cos_d)
        sin_d = math.sin(d)

        # Антиподальные точки (в т.ч. полюса): T = inf
        if is_zero(sin_d, EPS_MACHINE):
            azimuth = 0.0 if lat1 <= lat2 else math.pi
            return AzimuthResult(azimuth, azimuth)

        A = 0.0
        U = 0.0
        if not is_zero(cos_lat2, EPS_MACHINE):
            M = cos_lat1 * math.tan(lat2) - sin_lat1 * cos_dlon
            A = math.atan2(sin_dlon, M)
            U = (f / 2.0) * cos_lat1 * cos_lat1 * math.sin(2.0 * A)

        B = 0.0
        V = 0.0
        if not is_zero(cos_lat1, EPS_MACHINE):
            N = cos_lat2 * math.tan(lat1) - sin_lat2 * cos_dlon
            B = math.atan2(sin_dlon, N)
            V = (f / 2.0) * cos_lat2 * cos_lat2 * math.sin(2.0 * B)

        T = d / sin_d
        dA = V * T - U
        dB = -U * T + V

        return AzimuthResult(A - dA, math.pi - B - dB)


# =============================================================================
# THOMAS
# =============================================================================


class ThomasAzimuth:
    """
    Thomas (1970): поправка второго порядка по f.

    Работает на приведённых широтах θ = atan((1 - f) tan φ), полусуммах
    θm и полуразностях Δθm; азимуты из u, v через скорректированную
    полуразность долгот (Δλ + Q) / 2.

    Q содержит tan(Δλ), поэтому при |cos Δλ| < THOMAS_COS_DLON_MIN
    сегмент передаётся VincentyAzimuth.
    """

    def apply(
        self, lon1: float, lat1: float, lon2: float, lat2: float, spheroid: Spheroid
    ) -> AzimuthResult:
        if lon1 == lon2 and lat1 == lat2:
            return _COINCIDENT

        f = spheroid.flattening
        one_minus_f = 1.0 - f

        theta1 = lat1 if abs(lat1) == HALF_PI else math.atan(one_minus_f * math.tan(lat1))
        theta2 = lat2 if abs(lat2) == HALF_PI else math.atan(one_minus_f * math.tan(lat2))

        theta_m = (theta1 + theta2) / 2.0
        d_theta_m = (theta2 - theta1) / 2.0
        d_lambda = lon2 - lon1
        if abs(math.cos(d_lambda)) < THOMAS_COS_DLON_MIN:
            return VincentyAzimuth().apply(lon1, lat1, lon2, lat2, spheroid)

        d_lambda_m = d_lambda / 2.0

        sin_theta_m = math.sin(theta_m)
        cos_theta_m = math.cos(theta_m)
        sin_d_theta_m = math.sin(d_theta_m)
        cos_d_theta_m = math.cos(d_theta_m)
        sin2_theta_m = sin_theta_m * sin_theta_m
        cos2_theta_m = cos_theta_m * cos_theta_m
        sin2_d_theta_m = sin_d_theta_m * sin_d_theta_m
        cos2_d_theta_m = cos_d_theta_m * cos_d_theta_m
        sin_d_lambda_m = math.sin(d_lambda_m)
        sin2_d_lambda_m = sin_d_lambda_m * sin_d_lambda_m

        H = cos2_theta_m - sin2_d_theta_m
        L = sin2_d_theta_m + H * sin2_d_lambda_m
        cos_d = clamp(1.0 - 2.0 * L, -1.0, 1.0)
        d = math.acos(cos_d)
        sin_d = math.sin(d)

        one_minus_L = 1.0 - L

        if (
            is_zero(sin_d, EPS_MACHINE)
            or is_zero(L, EPS_MACHINE)
            or is_zero(one_minus_L, EPS_MACHINE)
        ):
            return _COINCIDENT

        U = 2.0 * sin2_theta_m * cos2_d_theta_m / one_minus_L
        V = 2.0 * sin2_d_theta_m * cos2_theta_m / L
        X = U + V
        Y = U - V
        T = d / sin_d
        D = 4.0 * T * T
        E = 2.0 * cos_d
        A = D * E
        B = 2.0 * D

        F = 2.0 * Y - E * (4.0 - X)
        M = 32.0 * T - (20.0 * T - A) * X - (B + 4.0) * Y
        G = f * T / 2.0 + f * f * M / 64.0
        Q = -(F * G * math.tan(d_lambda)) / 4.0
        d_lambda_m_p = (d_lambda + Q) / 2.0
        tan_d_lambda_m_p = math.tan(d_lambda_m_p)

        v = math.atan2(cos_d_theta_m, sin_theta_m * tan_d_lambda_m_p)
        u = math.atan2(-sin_d_theta_m, cos_theta_m * tan_d_lambda_m_p)

        alpha1 = v + u
        if alpha1 > math.pi:
            alpha1 -= 2.0 * math.pi

        alpha2 = math.pi - (v - u)
        if alpha2 > math.pi:
            alpha2 -= 2.0 * math.pi

        return AzimuthResult(alpha1, alpha2)


# =============================================================================
# VINCENTY
# =============================================================================


class VincentyAzimuth:
    """
    Vincenty inverse (1975): итерация по λ на вспомогательной сфере.

    Raises:
        AzimuthConvergenceError: если итерации не сошлись за max_iter
    """

    def __init__(self, max_iter: int = VINCENTY_MAX_ITER, tol: float = VINCENTY_TOL):
        self.max_iter = max_iter
        self.tol = tol

    def apply(
        self, lon1: float, lat1: float, lon2: float, lat2: float, spheroid: Spheroid
    ) -> AzimuthResult:
        if lon1 == lon2 and lat1 == lat2:
            return _COINCIDENT

        f = spheroid.flattening
        L = lon2 - lon1

        # Приведённые широты
        U1 = math.atan((1.0 - f) * math.tan(lat1))
        U2 = math.atan((1.0 - f) * math.tan(lat2))
        sin_U1, cos_U1 = math.sin(U1), math.cos(U1)
        sin_U2, cos_U2 = math.sin(U2), math.cos(U2)

        lam = L
        sin_lam = cos_lam = 0.0

        for _ in range(self.max_iter):
            sin_lam, cos_lam = math.sin(lam), math.cos(lam)
            sin_sigma = math.sqrt(
                (cos_U2 * sin_lam) ** 2
                + (cos_U1 * sin_U2 - sin_U1 * cos_U2 * cos_lam) ** 2
            )
            if sin_sigma == 0.0:
                return _COINCIDENT

            cos_sigma = sin_U1 * sin_U2 + cos_U1 * cos_U2 * cos_lam
            sigma = math.atan2(sin_sigma, cos_sigma)
            sin_alpha = cos_U1 * cos_U2 * sin_lam / sin_sigma
            cos2_alpha = 1.0 - sin_alpha * sin_alpha

            if cos2_alpha != 0.0:
                cos_2sigma_m = cos_sigma - 2.0 * sin_U1 * sin_U2 / cos2_alpha
            else:
                cos_2sigma_m = 0.0  # экваториальная линия

            C = (f / 16.0) * cos2_alpha * (4.0 + f * (4.0 - 3.0 * cos2_alpha))
            lam_next = L + (1.0 - C) * f * sin_alpha * (
                sigma + C * sin_sigma * (
                    cos_2sigma_m + C * cos_sigma * (-1.0 + 2.0 * cos_2sigma_m ** 2)
                )
            )
            if abs(lam_next - lam) < self.tol:
                lam = lam_next
                sin_lam, cos_lam = math.sin(lam), math.cos(lam)
                break
            lam = lam_next
        else:
            raise AzimuthConvergenceError(
                f"Vincenty inverse did not converge in {self.max_iter} iterations "
                f"for ({lon1:.12f}, {lat1:.12f}) -> ({lon2:.12f}, {lat2:.12f})"
            )

        alpha1 = math.atan2(cos_U2 * sin_lam, cos_U1 * sin_U2 - sin_U1 * cos_U2 * cos_lam)
        alpha2 = math.atan2(cos_U1 * sin_lam, -sin_U1 * cos_U2 + cos_U1 * sin_U2 * cos_lam)

        return AzimuthResult(alpha1, alpha2)


# =============================================================================
# REGISTRY
# =============================================================================


_STRATEGIES: Final[dict[AzimuthBackend, type]] = {
    AzimuthBackend.ANDOYER: AndoyerAzimuth,
    AzimuthBackend.THOMAS: ThomasAzimuth,
    AzimuthBackend.VINCENTY: VincentyAzimuth,
}


def get_azimuth_strategy(backend: AzimuthBackend) -> AzimuthStrategy:
    """
    Экземпляр inverse-решателя для выбранного backend.

    Args:
        backend: AzimuthBackend (или его строковое значение)

    Returns:
        Объект с методом apply(lon1, lat1, lon2, lat2, spheroid)
    """
    return _STRATEGIES[AzimuthBackend(backend)]()
