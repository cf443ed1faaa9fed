"""
Numerical Safeguards — угловые и float примитивы

Модуль обеспечивает общие численные примитивы для геодезических расчётов:
- Epsilon-параметры для углов (радианы) и сравнений float
- Нормализация долготы в [0, 2π)
- Epsilon-проверки float (ноль, полюс)
- Валидация параметров конфигурации

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все углы в радианах
2. NaN/Inf НЕ маскируются: вычислительные функции пропагируют их вызывающему
3. Валидаторы отвергают NaN/Inf явным ValueError
4. Все операции детерминированы и воспроизводимы
"""

import math
import sys
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Машинный epsilon (для проверок точного вырождения: sin(d) = 0, cos(φ) = 0)
EPS_MACHINE: Final[float] = sys.float_info.epsilon

# Epsilon для общих вычислений и сравнений
EPS_CALC: Final[float] = 1e-12

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Угловая толерантность для распознавания полюса (радианы, ~6e-6 угл. сек.)
POLE_EPS: Final[float] = 1e-12

TWO_PI: Final[float] = 2.0 * math.pi
HALF_PI: Final[float] = 0.5 * math.pi


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def is_zero(value: float, tol: float = EPS_FLOAT_COMPARE_ABS) -> bool:
    """
    Проверка, близко ли значение к нулю с учётом толерантности.

    Args:
        value: Проверяемое значение
        tol: Абсолютная толерантность (default: EPS_FLOAT_COMPARE_ABS)

    Returns:
        True если abs(value) <= tol
    """
    return abs(value) <= tol


def is_pole(lat: float, tol: float = POLE_EPS) -> bool:
    """
    Проверка, лежит ли широта на полюсе (±π/2) с учётом толерантности.

    Args:
        lat: Широта (радианы)
        tol: Угловая толерантность (default: POLE_EPS)

    Returns:
        True если abs(abs(lat) - π/2) <= tol
    """
    return abs(abs(lat) - HALF_PI) <= tol


# =============================================================================
# НОРМАЛИЗАЦИЯ УГЛОВ
# =============================================================================


def normalize_longitude_positive(lon: float) -> float:
    """
    Нормализация долготы в [0, 2π).

    Формула: lon - floor(lon / 2π) * 2π
    (floor через //: NaN пропагируется без исключения)

    Args:
        lon: Долгота (радианы, любой диапазон)

    Returns:
        Долгота в [0, 2π)

    Examples:
        >>> normalize_longitude_positive(-math.pi / 2)  # doctest: +ELLIPSIS
        4.712...
        >>> normalize_longitude_positive(0.0)
        0.0
    """
    return lon - (lon // TWO_PI) * TWO_PI


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value]

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.5, -1.0, 1.0)
        -1.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: float, name: str, eps: float = EPS_CALC) -> None:
    """
    Валидация, что значение положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        eps: Минимальный порог (default: EPS_CALC)

    Raises:
        ValueError: Если value <= eps или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= eps:
        raise ValueError(f"{name} must be positive (> {eps}), got {value}")


def validate_in_range(
    value: float,
    name: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> None:
    """
    Валидация, что значение в заданном диапазоне (границы включительно).

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Raises:
        ValueError: Если value вне диапазона или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if min_value is not None and value < min_value:
        raise ValueError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and value > max_value:
        raise ValueError(f"{name} must be <= {max_value}, got {value}")
