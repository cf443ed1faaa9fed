"""
Ring helpers — обход кольца как последовательности сегментов

Минимальная замена внешнего ring-traversal: порядок вершин и ориентация
берутся как есть (без нормализации), замыкание кольца может быть явным
(последняя вершина == первой) или неявным.
"""

import math
from typing import Iterable, Iterator, Sequence

from geoarea.core.domain.point import GeoPoint, Segment


def as_points(points: Iterable[Sequence[float]]) -> list[GeoPoint]:
    """Приведение пар (lon, lat) в радианах к списку GeoPoint."""
    return [p if isinstance(p, GeoPoint) else GeoPoint(float(p[0]), float(p[1])) for p in points]


def to_radians(points_deg: Iterable[Sequence[float]]) -> list[GeoPoint]:
    """Конверсия пар (lon, lat) в градусах в GeoPoint в радианах."""
    return [GeoPoint(math.radians(p[0]), math.radians(p[1])) for p in points_deg]


def is_explicitly_closed(points: Sequence[GeoPoint]) -> bool:
    return len(points) > 1 and points[0] == points[-1]


def distinct_vertex_count(points: Sequence[GeoPoint]) -> int:
    """Количество различных вершин кольца (без учёта замыкающей)."""
    return len(set(points))


def iter_segments(points: Sequence[GeoPoint]) -> Iterator[Segment]:
    """
    Сегменты кольца в порядке обхода, включая замыкающий.

    Для неявно замкнутого кольца добавляется сегмент (last → first).
    Пустое кольцо и кольцо из одной точки дают пустую последовательность.

    Args:
        points: Вершины кольца

    Yields:
        Segment для каждой пары соседних вершин
    """
    n = len(points)
    if n < 2:
        return

    for i in range(n - 1):
        yield Segment(points[i], points[i + 1])

    if not is_explicitly_closed(points):
        yield Segment(points[-1], points[0])


def reverse_ring(points: Sequence[GeoPoint]) -> list[GeoPoint]:
    """Кольцо с обратным порядком обхода."""
    return list(reversed(points))
