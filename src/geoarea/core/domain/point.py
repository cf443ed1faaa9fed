"""
GeoPoint / Segment — географические точки и сегменты кольца

Точки принадлежат вызывающему коду; ядро их только читает.
Все координаты в радианах: lon (долгота), lat (широта).
"""

from typing import NamedTuple


class GeoPoint(NamedTuple):
    """Вершина кольца: (lon, lat) в радианах."""

    lon: float
    lat: float


class Segment(NamedTuple):
    """
    Упорядоченная пара соседних вершин кольца (P1 → P2).

    Transient: создаётся при обходе кольца и не сохраняется.
    Направление значимо: сегмент P2 → P1 даёт вклад в площадь с обратным знаком.
    """

    p1: GeoPoint
    p2: GeoPoint
