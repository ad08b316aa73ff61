from __future__ import annotations

import math
from typing import Tuple, Union

from .model import Node

Point = Union[Node, Tuple[float, float]]


def _xy(point: Point) -> Tuple[float, float]:
    if isinstance(point, Node):
        return point.x, point.y
    x, y = point
    return float(x), float(y)


def _vec2(a: Tuple[float, float], b: Tuple[float, float]) -> Tuple[float, float]:
    return b[0] - a[0], b[1] - a[1]


def _dot2(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return a[0] * b[0] + a[1] * b[1]


def point_distance(p: Point, q: Point) -> float:
    """Euclidean distance between two planar points."""

    px, py = _xy(p)
    qx, qy = _xy(q)
    return math.hypot(px - qx, py - qy)


def segment_distance(p: Point, v: Point, w: Point) -> float:
    """Shortest distance from ``p`` to the segment ``v``-``w``."""

    pp, vv, ww = _xy(p), _xy(v), _xy(w)
    direction = _vec2(vv, ww)
    length_sq = _dot2(direction, direction)
    if length_sq == 0.0:
        return point_distance(pp, vv)
    t = _dot2(_vec2(vv, pp), direction) / length_sq
    t = max(0.0, min(1.0, t))
    projection = (vv[0] + t * direction[0], vv[1] + t * direction[1])
    return point_distance(pp, projection)


def heuristic_units(distance: float, scale: float) -> int:
    """Scaled distance rounded down, used for heuristic values."""

    return int(math.floor(distance / scale))


def weight_units(distance: float, scale: float) -> int:
    """Scaled distance rounded up, used for edge weights.

    Rounding weights up while heuristics round down keeps the heuristic
    admissible along multi-edge paths.
    """

    return int(math.ceil(distance / scale))


__all__ = [
    "Point",
    "point_distance",
    "segment_distance",
    "heuristic_units",
    "weight_units",
]
