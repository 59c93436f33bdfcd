"""
Geometry Kernel

Closed-form planar geometry used by the cephalometric analyzer.
All functions are pure; coordinates are image pixels.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np

from medtriage.utils import DegenerateGeometryError


@dataclass(frozen=True)
class Point:
    """A 2-D point in image pixel coordinates."""
    x: float
    y: float

    def scaled(self, width: float, height: float) -> "Point":
        """Map a normalized [0, 1] point onto an image of the given size."""
        return Point(self.x * width, self.y * height)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


def _check_finite(*points: Point) -> None:
    for p in points:
        if not (np.isfinite(p.x) and np.isfinite(p.y)):
            raise DegenerateGeometryError(
                f"Non-finite coordinate ({p.x}, {p.y})",
                details={"point": {"x": p.x, "y": p.y}},
            )


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return float(np.hypot(p2.x - p1.x, p2.y - p1.y))


def angle(vertex: Point, p1: Point, p2: Point) -> float:
    """
    Angle at ``vertex`` between the rays to ``p1`` and ``p2``, in degrees.

    Both rays are scaled to unit length first and the angle is taken from
    ``arctan2(|cross|, dot)``, so the result lies in [0, 180] for any
    coordinate magnitude. Raises DegenerateGeometryError when any two points
    coincide, a coordinate is not finite, or a ray is too long to represent.
    """
    _check_finite(vertex, p1, p2)

    details = {
        "vertex": vertex.to_dict(),
        "p1": p1.to_dict(),
        "p2": p2.to_dict(),
    }

    u = np.array([p1.x - vertex.x, p1.y - vertex.y], dtype=float)
    v = np.array([p2.x - vertex.x, p2.y - vertex.y], dtype=float)
    a = float(np.hypot(*u))
    b = float(np.hypot(*v))

    if not (np.isfinite(a) and np.isfinite(b)):
        raise DegenerateGeometryError("Angle undefined: ray length overflows", details=details)

    if a == 0.0 or b == 0.0 or distance(p1, p2) == 0.0:
        raise DegenerateGeometryError("Angle undefined: two or more points coincide", details=details)

    u /= a
    v /= b
    cross = u[0] * v[1] - u[1] * v[0]
    dot = u[0] * v[0] + u[1] * v[1]
    return float(np.degrees(np.arctan2(abs(cross), dot)))
