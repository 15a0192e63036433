"""Connector curve construction and sampling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

Point = Tuple[float, float]

CONTROL_OFFSET_RATIO = 0.25
_DEFAULT_STEPS = 32


@dataclass(frozen=True)
class CubicCurve:
    """Cubic Bezier from ``start`` to ``end``."""

    start: Point
    control1: Point
    control2: Point
    end: Point

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end

    @property
    def extent(self) -> float:
        """Chord length between the endpoints."""
        return float(np.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1]))

    def point_at(self, t: float) -> Point:
        u = 1.0 - t
        b0, b1, b2, b3 = u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t
        x = b0 * self.start[0] + b1 * self.control1[0] + b2 * self.control2[0] + b3 * self.end[0]
        y = b0 * self.start[1] + b1 * self.control1[1] + b2 * self.control2[1] + b3 * self.end[1]
        return (x, y)

    def to_svg_path(self) -> str:
        (x1, y1), (c1x, c1y), (c2x, c2y), (x2, y2) = (
            self.start,
            self.control1,
            self.control2,
            self.end,
        )
        return f"M {x1:g} {y1:g} C {c1x:g} {c1y:g} {c2x:g} {c2y:g} {x2:g} {y2:g}"


def curve_between(p1: Point, p2: Point) -> CubicCurve:
    """Build the connector curve between two anchors.

    Control points keep the ``y`` of their endpoint and sit a quarter of the
    horizontal distance inwards, so the curve stays monotonic in ``x``.
    """

    x1, y1 = float(p1[0]), float(p1[1])
    x2, y2 = float(p2[0]), float(p2[1])
    offset = abs(x2 - x1) * CONTROL_OFFSET_RATIO
    direction = 1.0 if x2 > x1 else -1.0
    return CubicCurve(
        start=(x1, y1),
        control1=(x1 + direction * offset, y1),
        control2=(x2 - direction * offset, y2),
        end=(x2, y2),
    )


def sample_curve(curve: CubicCurve, steps: int = _DEFAULT_STEPS) -> np.ndarray:
    """Return ``steps + 1`` points along ``curve`` as an ``(N, 2)`` array."""

    steps = max(1, int(steps))
    t = np.linspace(0.0, 1.0, num=steps + 1)[:, None]
    u = 1.0 - t
    pts = np.array([curve.start, curve.control1, curve.control2, curve.end], dtype=float)
    return (
        (u ** 3) * pts[0]
        + 3.0 * (u ** 2) * t * pts[1]
        + 3.0 * u * (t ** 2) * pts[2]
        + (t ** 3) * pts[3]
    )


def distance_to_curve(point: Point, curve: CubicCurve, steps: int = _DEFAULT_STEPS) -> float:
    """Minimum distance from ``point`` to the sampled polyline of ``curve``."""

    samples = sample_curve(curve, steps)
    p = np.asarray(point, dtype=float)
    a = samples[:-1]
    b = samples[1:]
    ab = b - a
    denom = np.einsum("ij,ij->i", ab, ab)
    safe = np.where(denom > 0.0, denom, 1.0)
    t = np.clip(np.einsum("ij,ij->i", p - a, ab) / safe, 0.0, 1.0)
    t = np.where(denom > 0.0, t, 0.0)
    closest = a + ab * t[:, None]
    return float(np.min(np.hypot(closest[:, 0] - p[0], closest[:, 1] - p[1])))
