"""
Circular Gradient

A gradient is a ring of control points on [0, 1). Looking up a position finds
the pair of neighbouring points around it (the last point pairs with the
first, across the wrap) and blends their colors in linear light.
"""

from dataclasses import dataclass
from typing import Iterator, List, Sequence

from ..fastmath import wrap
from .color import Color, LinearColor


@dataclass(frozen=True)
class ControlPoint:
    """A color anchored at a position on the gradient ring"""
    color: LinearColor
    position: float

    def __post_init__(self):
        object.__setattr__(self, 'position', float(wrap(self.position)))

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int, position: float) -> 'ControlPoint':
        """Create from a gamma-encoded color"""
        return cls(Color(r, g, b).to_linear(), position)

    def lerp(self, other: 'ControlPoint', position: float) -> LinearColor:
        """Color at position, moving from self toward other in the positive direction"""
        distance = wrap(other.position - self.position)
        if distance <= 0.0:
            raise ValueError(
                f"Control points at {self.position} and {other.position} span no interval"
            )
        adj_position = wrap(position - self.position) / distance
        return self.color.lerp(other.color, adj_position)


@dataclass(frozen=True)
class Subgradient:
    """The stretch of gradient between two neighbouring control points"""
    point1: ControlPoint
    point2: ControlPoint

    def contains(self, position: float) -> bool:
        """Inclusive on both ends; crosses 0.0 when point1 is past point2"""
        p = wrap(position)
        start = self.point1.position
        end = self.point2.position
        if start <= end:
            return start <= p <= end
        return p <= end or start <= p

    def get_color(self, position: float) -> LinearColor:
        if not self.contains(position):
            raise ValueError(
                f"Position {position} is outside [{self.point1.position}, {self.point2.position}]"
            )
        return self.point1.lerp(self.point2, position)


class Gradient:
    """
    Ordered ring of at least two control points.

    Points are sorted by position and points sharing a position are dropped
    (the first one wins), so every neighbouring pair spans a real interval.
    With no points the gradient is solid gray; with one point it is solid in
    that point's color.
    """

    def __init__(self, control_points: Sequence[ControlPoint]):
        points: List[ControlPoint] = []
        for point in sorted(control_points, key=lambda cp: cp.position):
            if points and points[-1].position == point.position:
                continue
            points.append(point)

        if not points:
            points.append(ControlPoint.from_rgb(128, 128, 128, 0.0))
        if len(points) == 1:
            only = points[0]
            points.append(ControlPoint(only.color, only.position + 0.5))
            points.sort(key=lambda cp: cp.position)

        self._points = tuple(points)

    @property
    def points(self) -> List[ControlPoint]:
        return list(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def subgradients(self) -> Iterator[Subgradient]:
        """Neighbouring pairs, starting with the one that wraps (last -> first)"""
        count = len(self._points)
        for i in range(count):
            yield Subgradient(self._points[i - 1], self._points[i])

    def get_color(self, position: float) -> LinearColor:
        pos = wrap(position)
        for subgradient in self.subgradients():
            if subgradient.contains(pos):
                return subgradient.get_color(pos)
        # The pairs cover the whole ring
        raise RuntimeError(f"No subgradient contains position {pos}")

    def sample(self, count: int) -> List[LinearColor]:
        """Colors at count evenly spaced positions, starting at 0.0"""
        step = 1.0 / count
        return [self.get_color(i * step) for i in range(count)]
