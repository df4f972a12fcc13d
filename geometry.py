from dataclasses import dataclass, field
from enum import IntEnum
from fractions import Fraction
from numbers import Real
from typing import Callable, Iterable, Sequence


@dataclass(frozen=True, order=True)
class Point:
    x: Real
    y: Real
    id: int | None = field(default=None, compare=False)

    def __repr__(self):
        if self.id is None:
            return f'Point({self.x}, {self.y})'
        return f'Point({self.x}, {self.y}, id={self.id})'


class Orientation(IntEnum):
    CLOCKWISE = -1
    COLLINEAR = 0
    COUNTERCLOCKWISE = 1


def cross(o: Point, a: Point, b: Point) -> Real:
    """
    Cross product of segments oa and ob.
    """
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def orientation(a: Point, b: Point, p: Point) -> Orientation:
    """
    Turn made by a -> b -> p, from the sign of cross(a, b, p).
    Uses the native arithmetic of the coordinates.
    """
    value = cross(a, b, p)
    if value > 0:
        return Orientation.COUNTERCLOCKWISE
    if value < 0:
        return Orientation.CLOCKWISE
    return Orientation.COLLINEAR


Predicate = Callable[[Point, Point, Point], Orientation]


class OrientationPredicate:
    """
    Configurable orientation test.

    With `exact` set, coordinates are converted to Fraction before the cross
    product is taken, so float input gets exact signs. Otherwise the cross
    product is computed natively and any value within `eps` of zero is
    reported as collinear.
    """

    def __init__(self, eps: float = 0.0, exact: bool = False):
        if eps < 0:
            raise ValueError(f'eps must be non-negative, got {eps}')
        self.eps = eps
        self.exact = exact

    def __call__(self, a: Point, b: Point, p: Point) -> Orientation:
        if self.exact:
            ax, ay = Fraction(a.x), Fraction(a.y)
            value = (Fraction(b.x) - ax) * (Fraction(p.y) - ay) - (Fraction(b.y) - ay) * (Fraction(p.x) - ax)
        else:
            value = cross(a, b, p)
        if value > self.eps:
            return Orientation.COUNTERCLOCKWISE
        if value < -self.eps:
            return Orientation.CLOCKWISE
        return Orientation.COLLINEAR

    def __repr__(self):
        return f'OrientationPredicate(eps={self.eps}, exact={self.exact})'


def sort_points(points: Iterable[Point]) -> list[Point]:
    """
    Sort points by x, ties broken by y. The sort is stable,
    so points with equal coordinates stay adjacent in input order.
    """
    return sorted(points, key=lambda p: (p.x, p.y))


def unique_points(points: Sequence[Point]) -> list[Point]:
    """
    Drop repeated coordinates from a sorted sequence,
    keeping the first Point object of each run.
    """
    unique = []
    for p in points:
        if unique and unique[-1].x == p.x and unique[-1].y == p.y:
            continue
        unique.append(p)
    return unique


def as_points(pairs: Iterable[Sequence[Real]]) -> list[Point]:
    """
    Wrap coordinate pairs (tuples, lists, rows of a numpy array)
    into points numbered by their position.
    """
    return [Point(pair[0], pair[1], i) for i, pair in enumerate(pairs)]


def convex_hull_andrew(points: Sequence[Point], predicate: Predicate = orientation) -> list[Point]:
    """
    Andrew's monotone chain algorithm for convex hull.
    Assumes input is sorted by (x, y) without duplicates. Time complexity: O(n).
    Returns the hull in CCW order starting from the smallest point,
    collinear boundary points excluded.
    """
    if len(points) <= 2:
        return list(points)

    lower = []  # lower hull
    for p in points:
        while len(lower) >= 2 and predicate(lower[-2], lower[-1], p) != Orientation.COUNTERCLOCKWISE:
            lower.pop()
        lower.append(p)

    upper = []  # upper hull
    for p in reversed(points):
        while len(upper) >= 2 and predicate(upper[-2], upper[-1], p) != Orientation.COUNTERCLOCKWISE:
            upper.pop()
        upper.append(p)

    return lower[:-1] + upper[:-1]
