import logging
import time

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from geometry import Orientation, OrientationPredicate, Point, sort_points, unique_points

logger = logging.getLogger(__name__)

STRATEGIES = ('recursive', 'iterative', 'parallel')


class PreconditionViolation(ValueError):
    """Raised when the hull builder is called outside its contract."""


@dataclass
class HullConfig:
    eps: float = 0.0
    exact: bool = False
    strategy: str = 'recursive'
    workers: int = 4
    parallel_depth: int = 2
    check_invariants: bool = False

    def predicate(self) -> OrientationPredicate:
        return OrientationPredicate(eps=self.eps, exact=self.exact)


def validate_hull(hull: Sequence[Point], predicate=None):
    """
    Check that hull is non-empty, has no repeated vertex
    and turns strictly counter-clockwise at every vertex.
    """
    predicate = predicate or OrientationPredicate()
    if len(hull) == 0:
        raise PreconditionViolation('hull is empty')
    if len(set(hull)) != len(hull):
        raise PreconditionViolation(f'hull has repeated vertices: {hull}')
    if len(hull) < 3:
        return
    for k in range(len(hull)):
        a, b, c = hull[k - 2], hull[k - 1], hull[k]
        if predicate(a, b, c) != Orientation.COUNTERCLOCKWISE:
            raise PreconditionViolation(f'hull is not strictly convex in CCW order at {b}')


class HullBuilder:
    def __init__(self, config: HullConfig | None = None):
        self.config = config or HullConfig()
        if self.config.strategy not in STRATEGIES:
            raise PreconditionViolation(
                f'unknown strategy {self.config.strategy!r}, expected one of {STRATEGIES}'
            )
        self.orientation = self.config.predicate()
        self.tree_height: int = 0

    def base_hull(self, points: Sequence[Point]) -> list[Point]:
        """
        Hull of one to three distinct points sorted by x, y.
        Three collinear points collapse to the two extremes.
        """
        if not 1 <= len(points) <= 3:
            raise PreconditionViolation(f'base case needs 1 to 3 points, got {len(points)}')
        if len(points) < 3:
            return list(points)

        a, b, c = points
        turn = self.orientation(a, b, c)
        if turn == Orientation.COLLINEAR:
            return [a, c]
        if turn == Orientation.CLOCKWISE:
            return self.prune([c, b, a])
        return self.prune([a, b, c])

    @staticmethod
    def extreme_indices(left: list[Point], right: list[Point]) -> tuple[int, int]:
        """
        Index of the largest vertex of left and the smallest vertex of right.
        """
        i = max(range(len(left)), key=lambda k: left[k])
        j = min(range(len(right)), key=lambda k: right[k])
        return i, j

    def slide(self, hull: list[Point], idx: int, step: int, anchor: Point, outward: bool) -> int:
        """
        Move a tangent endpoint along the tangent line over collinear vertices
        while they lie further from anchor. `outward` tells whether further
        means lexicographically larger (right hull) or smaller (left hull).
        """
        size = len(hull)
        while True:
            nxt = (idx + step) % size
            cand = hull[nxt]
            if self.orientation(anchor, hull[idx], cand) != Orientation.COLLINEAR:
                return idx
            if (hull[idx] < cand) != outward or cand == hull[idx]:
                return idx
            idx = nxt

    def upper_tangent(self, left: list[Point], right: list[Point]) -> tuple[int, int]:
        """
        Find upper tangent of two CCW convex hulls.
        Assuming every point of left is smaller (by x, then y) than every point of right.

        Left index walks counter-clockwise and right index walks clockwise
        while the next vertex lies strictly above the current line.
        Collinear vertices never rotate the line; once it is settled, both ends
        are slid outward so that the tangent joins the extreme points on it.

        Time complexity: O(n + m), where n and m are the lengths of convex hulls.
        """
        n, m = len(left), len(right)
        i, j = self.extreme_indices(left, right)

        update = True
        while update:
            update = False
            while self.orientation(right[j], left[i], left[(i + 1) % n]) == Orientation.CLOCKWISE:
                i = (i + 1) % n
                update = True

            while self.orientation(left[i], right[j], right[(j - 1) % m]) == Orientation.COUNTERCLOCKWISE:
                j = (j - 1) % m
                update = True

        i = self.slide(left, i, 1, right[j], outward=False)
        j = self.slide(right, j, -1, left[i], outward=True)
        return i, j

    def lower_tangent(self, left: list[Point], right: list[Point]) -> tuple[int, int]:
        """
        Find lower tangent of two CCW convex hulls.
        Mirror of `upper_tangent`: left index walks clockwise, right index counter-clockwise.
        """
        n, m = len(left), len(right)
        i, j = self.extreme_indices(left, right)

        update = True
        while update:
            update = False
            while self.orientation(right[j], left[i], left[(i - 1) % n]) == Orientation.COUNTERCLOCKWISE:
                i = (i - 1) % n
                update = True

            while self.orientation(left[i], right[j], right[(j + 1) % m]) == Orientation.CLOCKWISE:
                j = (j + 1) % m
                update = True

        i = self.slide(left, i, -1, right[j], outward=False)
        j = self.slide(right, j, 1, left[i], outward=True)
        return i, j

    @staticmethod
    def arc(hull: list[Point], start: int, stop: int) -> list[Point]:
        """
        Vertices of hull from start to stop inclusive, walking counter-clockwise.
        """
        arc = [hull[start]]
        k = start
        while k != stop:
            k = (k + 1) % len(hull)
            arc.append(hull[k])
        return arc

    def merge(self, left: list[Point], right: list[Point]) -> list[Point]:
        """
        Merge two separated CCW hulls into one.

        The outer arc of left runs counter-clockwise from the upper to the lower
        tangent vertex, the outer arc of right from the lower to the upper one.
        Everything between the tangents is dropped.
        """
        if len(left) == 0 or len(right) == 0:
            raise PreconditionViolation('cannot merge an empty hull')
        if self.config.check_invariants:
            validate_hull(left, self.orientation)
            validate_hull(right, self.orientation)

        upper_left, upper_right = self.upper_tangent(left, right)
        lower_left, lower_right = self.lower_tangent(left, right)

        merged = self.arc(left, upper_left, lower_left) + self.arc(right, lower_right, upper_right)
        merged = self.prune(merged)
        logger.debug('merged hulls of %d and %d vertices into %d', len(left), len(right), len(merged))
        return merged

    def prune(self, hull: list[Point]) -> list[Point]:
        """
        Drop vertices where the predicate does not see a strict CCW turn.

        With exact arithmetic the stitched hull is already strictly convex and
        nothing is removed. With an eps tolerance the bridge ends can come out
        flat or slightly reflex: a reflex vertex is dropped, and of a flat
        triple the point lying between the other two goes.
        """
        k = 0
        while len(hull) > 2 and k < len(hull):
            size = len(hull)
            triple = [(k - 1) % size, k, (k + 1) % size]
            turn = self.orientation(*(hull[idx] for idx in triple))
            if turn == Orientation.COUNTERCLOCKWISE:
                k += 1
                continue

            if turn == Orientation.CLOCKWISE:
                drop = k
            else:
                drop = sorted(triple, key=lambda idx: hull[idx])[1]
            del hull[drop]
            k = 0
        return hull

    def build(self, points: Sequence[Point], level: int = 0) -> list[Point]:
        """
        Build convex hull from a set of points recursively using divide and conquer strategy.
        Assuming points are already sorted by x and y and have no duplicates.

        On each recursion step, we divide a current set of points on left and right half
        by position, apply algorithm to both halves, and merge them along
        the upper and lower tangents.

        Time complexity: O(n*log(n))
        """
        self.tree_height = max(self.tree_height, level)

        if len(points) == 0:
            raise PreconditionViolation('cannot build the hull of an empty range')
        if len(points) <= 3:
            return self.base_hull(points)

        mid = len(points) // 2
        left_hull = self.build(points[:mid], level=level + 1)
        right_hull = self.build(points[mid:], level=level + 1)
        return self.merge(left_hull, right_hull)

    def build_iterative(self, points: Sequence[Point]) -> list[Point]:
        """
        Bottom-up variant of `build` without recursion: hull consecutive
        chunks of three points, then merge neighbouring hulls pairwise
        until one is left.
        """
        if len(points) == 0:
            raise PreconditionViolation('cannot build the hull of an empty range')

        hulls = [self.base_hull(points[k:k + 3]) for k in range(0, len(points), 3)]
        rounds = 0
        while len(hulls) > 1:
            merged = [self.merge(hulls[k], hulls[k + 1]) for k in range(0, len(hulls) - 1, 2)]
            if len(hulls) % 2:
                merged.append(hulls[-1])
            hulls = merged
            rounds += 1
        self.tree_height = max(self.tree_height, rounds)
        return hulls[0]

    def build_subtree(self, points: Sequence[Point], level: int) -> tuple[list[Point], int]:
        """
        Run `build` on a private builder so that worker threads never touch
        this builder's state. Returns the hull and the height reached.
        """
        worker = HullBuilder(self.config)
        hull = worker.build(points, level)
        return hull, worker.tree_height

    def fork(self, executor: Executor, points: Sequence[Point], depth: int, level: int = 0):
        if depth == 0 or len(points) <= 3:
            return executor.submit(self.build_subtree, points, level)
        mid = len(points) // 2
        return (
            self.fork(executor, points[:mid], depth - 1, level + 1),
            self.fork(executor, points[mid:], depth - 1, level + 1),
        )

    def join(self, node) -> list[Point]:
        if isinstance(node, Future):
            hull, height = node.result()
            self.tree_height = max(self.tree_height, height)
            return hull
        left, right = node
        return self.merge(self.join(left), self.join(right))

    def build_parallel(self, points: Sequence[Point], executor: Executor | None = None) -> list[Point]:
        """
        Fork-join variant of `build`. The top `parallel_depth` levels of the
        split are unrolled, the resulting ranges are hulled by `build` in the
        executor, and the hulls are merged back in split order.
        Ranges are disjoint slices, so workers share nothing mutable.
        """
        if len(points) == 0:
            raise PreconditionViolation('cannot build the hull of an empty range')

        if executor is not None:
            return self.join(self.fork(executor, points, self.config.parallel_depth))
        with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
            return self.join(self.fork(pool, points, self.config.parallel_depth))

    @staticmethod
    def rotate_to_smallest(hull: list[Point]) -> list[Point]:
        k = min(range(len(hull)), key=lambda idx: hull[idx])
        return hull[k:] + hull[:k]

    def compute(self, points: Sequence[Point], executor: Executor | None = None) -> list[Point]:
        """
        Compute convex hull of a given multiset of points.
        Points are sorted and de-duplicated once, then passed to the configured strategy.
        The hull is returned in CCW order starting from its smallest vertex.
        """
        if len(points) == 0:
            raise PreconditionViolation('cannot compute the hull of an empty point set')

        start_time = time.time()
        self.tree_height = 0
        prepared = unique_points(sort_points(points))

        strategy = self.config.strategy
        if strategy == 'recursive':
            hull = self.build(prepared)
        elif strategy == 'iterative':
            hull = self.build_iterative(prepared)
        else:
            hull = self.build_parallel(prepared, executor=executor)

        hull = self.rotate_to_smallest(hull)
        if self.config.check_invariants:
            validate_hull(hull, self.orientation)

        logger.info(
            'hull of %d points (%d distinct) has %d vertices, strategy=%s, depth=%d, %.4f sec',
            len(points), len(prepared), len(hull), strategy, self.tree_height, time.time() - start_time,
        )
        return hull


def compute_convex_hull(points: Sequence[Point], config: HullConfig | None = None) -> list[Point]:
    """
    Convex hull of points in counter-clockwise order, collinear boundary points excluded.
    """
    return HullBuilder(config).compute(points)
