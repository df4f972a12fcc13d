import logging

import numpy as np

from pathlib import Path
from typing import Iterable

from geometry import Point

logger = logging.getLogger(__name__)

DISTRIBUTIONS = ('uniform', 'circle', 'gaussian', 'clusters', 'grid')


class InputError(ValueError):
    """Point source is missing or malformed."""


class PointsFileError(InputError):
    def __init__(self, path):
        super().__init__(f'could not open file {path}')
        self.path = path


class PointsParseError(InputError):
    def __init__(self, message: str, token: str | None = None, line: int | None = None):
        super().__init__(message)
        self.token = token
        self.line = line


def parse_number(token: str, line: int):
    try:
        return int(token)
    except ValueError:
        pass
    try:
        value = float(token)
    except ValueError:
        raise PointsParseError(f'line {line}: {token!r} is not a number', token=token, line=line) from None
    if not np.isfinite(value):
        raise PointsParseError(f'line {line}: {token!r} is not a finite number', token=token, line=line)
    return value


def parse_points(text: str) -> list[Point]:
    """
    Parse whitespace-separated coordinates into points, pairing them as x y.
    Points are numbered by their position in the text.
    """
    values = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        for token in line.split():
            values.append(parse_number(token, line_no))

    if len(values) % 2:
        raise PointsParseError(f'odd number of coordinates ({len(values)}): last point has no y')

    return [Point(values[k], values[k + 1], k // 2) for k in range(0, len(values), 2)]


def load_points(path) -> list[Point]:
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except OSError as e:
        raise PointsFileError(path) from e
    except UnicodeDecodeError as e:
        raise PointsParseError(f'{path} is not UTF-8 text: {e.reason} at byte {e.start}') from e

    points = parse_points(text)
    logger.info('loaded %d points from %s', len(points), path.name)
    return points


def save_points(path, points: Iterable[Point]):
    with open(path, 'w', encoding='utf-8') as f:
        for p in points:
            f.write(f'{p.x} {p.y}\n')


def format_points(points: Iterable[Point]) -> str:
    return '\n'.join(f'({p.x}, {p.y})' for p in points)


def generate_points(n: int, distribution: str = 'uniform', seed: int = 42) -> list[Point]:
    """
    Random point sets for experiments. `grid` draws integer lattice points,
    which produces plenty of duplicates and collinear triples.
    """
    rng = np.random.default_rng(seed)

    if distribution == 'uniform':
        xs = rng.uniform(0, 1000, n)
        ys = rng.uniform(0, 1000, n)
    elif distribution == 'circle':
        angle = rng.uniform(0, 2 * np.pi, n)
        r = rng.uniform(0, 500, n) ** 0.5
        xs = 500 + r * np.cos(angle)
        ys = 500 + r * np.sin(angle)
    elif distribution == 'gaussian':
        xs = rng.normal(500, 150, n)
        ys = rng.normal(500, 150, n)
    elif distribution == 'clusters':
        n_clusters = 5
        centers = rng.uniform(100, 900, (n_clusters, 2))
        labels = rng.integers(0, n_clusters, n)
        xs = rng.normal(centers[labels, 0], 50)
        ys = rng.normal(centers[labels, 1], 50)
    elif distribution == 'grid':
        side = max(2, int(np.sqrt(n)))
        xs = rng.integers(0, side, n)
        ys = rng.integers(0, side, n)
        return [Point(int(xs[i]), int(ys[i]), i) for i in range(n)]
    else:
        raise ValueError(f'unknown distribution {distribution!r}, expected one of {DISTRIBUTIONS}')

    return [Point(float(xs[i]), float(ys[i]), i) for i in range(n)]
