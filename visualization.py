import logging

import matplotlib.pyplot as plt

from matplotlib.axes import Axes
from matplotlib.figure import Figure
from typing import Sequence

from geometry import Point

logger = logging.getLogger(__name__)


def plot_points(points: Sequence[Point], ax: Axes, color: str = 'k'):
    x = [p.x for p in points]
    y = [p.y for p in points]
    ax.scatter(x, y, c=color, s=8, zorder=2)


def plot_hull(hull: Sequence[Point], ax: Axes, color: str = 'b'):
    """
    Draw hull as a closed polygon. A segment hull is a single line
    and a point hull is a marker.
    """
    if len(hull) == 0:
        return
    if len(hull) == 1:
        ax.scatter([hull[0].x], [hull[0].y], c=color, marker='x', s=40, zorder=3)
        return

    closed = list(hull)
    if len(hull) > 2:
        closed.append(hull[0])
    ax.plot([p.x for p in closed], [p.y for p in closed], c=color, zorder=1)


def bounding_box(points: Sequence[Point], margin: float) -> tuple[float, float, float, float]:
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs) - margin, max(xs) + margin, min(ys) - margin, max(ys) + margin


def render(points: Sequence[Point], hull: Sequence[Point], path=None, margin: float = 10) -> Figure:
    """
    Draw input points and their hull scaled to the bounding box of the points plus margin.
    Save the figure to `path` (format taken from the suffix, e.g. .svg),
    or show it in a window when no path is given.
    """
    fig = Figure(figsize=(8, 8)) if path is not None else plt.figure(figsize=(8, 8))
    ax = fig.add_subplot(111)
    ax.set_aspect('equal', adjustable='box')
    ax.grid(True, alpha=0.3)

    if len(points) > 0:
        x_min, x_max, y_min, y_max = bounding_box(points, margin)
        ax.set_xlim(x_min, x_max)
        ax.set_ylim(y_min, y_max)
        plot_points(points, ax)
    plot_hull(hull, ax)
    ax.set_title(f'{len(points)} points, {len(hull)} in hull')

    if path is not None:
        fig.savefig(path, bbox_inches='tight')
        logger.info('saved plot to %s', path)
    else:
        plt.show()
    return fig
