import numpy as np

from matplotlib.figure import Figure

from dnc_hull import compute_convex_hull
from geometry import Point, as_points
from visualization import bounding_box, plot_hull, render


def test_bounding_box():
    points = [Point(0, 5), Point(-3, 2), Point(4, 9)]
    assert bounding_box(points, 10) == (-13, 14, -8, 19)


def test_plot_hull_closes_polygon():
    ax = Figure().add_subplot(111)
    hull = [Point(0, 0), Point(2, 0), Point(1, 1)]
    plot_hull(hull, ax)
    xs = list(ax.lines[0].get_xdata())
    ys = list(ax.lines[0].get_ydata())
    assert xs == [0, 2, 1, 0]
    assert ys == [0, 0, 1, 0]


def test_plot_degenerate_hulls():
    ax = Figure().add_subplot(111)
    plot_hull([Point(0, 0), Point(3, 3)], ax)
    assert list(ax.lines[0].get_xdata()) == [0, 3]

    ax = Figure().add_subplot(111)
    plot_hull([Point(1, 1)], ax)
    assert len(ax.lines) == 0
    assert len(ax.collections) == 1


def test_render_svg(tmp_path):
    points = as_points([(0, 0), (0, 20), (20, 20), (20, 0), (10, 10)])
    hull = compute_convex_hull(points)
    path = tmp_path / "hull.svg"

    fig = render(points, hull, path=path)

    assert path.exists()
    assert "<svg" in path.read_text(encoding="utf-8")
    ax = fig.axes[0]
    assert np.allclose(ax.get_xlim(), (-10, 30))
    assert np.allclose(ax.get_ylim(), (-10, 30))
