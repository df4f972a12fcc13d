import pytest

from geometry import Point
from points_io import (
    DISTRIBUTIONS,
    InputError,
    PointsFileError,
    PointsParseError,
    format_points,
    generate_points,
    load_points,
    parse_points,
    save_points,
)


def test_parse_points():
    points = parse_points("0 0\n10 -5\n  2.5 3e2\n")
    assert points == [Point(0, 0), Point(10, -5), Point(2.5, 300.0)]
    assert [p.id for p in points] == [0, 1, 2]
    assert isinstance(points[1].x, int)
    assert isinstance(points[2].x, float)


def test_parse_points_ignores_layout():
    assert parse_points("1 2 3\n4\n\n5 6") == [Point(1, 2), Point(3, 4), Point(5, 6)]
    assert parse_points("") == []


@pytest.mark.parametrize("text, token, line", [
    ("1 2\n3 x\n", "x", 2),
    ("1 2 3,5 4", "3,5", 1),
    ("nan 1", "nan", 1),
])
def test_parse_points_rejects_bad_tokens(text, token, line):
    with pytest.raises(PointsParseError) as excinfo:
        parse_points(text)
    assert excinfo.value.token == token
    assert excinfo.value.line == line


def test_parse_points_rejects_odd_count():
    with pytest.raises(PointsParseError):
        parse_points("1 2 3")


def test_load_missing_file(tmp_path):
    with pytest.raises(PointsFileError) as excinfo:
        load_points(tmp_path / "missing.txt")
    assert isinstance(excinfo.value, InputError)


def test_load_directory(tmp_path):
    with pytest.raises(PointsFileError) as excinfo:
        load_points(tmp_path)
    assert excinfo.value.path == tmp_path


def test_load_non_utf8_file(tmp_path):
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"1 2\n3 \xff\n")
    with pytest.raises(PointsParseError) as excinfo:
        load_points(path)
    assert isinstance(excinfo.value, InputError)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_save_and_load(tmp_path):
    path = tmp_path / "points.txt"
    points = [Point(0, 0), Point(3, -1), Point(0.25, 7.5)]
    save_points(path, points)
    assert load_points(path) == points


def test_format_points():
    assert format_points([Point(0, 0), Point(1.5, -2)]) == "(0, 0)\n(1.5, -2)"


@pytest.mark.parametrize("distribution", DISTRIBUTIONS)
def test_generate_points(distribution):
    points = generate_points(100, distribution, seed=1)
    assert len(points) == 100
    assert [p.id for p in points] == list(range(100))
    assert generate_points(100, distribution, seed=1) == points


def test_generate_grid_points_are_ints():
    points = generate_points(50, "grid")
    assert all(isinstance(p.x, int) and isinstance(p.y, int) for p in points)


def test_generate_unknown_distribution():
    with pytest.raises(ValueError):
        generate_points(10, "spiral")
