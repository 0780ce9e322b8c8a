import pytest
import numpy as np
from geodesy import distance, elevation_gain
from matrix import DistanceMatrix, build_matrix
from models import Waypoint, WaypointNotFound


@pytest.fixture
def waypoints():
    wps = [
        Waypoint("Start", 38.8985, -77.0378, elevation=10, points=0),
        Waypoint("A", 38.8980, -77.0400, elevation=20, points=50),
        Waypoint("B", 38.8990, -77.0415, elevation=None, points=80),
        Waypoint("Finish", 38.8970, -77.0430, elevation=5, points=0),
    ]
    return {w.name: w for w in wps}


@pytest.fixture
def matrix(waypoints):
    return build_matrix(waypoints)


class TestBuildMatrix:
    def test_all_pairs(self, matrix, waypoints):
        n = len(waypoints)
        assert matrix.distances.shape == (n, n)
        assert matrix.climbs.shape == (n, n)
        assert len(matrix) == n

    def test_diagonal_is_zero(self, matrix, waypoints):
        for name in waypoints:
            assert matrix.distance(name, name) == 0.0
            assert matrix.climb(name, name) == 0.0

    def test_distance_symmetric(self, matrix, waypoints):
        for a in waypoints:
            for b in waypoints:
                assert matrix.distance(a, b) == pytest.approx(matrix.distance(b, a))

    def test_matches_geodesy(self, matrix, waypoints):
        for a in waypoints.values():
            for b in waypoints.values():
                assert matrix.distance(a.name, b.name) == pytest.approx(distance(a, b))
                assert matrix.climb(a.name, b.name) == pytest.approx(elevation_gain(a, b))

    def test_climb_directional(self, matrix):
        assert matrix.climb("Start", "A") == pytest.approx(10.0)
        assert matrix.climb("A", "Start") == 0.0

    def test_missing_elevation_counts_as_zero(self, matrix):
        assert matrix.climb("B", "A") == pytest.approx(20.0)
        assert matrix.climb("A", "B") == 0.0

    def test_read_only(self, matrix):
        with pytest.raises(ValueError):
            matrix.distances[0, 1] = 1.0

    def test_empty_registry(self):
        m = build_matrix({})
        assert len(m) == 0
        assert m.distances.shape == (0, 0)


class TestLookups:
    def test_unknown_distance_raises(self, matrix):
        with pytest.raises(WaypointNotFound):
            matrix.distance("Start", "Nowhere")

    def test_unknown_climb_raises(self, matrix):
        with pytest.raises(WaypointNotFound):
            matrix.climb("Nowhere", "Start")

    def test_unknown_waypoint_raises(self, matrix):
        with pytest.raises(WaypointNotFound, match="Nowhere"):
            matrix.get_waypoint("Nowhere")

    def test_not_found_is_key_error(self, matrix):
        with pytest.raises(KeyError):
            matrix.index_of("Nowhere")

    def test_get_waypoint(self, matrix, waypoints):
        assert matrix.get_waypoint("A") is waypoints["A"]

    def test_contains(self, matrix):
        assert "A" in matrix
        assert "Nowhere" not in matrix

    def test_str(self, matrix):
        s = str(matrix)
        assert "DistanceMatrix:" in s
        assert "Finish" in s


class TestDistanceMatrix:
    def test_explicit_construction(self):
        wps = {"X": Waypoint("X", 0, 0), "Y": Waypoint("Y", 0, 0)}
        m = DistanceMatrix(wps, np.array([[0.0, 7.0], [7.0, 0.0]]), np.array([[0.0, 2.0], [0.0, 0.0]]))
        assert m.distance("X", "Y") == 7.0
        assert m.climb("X", "Y") == 2.0
        assert m.climb("Y", "X") == 0.0
        assert m.names == ["X", "Y"]
