import matplotlib
matplotlib.use("Agg")

import pytest
import matplotlib.pyplot as plt
from models import EMPTY_RESULT, PathResult, Waypoint
from visualise import plot_route, plot_waypoints_3d


@pytest.fixture
def waypoints():
    wps = [
        Waypoint("Start", 38.8985, -77.0378, elevation=10, points=0),
        Waypoint("A", 38.8980, -77.0400, points=50),
        Waypoint("Finish", 38.8970, -77.0430, elevation=5, points=0),
    ]
    return {w.name: w for w in wps}


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestPlotRoute:
    def test_route_line(self, waypoints):
        result = PathResult(("Start", "A", "Finish"), 481.0, 10.0, 50, True)
        fig = plot_route(result, waypoints)
        ax = fig.axes[0]
        assert len(ax.lines) == 1
        assert list(ax.lines[0].get_xdata()) == [-77.0378, -77.0400, -77.0430]
        assert list(ax.lines[0].get_ydata()) == [38.8985, 38.8980, 38.8970]
        assert "50 pts" in ax.get_title()

    def test_empty_result_has_no_line(self, waypoints):
        fig = plot_route(EMPTY_RESULT, waypoints)
        assert len(fig.axes[0].lines) == 0


class TestPlotWaypoints3d:
    def test_3d_axes(self, waypoints):
        fig = plot_waypoints_3d(waypoints)
        ax = fig.axes[0]
        assert ax.name == "3d"
        assert ax.get_zlabel() == "Elevation (m)"
        assert len(ax.texts) == len(waypoints)
