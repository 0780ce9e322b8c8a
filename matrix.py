import numpy as np

from geodesy import haversine, climb, elevation_or_zero
from models import WaypointNotFound


class DistanceMatrix:
    """All-pairs distance and climb between waypoints, indexed by waypoint name.

    ``distances[i, j]`` is symmetric. ``climbs[i, j]`` is the gain walking from
    ``names[i]`` to ``names[j]`` and is directional.
    """

    def __init__(self, waypoints, distances, climbs):
        self.waypoints = dict(waypoints)  # {name: Waypoint}
        self.names = list(self.waypoints)
        self._index = {name: i for i, name in enumerate(self.names)}
        self.distances = distances
        self.climbs = climbs
        self.distances.setflags(write=False)
        self.climbs.setflags(write=False)

    def index_of(self, name):
        try:
            return self._index[name]
        except KeyError:
            raise WaypointNotFound(name) from None

    def get_waypoint(self, name):
        try:
            return self.waypoints[name]
        except KeyError:
            raise WaypointNotFound(name) from None

    def distance(self, a, b):
        return float(self.distances[self.index_of(a), self.index_of(b)])

    def climb(self, a, b):
        return float(self.climbs[self.index_of(a), self.index_of(b)])

    def __contains__(self, name):
        return name in self._index

    def __len__(self):
        return len(self.names)

    def __str__(self):
        lines = ["DistanceMatrix:"]
        for i, name in enumerate(self.names):
            row = [f"{other}: {self.distances[i, j]:.1f}m/+{self.climbs[i, j]:.0f}m"
                   for j, other in enumerate(self.names) if j != i]
            lines.append(f"  {name} -> {{{', '.join(row)}}}")
        return "\n".join(lines)


def build_matrix(waypoints):
    """Build the full matrix from a {name: Waypoint} registry, self-pairs included."""
    wps = list(waypoints.values())
    lat = np.array([w.lat for w in wps], dtype=float)
    lon = np.array([w.lon for w in wps], dtype=float)
    ele = np.array([elevation_or_zero(w.elevation) for w in wps], dtype=float)

    distances = haversine(lat[:, None], lon[:, None], lat[None, :], lon[None, :])
    climbs = climb(ele[:, None], ele[None, :])
    # exact zeros on the diagonal regardless of rounding
    np.fill_diagonal(distances, 0.0)
    np.fill_diagonal(climbs, 0.0)
    return DistanceMatrix(waypoints, np.ascontiguousarray(distances), np.ascontiguousarray(climbs))
