from typing import NamedTuple, Tuple


class WaypointNotFound(KeyError):
    """A waypoint identifier is missing from the registry or distance matrix."""

    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Unknown waypoint: {self.name!r}"


class MalformedInput(ValueError):
    """Waypoint source data is missing required fields or cannot be parsed."""


class Waypoint:
    """A named geocache location. Treated as immutable once loaded."""

    __slots__ = ("name", "lat", "lon", "elevation", "points")

    def __init__(self, name, lat, lon, elevation=None, points=0):
        if points is None or points < 0:
            raise ValueError(f"Invalid points for waypoint {name!r}: {points!r}")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "lat", float(lat))
        object.__setattr__(self, "lon", float(lon))
        object.__setattr__(self, "elevation", None if elevation is None else float(elevation))
        object.__setattr__(self, "points", int(points))

    def __setattr__(self, key, value):
        raise AttributeError(f"Waypoint is read-only, cannot set {key!r}")

    def __reduce__(self):
        return (Waypoint, (self.name, self.lat, self.lon, self.elevation, self.points))

    def with_elevation(self, elevation):
        return Waypoint(self.name, self.lat, self.lon, elevation, self.points)

    def __eq__(self, other):
        if not isinstance(other, Waypoint):
            return False
        return (self.name, self.lat, self.lon, self.elevation, self.points) == \
            (other.name, other.lat, other.lon, other.elevation, other.points)

    def __hash__(self):
        return hash(self.name)

    def __str__(self):
        return f"Waypoint({self.name})"

    def __repr__(self):
        return (f"Waypoint({self.name}, lat={self.lat}, lon={self.lon}, "
                f"ele={self.elevation}, pts={self.points})")


class SearchBudget(NamedTuple):
    max_distance: float  # meters
    max_climb: float     # meters of cumulative positive elevation gain

    @classmethod
    def from_pace(cls, speed_mps, hours, max_climb):
        """Budget for walking at ``speed_mps`` for ``hours``."""
        return cls(speed_mps * 60 * 60 * hours, max_climb)

    def allows(self, distance, climb):
        return distance <= self.max_distance and climb <= self.max_climb


class PathResult(NamedTuple):
    """Snapshot of a path and the metrics derived from it.

    Only ``Evaluator`` builds these, so the metrics always agree with the path.
    ``feasible`` means the path ends at Finish and fits the budget.
    """
    path: Tuple[str, ...]
    distance: float
    climb: float
    score: int
    feasible: bool

    def __repr__(self):
        return (f"PathResult(pts={self.score}, dist={self.distance:.0f}m, "
                f"climb={self.climb:.0f}m, waypoints={len(self.path)}, "
                f"feasible={self.feasible})")


EMPTY_RESULT = PathResult((), 0.0, 0.0, 0, False)


def ranks_above(a: PathResult, b: PathResult) -> bool:
    """True if ``a`` is strictly better than ``b``.

    Higher score, then feasible over infeasible, then shorter distance, then
    the lexicographically smaller path. Total order, so folds are order-free.
    """
    if a.score != b.score:
        return a.score > b.score
    if a.feasible != b.feasible:
        return a.feasible
    if a.distance != b.distance:
        return a.distance < b.distance
    return a.path < b.path


def highest_scoring(a: PathResult, b: PathResult) -> PathResult:
    return b if ranks_above(b, a) else a
