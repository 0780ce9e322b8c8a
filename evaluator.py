import config
from models import PathResult, SearchBudget


class Evaluator:
    """Read-only search context: the distance matrix, the budget and the route anchors.

    Every search function takes one of these instead of reaching for globals.
    It is picklable so it can be shipped to worker processes.
    """

    def __init__(self, matrix, budget: SearchBudget,
                 start=config.START_NAME, finish=config.FINISH_NAME):
        self.matrix = matrix
        self.budget = budget
        self.start = start
        self.finish = finish
        # fail fast if the anchors are not in the registry
        matrix.index_of(start)
        matrix.index_of(finish)

    @property
    def waypoints(self):
        return self.matrix.waypoints

    def total_distance(self, path):
        return sum((self.matrix.distance(a, b) for a, b in zip(path, path[1:])), 0.0)

    def total_climb(self, path):
        return sum((self.matrix.climb(a, b) for a, b in zip(path, path[1:])), 0.0)

    def total_score(self, path):
        return sum(self.matrix.get_waypoint(name).points for name in path)

    def is_valid_path(self, path):
        """Starts at Start and visits every other waypoint at most once, never an anchor."""
        if not path or path[0] != self.start:
            return False
        interior = path[1:-1]
        return (len(set(interior)) == len(interior)
                and self.start not in interior and self.finish not in interior)

    def is_feasible(self, path, distance, climb):
        return (self.is_valid_path(path) and path[-1] == self.finish
                and self.budget.allows(distance, climb))

    def evaluate(self, path):
        """Recompute every metric of ``path`` from the matrix."""
        path = tuple(path)
        distance = self.total_distance(path)
        climb = self.total_climb(path)
        return PathResult(path, distance, climb, self.total_score(path),
                          self.is_feasible(path, distance, climb))

    def rejected(self, path, distance, climb):
        """Zero-score result for a path that broke the budget."""
        return PathResult(tuple(path), distance, climb, 0, False)

    def settle(self, result):
        """``result`` if feasible, otherwise its zero-score sentinel."""
        if result.feasible:
            return result
        return self.rejected(result.path, result.distance, result.climb)

    def available(self, path):
        """Waypoint names not on ``path``."""
        return set(self.matrix.names).difference(path)
