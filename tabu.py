from collections import deque
from functools import reduce

import config
from models import highest_scoring, ranks_above


class TabuList:
    """Most-recent-first record of visited paths with a fixed capacity."""

    def __init__(self, size=config.TABU_LIST_SIZE):
        if size < 1:
            raise ValueError(f"Tabu list size must be positive, got {size}")
        self._paths = deque(maxlen=size)

    def push(self, path):
        self._paths.appendleft(tuple(path))

    def __contains__(self, path):
        return tuple(path) in self._paths

    def __iter__(self):
        return iter(self._paths)

    def __len__(self):
        return len(self._paths)

    def __repr__(self):
        return f"TabuList({len(self._paths)}/{self._paths.maxlen})"


def reverse_middle(path):
    """Reverse the interior of ``path``, keeping both ends in place."""
    if len(path) <= 3:
        return tuple(path)
    return path[:1] + tuple(reversed(path[1:-1])) + path[-1:]


def neighbours(evaluator, path):
    """Feasible routes one move away from ``path``.

    Moves at each split point: insert an unvisited waypoint, replace the next
    waypoint with one, or drop the next 1-3 waypoints. Every move is also tried
    with its interior reversed. Only routes that end at Finish within both
    budgets are returned, each once, never ``path`` itself.
    """
    path = tuple(path)
    available = sorted(evaluator.available(path))

    moves = []
    for i in range(1, len(path)):
        left, right = path[:i], path[i:]
        for name in available:
            moves.append(left + (name,) + right)
            moves.append(left + (name,) + right[1:])
        for k in (1, 2, 3):
            if k <= len(right):
                moves.append(left + right[k:])
    moves.extend([reverse_middle(move) for move in moves])

    seen = {path}
    results = []
    for move in moves:
        if move in seen:
            continue
        seen.add(move)
        result = evaluator.evaluate(move)
        if result.feasible:
            results.append(result)
    return results


def tabu_search(evaluator, path, tabu_size=config.TABU_LIST_SIZE,
                stall_rounds=config.TABU_STALL_ROUNDS, on_round=None, cancel=None):
    """Tabu search from ``path``.

    Each round moves to the best neighbour that is not tabu, even if it is
    worse than the current route, and makes it tabu. Stops after
    ``stall_rounds`` rounds without a new best, or when every neighbour is tabu.

    on_round: optional callback(chosen, round_index, best) after each round.
    cancel: optional object with is_set(); checked before each round.

    Returns the best PathResult seen.
    """
    if stall_rounds < 1:
        raise ValueError(f"Stall rounds must be positive, got {stall_rounds}")

    current = evaluator.evaluate(path)
    best = current
    tabu = TabuList(tabu_size)
    tabu.push(current.path)

    stale = 0
    round_index = 0
    while stale < stall_rounds:
        if cancel is not None and cancel.is_set():
            break
        candidates = [r for r in neighbours(evaluator, current.path) if r.path not in tabu]
        if not candidates:
            break

        chosen = reduce(highest_scoring, candidates)
        tabu.push(chosen.path)
        if not best.feasible or ranks_above(chosen, best):
            best = chosen
            stale = 0
        else:
            stale += 1

        if on_round is not None:
            on_round(chosen, round_index, best)
        current = chosen
        round_index += 1

    return evaluator.settle(best)
