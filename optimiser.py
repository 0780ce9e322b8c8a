import random
from concurrent.futures import ProcessPoolExecutor
from functools import partial

import config
from models import EMPTY_RESULT, highest_scoring, ranks_above
from tabu import tabu_search


def depth_first_path(evaluator, candidates, path=None):
    """Exhaustive budgeted search for the best route through ``candidates``.

    Every ordering of the candidates that reaches Finish is tried, cutting a
    branch as soon as it breaks the distance or climb budget. A branch that
    breaks the budget still yields a zero-score result so it can take part in
    the comparison. Uses an explicit stack, so large candidate sets are only
    slow, never a recursion error.

    Returns the best PathResult, or EMPTY_RESULT if nothing terminated.
    """
    matrix = evaluator.matrix
    budget = evaluator.budget
    path = tuple(path) if path else (evaluator.start,)
    candidates = (set(candidates) | {evaluator.finish}) - {evaluator.start}

    best = EMPTY_RESULT
    stack = [(path, evaluator.total_distance(path), evaluator.total_climb(path))]
    while stack:
        current, distance, climb = stack.pop()
        if not budget.allows(distance, climb):
            best = highest_scoring(best, evaluator.rejected(current, distance, climb))
            continue
        last = current[-1]
        if last == evaluator.finish:
            best = highest_scoring(best, evaluator.evaluate(current))
            continue
        for name in sorted(candidates.difference(current), reverse=True):
            stack.append((
                current + (name,),
                distance + matrix.distance(last, name),
                climb + matrix.climb(last, name),
            ))
    return best


def depth_first(evaluator, windows):
    """Seed route for each candidate window."""
    return [depth_first_path(evaluator, window) for window in windows]


def _better_move(best, candidate):
    """Pick between the running best move and a candidate move.

    Moves are (left, right, result) where result describes left + right.
    A candidate must be a feasible route to win; it then wins on higher
    score, or equal score and shorter distance, or if the running best is
    itself infeasible.
    """
    new = candidate[2]
    if not new.feasible:
        return best
    old = best[2]
    if not old.feasible or new.score > old.score:
        return candidate
    if new.score == old.score and new.distance < old.distance:
        return candidate
    return best


def hill_climb_path(evaluator, path):
    """One sweep along ``path`` trying to insert or swap in a single waypoint at each step."""
    path = tuple(path)
    if not path:
        raise ValueError("Cannot hill-climb an empty path")

    available = evaluator.available(path)
    left, right = path[:1], path[1:]
    result = evaluator.evaluate(path)

    while right:
        best = (left + right[:1], right[1:], result)
        for name in sorted(available):
            rest = right[1:]
            replacement = (left + (name,), rest, evaluator.evaluate(left + (name,) + rest))
            best = _better_move(best, replacement)
        for name in sorted(available):
            insertion = (left + (name,), right, evaluator.evaluate(left + (name,) + right))
            best = _better_move(best, insertion)

        left, right, result = best
        available.discard(left[-1])

    return evaluator.evaluate(left)


def hill_climb(evaluator, path, on_pass=None, cancel=None):
    """Repeat hill_climb_path until a sweep no longer changes the result.

    on_pass: optional callback(result, pass_index) after each sweep.
    cancel: optional object with is_set(); checked between sweeps.
    """
    result = evaluator.evaluate(path)
    pass_index = 0
    while True:
        improved = hill_climb_path(evaluator, result.path)
        if on_pass is not None:
            on_pass(improved, pass_index)
        pass_index += 1
        if improved == result:
            return evaluator.settle(improved)
        result = improved
        if cancel is not None and cancel.is_set():
            return evaluator.settle(result)


def partition_waypoints(names, size, stride, rng=None):
    """Shuffle ``names`` and cut them into overlapping windows.

    Windows hold ``size`` names and start every ``stride`` names. When the last
    window stops short of the end another window covering the tail is added.
    """
    if size < 1 or stride < 1:
        raise ValueError(f"Window size and stride must be positive, got {size}/{stride}")
    names = list(names)
    (rng or random).shuffle(names)
    if len(names) <= size:
        return [names]
    windows = [names[i:i + size] for i in range(0, len(names) - size + 1, stride)]
    if (len(names) - size) % stride:
        windows.append(names[-size:])
    return windows


def search_window(evaluator, window, local_search="hill_climb",
                  tabu_size=config.TABU_LIST_SIZE, stall_rounds=config.TABU_STALL_ROUNDS):
    """Depth-first seed for one window, then local search from that seed."""
    seed = depth_first_path(evaluator, window)
    if not seed.path:
        return seed
    if local_search == "tabu":
        return tabu_search(evaluator, seed.path, tabu_size=tabu_size, stall_rounds=stall_rounds)
    if local_search == "hill_climb":
        return hill_climb(evaluator, seed.path)
    raise ValueError(f"Unknown local search: {local_search!r}")


def _run_windows(job, windows, workers):
    if workers <= 1 or len(windows) <= 1:
        yield from map(job, windows)
        return
    pool = ProcessPoolExecutor(max_workers=min(workers, len(windows)))
    try:
        futures = [pool.submit(job, window) for window in windows]
        for future in futures:
            yield future.result()
    finally:
        pool.shutdown(wait=True, cancel_futures=True)


def best_of_random_hill_climbs(evaluator, window_size=config.WINDOW_SIZE,
                               stride=config.WINDOW_STRIDE, seed=None, workers=1,
                               local_search="hill_climb",
                               tabu_size=config.TABU_LIST_SIZE,
                               stall_rounds=config.TABU_STALL_ROUNDS,
                               on_result=None, cancel=None):
    """Run random-restart search over shuffled waypoint windows.

    Each window gets a depth-first seed and a local search, in parallel when
    workers > 1. The same seed gives the same answer for any worker count.

    Args:
        local_search: "hill_climb" or "tabu".
        on_result: optional callback(result, index, is_new_best) called per window.
                   Return False from callback to stop early.
        cancel: optional object with is_set(); checked after each window.

    Returns the best PathResult, EMPTY_RESULT if there were no windows.
    """
    rng = random.Random(seed)
    universe = [name for name in evaluator.matrix.names
                if name not in (evaluator.start, evaluator.finish)]
    windows = partition_waypoints(universe, window_size, stride, rng)
    job = partial(search_window, evaluator, local_search=local_search,
                  tabu_size=tabu_size, stall_rounds=stall_rounds)

    best = EMPTY_RESULT
    for index, result in enumerate(_run_windows(job, windows, workers)):
        is_new_best = ranks_above(result, best)
        if is_new_best:
            best = result
        if on_result is not None:
            if on_result(result, index, is_new_best) is False:
                break
        if cancel is not None and cancel.is_set():
            break
    return best
