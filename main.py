import argparse
import os
import sys

import config
from dem import DEM, fill_missing_elevations
from evaluator import Evaluator
from gpx import load_waypoints
from kml import write_kml
from matrix import build_matrix
from models import MalformedInput, SearchBudget, WaypointNotFound
from optimiser import best_of_random_hill_climbs, hill_climb
from tabu import tabu_search
from visualise import show_result


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Find a high scoring geocache route from Start to Finish within a distance and climb budget.")
    parser.add_argument("path", nargs="*",
                        help="optional manual route (waypoint names); hill-climbed instead of searched")
    parser.add_argument("--waypoints", default=config.WAYPOINTS_FILE, help="GPX waypoint file")
    parser.add_argument("--dem", default=config.DEM_FOLDER_PATH,
                        help="folder of DEM GeoTIFFs used to fill missing elevations")
    parser.add_argument("--output-dir", default=config.OUTPUT_DIR)
    parser.add_argument("--max-distance", type=float, default=config.MAX_DISTANCE_M, help="meters")
    parser.add_argument("--max-climb", type=float, default=config.MAX_CLIMB_M, help="meters")
    parser.add_argument("--local-search", choices=("hill_climb", "tabu"), default=config.LOCAL_SEARCH)
    parser.add_argument("--seed", type=int, default=config.RANDOM_SEED)
    parser.add_argument("--workers", type=int, default=config.WORKERS)
    parser.add_argument("--plot", action="store_true", default=config.DISPLAY_FINAL,
                        help="show the best route when done")
    return parser.parse_args(argv)


def load_registry(args):
    print("Loading waypoints...")
    waypoints = load_waypoints(args.waypoints)
    missing = sum(1 for w in waypoints.values() if w.elevation is None)
    if missing and args.dem and os.path.isdir(args.dem):
        print(f"Filling {missing} missing elevations from DEM in {args.dem}...")
        dem = DEM()
        dem.load_dem_files(args.dem)
        waypoints = fill_missing_elevations(waypoints, dem)
    print(f"Loaded {len(waypoints)} waypoints")
    return waypoints


def check_manual_path(evaluator, path):
    """Raise MalformedInput unless ``path`` starts at Start and never repeats a waypoint."""
    if not path or path[0] != evaluator.start:
        raise MalformedInput(f"Manual path must begin at {evaluator.start!r}")
    interior = path[1:-1] if path[-1] == evaluator.finish else path[1:]
    if evaluator.start in interior or evaluator.finish in interior:
        raise MalformedInput(f"Manual path may only visit {evaluator.start!r} and {evaluator.finish!r} at its ends")
    if len(set(interior)) != len(interior):
        raise MalformedInput(f"Manual path repeats a waypoint: {' -> '.join(path)}")


def report_new_best(result, index, is_new_best):
    if is_new_best:
        print(f"  [window {index + 1}] New best: {result.score} pts, "
              f"{result.distance / 1000:.2f} km, {result.climb:.0f}m climb")


def run(args):
    waypoints = load_registry(args)

    print("Building distance matrix...")
    evaluator = Evaluator(build_matrix(waypoints), SearchBudget(args.max_distance, args.max_climb))
    print(f"  Budget: {args.max_distance / 1000:.2f} km, {args.max_climb:.0f} m climb")

    if args.path:
        path = tuple(args.path)
        for name in path:
            if name not in waypoints:
                raise WaypointNotFound(name)
        check_manual_path(evaluator, path)
        print(f"Optimising manual path: {' -> '.join(path)}")
        if args.local_search == "tabu":
            best = tabu_search(evaluator, path)
        else:
            best = hill_climb(evaluator, path)
    else:
        print(f"Running random-restart search ({args.local_search}, {args.workers} workers)...")
        best = best_of_random_hill_climbs(
            evaluator,
            seed=args.seed,
            workers=args.workers,
            local_search=args.local_search,
            on_result=report_new_best,
        )

    print("\n" + "=" * 50)
    print("BEST PATH FOUND:")
    print(f"  Points:     {best.score}")
    print(f"  Distance:   {best.distance / 1000:.2f} km")
    print(f"  Climb:      {best.climb:.0f} m")
    print(f"  Feasible:   {best.feasible}")
    print(f"  Route:      {' -> '.join(best.path)}")
    print("=" * 50)

    filename = write_kml(best, waypoints, args.output_dir)
    print(f"Route exported to {filename}")

    if args.plot:
        show_result(best, waypoints)
    return best


def main(argv=None):
    args = parse_args(argv)
    try:
        run(args)
    except (MalformedInput, WaypointNotFound, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
