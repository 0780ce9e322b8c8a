# config.py — Central configuration for the geocache route optimiser
import os

# Input, elevation and output locations
WAYPOINTS_FILE = "2015.gpx"
DEM_FOLDER_PATH = "./dem"  # only used if the folder exists
OUTPUT_DIR = "."

# Waypoint names that anchor every route
START_NAME = "Start"
FINISH_NAME = "Finish"

# Budget, derived from walking pace and available time
AVG_HIKING_SPEED_MPS = 1.34112
MAX_TIME_HOURS = 4
MAX_DISTANCE_M = AVG_HIKING_SPEED_MPS * 60 * 60 * MAX_TIME_HOURS
MAX_CLIMB_M = 600.0

# Random-restart parameters
WINDOW_SIZE = 10      # waypoints handed to each exhaustive depth-first search
WINDOW_STRIDE = 5
RANDOM_SEED = None    # set an int for reproducible runs
WORKERS = os.cpu_count() or 1

# Local search: "hill_climb" or "tabu"
LOCAL_SEARCH = "hill_climb"

# Tabu search parameters
TABU_LIST_SIZE = 50
TABU_STALL_ROUNDS = 100

# Output
ROUTE_NAME = "WCG 2015"
DISPLAY_FINAL = False    # plot the best route at the end
