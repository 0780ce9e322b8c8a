import re

import gpxpy
import gpxpy.gpx

import config
from models import MalformedInput, Waypoint

_POINTS_PATTERN = re.compile(r"[0-9]+")


def points_from_description(name, description):
    """Point value is the first run of digits in the waypoint description."""
    match = _POINTS_PATTERN.search(description or "")
    if match is None:
        raise MalformedInput(f"Waypoint {name!r} has no point value in its description: {description!r}")
    return int(match.group())


def parse_waypoints(xml_text, start=config.START_NAME, finish=config.FINISH_NAME):
    """Parse GPX text into a {name: Waypoint} registry.

    Raises MalformedInput for unparseable XML, unnamed or duplicate waypoints,
    missing coordinates or point values, or a missing Start/Finish.
    """
    try:
        gpx = gpxpy.parse(xml_text)
    except gpxpy.gpx.GPXException as e:
        raise MalformedInput(f"Could not parse GPX: {e}") from e

    waypoints = {}
    for i, wpt in enumerate(gpx.waypoints):
        name = (wpt.name or "").strip()
        if not name:
            raise MalformedInput(f"Waypoint #{i} has no name")
        if wpt.latitude is None or wpt.longitude is None:
            raise MalformedInput(f"Waypoint {name!r} is missing coordinates")
        if name in waypoints:
            raise MalformedInput(f"Duplicate waypoint name: {name!r}")
        waypoints[name] = Waypoint(
            name, wpt.latitude, wpt.longitude,
            elevation=wpt.elevation,
            points=points_from_description(name, wpt.description),
        )

    for anchor in (start, finish):
        if anchor not in waypoints:
            raise MalformedInput(f"No {anchor!r} waypoint found")
    return waypoints


def load_waypoints(path, start=config.START_NAME, finish=config.FINISH_NAME):
    with open(path, "r", encoding="utf-8") as f:
        return parse_waypoints(f.read(), start=start, finish=finish)
