import os
import time
import xml.etree.ElementTree as ET

import config
from models import WaypointNotFound

KML_NAMESPACE = "http://earth.google.com/kml/2.0"


def path_to_coordinates(path, waypoints):
    """(lon, lat, alt) per waypoint. Altitude is always 0.0."""
    coords = []
    for name in path:
        if name not in waypoints:
            raise WaypointNotFound(name)
        wp = waypoints[name]
        coords.append((wp.lon, wp.lat, 0.0))
    return coords


def _sub(parent, tag, text=None):
    el = ET.SubElement(parent, tag)
    if text is not None:
        el.text = text
    return el


def path_result_to_kml(result, waypoints, route_name=config.ROUTE_NAME):
    """Build a KML document with a single LineString placemark for ``result``."""
    kml = ET.Element("kml", xmlns=KML_NAMESPACE)
    doc = _sub(kml, "Document")
    _sub(doc, "name", "Geocache Route")
    placemark = _sub(doc, "Placemark")
    _sub(placemark, "name", route_name)
    _sub(placemark, "description", "\n".join([
        f"Points: {result.score}",
        f"Distance: {result.distance:.1f} m",
        f"Elevation: {result.climb:.1f} m",
    ]))
    line = _sub(placemark, "LineString")
    _sub(line, "coordinates", "\n".join(
        f"{lon},{lat},{alt}" for lon, lat, alt in path_to_coordinates(result.path, waypoints)
    ))
    return ET.ElementTree(kml)


def write_kml(result, waypoints, output_dir=config.OUTPUT_DIR, route_name=config.ROUTE_NAME):
    """Write ``result`` to path-<epoch millis>.kml in ``output_dir``. Returns the file path.

    Never overwrites: a name already taken gets a -1, -2, ... suffix.
    """
    tree = path_result_to_kml(result, waypoints, route_name)
    stem = os.path.join(output_dir, f"path-{time.time_ns() // 1_000_000}")
    filename = stem + ".kml"
    suffix = 0
    while True:
        try:
            with open(filename, "xb") as f:
                tree.write(f, encoding="UTF-8", xml_declaration=True)
            return filename
        except FileExistsError:
            suffix += 1
            filename = f"{stem}-{suffix}.kml"
