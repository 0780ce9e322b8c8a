import numpy as np

EARTH_RADIUS_M = 6378100.0


def haversine(lat1, lon1, lat2, lon2, radius=EARTH_RADIUS_M):
    """Great-circle distance in meters. Accepts scalars or numpy arrays (broadcast)."""
    lat1, lon1, lat2, lon2 = (np.radians(v) for v in (lat1, lon1, lat2, lon2))
    sin_half_dlat = np.sin((lat2 - lat1) / 2)
    sin_half_dlon = np.sin((lon2 - lon1) / 2)
    h = sin_half_dlat ** 2 + np.cos(lat1) * np.cos(lat2) * sin_half_dlon ** 2
    # rounding can push h a hair outside [0, 1] for antipodal points
    h = np.clip(h, 0.0, 1.0)
    return radius * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def elevation_or_zero(elevation):
    return 0.0 if elevation is None else elevation


def climb(ele_from, ele_to):
    """Positive elevation gain going from ``ele_from`` to ``ele_to``. Array friendly."""
    return np.maximum(0.0, np.subtract(ele_to, ele_from))


def distance(a, b):
    """Haversine distance between two waypoints, in meters."""
    return float(haversine(a.lat, a.lon, b.lat, b.lon))


def elevation_gain(a, b):
    """Returns positive climb only (uphill) from ``a`` to ``b``. Missing elevation counts as 0."""
    return float(climb(elevation_or_zero(a.elevation), elevation_or_zero(b.elevation)))
