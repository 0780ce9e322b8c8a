import os

import rasterio
from rasterio.merge import merge


class DEM:
    """Elevation lookup over a mosaic of geographic (lon/lat) GeoTIFF tiles."""

    def __init__(self):
        self.dem_files = []
        self.dem_mosaic = None
        self.transform = None

    def load_dem_files(self, folder_path):
        """Load and mosaic DEM files, caching the result."""
        self.dem_files = sorted(
            os.path.join(folder_path, f)
            for f in os.listdir(folder_path)
            if f.lower().endswith((".tif", ".tiff", ".dem"))
        )
        if not self.dem_files:
            raise ValueError("No DEM files found in the specified folder")

        datasets = [rasterio.open(path) for path in self.dem_files]
        try:
            mosaic, self.transform = merge(datasets)
        finally:
            for ds in datasets:
                ds.close()
        self.dem_mosaic = mosaic[0].clip(min=0)

    def get_elevation(self, lon, lat):
        """Look up elevation from cached DEM using its affine transform."""
        if self.dem_mosaic is None or self.transform is None:
            raise RuntimeError("DEM not loaded. Call load_dem_files first.")

        col, row = ~self.transform * (lon, lat)
        px, py = int(col), int(row)
        if 0 <= col and 0 <= row and px < self.dem_mosaic.shape[1] and py < self.dem_mosaic.shape[0]:
            return float(self.dem_mosaic[py, px])
        return None


def fill_missing_elevations(waypoints, dem):
    """Copy of ``waypoints`` with missing elevations looked up in ``dem``.

    Waypoints outside the DEM keep a missing elevation.
    """
    filled = {}
    for name, wp in waypoints.items():
        if wp.elevation is None:
            elevation = dem.get_elevation(wp.lon, wp.lat)
            if elevation is not None:
                wp = wp.with_elevation(elevation)
        filled[name] = wp
    return filled
