"""
Barrier rasterizer: polygon -> boolean occupancy mask on the lattice grid.
"""

from __future__ import annotations
import logging
from typing import Tuple
import numpy as np
from numpy.typing import NDArray

from .primitives import PolygonLike, as_polygon_array

logger = logging.getLogger(__name__)


def points_in_polygon(xs: NDArray[np.float64],
                      ys: NDArray[np.float64],
                      polygon: NDArray[np.float64]) -> NDArray[np.bool_]:
    """
    Even-odd ray crossing test for many points at once.

    A horizontal ray is cast towards +x from every point; each polygon edge
    it crosses toggles the inside flag.

    Args:
        xs, ys: Point coordinates (any matching shape)
        polygon: (N, 2) vertices, implicitly closed

    Returns:
        Boolean array shaped like xs
    """
    inside = np.zeros(np.shape(xs), dtype=bool)
    n = polygon.shape[0]
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        straddles = (yi > ys) != (yj > ys)
        if yj != yi:
            x_cross = (xj - xi) * (ys - yi) / (yj - yi) + xi
            inside ^= straddles & (xs < x_cross)
        j = i
    return inside


def rasterize(polygon: PolygonLike,
              scale: float,
              grid_shape: Tuple[int, int]) -> NDArray[np.bool_]:
    """
    Convert a display-space polygon into a solid-cell mask.

    Args:
        polygon: Vertices in display units
        scale: Display units per grid cell
        grid_shape: (rows, cols) of the simulation grid

    Returns:
        (rows, cols) boolean mask, True where the cell is solid. Always a
        fresh all-fluid mask first, so nothing from a previous shape
        survives. Polygons with fewer than 3 vertices give no solid cells.
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")

    rows, cols = grid_shape
    mask = np.zeros((rows, cols), dtype=bool)

    poly = as_polygon_array(polygon)
    if poly.shape[0] < 3:
        return mask

    grid_poly = poly / scale

    x_min = max(0, int(np.floor(grid_poly[:, 0].min())))
    x_max = min(cols - 1, int(np.ceil(grid_poly[:, 0].max())))
    y_min = max(0, int(np.floor(grid_poly[:, 1].min())))
    y_max = min(rows - 1, int(np.ceil(grid_poly[:, 1].max())))

    if x_min > x_max or y_min > y_max:
        logger.debug("Polygon lies outside the %dx%d grid", rows, cols)
        return mask

    yy, xx = np.mgrid[y_min:y_max + 1, x_min:x_max + 1]
    mask[y_min:y_max + 1, x_min:x_max + 1] = points_in_polygon(
        xx.astype(np.float64), yy.astype(np.float64), grid_poly
    )

    logger.debug("Rasterized %d vertices -> %d solid cells", poly.shape[0], int(mask.sum()))
    return mask
