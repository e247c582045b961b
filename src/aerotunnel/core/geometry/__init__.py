"""Geometry primitives, body provider and barrier rasterizer."""

from .primitives import (
    Point2D,
    as_polygon_array,
    to_points,
    is_simulatable,
    rotation_matrix_2d,
    rotate_polygon,
    bounding_box,
    polygon_area,
)
from .bodies import BodyType, AirfoilParams, build_body
from .raster import rasterize, points_in_polygon

__all__ = [
    "Point2D",
    "as_polygon_array",
    "to_points",
    "is_simulatable",
    "rotation_matrix_2d",
    "rotate_polygon",
    "bounding_box",
    "polygon_area",
    "BodyType",
    "AirfoilParams",
    "build_body",
    "rasterize",
    "points_in_polygon",
]
