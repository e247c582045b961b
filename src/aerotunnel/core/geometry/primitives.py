"""
Geometric primitives: Point2D and polygon array helpers.

Polygons are carried as (N, 2) float64 arrays in display coordinates
(origin top-left, y pointing down). The last vertex implicitly connects
back to the first.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple, Union
import numpy as np
from numpy.typing import NDArray


@dataclass
class Point2D:
    """2D point in the caller's coordinate space (pixels or metres)."""
    x: float
    y: float

    def to_array(self) -> NDArray[np.float64]:
        """Convert to NumPy array (2,)."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> Point2D:
        """Create from NumPy array."""
        if arr.shape != (2,):
            raise ValueError(f"Expected array of shape (2,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]))

    def distance_to(self, other: Point2D) -> float:
        """Euclidean distance to another point."""
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def __repr__(self) -> str:
        return f"Point2D({self.x:.6f}, {self.y:.6f})"


PolygonLike = Union[NDArray[np.float64], Sequence[Point2D], Sequence[Tuple[float, float]]]


def as_polygon_array(polygon: PolygonLike) -> NDArray[np.float64]:
    """
    Normalise any polygon representation to an (N, 2) float64 array.

    Accepts an array, a sequence of Point2D or a sequence of (x, y) pairs.
    An empty input gives a (0, 2) array.

    Returns:
        A new array; the caller's data is never aliased.
    """
    if isinstance(polygon, np.ndarray):
        arr = np.array(polygon, dtype=np.float64, copy=True)
    else:
        items = list(polygon)
        if not items:
            return np.zeros((0, 2), dtype=np.float64)
        if isinstance(items[0], Point2D):
            arr = np.array([[p.x, p.y] for p in items], dtype=np.float64)
        else:
            arr = np.array(items, dtype=np.float64)

    if arr.size == 0:
        return np.zeros((0, 2), dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"polygon must have shape (N, 2), got {arr.shape}")
    return arr


def to_points(polygon: NDArray[np.float64]) -> list[Point2D]:
    """Convert an (N, 2) array back to a list of Point2D."""
    return [Point2D(float(x), float(y)) for x, y in polygon]


def is_simulatable(polygon: NDArray[np.float64]) -> bool:
    """A polygon needs at least 3 vertices before either solver will use it."""
    return polygon.shape[0] >= 3


def rotation_matrix_2d(angle_rad: float) -> NDArray[np.float64]:
    """
    2D rotation matrix.

    Args:
        angle_rad: Rotation angle in radians. In display coordinates
            (y down) a positive angle turns clockwise on screen.

    Returns:
        2x2 rotation matrix
    """
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    return np.array([
        [c, -s],
        [s,  c]
    ], dtype=np.float64)


def rotate_polygon(polygon: NDArray[np.float64],
                   angle_deg: float,
                   center: Tuple[float, float]) -> NDArray[np.float64]:
    """
    Rotate a polygon about a centre point.

    Args:
        polygon: (N, 2) vertices
        angle_deg: Rotation angle in degrees
        center: Pivot (cx, cy)

    Returns:
        Rotated (N, 2) vertices
    """
    if polygon.shape[0] == 0:
        return polygon.copy()
    pivot = np.asarray(center, dtype=np.float64)
    rot = rotation_matrix_2d(np.deg2rad(angle_deg))
    return (rot @ (polygon - pivot).T).T + pivot


def bounding_box(polygon: NDArray[np.float64]) -> Tuple[float, float, float, float]:
    """Axis-aligned bounds (xmin, ymin, xmax, ymax)."""
    xmin, ymin = polygon.min(axis=0)
    xmax, ymax = polygon.max(axis=0)
    return float(xmin), float(ymin), float(xmax), float(ymax)


def polygon_area(polygon: NDArray[np.float64]) -> float:
    """Unsigned shoelace area of the implicitly closed polygon."""
    if polygon.shape[0] < 3:
        return 0.0
    x = polygon[:, 0]
    y = polygon[:, 1]
    return float(0.5 * abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))))


def close_loop(points: Iterable[Sequence[float]]) -> NDArray[np.float64]:
    """Stack points into an array and repeat the first vertex at the end."""
    arr = np.asarray(list(points), dtype=np.float64)
    return np.vstack([arr, arr[:1]])
