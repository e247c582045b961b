"""
Polygon file readers and writers for JSON and XY formats.
"""

from pathlib import Path
import json
import numpy as np
from numpy.typing import NDArray

from ..geometry.primitives import PolygonLike, as_polygon_array


class PolygonReader:
    """Read body outlines drawn or exported elsewhere."""

    @staticmethod
    def read_json(filepath: str | Path) -> NDArray[np.float64]:
        """
        Read a polygon from a JSON file.

        Expected format:
        {
          "points": [[x, y], ...]
        }

        Args:
            filepath: Path to JSON file

        Returns:
            (N, 2) vertices
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Polygon file not found: {filepath}")

        with open(filepath, 'r') as f:
            data = json.load(f)

        if not isinstance(data, dict) or "points" not in data:
            raise ValueError("Missing 'points' field in JSON")

        return as_polygon_array(data["points"])

    @staticmethod
    def read_xy(filepath: str | Path) -> NDArray[np.float64]:
        """
        Read a polygon from an XY file.

        Expected format (space or tab separated):
        # Optional comment lines
        x1 y1
        x2 y2
        ...

        Args:
            filepath: Path to XY file

        Returns:
            (N, 2) vertices
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"Polygon file not found: {filepath}")

        points = []
        with open(filepath, 'r') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                parts = line.split()
                if len(parts) >= 2:
                    points.append([float(parts[0]), float(parts[1])])

        return as_polygon_array(points)

    @staticmethod
    def read(filepath: str | Path) -> NDArray[np.float64]:
        """
        Auto-detect format and read a polygon file.

        Args:
            filepath: Path to polygon file

        Returns:
            (N, 2) vertices
        """
        filepath = Path(filepath)
        suffix = filepath.suffix.lower()

        if suffix == '.json':
            return PolygonReader.read_json(filepath)
        elif suffix in ('.xy', '.dat', '.txt'):
            return PolygonReader.read_xy(filepath)
        else:
            raise ValueError(
                f"Unsupported file extension '{suffix}'. "
                f"Supported: .json, .xy, .dat, .txt"
            )


def write_polygon(polygon: PolygonLike, filepath: str | Path) -> Path:
    """
    Write a polygon as JSON ({"points": ...}) or XY columns, by suffix.

    Returns:
        Path written
    """
    filepath = Path(filepath)
    pts = as_polygon_array(polygon)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    if filepath.suffix.lower() == '.json':
        with open(filepath, 'w') as f:
            json.dump({"points": pts.tolist()}, f, indent=2)
    else:
        np.savetxt(filepath, pts, fmt="%.6f", header="x y")
    return filepath
