"""IO utilities: polygon readers, case loader, case container."""

from .polygon_io import PolygonReader, write_polygon
from .case_loader import CaseLoader
from .case import Case

__all__ = [
    "PolygonReader",
    "write_polygon",
    "CaseLoader",
    "Case",
]
