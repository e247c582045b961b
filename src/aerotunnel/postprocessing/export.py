"""
Result export to JSON and CSV.

Usage:
    exporter = ResultExporter(case.output_dir, name=case.name)
    exporter.export(result, formats=["json", "csv"])
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional
import json
import logging
import numpy as np

from ..solvers.panel2d.results import PhysicsResult

logger = logging.getLogger(__name__)


class ResultExporter:
    """Write panel results (and optional run metadata) to disk."""

    def __init__(self, directory: str | Path, name: str = "result"):
        """
        Args:
            directory: Output directory, created on first write
            name: File stem for every output
        """
        self.directory = Path(directory)
        self.name = name

    def _path(self, suffix: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory / f"{self.name}{suffix}"

    def write_json(self, result: PhysicsResult,
                   metadata: Optional[Dict[str, Any]] = None) -> Path:
        """Full record: coefficients, Cp distribution and metadata."""
        data = result.to_dict()
        if metadata:
            data["metadata"] = metadata
        path = self._path(".json")
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)
        return path

    def write_csv(self, result: PhysicsResult) -> Path:
        """Cp distribution as x,cp columns."""
        path = self._path("_cp.csv")
        table = np.array([[p.x, p.cp] for p in result.cp_distribution], dtype=np.float64).reshape(-1, 2)
        np.savetxt(path, table, delimiter=",", header="x,cp", comments="", fmt="%.8g")
        return path

    def export(self, result: PhysicsResult,
               formats: Iterable[str] = ("json",),
               metadata: Optional[Dict[str, Any]] = None) -> List[Path]:
        """
        Write every requested format.

        Returns:
            Paths written, in request order
        """
        written = []
        for fmt in formats:
            if fmt == "json":
                written.append(self.write_json(result, metadata))
            elif fmt == "csv":
                written.append(self.write_csv(result))
            else:
                raise ValueError(f"Unsupported export format '{fmt}'. Supported: json, csv")
        for path in written:
            logger.info("Wrote %s", path)
        return written
