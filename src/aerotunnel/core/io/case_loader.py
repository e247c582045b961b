"""
YAML case file loader with validation.
"""

from pathlib import Path
import logging
import yaml

from ..config.schemas import SimulationConfig
from ..geometry.bodies import BodyType
from .polygon_io import PolygonReader
from .case import Case

logger = logging.getLogger(__name__)


class CaseLoader:
    """Load and validate simulation cases from YAML files."""

    @staticmethod
    def _read_config(filepath: Path) -> SimulationConfig:
        if not filepath.exists():
            raise FileNotFoundError(f"Case file not found: {filepath}")

        with open(filepath, 'r') as f:
            raw_config = yaml.safe_load(f)

        if not isinstance(raw_config, dict):
            raise ValueError(f"Case file must contain a mapping: {filepath}")

        # Validate with Pydantic
        return SimulationConfig(**raw_config)

    @staticmethod
    def load(filepath: str | Path) -> Case:
        """
        Load a case file.

        Args:
            filepath: Path to YAML case file

        Returns:
            Case object with config and helper properties
        """
        filepath = Path(filepath)
        config = CaseLoader._read_config(filepath)
        base_path = filepath.parent

        custom = None
        if config.body.type is BodyType.CUSTOM:
            geom_path = base_path / config.body.geometry_file
            custom = PolygonReader.read(geom_path)
            logger.info("Loaded custom polygon with %d vertices from %s", custom.shape[0], geom_path)

        return Case(config=config, case_dir=base_path, custom_polygon=custom)

    @staticmethod
    def validate(filepath: str | Path) -> bool:
        """
        Validate case file without building geometry.

        Args:
            filepath: Path to YAML case file

        Returns:
            True if valid, raises ValidationError otherwise
        """
        CaseLoader._read_config(Path(filepath))
        return True
