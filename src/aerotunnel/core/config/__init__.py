"""Configuration schemas for validation."""

from .schemas import (
    AirfoilConfig,
    BodyConfig,
    FlowConfig,
    LatticeConfig,
    PanelConfig,
    OutputConfig,
    VisualizationConfig,
    SimulationConfig,
)

__all__ = [
    "AirfoilConfig",
    "BodyConfig",
    "FlowConfig",
    "LatticeConfig",
    "PanelConfig",
    "OutputConfig",
    "VisualizationConfig",
    "SimulationConfig",
]
