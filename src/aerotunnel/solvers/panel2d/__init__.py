"""Vortex panel aerodynamics solver."""

from .results import CpPoint, PhysicsResult
from .vortex import PanelGeometry, VortexPanelSolver, solve_aerodynamics

__all__ = [
    "CpPoint",
    "PhysicsResult",
    "PanelGeometry",
    "VortexPanelSolver",
    "solve_aerodynamics",
]
