"""
AeroTunnel: 2D wind tunnel sandbox.

A D2Q9 lattice Boltzmann tunnel shows the flow around a body while a
vortex panel solver reports its lift, drag and pressure distribution.
"""

from .core.geometry import BodyType, build_body, rasterize
from .solvers import (
    LatticeFluidEngine,
    PhysicsResult,
    SimulationStatus,
    SingularMatrixError,
    reset_fluid,
    solve_aerodynamics,
    solve_linear_system,
    step_fluid,
)

__version__ = "0.1.0"

__all__ = [
    "BodyType",
    "build_body",
    "rasterize",
    "LatticeFluidEngine",
    "PhysicsResult",
    "SimulationStatus",
    "SingularMatrixError",
    "reset_fluid",
    "solve_aerodynamics",
    "solve_linear_system",
    "step_fluid",
]
