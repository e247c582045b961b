"""Numerical solvers: linear algebra, vortex panels, lattice Boltzmann."""

from .linalg import SingularMatrixError, solve_linear_system
from .panel2d import CpPoint, PhysicsResult, VortexPanelSolver, solve_aerodynamics
from .lattice import LatticeFluidEngine, SimulationStatus, step_fluid, reset_fluid

__all__ = [
    "SingularMatrixError",
    "solve_linear_system",
    "CpPoint",
    "PhysicsResult",
    "VortexPanelSolver",
    "solve_aerodynamics",
    "LatticeFluidEngine",
    "SimulationStatus",
    "step_fluid",
    "reset_fluid",
]
