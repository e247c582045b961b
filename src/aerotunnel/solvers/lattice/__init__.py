"""D2Q9 lattice Boltzmann fluid engine."""

from .d2q9 import EX, EY, W, OPPOSITE, Q, equilibrium
from .engine import LatticeFluidEngine, SimulationStatus, step_fluid, reset_fluid

__all__ = [
    "EX",
    "EY",
    "W",
    "OPPOSITE",
    "Q",
    "equilibrium",
    "LatticeFluidEngine",
    "SimulationStatus",
    "step_fluid",
    "reset_fluid",
]
