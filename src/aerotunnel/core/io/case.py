"""
Case class - unified container for all case data.

Provides clean access to:
- Body outlines (tunnel attitude and zero incidence)
- Barrier mask for the lattice
- Flow conditions
- Solver entry points
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from ..config.schemas import SimulationConfig
from ..geometry.bodies import BodyType, build_body
from ..geometry.raster import rasterize


@dataclass
class Case:
    """
    Unified container for a simulation case.

    Usage:
        from aerotunnel.core.io import CaseLoader

        case = CaseLoader.load('cases/naca2412.yaml')
        result = case.solve()
        engine = case.new_engine()
        engine.step(case.inflow_velocity, steps=4)
    """

    config: SimulationConfig
    case_dir: Path
    custom_polygon: Optional[NDArray[np.float64]] = None

    @property
    def name(self) -> str:
        """Case name."""
        return self.config.name

    @property
    def description(self) -> str:
        """Case description."""
        return self.config.description

    @property
    def body_type(self) -> BodyType:
        return self.config.body.type

    # -------------------------------------------------------------------------
    # Flow Conditions
    # -------------------------------------------------------------------------

    @property
    def speed(self) -> float:
        """Freestream speed (m/s)."""
        return self.config.flow.speed

    @property
    def alpha_deg(self) -> float:
        """Angle of attack in degrees."""
        return self.config.flow.angle_of_attack_deg

    @property
    def inflow_velocity(self) -> float:
        """Lattice inflow speed for the configured wind speed."""
        return self.config.lattice.inflow_from_wind(self.speed)

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    def _build(self, angle_deg: float) -> NDArray[np.float64]:
        body = self.config.body
        return build_body(
            body.type,
            body.width,
            body.height,
            angle_deg=angle_deg,
            custom=self.custom_polygon,
            airfoil=body.airfoil.to_params(),
        )

    @property
    def polygon(self) -> NDArray[np.float64]:
        """Outline as placed in the tunnel, rotated by the angle of attack."""
        return self._build(self.alpha_deg)

    @property
    def reference_polygon(self) -> NDArray[np.float64]:
        """Outline at zero incidence, for the panel solver."""
        return self._build(0.0)

    @property
    def barrier(self) -> NDArray[np.bool_]:
        """Solid-cell mask of the tunnel outline."""
        lattice = self.config.lattice
        return rasterize(self.polygon, lattice.scale, lattice.grid_shape)

    # -------------------------------------------------------------------------
    # Solvers
    # -------------------------------------------------------------------------

    def solve(self):
        """
        Run the vortex panel solver for this case.

        Returns:
            PhysicsResult
        """
        # Import here to avoid circular dependency
        from ...solvers.panel2d import VortexPanelSolver

        solver = VortexPanelSolver(
            self.reference_polygon,
            self.speed,
            self.alpha_deg,
            self.config.panel
        )
        return solver.solve()

    def new_engine(self):
        """
        Lattice engine with this case's barrier installed, at equilibrium.

        Returns:
            LatticeFluidEngine
        """
        from ...solvers.lattice import LatticeFluidEngine

        engine = LatticeFluidEngine(self.config.lattice)
        engine.set_barrier(self.barrier)
        engine.reset()
        return engine

    # -------------------------------------------------------------------------
    # Output Paths
    # -------------------------------------------------------------------------

    @property
    def output_dir(self) -> Path:
        """Output directory, relative paths resolved against the case directory."""
        out = Path(self.config.output.directory)
        if not out.is_absolute():
            out = self.case_dir / out
        return out

    def __repr__(self) -> str:
        return (
            f"Case(name='{self.name}', "
            f"body={self.body_type.value}, "
            f"speed={self.speed}, alpha={self.alpha_deg})"
        )
