"""
Lattice Boltzmann wind tunnel (D2Q9, BGK collision).

The engine owns two population buffers of shape (9, rows, cols). Each step
collides in place on the current buffer, pull-streams into the other one
and swaps them. Rows are y (downward), columns are x (downstream).
"""

from __future__ import annotations
from enum import Enum
import logging
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from ...core.config.schemas import LatticeConfig
from .d2q9 import EX, EY, OPPOSITE, Q, W, equilibrium

logger = logging.getLogger(__name__)


class SimulationStatus(str, Enum):
    """Lifecycle of the lattice engine."""
    UNINITIALIZED = "uninitialized"
    EQUILIBRIUM = "equilibrium"
    EVOLVING = "evolving"
    HALTED = "halted"


def _read_only(arr: NDArray) -> NDArray:
    view = arr.view()
    view.flags.writeable = False
    return view


class LatticeFluidEngine:
    """
    D2Q9 lattice Boltzmann solver for flow past a solid barrier.

    Usage:
        engine = LatticeFluidEngine(LatticeConfig())
        engine.set_barrier(mask)
        engine.reset()
        status = engine.step(inflow_velocity=0.09, steps=4)
    """

    def __init__(self, config: Optional[LatticeConfig] = None):
        """
        Allocate the grid. Populations stay zero until reset().

        Args:
            config: Lattice settings, defaults if omitted
        """
        self.config = config or LatticeConfig()
        rows, cols = self.config.grid_shape

        self._f = np.zeros((Q, rows, cols), dtype=np.float64)
        self._f_next = np.zeros_like(self._f)
        self._rho = np.ones((rows, cols), dtype=np.float64)
        self._ux = np.zeros((rows, cols), dtype=np.float64)
        self._uy = np.zeros((rows, cols), dtype=np.float64)
        self._solid = np.zeros((rows, cols), dtype=bool)

        self._status = SimulationStatus.UNINITIALIZED
        self.step_count = 0

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def shape(self):
        """(rows, cols)"""
        return self._rho.shape

    @property
    def status(self) -> SimulationStatus:
        return self._status

    @property
    def is_halted(self) -> bool:
        return self._status is SimulationStatus.HALTED

    @property
    def populations(self) -> NDArray[np.float64]:
        """Current populations (9, rows, cols), read-only."""
        return _read_only(self._f)

    @property
    def density(self) -> NDArray[np.float64]:
        return _read_only(self._rho)

    @property
    def ux(self) -> NDArray[np.float64]:
        return _read_only(self._ux)

    @property
    def uy(self) -> NDArray[np.float64]:
        return _read_only(self._uy)

    @property
    def speed(self) -> NDArray[np.float64]:
        """Velocity magnitude per cell."""
        return np.hypot(self._ux, self._uy)

    @property
    def solid(self) -> NDArray[np.bool_]:
        return _read_only(self._solid)

    def fluid_mass(self) -> float:
        """Total population over non-solid cells."""
        return float(self._f.sum(axis=0)[~self._solid].sum())

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def reset(self):
        """Fill every cell with the rest equilibrium (rho = 1, u = 0)."""
        self._f[:] = W[:, None, None]
        self._f_next[:] = W[:, None, None]
        self._rho.fill(1.0)
        self._ux.fill(0.0)
        self._uy.fill(0.0)
        self._status = SimulationStatus.EQUILIBRIUM
        self.step_count = 0
        logger.debug("Lattice reset to equilibrium (%dx%d)", *self.shape)

    def set_barrier(self, mask: NDArray[np.bool_]):
        """
        Replace the solid-cell mask.

        Args:
            mask: (rows, cols) boolean occupancy

        Raises:
            ValueError: If the mask shape does not match the grid
        """
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != self.shape:
            raise ValueError(f"Barrier shape {mask.shape} does not match grid {self.shape}")
        self._solid = mask.copy()
        logger.debug("Barrier installed: %d solid cells", int(self._solid.sum()))

    def set_populations(self, populations: NDArray[np.float64]):
        """
        Overwrite the current populations, e.g. to seed a perturbed state.

        Args:
            populations: (9, rows, cols) array
        """
        populations = np.asarray(populations, dtype=np.float64)
        if populations.shape != self._f.shape:
            raise ValueError(f"Populations shape {populations.shape} does not match {self._f.shape}")
        self._f[:] = populations
        if self._status is SimulationStatus.UNINITIALIZED:
            self._status = SimulationStatus.EQUILIBRIUM

    # -------------------------------------------------------------------------
    # Time stepping
    # -------------------------------------------------------------------------

    def _cap_inflow(self, inflow_velocity: float) -> float:
        cap = self.config.max_inflow_velocity
        return float(np.clip(inflow_velocity, -cap, cap))

    @property
    def _tunnel(self) -> bool:
        return self.config.boundary == "tunnel"

    def collide(self, inflow_velocity: float = 0.0):
        """
        Macroscopic moments and BGK relaxation on every fluid cell.

        In tunnel mode the leftmost column is forced to the inflow
        equilibrium (rho = 1, u = (inflow, 0)). Solid cells are skipped and
        report rho = 1, u = 0.
        """
        cfg = self.config
        f = self._f
        fluid = ~self._solid

        rho = f.sum(axis=0)
        np.maximum(rho, cfg.density_floor, out=rho)
        ux = np.tensordot(EX.astype(np.float64), f, axes=1) / rho
        uy = np.tensordot(EY.astype(np.float64), f, axes=1) / rho

        np.clip(ux, -cfg.velocity_clamp, cfg.velocity_clamp, out=ux)
        np.clip(uy, -cfg.velocity_clamp, cfg.velocity_clamp, out=uy)

        if self._tunnel:
            rho[:, 0] = 1.0
            ux[:, 0] = self._cap_inflow(inflow_velocity)
            uy[:, 0] = 0.0

        feq = equilibrium(rho, ux, uy)

        relaxed = f + cfg.omega * (feq - f)
        if self._tunnel:
            relaxed[:, :, 0] = feq[:, :, 0]
        f[:] = np.where(fluid, relaxed, f)

        self._rho = np.where(fluid, rho, 1.0)
        self._ux = np.where(fluid, ux, 0.0)
        self._uy = np.where(fluid, uy, 0.0)

    def stream(self, inflow_velocity: float = 0.0):
        """
        Pull-stream into the second buffer and swap.

        Rows wrap periodically. In tunnel mode a source beyond the left or
        right edge supplies the inflow equilibrium; in periodic mode columns
        wrap as well. A population whose source is solid is replaced by the
        receiving cell's own opposite population (bounce-back). Solid cells
        are reset to the rest weights.
        """
        f = self._f
        out = self._f_next
        solid = self._solid
        edge = equilibrium(1.0, self._cap_inflow(inflow_velocity), 0.0)

        for i in range(Q):
            shift = (int(EY[i]), int(EX[i]))
            out[i] = np.roll(f[i], shift, axis=(0, 1))
            src_solid = np.roll(solid, shift, axis=(0, 1))

            if self._tunnel and EX[i] != 0:
                col = 0 if EX[i] > 0 else -1
                out[i][:, col] = edge[i]
                src_solid[:, col] = False

            np.copyto(out[i], f[OPPOSITE[i]], where=src_solid)

        out[:, solid] = W[:, None]

        self._f, self._f_next = out, f

    def check_stability(self) -> bool:
        """
        Finite-value check on the velocity field.

        'probe' samples one fixed cell; 'full' checks every cell.
        """
        if self.config.stability_check == "full":
            return bool(np.isfinite(self._ux).all() and np.isfinite(self._uy).all())
        r, c = self.config.probe_cell
        return bool(np.isfinite(self._ux[r, c]) and np.isfinite(self._uy[r, c]))

    def step(self, inflow_velocity: float, steps: int = 1) -> SimulationStatus:
        """
        Advance the flow by a batch of steps, then check stability.

        Args:
            inflow_velocity: Lattice inflow speed, magnitude capped at
                max_inflow_velocity
            steps: Number of collide + stream steps in this batch

        Returns:
            New status; HALTED is sticky until reset()

        Raises:
            ValueError: If steps is negative
        """
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")
        if self._status is SimulationStatus.HALTED:
            return self._status
        if self._status is SimulationStatus.UNINITIALIZED:
            self.reset()
        if steps == 0:
            return self._status

        for _ in range(steps):
            self.collide(inflow_velocity)
            self.stream(inflow_velocity)
        self.step_count += steps

        if self.check_stability():
            self._status = SimulationStatus.EVOLVING
        else:
            self._status = SimulationStatus.HALTED
            logger.warning(
                "Lattice became unstable after %d steps; halted until reset",
                self.step_count
            )
        return self._status


def step_fluid(engine: LatticeFluidEngine,
               mask: NDArray[np.bool_],
               inflow_velocity: float,
               steps: int = 1) -> SimulationStatus:
    """
    Advance the engine against an occupancy mask.

    A mask that differs from the installed barrier is a shape change: it is
    installed and the populations are reset before stepping.
    """
    if not np.array_equal(engine.solid, mask):
        engine.set_barrier(mask)
        engine.reset()
    return engine.step(inflow_velocity, steps)


def reset_fluid(engine: LatticeFluidEngine) -> SimulationStatus:
    """Return the engine to equilibrium, clearing any halt."""
    engine.reset()
    return engine.status
