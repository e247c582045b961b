"""
2D constant-strength vortex panel solver.

Each panel carries a vortex sheet of uniform density gamma, lumped at its
midpoint for the mutual influence terms. Flow tangency is enforced at
every control point; the net circulation gives lift through
Kutta-Joukowski, and empirical corrections supply stall and drag.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import math
from typing import Optional
import numpy as np
from numpy.typing import NDArray

from ...core.config.schemas import PanelConfig
from ...core.geometry.primitives import PolygonLike, as_polygon_array
from ..linalg import SingularMatrixError, solve_linear_system
from .results import CpPoint, PhysicsResult

logger = logging.getLogger(__name__)


@dataclass
class PanelGeometry:
    """
    Straight panels between consecutive vertices of an open chain.

    Attributes:
        control_points: (N, 2) panel midpoints
        lengths: (N,) panel lengths
        theta: (N,) panel orientation angles atan2(dy, dx)
        normals: (N, 2) unit normals (-sin theta, cos theta)
    """
    control_points: NDArray[np.float64]
    lengths: NDArray[np.float64]
    theta: NDArray[np.float64]
    normals: NDArray[np.float64]

    @classmethod
    def from_vertices(cls, vertices: NDArray[np.float64]) -> PanelGeometry:
        """N+1 vertices give N panels; the chain is not closed implicitly."""
        p1 = vertices[:-1]
        p2 = vertices[1:]
        d = p2 - p1
        theta = np.arctan2(d[:, 1], d[:, 0])
        return cls(
            control_points=0.5 * (p1 + p2),
            lengths=np.hypot(d[:, 0], d[:, 1]),
            theta=theta,
            normals=np.column_stack([-np.sin(theta), np.cos(theta)]),
        )

    @property
    def num_panels(self) -> int:
        return self.lengths.shape[0]


class VortexPanelSolver:
    """
    Vortex panel method for a single 2D body.

    The polygon is given in the body's own attitude; the angle of attack
    enters only through the freestream direction.
    """

    def __init__(self,
                 polygon: PolygonLike,
                 speed: float,
                 alpha_deg: float,
                 config: Optional[PanelConfig] = None):
        """
        Initialize the solver.

        Args:
            polygon: Body outline (N+1 vertices for N panels)
            speed: Freestream speed (m/s), must be positive
            alpha_deg: Angle of attack in degrees
            config: Solver constants, defaults if omitted
        """
        if not math.isfinite(speed) or speed <= 0:
            raise ValueError(f"speed must be positive and finite, got {speed}")

        self.polygon = as_polygon_array(polygon)
        self.v_inf = float(speed)
        self.alpha_deg = float(alpha_deg)
        self.alpha = math.radians(alpha_deg)
        self.config = config or PanelConfig()

        # Results
        self.panels: Optional[PanelGeometry] = None
        self.gamma: Optional[NDArray[np.float64]] = None
        self.result: Optional[PhysicsResult] = None

    @property
    def reynolds_number(self) -> float:
        cfg = self.config
        return self.v_inf * cfg.reference_chord / cfg.kinematic_viscosity

    def compute_influence_matrix(self, panels: PanelGeometry) -> NDArray[np.float64]:
        """
        Normal velocity induced at control point i by unit gamma on panel j.

        Returns:
            (N, N) influence matrix with the self-influence on the diagonal
        """
        cp = panels.control_points
        dx = cp[:, 0][:, None] - cp[:, 0][None, :]
        dy = cp[:, 1][:, None] - cp[:, 1][None, :]
        r2 = dx**2 + dy**2

        # Normal of the receiving panel i
        nx = panels.normals[:, 0][:, None]
        ny = panels.normals[:, 1][:, None]
        cross = dx * ny - dy * nx

        A = np.zeros_like(r2)
        # Coincident control points induce nothing
        np.divide(cross, r2, out=A, where=r2 > 0.0)
        A *= panels.lengths[None, :] / (2.0 * np.pi)

        np.fill_diagonal(A, self.config.self_influence)
        return A

    def compute_rhs(self, panels: PanelGeometry) -> NDArray[np.float64]:
        """Freestream normal component, negated."""
        n = panels.normals
        return -self.v_inf * (math.cos(self.alpha) * n[:, 0] + math.sin(self.alpha) * n[:, 1])

    def solve_strengths(self, A: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
        """Vortex densities, or zeros when the system cannot be solved."""
        try:
            gamma = solve_linear_system(A, b, tol=self.config.singular_tolerance)
        except SingularMatrixError as exc:
            logger.warning("Singular panel system (%s); using zero circulation", exc)
            return np.zeros_like(b)

        if not np.all(np.isfinite(gamma)):
            logger.warning("Non-finite vortex strengths; using zero circulation")
            return np.zeros_like(b)
        return gamma

    def solve(self) -> PhysicsResult:
        """
        Solve for vortex strengths and compute the coefficients.

        Returns:
            PhysicsResult (also stored on self.result)
        """
        cfg = self.config
        if self.polygon.shape[0] < 3:
            self.result = PhysicsResult.empty(cfg.center_of_pressure)
            return self.result

        panels = PanelGeometry.from_vertices(self.polygon)
        A = self.compute_influence_matrix(panels)
        b = self.compute_rhs(panels)
        gamma = self.solve_strengths(A, b)

        self.panels = panels
        self.gamma = gamma

        circulation = float(np.dot(gamma, panels.lengths))

        # Local speed approximated as freestream plus sheet density
        cp = 1.0 - ((self.v_inf + gamma) / self.v_inf) ** 2
        order = np.argsort(panels.control_points[:, 0], kind="stable")
        cp_distribution = tuple(
            CpPoint(x=float(panels.control_points[k, 0]), cp=float(cp[k])) for k in order
        )

        re = self.reynolds_number
        cl = 2.0 * circulation / (self.v_inf * cfg.pixel_chord)

        stalled = abs(self.alpha) > math.radians(cfg.stall_angle_deg)
        if stalled:
            cl *= math.cos(self.alpha) * cfg.post_stall_lift_factor

        # Turbulent flat plate skin friction with a thickness form factor
        tc = cfg.thickness_ratio
        cf = 0.074 / re ** 0.2
        form_factor = 1.0 + 2.0 * tc + 60.0 * tc ** 4
        cd = 2.0 * cf * form_factor

        if stalled:
            cd += cfg.bluff_drag_factor * math.sin(self.alpha) ** 2
        else:
            cd += cl * cl / (math.pi * cfg.induced_drag_aspect)

        if not math.isfinite(cl):
            cl = 0.0
        if not math.isfinite(cd) or cd <= 0.0:
            cd = cfg.drag_floor

        self.result = PhysicsResult(
            lift_coefficient=cl,
            drag_coefficient=cd,
            moment_coefficient=cfg.moment_arm * cl,
            reynolds_number=re,
            cp_distribution=cp_distribution,
            center_of_pressure=cfg.center_of_pressure,
        )

        logger.debug(
            "Panels=%d alpha=%.1f deg: Cl=%.4f Cd=%.4f Re=%.3g",
            panels.num_panels, self.alpha_deg, cl, cd, re
        )
        return self.result


def solve_aerodynamics(polygon: PolygonLike,
                       speed: float,
                       alpha_deg: float,
                       reference_chord: Optional[float] = None,
                       config: Optional[PanelConfig] = None) -> PhysicsResult:
    """
    Steady aerodynamic coefficients of a 2D body.

    Args:
        polygon: Body outline at zero incidence
        speed: Freestream speed (m/s)
        alpha_deg: Angle of attack in degrees
        reference_chord: Physical chord for the Reynolds number (m),
            0.2 unless the config says otherwise
        config: Solver constants

    Returns:
        PhysicsResult
    """
    config = config or PanelConfig()
    if reference_chord is not None and reference_chord != config.reference_chord:
        config = config.model_copy(update={"reference_chord": reference_chord})
    return VortexPanelSolver(polygon, speed, alpha_deg, config).solve()
