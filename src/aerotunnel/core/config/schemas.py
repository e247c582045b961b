"""
Pydantic schemas for configuration validation.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Tuple, Optional, Literal
import math

from ..geometry.bodies import AirfoilParams, BodyType


class AirfoilConfig(BaseModel):
    """NACA four-digit section parameters."""
    camber: float = Field(default=0.02, ge=0.0, le=0.095, description="Maximum camber m (fraction of chord)")
    camber_position: float = Field(default=0.4, gt=0.0, lt=1.0, description="Position of maximum camber p")
    thickness: float = Field(default=0.12, gt=0.0, le=0.4, description="Maximum thickness t")
    stations: int = Field(default=40, ge=4, le=400, description="Cosine-spaced intervals per surface")

    def to_params(self) -> AirfoilParams:
        """Convert to the geometry layer's section parameters."""
        return AirfoilParams(
            camber=self.camber,
            camber_position=self.camber_position,
            thickness=self.thickness,
            stations=self.stations,
        )


class BodyConfig(BaseModel):
    """Body selection and viewport size (display units)."""
    type: BodyType = Field(default=BodyType.AIRFOIL, description="Body type")
    width: float = Field(default=800.0, gt=0, description="Viewport width")
    height: float = Field(default=400.0, gt=0, description="Viewport height")
    geometry_file: Optional[str] = Field(
        default=None,
        description="Polygon file for custom bodies (JSON/XY), relative to the case file"
    )
    airfoil: AirfoilConfig = Field(default_factory=AirfoilConfig, description="Airfoil section")


class FlowConfig(BaseModel):
    """Freestream conditions."""
    speed: float = Field(default=45.0, gt=0, description="Wind speed (m/s)")
    angle_of_attack_deg: float = Field(default=5.0, ge=-45.0, le=45.0, description="Angle of incidence in degrees")


class LatticeConfig(BaseModel):
    """
    D2Q9 lattice Boltzmann tunnel settings.

    Grid size and viscosity are fixed for the session: the engine allocates
    its grid once from them, so the model is frozen after validation. Only
    the inflow velocity, barrier mask and step count vary between runs.
    """
    model_config = ConfigDict(frozen=True)

    rows: int = Field(default=100, ge=8, description="Grid height (cells), fixed per session")
    cols: int = Field(default=200, ge=8, description="Grid width (cells), fixed per session")
    scale: float = Field(default=4.0, gt=0, description="Display units per grid cell")
    viscosity: float = Field(default=0.02, gt=0, description="Lattice kinematic viscosity, fixed per session")
    max_inflow_velocity: float = Field(default=0.12, gt=0, lt=0.3, description="Inflow cap (lattice units)")
    inflow_gain: float = Field(default=0.002, gt=0, description="Lattice velocity per unit wind speed")
    velocity_clamp: float = Field(default=0.35, gt=0, lt=0.58, description="Velocity component clamp")
    density_floor: float = Field(default=0.01, gt=0, description="Lower bound on density before division")
    probe_column: int = Field(default=20, ge=0, description="Column of the stability probe cell")
    stability_check: Literal["probe", "full"] = Field(
        default="probe",
        description="'probe' samples one cell, 'full' checks every cell"
    )
    boundary: Literal["tunnel", "periodic"] = Field(
        default="tunnel",
        description="'tunnel': inflow left, open right, periodic top/bottom; 'periodic': closed box"
    )
    steps_per_batch: int = Field(default=4, ge=1, description="Steps between stability checks")

    @model_validator(mode="after")
    def check_probe(self):
        """Probe cell must lie on the grid."""
        if self.probe_column >= self.cols:
            raise ValueError(f"probe_column {self.probe_column} outside grid of {self.cols} columns")
        return self

    @property
    def omega(self) -> float:
        """BGK relaxation rate 1 / (3 nu + 1/2)."""
        return 1.0 / (3.0 * self.viscosity + 0.5)

    @property
    def grid_shape(self) -> Tuple[int, int]:
        """(rows, cols)"""
        return (self.rows, self.cols)

    @property
    def display_size(self) -> Tuple[float, float]:
        """(width, height) of the viewport the grid covers."""
        return (self.cols * self.scale, self.rows * self.scale)

    @property
    def probe_cell(self) -> Tuple[int, int]:
        """(row, col) sampled by the instability check."""
        return (self.rows // 2, self.probe_column)

    def inflow_from_wind(self, speed: float) -> float:
        """Map wind speed to a capped lattice inflow velocity."""
        return min(self.max_inflow_velocity, speed * self.inflow_gain)


class PanelConfig(BaseModel):
    """Vortex panel solver constants and empirical corrections."""
    reference_chord: float = Field(default=0.2, gt=0, description="Physical chord for Reynolds number (m)")
    kinematic_viscosity: float = Field(default=1.460e-5, gt=0, description="Air kinematic viscosity (m^2/s)")
    pixel_chord: float = Field(
        default=200.0, gt=0,
        description="Assumed on-screen chord (display units) used to normalise circulation"
    )
    self_influence: float = Field(default=0.5, description="Diagonal influence coefficient")
    stall_angle_deg: float = Field(default=15.0, gt=0, lt=90, description="Stall threshold")
    post_stall_lift_factor: float = Field(default=0.8, ge=0, le=1, description="Lift multiplier beyond stall (x cos a)")
    thickness_ratio: float = Field(default=0.12, ge=0, description="Thickness for the skin-friction form factor")
    bluff_drag_factor: float = Field(default=1.8, ge=0, description="Separated-flow drag x sin^2(a)")
    induced_drag_aspect: float = Field(default=50.0, gt=0, description="Effective aspect ratio for induced drag")
    moment_arm: float = Field(default=-0.25, description="Cm = moment_arm * Cl")
    center_of_pressure: float = Field(default=0.25, ge=0, le=1, description="Chord fraction")
    drag_floor: float = Field(default=0.01, gt=0, description="Drag substituted for non-finite values")
    singular_tolerance: float = Field(default=1e-12, gt=0, description="Relative pivot threshold")


class OutputConfig(BaseModel):
    """Output configuration."""
    directory: str = Field(
        default="./results",
        description="Output directory path (relative to the case file)"
    )
    formats: List[Literal["json", "csv"]] = Field(
        default=["json"],
        description="Result export formats"
    )
    save_plots: bool = Field(default=True, description="Save flow and Cp plots")


class VisualizationConfig(BaseModel):
    """Visualization settings."""
    enabled: bool = Field(default=True, description="Enable visualization")
    cmap: str = Field(default="jet", description="Colormap for the speed field")
    dpi: int = Field(default=150, gt=0, description="Saved figure resolution")


class SimulationConfig(BaseModel):
    """Top-level simulation configuration."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    name: str = Field(..., description="Simulation name")
    description: str = Field(default="", description="Case description")

    body: BodyConfig = Field(default_factory=BodyConfig, description="Body settings")
    flow: FlowConfig = Field(default_factory=FlowConfig, description="Freestream")
    lattice: LatticeConfig = Field(default_factory=LatticeConfig, description="Fluid engine settings")
    panel: PanelConfig = Field(default_factory=PanelConfig, description="Panel solver settings")
    lattice_steps: int = Field(default=400, ge=0, description="Lattice steps to run")

    output: OutputConfig = Field(
        default_factory=OutputConfig,
        description="Output settings"
    )

    visualization: VisualizationConfig = Field(
        default_factory=VisualizationConfig,
        description="Visualization settings"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Check name is non-empty."""
        if not v or not v.strip():
            raise ValueError("Simulation name cannot be empty")
        return v.strip()

    @model_validator(mode="after")
    def check_custom_body(self):
        """Custom bodies need a polygon file."""
        if self.body.type is BodyType.CUSTOM and not self.body.geometry_file:
            raise ValueError("body.geometry_file is required for custom bodies")
        return self

    @property
    def alpha_rad(self) -> float:
        """Angle of incidence in radians."""
        return math.radians(self.flow.angle_of_attack_deg)
