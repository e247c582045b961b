"""
Result records produced by the panel solver.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class CpPoint:
    """Pressure coefficient sample at a control point."""
    x: float
    cp: float


@dataclass(frozen=True)
class PhysicsResult:
    """
    Aerodynamic coefficients for one body at one flow condition.

    Attributes:
        lift_coefficient: Cl
        drag_coefficient: Cd (always positive and finite)
        moment_coefficient: Cm about the quarter chord
        reynolds_number: Re based on the reference chord
        cp_distribution: Cp samples ordered by x
        center_of_pressure: Chord fraction
    """
    lift_coefficient: float = 0.0
    drag_coefficient: float = 0.0
    moment_coefficient: float = 0.0
    reynolds_number: float = 0.0
    cp_distribution: Tuple[CpPoint, ...] = field(default_factory=tuple)
    center_of_pressure: float = 0.25

    @classmethod
    def empty(cls, center_of_pressure: float = 0.25) -> PhysicsResult:
        """Result for a polygon that is not ready to simulate."""
        return cls(center_of_pressure=center_of_pressure)

    @property
    def lift_to_drag(self) -> float:
        """L/D, or 0 when there is no drag."""
        if self.drag_coefficient == 0.0:
            return 0.0
        return self.lift_coefficient / self.drag_coefficient

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form for export."""
        return {
            "lift_coefficient": self.lift_coefficient,
            "drag_coefficient": self.drag_coefficient,
            "moment_coefficient": self.moment_coefficient,
            "reynolds_number": self.reynolds_number,
            "center_of_pressure": self.center_of_pressure,
            "lift_to_drag": self.lift_to_drag,
            "cp_distribution": [{"x": p.x, "cp": p.cp} for p in self.cp_distribution],
        }
