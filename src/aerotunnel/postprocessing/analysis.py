"""
Merging numeric results with an external explanation.

The explanation itself comes from a collaborator (for example a hosted
language model). This module only defines the contract and guarantees
that a failing or missing collaborator never loses the numbers.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Optional, Protocol, Tuple

from ..solvers.panel2d.results import PhysicsResult

logger = logging.getLogger(__name__)

FALLBACK_EXPLANATION = (
    "Analysis currently unavailable. The physics calculations are accurate, "
    "but the expert explanation service is offline."
)
FALLBACK_RECOMMENDATIONS = (
    "Check Reynolds number manually.",
    "Verify angle of attack is within linear range.",
)

LAMINAR_LIMIT = 5e5
TURBULENT_LIMIT = 3e6


@dataclass(frozen=True)
class Explanation:
    """Text produced by an explainer."""
    text: str
    recommendations: Tuple[str, ...] = ()


class Explainer(Protocol):
    """Anything that can explain a result in words."""

    def explain(self, result: PhysicsResult, body_type: str, alpha_deg: float) -> Explanation:
        ...


@dataclass(frozen=True)
class AnalysisResult:
    """PhysicsResult plus explanation, flow regime and stall flag."""
    physics: PhysicsResult
    explanation: str
    recommendations: Tuple[str, ...] = field(default_factory=tuple)
    flow_regime: str = ""
    stall_suspected: bool = False
    explained: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = self.physics.to_dict()
        data.update({
            "explanation": self.explanation,
            "recommendations": list(self.recommendations),
            "flow_regime": self.flow_regime,
            "stall_suspected": self.stall_suspected,
        })
        return data


def describe_flow_regime(reynolds: float) -> str:
    """Laminar below 5e5, transitional up to 3e6, turbulent above."""
    if reynolds < LAMINAR_LIMIT:
        return "laminar"
    if reynolds <= TURBULENT_LIMIT:
        return "transitional"
    return "turbulent"


def stall_suspected(alpha_deg: float, stall_angle_deg: float = 15.0) -> bool:
    """True beyond the stall angle in either direction."""
    return abs(alpha_deg) > stall_angle_deg


def build_prompt(result: PhysicsResult, body_type: str, alpha_deg: float) -> str:
    """Question an explainer can send to a language model."""
    return (
        "You are an expert aerodynamicist consultant.\n"
        f"A vortex panel simulation was run on a {body_type}.\n\n"
        "Calculated data:\n"
        f"- Lift coefficient (Cl): {result.lift_coefficient:.3f}\n"
        f"- Drag coefficient (Cd): {result.drag_coefficient:.3f}\n"
        f"- Reynolds number: {result.reynolds_number:.2e}\n"
        f"- Angle of attack: {alpha_deg} degrees\n\n"
        "1. Explain the flow regime based on the Reynolds number.\n"
        "2. Analyze the efficiency (L/D ratio).\n"
        "3. Say whether the body is likely stalled.\n"
        "4. Recommend changes that would improve performance.\n"
        "Keep the explanation technical and at most 3 sentences."
    )


def analyze(result: PhysicsResult,
            body_type: str,
            alpha_deg: float,
            explainer: Optional[Explainer] = None,
            stall_angle_deg: float = 15.0) -> AnalysisResult:
    """
    Attach an explanation to a result.

    Without an explainer, or when it fails, the fixed fallback text is
    used. The numeric result is returned unchanged either way.
    """
    regime = describe_flow_regime(result.reynolds_number)
    stalled = stall_suspected(alpha_deg, stall_angle_deg)

    explanation = None
    if explainer is not None:
        try:
            explanation = explainer.explain(result, body_type, alpha_deg)
        except Exception:
            logger.exception("Explanation service failed; using fallback text")

    if explanation is None:
        return AnalysisResult(
            physics=result,
            explanation=FALLBACK_EXPLANATION,
            recommendations=FALLBACK_RECOMMENDATIONS,
            flow_regime=regime,
            stall_suspected=stalled,
        )

    return AnalysisResult(
        physics=result,
        explanation=explanation.text,
        recommendations=tuple(explanation.recommendations),
        flow_regime=regime,
        stall_suspected=stalled,
        explained=True,
    )
