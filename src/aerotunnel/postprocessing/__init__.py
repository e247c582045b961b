"""
Post-processing module.

Key pieces:
- ResultExporter: JSON/CSV output of panel results
- analyze: merges a PhysicsResult with an external explanation
"""

from .analysis import (
    AnalysisResult,
    Explainer,
    Explanation,
    analyze,
    build_prompt,
    describe_flow_regime,
    stall_suspected,
)
from .export import ResultExporter

__all__ = [
    "AnalysisResult",
    "Explainer",
    "Explanation",
    "analyze",
    "build_prompt",
    "describe_flow_regime",
    "stall_suspected",
    "ResultExporter",
]
