"""
Test the explanation merge and the command line runner.
"""

import json
import logging
import pytest

from aerotunnel import cli
from aerotunnel.core.config import LatticeConfig
from aerotunnel.postprocessing import (
    Explanation,
    analyze,
    build_prompt,
    describe_flow_regime,
    stall_suspected,
)
from aerotunnel.postprocessing.analysis import FALLBACK_EXPLANATION, FALLBACK_RECOMMENDATIONS
from aerotunnel.solvers.lattice import LatticeFluidEngine
from aerotunnel.solvers.panel2d import PhysicsResult

RESULT = PhysicsResult(
    lift_coefficient=0.42,
    drag_coefficient=0.012,
    moment_coefficient=-0.105,
    reynolds_number=6.16e5,
)


class CannedExplainer:
    def explain(self, result, body_type, alpha_deg):
        return Explanation(
            text=f"{body_type} at {alpha_deg} deg is attached.",
            recommendations=["Reduce thickness."],
        )


class BrokenExplainer:
    def explain(self, result, body_type, alpha_deg):
        raise ConnectionError("service offline")


class TestAnalysis:

    def test_flow_regime(self):
        assert describe_flow_regime(1e5) == "laminar"
        assert describe_flow_regime(5e5) == "transitional"
        assert describe_flow_regime(3e6) == "transitional"
        assert describe_flow_regime(1e7) == "turbulent"

    def test_stall_suspected(self):
        assert not stall_suspected(15.0)
        assert stall_suspected(-16.0)

    def test_no_explainer_uses_fallback(self):
        analysis = analyze(RESULT, "airfoil", 5.0)
        assert analysis.physics is RESULT
        assert analysis.explanation == FALLBACK_EXPLANATION
        assert analysis.recommendations == FALLBACK_RECOMMENDATIONS
        assert not analysis.explained

    def test_failing_explainer_keeps_numbers(self, caplog):
        with caplog.at_level(logging.ERROR):
            analysis = analyze(RESULT, "airfoil", 20.0, explainer=BrokenExplainer())
        assert analysis.physics == RESULT
        assert analysis.explanation == FALLBACK_EXPLANATION
        assert analysis.stall_suspected
        assert "fallback" in caplog.text

    def test_explainer_text_merged(self):
        analysis = analyze(RESULT, "airfoil", 5.0, explainer=CannedExplainer())
        assert analysis.explained
        assert analysis.explanation == "airfoil at 5.0 deg is attached."
        assert analysis.recommendations == ("Reduce thickness.",)
        data = analysis.to_dict()
        assert data["lift_coefficient"] == 0.42
        assert data["flow_regime"] == "transitional"

    def test_prompt_carries_numbers(self):
        prompt = build_prompt(RESULT, "cylinder", 3.0)
        assert "0.420" in prompt
        assert "cylinder" in prompt


SMALL_CASE = """
name: cli_case
body:
  type: cylinder
flow:
  speed: 30.0
  angle_of_attack_deg: 0.0
lattice:
  rows: 20
  cols: 40
  scale: 20
  probe_column: 5
  steps_per_batch: 3
lattice_steps: 8
output:
  directory: results
  formats: [json, csv]
visualization:
  dpi: 50
"""


@pytest.fixture
def cli_case(tmp_path):
    path = tmp_path / "cli_case.yaml"
    path.write_text(SMALL_CASE)
    return path


class TestCli:

    def test_run_writes_outputs(self, cli_case):
        assert cli.main([str(cli_case)]) == cli.EXIT_OK
        out = cli_case.parent / "results"
        data = json.loads((out / "cli_case.json").read_text())
        assert data["metadata"]["lattice_steps"] == 8
        assert data["metadata"]["lattice_status"] == "evolving"
        assert (out / "cli_case_cp.csv").exists()
        assert (out / "cli_case_flow.png").exists()
        assert (out / "cli_case_cp.png").exists()

    def test_overrides(self, cli_case, tmp_path):
        out = tmp_path / "elsewhere"
        assert cli.main([str(cli_case), "--steps", "2", "--output", str(out), "--no-plots"]) == 0
        data = json.loads((out / "cli_case.json").read_text())
        assert data["metadata"]["lattice_steps"] == 2
        assert not list(out.glob("*.png"))

    def test_missing_case(self, tmp_path):
        assert cli.main([str(tmp_path / "missing.yaml")]) == cli.EXIT_LOAD_ERROR

    def test_invalid_case(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("name: bad\nflow:\n  speed: -3\n")
        assert cli.main([str(path)]) == cli.EXIT_LOAD_ERROR

    def test_halt_exit_code(self, cli_case, monkeypatch):
        monkeypatch.setattr(LatticeFluidEngine, "check_stability", lambda self: False)
        assert cli.main([str(cli_case), "--no-plots"]) == cli.EXIT_HALTED
        data = json.loads((cli_case.parent / "results" / "cli_case.json").read_text())
        assert data["metadata"]["lattice_status"] == "halted"
        assert data["metadata"]["lattice_steps"] == 3

    def test_run_lattice_batches(self):
        engine = LatticeFluidEngine(LatticeConfig(rows=20, cols=40, probe_column=5))
        engine.reset()
        cli.run_lattice(engine, 0.06, total_steps=10, batch=4)
        assert engine.step_count == 10


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
