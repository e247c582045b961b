"""
Test configuration schemas, case loading and result export.
"""

import json
import pytest
import numpy as np
from pathlib import Path
from pydantic import ValidationError

from aerotunnel.core.config import LatticeConfig, PanelConfig, SimulationConfig
from aerotunnel.core.geometry import BodyType
from aerotunnel.core.io import CaseLoader, PolygonReader, write_polygon
from aerotunnel.postprocessing import ResultExporter
from aerotunnel.solvers.panel2d import PhysicsResult
from aerotunnel.solvers.lattice import LatticeFluidEngine, SimulationStatus

CASES_DIR = Path(__file__).parent.parent.parent / "cases"

CASE_YAML = """
name: test_airfoil
body:
  type: airfoil
flow:
  speed: 45.0
  angle_of_attack_deg: 5.0
lattice:
  rows: 20
  cols: 40
  scale: 20
  probe_column: 5
lattice_steps: 8
output:
  directory: out
  formats: [json, csv]
"""


@pytest.fixture
def case_file(tmp_path):
    path = tmp_path / "case.yaml"
    path.write_text(CASE_YAML)
    return path


class TestSchemas:

    def test_defaults(self):
        config = SimulationConfig(name="defaults")
        assert config.body.type is BodyType.AIRFOIL
        assert config.flow.speed == 45.0
        assert config.lattice.grid_shape == (100, 200)
        assert config.lattice.display_size == (800.0, 400.0)
        assert config.lattice.probe_cell == (50, 20)
        assert config.panel.pixel_chord == 200.0

    def test_omega(self):
        assert LatticeConfig().omega == pytest.approx(1.0 / 0.56)

    def test_inflow_from_wind(self):
        lattice = LatticeConfig()
        assert lattice.inflow_from_wind(45.0) == pytest.approx(0.09)
        assert lattice.inflow_from_wind(100.0) == pytest.approx(0.12)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(name="  ")

    def test_extra_field_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(name="x", solver={"type": "spm"})

    def test_custom_needs_geometry(self):
        with pytest.raises(ValidationError):
            SimulationConfig(name="x", body={"type": "custom"})

    def test_probe_inside_grid(self):
        with pytest.raises(ValidationError):
            LatticeConfig(cols=16, probe_column=20)

    def test_lattice_grid_fixed_after_creation(self):
        lattice = LatticeConfig(rows=20, cols=40, probe_column=5)
        engine = LatticeFluidEngine(lattice)
        with pytest.raises(ValidationError):
            lattice.rows = 50
        with pytest.raises(ValidationError):
            lattice.viscosity = 0.1
        assert engine.shape == (20, 40)
        assert engine.config.omega == pytest.approx(1.0 / 0.56)

    def test_bad_values(self):
        with pytest.raises(ValidationError):
            SimulationConfig(name="x", flow={"speed": 0.0})
        with pytest.raises(ValidationError):
            SimulationConfig(name="x", lattice={"boundary": "open"})
        with pytest.raises(ValidationError):
            PanelConfig(reference_chord=-1.0)


class TestPolygonIO:

    def test_json_roundtrip(self, tmp_path):
        pts = np.array([[0.0, 0.0], [10.0, 0.0], [5.0, 8.0]])
        path = write_polygon(pts, tmp_path / "tri.json")
        np.testing.assert_array_almost_equal(PolygonReader.read(path), pts)

    def test_xy_with_comments(self, tmp_path):
        path = tmp_path / "shape.xy"
        path.write_text("# sketch\n1.0 2.0\n\n3.0 4.0\n5.0 6.0 0.0\n")
        np.testing.assert_array_equal(
            PolygonReader.read(path), [[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]]
        )

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PolygonReader.read(tmp_path / "nope.json")

    def test_unsupported_suffix(self, tmp_path):
        with pytest.raises(ValueError):
            PolygonReader.read(tmp_path / "shape.stl")

    def test_json_without_points(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"nodes": []}))
        with pytest.raises(ValueError):
            PolygonReader.read(path)


class TestCaseLoader:

    def test_load(self, case_file):
        case = CaseLoader.load(case_file)
        assert case.name == "test_airfoil"
        assert case.body_type is BodyType.AIRFOIL
        assert case.output_dir == case_file.parent / "out"
        assert case.inflow_velocity == pytest.approx(0.09)

    def test_polygons(self, case_file):
        case = CaseLoader.load(case_file)
        assert case.polygon.shape == case.reference_polygon.shape
        # Only the tunnel outline is pitched
        assert case.polygon[0, 1] < case.reference_polygon[0, 1]

    def test_barrier(self, case_file):
        case = CaseLoader.load(case_file)
        barrier = case.barrier
        assert barrier.shape == (20, 40)
        assert barrier.any()

    def test_solve(self, case_file):
        result = CaseLoader.load(case_file).solve()
        assert isinstance(result, PhysicsResult)
        assert result.lift_coefficient > 0

    def test_new_engine(self, case_file):
        case = CaseLoader.load(case_file)
        engine = case.new_engine()
        assert isinstance(engine, LatticeFluidEngine)
        assert engine.status is SimulationStatus.EQUILIBRIUM
        np.testing.assert_array_equal(engine.solid, case.barrier)

    def test_custom_polygon(self, tmp_path):
        write_polygon([(300.0, 200.0), (500.0, 170.0), (500.0, 230.0), (300.0, 200.0)],
                      tmp_path / "shapes" / "wedge.json")
        path = tmp_path / "sketch.yaml"
        path.write_text(
            "name: sketch\n"
            "body:\n  type: custom\n  geometry_file: shapes/wedge.json\n"
            "flow:\n  angle_of_attack_deg: 10.0\n"
        )
        case = CaseLoader.load(path)
        assert case.custom_polygon.shape == (4, 2)
        # Sketches are used as drawn
        np.testing.assert_array_equal(case.polygon, case.custom_polygon)
        assert case.barrier.any()

    def test_missing_case(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CaseLoader.load(tmp_path / "missing.yaml")

    def test_validate(self, case_file):
        assert CaseLoader.validate(case_file)

    @pytest.mark.parametrize("name", ["naca2412.yaml", "cylinder.yaml", "sketch.yaml"])
    def test_shipped_cases(self, name):
        assert CaseLoader.validate(CASES_DIR / name)
        case = CaseLoader.load(CASES_DIR / name)
        assert case.polygon.shape[0] >= 3


class TestExport:

    def test_json_and_csv(self, tmp_path, case_file):
        result = CaseLoader.load(case_file).solve()
        exporter = ResultExporter(tmp_path / "results", name="run")
        paths = exporter.export(result, formats=["json", "csv"], metadata={"case": "x"})
        assert [p.name for p in paths] == ["run.json", "run_cp.csv"]

        data = json.loads(paths[0].read_text())
        assert data["lift_coefficient"] == pytest.approx(result.lift_coefficient)
        assert data["metadata"] == {"case": "x"}

        table = np.loadtxt(paths[1], delimiter=",", skiprows=1)
        assert table.shape == (len(result.cp_distribution), 2)

    def test_empty_result_csv(self, tmp_path):
        path = ResultExporter(tmp_path).write_csv(PhysicsResult.empty())
        assert path.read_text().strip() == "x,cp"

    def test_unknown_format(self, tmp_path):
        with pytest.raises(ValueError):
            ResultExporter(tmp_path).export(PhysicsResult(), formats=["xml"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
