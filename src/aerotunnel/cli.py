"""
Run a wind tunnel case defined by a YAML config file.
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from .core.io import CaseLoader
from .postprocessing import ResultExporter, analyze
from .solvers.lattice import SimulationStatus

logger = logging.getLogger("aerotunnel")

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_HALTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run Wind Tunnel Case")
    parser.add_argument("case_file", type=str, help="Path to YAML case file")
    parser.add_argument("--steps", type=int, default=None,
                        help="Lattice steps to run (overrides the case file)")
    parser.add_argument("--output", type=str, default=None,
                        help="Output directory (overrides the case file)")
    parser.add_argument("--no-plots", action="store_true", help="Skip saving plots")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def run_lattice(engine, inflow_velocity: float, total_steps: int, batch: int) -> SimulationStatus:
    """Step in batches until total_steps are done or the engine halts."""
    status = engine.status
    done = 0
    while done < total_steps:
        n = min(batch, total_steps - done)
        status = engine.step(inflow_velocity, steps=n)
        done += n
        if status is SimulationStatus.HALTED:
            break
    return status


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    case_path = Path(args.case_file).resolve()
    logger.info("Loading case: %s", case_path.name)
    try:
        case = CaseLoader.load(case_path)
    except (FileNotFoundError, ValueError, ValidationError, yaml.YAMLError) as e:
        logger.error("Error loading case: %s", e)
        return EXIT_LOAD_ERROR

    config = case.config
    logger.info("Case '%s' loaded: %s at %.1f m/s, alpha %.1f deg",
                case.name, case.body_type.value, case.speed, case.alpha_deg)

    # Panel solution
    result = case.solve()
    analysis = analyze(result, case.body_type.value, case.alpha_deg,
                       stall_angle_deg=config.panel.stall_angle_deg)
    logger.info("Cl=%.4f Cd=%.4f Cm=%.4f L/D=%.2f Re=%.3g (%s)",
                result.lift_coefficient, result.drag_coefficient,
                result.moment_coefficient, result.lift_to_drag,
                result.reynolds_number, analysis.flow_regime)

    # Lattice run
    steps = config.lattice_steps if args.steps is None else args.steps
    engine = case.new_engine()
    logger.info("Running lattice: %d steps, inflow %.3f, %d solid cells",
                steps, case.inflow_velocity, int(engine.solid.sum()))
    status = run_lattice(engine, case.inflow_velocity, steps, config.lattice.steps_per_batch)

    # Outputs
    output_dir = Path(args.output) if args.output else case.output_dir
    exporter = ResultExporter(output_dir, name=case_path.stem)
    metadata = {
        "case": case.name,
        "body": case.body_type.value,
        "speed": case.speed,
        "angle_of_attack_deg": case.alpha_deg,
        "lattice_steps": engine.step_count,
        "lattice_status": status.value,
        "flow_regime": analysis.flow_regime,
        "stall_suspected": analysis.stall_suspected,
    }
    exporter.export(result, formats=config.output.formats, metadata=metadata)

    if config.visualization.enabled and config.output.save_plots and not args.no_plots:
        from .visualization import plot_cp_distribution, plot_flow_field

        output_dir.mkdir(parents=True, exist_ok=True)
        viz = config.visualization
        plot_flow_field(engine, case.polygon, cmap=viz.cmap, dpi=viz.dpi,
                        save_path=str(output_dir / f"{case_path.stem}_flow.png"))
        plot_cp_distribution(result, dpi=viz.dpi,
                             save_path=str(output_dir / f"{case_path.stem}_cp.png"))

    if status is SimulationStatus.HALTED:
        logger.error("Lattice halted after %d steps; results for the panel solver are still valid",
                     engine.step_count)
        return EXIT_HALTED

    logger.info("Done.")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
