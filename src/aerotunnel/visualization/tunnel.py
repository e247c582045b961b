"""
Plots for the wind tunnel: lattice speed field and panel Cp distribution.
"""

import logging
import numpy as np
import matplotlib.pyplot as plt
from typing import Tuple, Optional
from numpy.typing import NDArray

from ..solvers.lattice.engine import LatticeFluidEngine
from ..solvers.panel2d.results import PhysicsResult

logger = logging.getLogger(__name__)


def _finish(fig, save_path: Optional[str], dpi: int, label: str):
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=dpi)
        logger.info("%s saved: %s", label, save_path)
    else:
        plt.show()

    plt.close(fig)


def plot_flow_field(engine: LatticeFluidEngine,
                    polygon: Optional[NDArray[np.float64]] = None,
                    cmap: str = 'jet',
                    figsize: Tuple[float, float] = (12, 6),
                    dpi: int = 150,
                    save_path: Optional[str] = None):
    """
    Plot lattice speed magnitude with solid cells masked out.

    Args:
        engine: Lattice engine to read the field from
        polygon: Body outline in display units, drawn on top
        cmap: Colormap name
        figsize: Figure dimensions
        dpi: Saved figure resolution
        save_path: Output file path (None = show)
    """
    rows, cols = engine.shape
    scale = engine.config.scale
    speed = np.ma.masked_array(engine.speed, mask=engine.solid)

    fig, ax = plt.subplots(figsize=figsize)

    # Display coordinates: origin top-left, y down
    image = ax.imshow(
        speed,
        cmap=cmap,
        origin='upper',
        extent=(0, cols * scale, rows * scale, 0),
        interpolation='bilinear'
    )
    plt.colorbar(image, ax=ax, label='Speed (lattice units)')

    if polygon is not None and len(polygon) >= 2:
        outline = np.vstack([polygon, polygon[:1]])
        ax.plot(outline[:, 0], outline[:, 1], 'k-', lw=1.5, label='Body')

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_title(f'Lattice Speed ({engine.status.value}, step {engine.step_count})')
    ax.set_aspect('equal')

    _finish(fig, save_path, dpi, "Flow field")


def plot_cp_distribution(result: PhysicsResult,
                         figsize: Tuple[float, float] = (10, 6),
                         dpi: int = 150,
                         save_path: Optional[str] = None):
    """
    Plot Cp against x.

    Args:
        result: Panel solver result
        figsize: Figure dimensions
        dpi: Saved figure resolution
        save_path: Output file path (None = show)
    """
    x = [p.x for p in result.cp_distribution]
    cp = [p.cp for p in result.cp_distribution]

    fig, ax = plt.subplots(figsize=figsize)

    ax.plot(x, cp, 'o-', markersize=4, linewidth=1.2)
    ax.axhline(0, color='k', linestyle='--', linewidth=0.8, alpha=0.5)
    ax.set_xlabel('X Position')
    ax.set_ylabel('Cp')
    ax.set_title(
        f'Pressure Coefficient (Cl={result.lift_coefficient:.3f}, '
        f'Cd={result.drag_coefficient:.3f})'
    )
    ax.invert_yaxis()
    ax.grid(True, alpha=0.3)

    _finish(fig, save_path, dpi, "Cp plot")
