"""
Body geometry provider.

Generates the closed outline of every body the tunnel offers, in display
coordinates (origin top-left, y down), centred on the middle of a
width x height viewport.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
import logging
from typing import Callable, Dict, Optional, Union
import numpy as np
from numpy.typing import NDArray

from .primitives import PolygonLike, as_polygon_array, close_loop, rotate_polygon

logger = logging.getLogger(__name__)


class BodyType(str, Enum):
    """Bodies available in the tunnel."""
    AIRFOIL = "airfoil"
    SYMMETRIC_AIRFOIL = "symmetric_airfoil"
    CYLINDER = "cylinder"
    PLATE = "plate"
    PARAGLIDER = "paraglider"
    POD = "pod"
    CUSTOM = "custom"


@dataclass(frozen=True)
class AirfoilParams:
    """
    NACA four-digit section parameters (fractions of chord).

    Attributes:
        camber: Maximum camber m (0.02 for a 2412)
        camber_position: Chordwise position of maximum camber p
        thickness: Maximum thickness t
        stations: Number of cosine-spaced intervals per surface
        chord_fraction: Chord as a fraction of the viewport width
    """
    camber: float = 0.02
    camber_position: float = 0.4
    thickness: float = 0.12
    stations: int = 40
    chord_fraction: float = 0.4

    @classmethod
    def symmetric(cls, thickness: float = 0.12) -> AirfoilParams:
        """NACA 00xx section."""
        return cls(camber=0.0, camber_position=0.4, thickness=thickness)


def cosine_stations(n: int) -> NDArray[np.float64]:
    """Chordwise stations x/c in [0, 1], clustered at both edges."""
    beta = np.linspace(0.0, np.pi, n + 1)
    return 0.5 * (1.0 - np.cos(beta))


def naca_section(xc: NDArray[np.float64], params: AirfoilParams):
    """
    Thickness, camber and camber slope angle at stations xc.

    Returns:
        (yt, yc, theta) arrays, all in chord units
    """
    t = params.thickness
    yt = 5.0 * t * (0.2969 * np.sqrt(xc) - 0.1260 * xc - 0.3516 * xc**2
                    + 0.2843 * xc**3 - 0.1015 * xc**4)

    m = params.camber
    p = params.camber_position
    if m <= 0.0:
        return yt, np.zeros_like(xc), np.zeros_like(xc)

    fore = xc < p
    yc = np.where(
        fore,
        (m / p**2) * (2 * p * xc - xc**2),
        (m / (1 - p)**2) * ((1 - 2 * p) + 2 * p * xc - xc**2)
    )
    dyc_dx = np.where(
        fore,
        (2 * m / p**2) * (p - xc),
        (2 * m / (1 - p)**2) * (p - xc)
    )
    return yt, yc, np.arctan(dyc_dx)


def airfoil_outline(width: float, height: float,
                    params: Optional[AirfoilParams] = None) -> NDArray[np.float64]:
    """
    NACA section: upper surface leading edge to trailing edge, then the
    lower surface back to the leading edge. Both surfaces share the
    leading-edge vertex, so the outline already ends where it starts.
    """
    params = params or AirfoilParams()
    cx, cy = width / 2, height / 2
    chord = width * params.chord_fraction
    x_le = cx - chord / 2

    xc = cosine_stations(params.stations)
    yt, yc, theta = naca_section(xc, params)

    # Screen y points down, so "up" is a negative offset
    upper = np.column_stack([
        x_le + (xc - yt * np.sin(theta)) * chord,
        cy - (yc + yt * np.cos(theta)) * chord,
    ])
    lower = np.column_stack([
        x_le + (xc + yt * np.sin(theta)) * chord,
        cy - (yc - yt * np.cos(theta)) * chord,
    ])[::-1]
    return np.vstack([upper, lower])


def symmetric_airfoil_outline(width: float, height: float,
                              params: Optional[AirfoilParams] = None) -> NDArray[np.float64]:
    """Uncambered section; any camber in params is dropped."""
    params = replace(params, camber=0.0) if params is not None else AirfoilParams.symmetric()
    return airfoil_outline(width, height, params)


def cylinder_outline(width: float, height: float,
                     params: Optional[AirfoilParams] = None) -> NDArray[np.float64]:
    """Regular 24-gon (15 degree step), radius 8% of the width."""
    cx, cy = width / 2, height / 2
    r = width * 0.08
    angles = np.deg2rad(np.arange(0, 360, 15))
    return close_loop(np.column_stack([cx + r * np.cos(angles), cy + r * np.sin(angles)]))


def plate_outline(width: float, height: float,
                  params: Optional[AirfoilParams] = None) -> NDArray[np.float64]:
    """Thin plate standing across the stream."""
    cx, cy = width / 2, height / 2
    h = height * 0.4
    w = 10.0
    return close_loop([
        (cx - w / 2, cy - h / 2),
        (cx + w / 2, cy - h / 2),
        (cx + w / 2, cy + h / 2),
        (cx - w / 2, cy + h / 2),
    ])


def paraglider_outline(width: float, height: float,
                       params: Optional[AirfoilParams] = None) -> NDArray[np.float64]:
    """Arched thin shell, like a paraglider canopy seen in section."""
    cx, cy = width / 2, height / 2
    span = width * 0.5
    thickness = 14.0
    arch = 50.0

    t = np.linspace(0.0, 1.0, 51)
    x = cx - span / 2 + t * span
    y_base = cy - np.sin(t * np.pi) * arch
    upper = np.column_stack([x, y_base - thickness / 2])
    lower = np.column_stack([x, y_base + thickness / 2])[::-1]
    return close_loop(np.vstack([upper, lower]))


def pod_outline(width: float, height: float,
                params: Optional[AirfoilParams] = None) -> NDArray[np.float64]:
    """Teardrop harness pod, blunt nose and tapered tail."""
    cx, cy = width / 2, height / 2
    length = width * 0.45
    h = length * 0.35
    rad = np.deg2rad(np.arange(0, 360, 10))
    x = cx + np.cos(rad) * (length / 2)
    y = cy + np.sin(rad) * np.sqrt(np.sin(rad / 2)) * h
    return close_loop(np.column_stack([x, y]))


_GENERATORS: Dict[BodyType, Callable[..., NDArray[np.float64]]] = {
    BodyType.AIRFOIL: airfoil_outline,
    BodyType.SYMMETRIC_AIRFOIL: symmetric_airfoil_outline,
    BodyType.CYLINDER: cylinder_outline,
    BodyType.PLATE: plate_outline,
    BodyType.PARAGLIDER: paraglider_outline,
    BodyType.POD: pod_outline,
}


def build_body(body_type: Union[BodyType, str],
               width: float,
               height: float,
               angle_deg: float = 0.0,
               custom: Optional[PolygonLike] = None,
               airfoil: Optional[AirfoilParams] = None) -> NDArray[np.float64]:
    """
    Produce the outline for a body type.

    Parametric bodies are rotated by angle_deg about the viewport centre,
    where they are anchored. A positive angle raises the leading edge on
    screen. Custom polygons are passed through untouched.

    Args:
        body_type: BodyType or its string value
        width, height: Viewport size in display units
        angle_deg: Angle of incidence in degrees
        custom: Sketched polygon, used only for BodyType.CUSTOM
        airfoil: Section parameters for the airfoil bodies

    Returns:
        (N, 2) polygon; empty (0, 2) for unknown types or a missing sketch
    """
    try:
        body_type = BodyType(body_type)
    except ValueError:
        logger.warning("Unknown body type %r, returning empty outline", body_type)
        return np.zeros((0, 2), dtype=np.float64)

    if body_type is BodyType.CUSTOM:
        if custom is None:
            return np.zeros((0, 2), dtype=np.float64)
        return as_polygon_array(custom)

    outline = _GENERATORS[body_type](width, height, airfoil)
    if angle_deg == 0.0:
        return outline
    return rotate_polygon(outline, angle_deg, (width / 2, height / 2))
