r"""
D2Q9 lattice constants and the BGK equilibrium.

Direction layout (y grows downward, matching grid rows):

    7   4   8
      \ | /
    3 - 0 - 1
      / | \
    6   2   5
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Lattice velocity components
EX = np.array([0, 1, 0, -1, 0, 1, -1, -1, 1], dtype=np.int64)
EY = np.array([0, 0, 1, 0, -1, 1, 1, -1, -1], dtype=np.int64)

# Lattice weights
W = np.array([4/9, 1/9, 1/9, 1/9, 1/9, 1/36, 1/36, 1/36, 1/36], dtype=np.float64)

# Opposite direction indices (for bounce-back)
OPPOSITE = np.array([0, 3, 4, 1, 2, 7, 8, 5, 6], dtype=np.int64)

# Number of lattice velocities
Q = 9

for _table in (EX, EY, W, OPPOSITE):
    _table.flags.writeable = False


def equilibrium(rho: ArrayLike, ux: ArrayLike, uy: ArrayLike) -> NDArray[np.float64]:
    """
    Second-order equilibrium populations.

        f_eq_i = w_i rho (1 + 3 e.u + 4.5 (e.u)^2 - 1.5 u.u)

    Args:
        rho, ux, uy: Density and velocity (scalars or matching arrays)

    Returns:
        Array of shape (9,) + broadcast shape of the inputs
    """
    rho, ux, uy = np.broadcast_arrays(
        np.asarray(rho, dtype=np.float64),
        np.asarray(ux, dtype=np.float64),
        np.asarray(uy, dtype=np.float64),
    )
    shape = (Q,) + (1,) * rho.ndim
    ex = EX.reshape(shape)
    ey = EY.reshape(shape)
    w = W.reshape(shape)

    eu = ex * ux + ey * uy
    u2 = ux * ux + uy * uy
    return w * rho * (1.0 + 3.0 * eu + 4.5 * eu * eu - 1.5 * u2)
