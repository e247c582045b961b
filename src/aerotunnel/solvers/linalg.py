"""
Dense linear solver: Gaussian elimination with partial pivoting.
"""

import numpy as np
from numpy.typing import NDArray


class SingularMatrixError(np.linalg.LinAlgError):
    """Raised when elimination meets a zero (or numerically zero) pivot."""


def solve_linear_system(A: NDArray[np.float64],
                        b: NDArray[np.float64],
                        tol: float = 1e-12) -> NDArray[np.float64]:
    """
    Solve A x = b by Gauss-Jordan elimination on the augmented matrix [A | b].

    For each column the row with the largest magnitude entry (among rows not
    yet used) is swapped into the pivot position, the pivot row is
    normalised, and the column is eliminated from every other row.

    Args:
        A: (N, N) coefficient matrix
        b: (N,) right-hand side
        tol: Relative pivot threshold, scaled by max(1, max|A|)

    Returns:
        Solution vector (N,)

    Raises:
        ValueError: If shapes do not match
        SingularMatrixError: If a pivot is at or below the threshold
    """
    A = np.asarray(A, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"A must be square, got shape {A.shape}")
    n = A.shape[0]
    if b.shape != (n,):
        raise ValueError(f"b must have shape ({n},), got {b.shape}")

    if n == 0:
        return np.zeros(0, dtype=np.float64)

    M = np.hstack([A, b[:, None]])
    threshold = tol * max(1.0, float(np.max(np.abs(A))))

    for i in range(n):
        # Partial pivoting
        max_row = i + int(np.argmax(np.abs(M[i:, i])))
        if max_row != i:
            M[[i, max_row]] = M[[max_row, i]]

        pivot = M[i, i]
        if not np.isfinite(pivot) or abs(pivot) <= threshold:
            raise SingularMatrixError(f"Singular matrix: pivot {pivot:.3e} in column {i}")

        M[i, i:] /= pivot

        factors = M[:, i].copy()
        factors[i] = 0.0
        M[:, i:] -= np.outer(factors, M[i, i:])

    return M[:, n].copy()
