"""
Test Gaussian elimination with partial pivoting.
"""

import pytest
import numpy as np

from aerotunnel.solvers.linalg import SingularMatrixError, solve_linear_system


class TestSolveLinearSystem:

    def test_known_solution(self):
        A = np.array([[2.0, 1.0, -1.0],
                      [-3.0, -1.0, 2.0],
                      [-2.0, 1.0, 2.0]])
        b = np.array([8.0, -11.0, -3.0])
        np.testing.assert_array_almost_equal(solve_linear_system(A, b), [2.0, 3.0, -1.0])

    def test_zero_leading_pivot(self):
        A = np.array([[0.0, 1.0], [1.0, 0.0]])
        b = np.array([2.0, 3.0])
        np.testing.assert_array_almost_equal(solve_linear_system(A, b), [3.0, 2.0])

    def test_matches_numpy(self):
        rng = np.random.default_rng(7)
        n = 30
        A = rng.standard_normal((n, n)) + n * np.eye(n)
        b = rng.standard_normal(n)
        np.testing.assert_allclose(solve_linear_system(A, b), np.linalg.solve(A, b), rtol=1e-10)

    def test_inputs_untouched(self):
        A = np.array([[4.0, 1.0], [2.0, 3.0]])
        b = np.array([1.0, 2.0])
        A0, b0 = A.copy(), b.copy()
        solve_linear_system(A, b)
        np.testing.assert_array_equal(A, A0)
        np.testing.assert_array_equal(b, b0)

    def test_singular(self):
        A = np.array([[1.0, 2.0], [2.0, 4.0]])
        with pytest.raises(SingularMatrixError):
            solve_linear_system(A, np.array([1.0, 2.0]))

    def test_singular_is_linalg_error(self):
        with pytest.raises(np.linalg.LinAlgError):
            solve_linear_system(np.zeros((3, 3)), np.ones(3))

    def test_shape_mismatch(self):
        with pytest.raises(ValueError):
            solve_linear_system(np.eye(3), np.ones(2))
        with pytest.raises(ValueError):
            solve_linear_system(np.ones((2, 3)), np.ones(2))

    def test_empty_system(self):
        assert solve_linear_system(np.zeros((0, 0)), np.zeros(0)).shape == (0,)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
