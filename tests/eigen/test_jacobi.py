"""
Tests for cyclic Jacobi eigendecomposition.

Validates:
    - Orthogonality of V and A V = V diag(w)
    - Descending eigenvalue order and the eigenvector sign rule
    - Agreement with scipy.linalg.eigh as an independent reference
    - Soft non-convergence (estimate still returned, sorted, normalized)
    - float32 support
"""

import logging

import numpy as np
import pytest
import scipy.linalg

from pynumerics.core.exceptions import DimensionError
from pynumerics.core.result import Status
from pynumerics.eigen import EigenDecomposition, jacobi, jacobi_3x3


def _assert_sign_rule(V):
    n = V.shape[0]
    non_negative = np.count_nonzero(V >= 0.0, axis=0)
    assert np.all(non_negative >= (n + 1) // 2)


# ═══════════════════════════════════════════════════════════════════════
# Decomposition properties
# ═══════════════════════════════════════════════════════════════════════


class TestJacobiProperties:

    def test_orthogonal_vectors(self, symmetric_matrix):
        V = jacobi(symmetric_matrix).params.vectors
        np.testing.assert_allclose(V.T @ V, np.eye(5), atol=1e-12)

    def test_eigen_equation(self, symmetric_matrix):
        eig = jacobi(symmetric_matrix).params
        A = symmetric_matrix
        np.testing.assert_allclose(A @ eig.vectors, eig.vectors * eig.values, atol=1e-12)

    def test_descending(self, symmetric_matrix):
        w = jacobi(symmetric_matrix).params.values
        assert np.all(np.diff(w) <= 0.0)

    def test_sign_rule(self, symmetric_matrix):
        _assert_sign_rule(jacobi(symmetric_matrix).params.vectors)

    def test_reconstruct(self, symmetric_matrix):
        eig = jacobi(symmetric_matrix).params
        assert isinstance(eig, EigenDecomposition)
        assert eig.n == 5
        np.testing.assert_allclose(eig.reconstruct(), symmetric_matrix, atol=1e-12)

    @pytest.mark.parametrize("n", [2, 3, 4, 7, 12])
    def test_matches_scipy_eigh(self, rng, n):
        M = rng.standard_normal((n, n))
        A = M + M.T
        w = jacobi(A).params.values
        expected = scipy.linalg.eigh(A, eigvals_only=True)[::-1]
        np.testing.assert_allclose(w, expected, rtol=1e-10, atol=1e-12)

    def test_input_not_modified(self, symmetric_matrix):
        A0 = symmetric_matrix.copy()
        jacobi(symmetric_matrix)
        np.testing.assert_array_equal(symmetric_matrix, A0)

    def test_only_upper_triangle_read(self, symmetric_matrix):
        corrupted = np.triu(symmetric_matrix) + np.tril(np.full((5, 5), 99.0), k=-1)
        np.testing.assert_allclose(
            jacobi(corrupted).params.values,
            jacobi(symmetric_matrix).params.values,
        )

    def test_info(self, symmetric_matrix):
        result = jacobi(symmetric_matrix)
        assert result.ok
        assert result.info['method'] == 'cyclic_jacobi'
        assert 0 < result.info['sweeps'] <= 20
        assert result.info['off_diagonal'] == 0.0


# ═══════════════════════════════════════════════════════════════════════
# Special inputs
# ═══════════════════════════════════════════════════════════════════════


class TestJacobiSpecialCases:

    def test_diagonal_needs_no_sweeps(self):
        result = jacobi(np.diag([1.0, 3.0, 2.0]))
        assert result.info['sweeps'] == 0
        np.testing.assert_array_equal(result.params.values, [3.0, 2.0, 1.0])
        np.testing.assert_array_equal(
            result.params.vectors,
            [[0.0, 0.0, 1.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]],
        )

    def test_equal_eigenvalues_keep_order(self):
        eig = jacobi(np.diag([2.0, 5.0, 2.0])).params
        np.testing.assert_array_equal(eig.values, [5.0, 2.0, 2.0])
        np.testing.assert_array_equal(eig.vectors[:, 1], [1.0, 0.0, 0.0])
        np.testing.assert_array_equal(eig.vectors[:, 2], [0.0, 0.0, 1.0])

    def test_negative_column_flipped(self):
        A = np.array([[2.0, 1.0], [1.0, 2.0]])
        eig = jacobi(A).params
        np.testing.assert_allclose(eig.values, [3.0, 1.0])
        _assert_sign_rule(eig.vectors)
        assert eig.vectors[0, 0] > 0.0

    def test_one_by_one(self):
        eig = jacobi([[4.0]]).params
        np.testing.assert_array_equal(eig.values, [4.0])
        np.testing.assert_array_equal(eig.vectors, [[1.0]])

    def test_not_square(self):
        with pytest.raises(DimensionError):
            jacobi(np.ones((2, 3)))

    def test_invalid_sweep_cap(self, symmetric_matrix):
        with pytest.raises(ValueError):
            jacobi(symmetric_matrix, max_sweeps=0)


# ═══════════════════════════════════════════════════════════════════════
# Non-convergence
# ═══════════════════════════════════════════════════════════════════════


class TestNonConvergence:

    def test_soft_failure_returns_estimate(self, rng, caplog):
        M = rng.standard_normal((10, 10))
        A = M + M.T
        with caplog.at_level(logging.WARNING, logger='pynumerics'):
            result = jacobi(A, max_sweeps=1)
        assert result.status is Status.NON_CONVERGENCE
        assert result.params is not None
        assert result.has_warning("after 1 sweeps")
        assert any("still nonzero" in rec.getMessage() for rec in caplog.records)

        eig = result.unwrap()
        assert np.all(np.diff(eig.values) <= 0.0)
        _assert_sign_rule(eig.vectors)
        np.testing.assert_allclose(eig.vectors.T @ eig.vectors, np.eye(10), atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# 3x3 wrapper and float32
# ═══════════════════════════════════════════════════════════════════════


class TestJacobi3x3:

    def test_agrees_with_general(self, rng):
        M = rng.standard_normal((3, 3))
        A = M + M.T
        small = jacobi_3x3(A).params
        general = jacobi(A).params
        np.testing.assert_allclose(small.values, general.values)
        np.testing.assert_allclose(small.vectors, general.vectors)

    def test_rejects_other_sizes(self):
        with pytest.raises(DimensionError):
            jacobi_3x3(np.eye(4))


class TestFloat32:

    def test_float32_stays_float32(self, symmetric_matrix):
        A32 = symmetric_matrix.astype(np.float32)
        result = jacobi(A32)
        eig = result.params
        assert eig.values.dtype == np.float32
        assert eig.vectors.dtype == np.float32
        expected = scipy.linalg.eigh(symmetric_matrix, eigvals_only=True)[::-1]
        np.testing.assert_allclose(eig.values, expected, rtol=1e-4, atol=1e-5)
        _assert_sign_rule(eig.vectors)
