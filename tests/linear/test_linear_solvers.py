"""
Tests for dense N x N factor / solve / invert.

Validates:
    - Residual of solve() on random well-conditioned systems
    - Agreement with scipy.linalg LU as an independent reference
    - invert(invert(A)) round trip
    - Direct 1x1 and 2x2 paths
    - Singular detection (zero row, small pivot) as a returned status
    - In-place and workspace calling styles
    - float32 support without promotion
"""

import logging

import numpy as np
import pytest
import scipy.linalg

from pynumerics.core.exceptions import DimensionError, SingularMatrixError, ValidationError
from pynumerics.core.precision import condition_number
from pynumerics.core.result import Status
from pynumerics.core.tolerances import FP32, FP64
from pynumerics.core.workspace import Workspace
from pynumerics.linear import estimate_condition, invert, lu_factor, lu_solve, solve
from pynumerics.mat3 import determinant_2x2


# ═══════════════════════════════════════════════════════════════════════
# solve()
# ═══════════════════════════════════════════════════════════════════════


class TestSolve:

    def test_residual_small(self, well_conditioned):
        A, b = well_conditioned
        result = solve(A, b)
        assert result.ok
        x = result.params
        tol = 1e-14 * condition_number(A) * np.linalg.norm(b)
        assert np.linalg.norm(A @ x - b) <= max(tol, 1e-12)

    @pytest.mark.parametrize("n", [3, 5, 12, 40])
    def test_matches_scipy(self, rng, n):
        A = rng.standard_normal((n, n)) + n * np.eye(n)
        b = rng.standard_normal(n)
        expected = scipy.linalg.lu_solve(scipy.linalg.lu_factor(A), b)
        np.testing.assert_allclose(solve(A, b).params, expected, rtol=FP64.rtol, atol=FP64.atol)

    def test_inputs_untouched_by_default(self, well_conditioned):
        A, b = well_conditioned
        A0, b0 = A.copy(), b.copy()
        solve(A, b)
        np.testing.assert_array_equal(A, A0)
        np.testing.assert_array_equal(b, b0)

    def test_one_by_one(self):
        result = solve([[4.0]], [2.0])
        assert result.info['method'] == 'division'
        np.testing.assert_allclose(result.params, [0.5])

    def test_one_by_one_zero(self):
        result = solve([[0.0]], [2.0])
        assert result.status is Status.SINGULAR_MATRIX
        assert result.params is None

    def test_two_by_two_cramer(self):
        A = np.array([[2.0, 1.0], [1.0, 3.0]])
        b = np.array([3.0, 5.0])
        result = solve(A, b)
        assert result.info['method'] == 'cramer'
        np.testing.assert_allclose(result.params, np.linalg.solve(A, b))

    def test_two_by_two_uses_determinant_ratios(self):
        A = np.array([[3.0, 7.0], [2.0, 5.0]])
        b = np.array([1.0, 4.0])
        det = determinant_2x2(3.0, 7.0, 2.0, 5.0)
        expected = [determinant_2x2(1.0, 7.0, 4.0, 5.0) / det, determinant_2x2(3.0, 1.0, 2.0, 4.0) / det]
        np.testing.assert_array_equal(solve(A, b).params, expected)

    def test_two_by_two_float32(self):
        A = np.array([[2.0, 1.0], [1.0, 3.0]], dtype=np.float32)
        b = np.array([3.0, 5.0], dtype=np.float32)
        x = solve(A, b).params
        assert x.dtype == np.float32
        np.testing.assert_allclose(x, [0.8, 1.4], rtol=1e-6)

    def test_two_by_two_zero_determinant(self):
        result = solve([[1.0, 2.0], [2.0, 4.0]], [1.0, 1.0])
        assert result.status is Status.SINGULAR_MATRIX
        assert result.has_warning("zero determinant")

    def test_leading_zero_rhs(self, rng):
        A = rng.standard_normal((6, 6)) + 6 * np.eye(6)
        b = np.zeros(6)
        b[4] = 1.0
        np.testing.assert_allclose(solve(A, b).params, np.linalg.solve(A, b), atol=1e-12)

    def test_zero_rhs_gives_zero(self, well_conditioned):
        A, _ = well_conditioned
        np.testing.assert_array_equal(solve(A, np.zeros(6)).params, np.zeros(6))

    def test_shape_mismatch(self):
        with pytest.raises(DimensionError):
            solve(np.eye(3), np.ones(4))

    def test_not_square(self):
        with pytest.raises(DimensionError):
            solve(np.ones((3, 2)), np.ones(3))

    def test_mixed_precision_rejected(self):
        with pytest.raises(ValidationError, match="Mixed precision"):
            solve(np.eye(3, dtype=np.float32), np.ones(3))


# ═══════════════════════════════════════════════════════════════════════
# Singular matrices
# ═══════════════════════════════════════════════════════════════════════


class TestSingular:

    def test_zero_row(self):
        A = np.array([[1.0, 2.0, 3.0], [0.0, 0.0, 0.0], [4.0, 5.0, 6.0]])
        result = lu_factor(A)
        assert result.status is Status.SINGULAR_MATRIX
        assert result.info['row'] == 1
        assert result.has_warning("entirely zero")

    def test_rank_deficient(self):
        A = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [7.0, 8.0, 9.0]])
        result = solve(A, np.ones(3))
        assert result.status is Status.SINGULAR_MATRIX
        assert result.params is None

    def test_unwrap_raises(self):
        A = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [1.0, 0.0, 1.0]])
        with pytest.raises(SingularMatrixError) as exc_info:
            invert(A).unwrap()
        assert exc_info.value.matrix_name == 'a'

    def test_logs_warning(self, caplog):
        A = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [1.0, 0.0, 1.0]])
        with caplog.at_level(logging.WARNING, logger='pynumerics'):
            result = solve(A, np.ones(3))
        assert not result.ok
        assert any(result.warnings[0] in rec.getMessage() for rec in caplog.records)

    def test_pivot_tolerance_is_absolute(self):
        A = np.eye(3) * 1e-13
        assert lu_factor(A).status is Status.SINGULAR_MATRIX
        assert lu_factor(A, pivot_tolerance=0.0).ok


# ═══════════════════════════════════════════════════════════════════════
# lu_factor() / lu_solve()
# ═══════════════════════════════════════════════════════════════════════


class TestFactorization:

    def test_reconstructs_permuted_matrix(self, rng):
        A = rng.standard_normal((7, 7))
        fac = lu_factor(A).unwrap()
        perm = fac.permutation()
        np.testing.assert_allclose(fac.lower @ fac.upper, A[perm], atol=1e-12)

    def test_factor_once_solve_many(self, well_conditioned, rng):
        A, _ = well_conditioned
        fac = lu_factor(A).unwrap()
        for _ in range(3):
            b = rng.standard_normal(6)
            np.testing.assert_allclose(A @ lu_solve(fac, b), b, atol=1e-12)

    def test_pivot_ties_choose_later_row(self):
        A = np.array([[1.0, 0.0, 0.0], [1.0, 1.0, 0.0], [1.0, 0.0, 1.0]])
        fac = lu_factor(A).unwrap()
        assert fac.pivots[0] == 2

    def test_overwrite_in_place(self, well_conditioned):
        A, b = well_conditioned
        work = A.copy()
        fac = lu_factor(work, overwrite_a=True).unwrap()
        assert fac.lu is work
        x = b.copy()
        out = lu_solve(fac, x, overwrite_b=True)
        assert out is x
        np.testing.assert_allclose(A @ x, b, atol=1e-12)

    def test_overwrite_rejects_fortran_order(self, well_conditioned):
        A, b = well_conditioned
        work = np.asfortranarray(A)
        with pytest.raises(ValidationError, match="not C-contiguous"):
            lu_factor(work, overwrite_a=True)
        np.testing.assert_array_equal(work, A)
        with pytest.raises(ValidationError, match="not C-contiguous"):
            solve(A, np.stack([b, b], axis=1)[:, 0], overwrite_b=True)

    def test_fortran_order_copied_by_default(self, well_conditioned):
        A, b = well_conditioned
        x = solve(np.asfortranarray(A), b).params
        np.testing.assert_allclose(A @ x, b, atol=1e-12)

    def test_workspace_pivots_are_views(self, well_conditioned):
        A, b = well_conditioned
        ws = Workspace.allocate(10)
        fac = lu_factor(A, workspace=ws).unwrap()
        assert np.shares_memory(fac.pivots, ws.pivots)
        np.testing.assert_allclose(A @ lu_solve(fac, b), b, atol=1e-12)

    def test_workspace_reused_across_calls(self, rng):
        ws = Workspace.allocate(8)
        for n in (3, 5, 8):
            A = rng.standard_normal((n, n)) + n * np.eye(n)
            b = rng.standard_normal(n)
            x = solve(A, b, workspace=ws).params
            np.testing.assert_allclose(A @ x, b, atol=1e-12)

    def test_condition_estimate(self):
        fac = lu_factor(np.diag([10.0, 1.0, 0.5])).unwrap()
        assert estimate_condition(fac) == pytest.approx(20.0)


# ═══════════════════════════════════════════════════════════════════════
# invert()
# ═══════════════════════════════════════════════════════════════════════


class TestInvert:

    def test_matches_numpy(self, well_conditioned):
        A, _ = well_conditioned
        np.testing.assert_allclose(invert(A).params, np.linalg.inv(A), rtol=1e-10, atol=1e-12)

    def test_round_trip(self, well_conditioned):
        A, _ = well_conditioned
        np.testing.assert_allclose(invert(invert(A).params).params, A, rtol=1e-10, atol=1e-12)

    def test_out_parameter(self, well_conditioned):
        A, _ = well_conditioned
        out = np.empty_like(A)
        result = invert(A, out=out)
        assert result.params is out
        np.testing.assert_allclose(A @ out, np.eye(6), atol=1e-12)

    def test_out_aliasing_a_rejected_when_overwriting(self, well_conditioned):
        A, _ = well_conditioned
        work = A.copy()
        with pytest.raises(ValidationError, match="share memory"):
            invert(work, out=work, overwrite_a=True)

    def test_out_aliasing_a_allowed_with_copy(self, well_conditioned):
        A, _ = well_conditioned
        work = A.copy()
        invert(work, out=work)
        np.testing.assert_allclose(work, np.linalg.inv(A), rtol=1e-10, atol=1e-12)


# ═══════════════════════════════════════════════════════════════════════
# Single precision
# ═══════════════════════════════════════════════════════════════════════


class TestFloat32:

    def test_solve_stays_float32(self, well_conditioned):
        A, b = well_conditioned
        A32, b32 = A.astype(np.float32), b.astype(np.float32)
        x = solve(A32, b32).params
        assert x.dtype == np.float32
        np.testing.assert_allclose(x, np.linalg.solve(A, b), rtol=FP32.rtol, atol=FP32.atol)

    def test_invert_stays_float32(self, well_conditioned):
        A, _ = well_conditioned
        inv = invert(A.astype(np.float32)).params
        assert inv.dtype == np.float32
        np.testing.assert_allclose(inv, np.linalg.inv(A), rtol=1e-3, atol=1e-4)
