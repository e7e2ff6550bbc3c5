"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, float32/float64 preservation, rejection
    - check_finite: NaN/Inf detection
    - check_ndim / check_1d / check_2d / check_square / check_shape
    - check_same_dtype: mixed precision rejection
    - check_consistent_length, check_writable
"""

import numpy as np
import pytest

from pynumerics.core.exceptions import DimensionError, ValidationError
from pynumerics.core.validation import (
    check_1d,
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_ndim,
    check_same_dtype,
    check_shape,
    check_square,
    check_writable,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:
    """check_array converts to a float array and rejects non-numeric data."""

    def test_list_to_float64(self):
        result = check_array([1, 2, 3], "a")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_int_array_promoted_to_float64(self):
        result = check_array(np.array([1, 2], dtype=np.int32), "a")
        assert result.dtype == np.float64

    def test_float32_preserved(self):
        arr = np.array([1.0, 2.0], dtype=np.float32)
        result = check_array(arr, "a")
        assert result.dtype == np.float32
        assert result is arr

    def test_float16_promoted(self):
        result = check_array(np.array([1.0], dtype=np.float16), "a")
        assert result.dtype == np.float64

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="a: non-numeric"):
            check_array(np.array(["x", "y"]), "a")

    def test_object_rejected(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array(np.array([1, "x", None], dtype=object), "a")

    def test_complex_rejected(self):
        with pytest.raises(ValidationError, match="complex"):
            check_array(np.array([1 + 2j]), "a")


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, -2.0]), "a")

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match="1 NaN, 1 Inf"):
            check_finite(np.array([np.nan, np.inf, 0.0]), "a")


# ═══════════════════════════════════════════════════════════════════════
# Shape checks
# ═══════════════════════════════════════════════════════════════════════


class TestShapeChecks:

    def test_check_ndim(self):
        with pytest.raises(DimensionError, match="expected 3D"):
            check_ndim(np.zeros((2, 2)), 3, "a")

    def test_check_1d_and_2d(self):
        check_1d(np.zeros(3), "v")
        check_2d(np.zeros((3, 2)), "m")
        with pytest.raises(DimensionError):
            check_1d(np.zeros((3, 1)), "v")

    def test_check_square_returns_order(self):
        assert check_square(np.zeros((4, 4)), "a") == 4

    def test_check_square_rejects_rectangular(self):
        with pytest.raises(DimensionError, match="square"):
            check_square(np.zeros((3, 4)), "a")

    def test_check_square_rejects_empty(self):
        with pytest.raises(DimensionError, match="empty"):
            check_square(np.zeros((0, 0)), "a")

    def test_check_shape(self):
        check_shape(np.zeros((3, 3)), (3, 3), "a")
        with pytest.raises(DimensionError, match=r"expected shape \(3,\)"):
            check_shape(np.zeros(4), (3,), "v")


# ═══════════════════════════════════════════════════════════════════════
# Multi-array checks
# ═══════════════════════════════════════════════════════════════════════


class TestCheckSameDtype:

    def test_same_dtype_returned(self):
        a = np.zeros(2, dtype=np.float32)
        b = np.ones(2, dtype=np.float32)
        assert check_same_dtype(a, b, names=("a", "b")) == np.float32

    def test_mixed_precision_rejected(self):
        a = np.zeros(2, dtype=np.float32)
        b = np.zeros(2, dtype=np.float64)
        with pytest.raises(ValidationError, match="Mixed precision"):
            check_same_dtype(a, b, names=("a", "b"))

    def test_name_count_mismatch(self):
        with pytest.raises(ValueError):
            check_same_dtype(np.zeros(1), names=("a", "b"))


class TestCheckConsistentLength:

    def test_consistent(self):
        check_consistent_length(np.zeros((5, 2)), np.zeros((5, 1)), names=("xt", "yt"))

    def test_inconsistent(self):
        with pytest.raises(DimensionError, match="xt=5, yt=4"):
            check_consistent_length(np.zeros((5, 2)), np.zeros((4, 1)), names=("xt", "yt"))


class TestCheckWritable:

    def test_read_only_rejected(self):
        arr = np.zeros(3)
        arr.setflags(write=False)
        with pytest.raises(ValidationError, match="read-only"):
            check_writable(arr, "b")

    def test_fortran_order_rejected(self):
        arr = np.asfortranarray(np.ones((3, 3)))
        with pytest.raises(ValidationError, match="not C-contiguous"):
            check_writable(arr, "a")

    def test_contiguous_writable_accepted(self):
        check_writable(np.zeros((2, 2)), "a")
