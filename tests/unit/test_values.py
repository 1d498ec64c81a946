"""Tests for tagged parameter values."""

from __future__ import annotations

import warnings

import numpy as np
import pytest

from hparams.values import Kind, Lookup, LookupStatus, ParamKindError, Value


class TestValueOf:
    """Tests for kind inference in Value.of()."""

    def test_small_int_is_int32(self):
        """Python ints that fit in 32 bits are int32."""
        assert Value.of(20).kind is Kind.INT32
        assert Value.of(-(2**31)).kind is Kind.INT32

    def test_large_int_is_int64(self):
        """Python ints beyond 32 bits are int64."""
        value = Value.of(2**40)
        assert value.kind is Kind.INT64
        assert value.data == 2**40

    def test_int_beyond_int64_raises(self):
        """Integers that do not fit in 64 bits are rejected."""
        with pytest.raises(ValueError, match="out of range"):
            Value.of(2**70)

    def test_bool_is_not_int(self):
        """Booleans keep their own kind."""
        assert Value.of(True).kind is Kind.BOOL
        assert Value.of(np.bool_(False)).kind is Kind.BOOL

    def test_numpy_integers(self):
        """numpy integer width decides the kind."""
        assert Value.of(np.int32(3)).kind is Kind.INT32
        assert Value.of(np.int64(3)).kind is Kind.INT64
        assert Value.of(np.int16(3)).kind is Kind.INT32

    def test_floats(self):
        """Python floats are float64; numpy float32 stays float32."""
        assert Value.of(0.5).kind is Kind.FLOAT64
        assert Value.of(np.float64(0.5)).kind is Kind.FLOAT64
        assert Value.of(np.float32(0.5)).kind is Kind.FLOAT32

    def test_string(self):
        """Strings are stored as text."""
        value = Value.of("Cosine")
        assert value.kind is Kind.STRING
        assert value.data == "Cosine"

    def test_value_passthrough(self):
        """Wrapping a Value returns it unchanged."""
        value = Value.int64(5)
        assert Value.of(value) is value

    @pytest.mark.parametrize("obj", [None, [1, 2], {"a": 1}, b"raw"])
    def test_unsupported_types_raise(self, obj):
        """Non-scalar values cannot be parameters."""
        with pytest.raises(ParamKindError, match="Unsupported"):
            Value.of(obj)

    def test_kind_error_is_type_error(self):
        """ParamKindError can be caught as TypeError."""
        with pytest.raises(TypeError):
            Value.of(object())


class TestConstructors:
    """Tests for the explicit-kind constructors."""

    def test_int32_range_checked(self):
        with pytest.raises(ValueError):
            Value.int32(2**31)

    def test_int32_rejects_bool_and_float(self):
        with pytest.raises(ParamKindError):
            Value.int32(True)
        with pytest.raises(ParamKindError):
            Value.int32(3.5)

    def test_int64_accepts_small_values(self):
        value = Value.int64(7)
        assert value.kind is Kind.INT64
        assert value.data == 7

    def test_float32_rounds_on_store(self):
        """float32 data is exactly representable in 32 bits."""
        value = Value.float32(0.1)
        assert value.data == float(np.float32(0.1))
        assert value.data != 0.1

    def test_float64_accepts_int(self):
        value = Value.float64(3)
        assert value.data == 3.0
        assert isinstance(value.data, float)

    def test_string_rejects_numbers(self):
        with pytest.raises(ParamKindError):
            Value.string(1)

    def test_equality_includes_kind(self):
        """Same data with different kinds are different values."""
        assert Value.int32(1) != Value.int64(1)
        assert Value.of(True) != Value.of(1)


class TestCoerce:
    """Tests for reading a value as another kind."""

    def test_int32_widens_to_int64(self):
        assert Value.of(5).coerce(Kind.INT64) == 5

    def test_int64_does_not_narrow_to_int32(self):
        value = Value.of(2**40)
        assert not value.accepts(Kind.INT32)
        with pytest.raises(ParamKindError, match="Cannot read int64 as int32"):
            value.coerce(Kind.INT32)

    def test_float64_narrows_to_float32(self):
        result = Value.of(0.1).coerce(Kind.FLOAT32)
        assert isinstance(result, np.float32)
        assert result == np.float32(0.1)

    def test_int32_reads_as_float32(self):
        assert Value.of(3).coerce(Kind.FLOAT32) == np.float32(3.0)

    def test_int64_does_not_read_as_float32(self):
        assert not Value.of(2**40).accepts(Kind.FLOAT32)

    def test_string_only_reads_as_string(self):
        value = Value.of("Dot")
        assert value.accepts(Kind.STRING)
        for kind in (Kind.BOOL, Kind.INT32, Kind.INT64, Kind.FLOAT32):
            assert not value.accepts(kind)

    def test_is_finite(self):
        assert Value.of(1.0).is_finite()
        assert not Value.of(float("nan")).is_finite()
        assert not Value.float32(float("inf")).is_finite()
        assert Value.of("text").is_finite()


class TestLookup:
    """Tests for the Lookup result type."""

    def test_found_unwraps_value(self):
        result = Lookup(LookupStatus.FOUND, value=3)
        assert result.found
        assert result.unwrap_or(0) == 3

    def test_absent_uses_default(self):
        result = Lookup(LookupStatus.ABSENT)
        assert not result.found
        assert result.unwrap_or(9) == 9

    def test_wrong_kind_uses_default(self):
        result = Lookup(LookupStatus.WRONG_KIND, actual_kind=Kind.STRING)
        assert not result.found
        assert result.unwrap_or(1.5) == 1.5
        assert result.actual_kind is Kind.STRING


class TestValueValidation:
    """Tests for data/kind checks on direct construction."""

    def test_float32_rejects_text(self):
        with pytest.raises(ParamKindError, match="must be a float"):
            Value(Kind.FLOAT32, "abc")

    def test_int32_rejects_out_of_range(self):
        with pytest.raises(ValueError, match="out of range for int32"):
            Value(Kind.INT32, 2**40)

    def test_int64_accepts_large_int(self):
        assert Value(Kind.INT64, 2**40).data == 2**40

    def test_int_rejects_bool(self):
        with pytest.raises(ParamKindError):
            Value(Kind.INT32, True)

    def test_bool_rejects_int(self):
        with pytest.raises(ParamKindError):
            Value(Kind.BOOL, 1)

    def test_string_rejects_number(self):
        with pytest.raises(ParamKindError):
            Value(Kind.STRING, 1.5)

    def test_float32_must_be_exact(self):
        """float32 data must already be rounded to 32 bits."""
        with pytest.raises(ValueError, match="not exactly representable"):
            Value(Kind.FLOAT32, 0.1)
        assert Value(Kind.FLOAT32, float(np.float32(0.1))).kind is Kind.FLOAT32

    def test_float32_allows_non_finite(self):
        assert Value(Kind.FLOAT32, float("inf")).data == float("inf")
        assert not Value(Kind.FLOAT32, float("nan")).is_finite()

    def test_kind_given_as_text(self):
        value = Value("int64", 3)
        assert value.kind is Kind.INT64

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            Value("complex", 3)


class TestFloatOverflow:
    """Tests for numbers beyond the float ranges."""

    def test_narrowing_overflow_is_silent(self):
        """float64 values beyond float32 range read as inf without a warning."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            result = Value.of(1e300).coerce(Kind.FLOAT32)
        assert isinstance(result, np.float32)
        assert np.isinf(result)

    def test_float32_constructor_overflow_is_silent(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            value = Value.float32(-1e300)
        assert value.data == float("-inf")

    def test_float32_huge_int_raises_value_error(self):
        with pytest.raises(ValueError, match="out of range for float32"):
            Value.float32(2**1100)

    def test_float64_huge_int_raises_value_error(self):
        with pytest.raises(ValueError, match="out of range for float64"):
            Value.float64(2**1100)
