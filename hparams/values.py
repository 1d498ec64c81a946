"""
Tagged parameter values.

Every hyper-parameter value is stored as a Value: a kind discriminant plus a
normalized Python scalar. Typed reads go through Value.coerce(), which applies
the lossless widenings (int32 -> int64) and the accepted narrowings
(float64 -> float32) and rejects everything else.

Kinds:
- bool: True/False
- int32, int64: signed integers with the matching range
- float32: a float exactly representable in 32 bits
- float64: a Python float
- string: text
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

import numpy as np

T = TypeVar("T")

_INT32 = np.iinfo(np.int32)
_INT64 = np.iinfo(np.int64)


class ParamKindError(TypeError):
    """Raised when a value cannot be stored as, or read as, a parameter kind."""

    pass


class Kind(str, Enum):
    """Kind of a stored parameter value."""

    BOOL = "bool"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "string"


# Stored kinds each requested kind will accept.
_ACCEPTED: dict[Kind, frozenset[Kind]] = {
    Kind.BOOL: frozenset({Kind.BOOL}),
    Kind.INT32: frozenset({Kind.INT32}),
    Kind.INT64: frozenset({Kind.INT64, Kind.INT32}),
    Kind.FLOAT32: frozenset({Kind.FLOAT32, Kind.FLOAT64, Kind.INT32}),
    Kind.FLOAT64: frozenset({Kind.FLOAT64, Kind.FLOAT32, Kind.INT32, Kind.INT64}),
    Kind.STRING: frozenset({Kind.STRING}),
}


def _is_integral(obj: Any) -> bool:
    return isinstance(obj, (int, np.integer)) and not isinstance(obj, (bool, np.bool_))


def _is_real(obj: Any) -> bool:
    return _is_integral(obj) or isinstance(obj, (float, np.floating))


def _check_range(value: int, info: np.iinfo, kind: Kind) -> int:
    if not info.min <= value <= info.max:
        raise ValueError(f"{value} is out of range for {kind.value}")
    return value


def _to_float32(obj: Any) -> np.float32:
    # Values beyond the float32 range become +/-inf
    try:
        with np.errstate(over="ignore"):
            return np.float32(obj)
    except OverflowError as e:
        raise ValueError(f"{obj!r} is out of range for float32") from e


def _to_float(obj: Any) -> float:
    try:
        return float(obj)
    except OverflowError as e:
        raise ValueError(f"{obj!r} is out of range for float64") from e


@dataclass(frozen=True)
class Value:
    """
    A single parameter value with an explicit kind.

    Use the named constructors to force a kind, or Value.of() to infer one
    from a Python or numpy scalar.

    Attributes:
        kind: The value's kind.
        data: The normalized scalar (bool, int, float or str).
    """

    kind: Kind
    data: bool | int | float | str

    def __post_init__(self) -> None:
        """
        Check that data is the normalized scalar for kind.

        Raises:
            ParamKindError: If data has the wrong type for kind.
            ValueError: If data is out of range, or a float32 value is not
                exactly representable in 32 bits.
        """
        kind = Kind(self.kind)
        object.__setattr__(self, "kind", kind)
        data = self.data
        if kind is Kind.BOOL:
            if not isinstance(data, bool):
                raise ParamKindError(f"bool value must be a bool, got {type(data).__name__}")
        elif kind in (Kind.INT32, Kind.INT64):
            if not isinstance(data, int) or isinstance(data, bool):
                raise ParamKindError(f"{kind.value} value must be an int, got {type(data).__name__}")
            _check_range(data, _INT32 if kind is Kind.INT32 else _INT64, kind)
        elif kind in (Kind.FLOAT32, Kind.FLOAT64):
            if not isinstance(data, float):
                raise ParamKindError(f"{kind.value} value must be a float, got {type(data).__name__}")
            if kind is Kind.FLOAT32 and not math.isnan(data) and float(_to_float32(data)) != data:
                raise ValueError(f"{data!r} is not exactly representable as float32")
        elif not isinstance(data, str):
            raise ParamKindError(f"string value must be a str, got {type(data).__name__}")

    @classmethod
    def boolean(cls, obj: Any) -> Value:
        if not isinstance(obj, (bool, np.bool_)):
            raise ParamKindError(f"Expected a boolean, got {type(obj).__name__}")
        return cls(Kind.BOOL, bool(obj))

    @classmethod
    def int32(cls, obj: Any) -> Value:
        if not _is_integral(obj):
            raise ParamKindError(f"Expected an integer, got {type(obj).__name__}")
        return cls(Kind.INT32, _check_range(int(obj), _INT32, Kind.INT32))

    @classmethod
    def int64(cls, obj: Any) -> Value:
        if not _is_integral(obj):
            raise ParamKindError(f"Expected an integer, got {type(obj).__name__}")
        return cls(Kind.INT64, _check_range(int(obj), _INT64, Kind.INT64))

    @classmethod
    def float32(cls, obj: Any) -> Value:
        if not _is_real(obj):
            raise ParamKindError(f"Expected a number, got {type(obj).__name__}")
        return cls(Kind.FLOAT32, float(_to_float32(obj)))

    @classmethod
    def float64(cls, obj: Any) -> Value:
        if not _is_real(obj):
            raise ParamKindError(f"Expected a number, got {type(obj).__name__}")
        return cls(Kind.FLOAT64, _to_float(obj))

    @classmethod
    def string(cls, obj: Any) -> Value:
        if not isinstance(obj, str):
            raise ParamKindError(f"Expected a string, got {type(obj).__name__}")
        return cls(Kind.STRING, str(obj))

    @classmethod
    def of(cls, obj: Any) -> Value:
        """
        Wrap a scalar, inferring its kind.

        Python ints become int32 when they fit and int64 otherwise. Python
        floats are float64; numpy float32/float16 scalars are float32.

        Args:
            obj: A Value, or a bool, int, float, str or numpy scalar.

        Returns:
            The wrapped value.

        Raises:
            ParamKindError: If the type cannot be stored as a parameter.
            ValueError: If a number does not fit in 64 bits.
        """
        if isinstance(obj, Value):
            return obj
        if isinstance(obj, (bool, np.bool_)):
            return cls.boolean(obj)
        if isinstance(obj, np.integer) and obj.dtype.itemsize > 4:
            return cls.int64(obj)
        if _is_integral(obj):
            value = int(obj)
            if _INT32.min <= value <= _INT32.max:
                return cls.int32(value)
            return cls.int64(value)
        if isinstance(obj, (np.float32, np.float16)):
            return cls.float32(obj)
        if isinstance(obj, (float, np.floating)):
            return cls.float64(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        raise ParamKindError(f"Unsupported parameter value type: {type(obj).__name__}")

    def accepts(self, kind: Kind) -> bool:
        """Return True if this value can be read as *kind*."""
        return self.kind in _ACCEPTED[kind]

    def coerce(self, kind: Kind) -> Any:
        """
        Read this value as *kind*.

        float32 reads return numpy.float32; narrowing a float64 rounds to the
        nearest representable float32 without complaint.

        Raises:
            ParamKindError: If the stored kind cannot be read as *kind*.
        """
        if not self.accepts(kind):
            raise ParamKindError(f"Cannot read {self.kind.value} as {kind.value}")
        if kind is Kind.FLOAT32:
            return _to_float32(self.data)
        if kind is Kind.FLOAT64:
            return float(self.data)
        return self.data

    def is_finite(self) -> bool:
        if self.kind in (Kind.FLOAT32, Kind.FLOAT64):
            return math.isfinite(self.data)
        return True


class LookupStatus(str, Enum):
    """Outcome of a typed lookup."""

    FOUND = "found"
    WRONG_KIND = "wrong_kind"
    ABSENT = "absent"


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """
    Result of reading a parameter as a specific kind.

    Attributes:
        status: Whether the value was found, found with the wrong kind, or absent.
        value: The converted value when status is FOUND.
        actual_kind: The stored kind when status is WRONG_KIND.
    """

    status: LookupStatus
    value: T | None = None
    actual_kind: Kind | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def unwrap_or(self, default: T) -> T:
        """Return the found value, or *default* for any other status."""
        if self.status is LookupStatus.FOUND:
            return self.value  # type: ignore[return-value]
        return default
