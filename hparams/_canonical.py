"""
Canonical JSON encoding of parameter values (internal).

Key design decisions:
- Keys are always sorted, output is compact
- float32 values are written with their shortest float32 representation
- NaN/Inf raise SerializationError (not silently encoded)
- Encoding is all-or-nothing: no partial output on failure
"""

from __future__ import annotations

import hashlib
import json
import math
from typing import Any, Mapping

import numpy as np

from hparams.values import Kind, Value


class SerializationError(Exception):
    """Raised when parameters cannot be converted to or from JSON."""

    pass


def _encode_value(name: str, value: Value) -> bool | int | float | str:
    """
    Encode a single value as a JSON primitive.

    Raises:
        SerializationError: If the value is NaN or infinite.
    """
    if not value.is_finite():
        raise SerializationError(f"Parameter {name!r} has non-finite value {value.data!r}")
    if value.kind is Kind.FLOAT32:
        # "0.1" rather than "0.10000000149011612"
        return float(str(np.float32(value.data)))
    return value.data


def _decode_value(name: str, obj: Any) -> Value:
    if isinstance(obj, float) and not math.isfinite(obj):
        raise SerializationError(f"Parameter {name!r} has non-finite value {obj!r}")
    if isinstance(obj, (bool, int, float, str)):
        try:
            return Value.of(obj)
        except ValueError as e:
            raise SerializationError(f"Parameter {name!r}: {e}") from e
    raise SerializationError(
        f"Parameter {name!r} has unsupported JSON type: {type(obj).__name__}"
    )


def encode(values: Mapping[str, Value]) -> dict[str, bool | int | float | str]:
    """Encode a name -> Value mapping into a dict of JSON primitives."""
    return {str(name): _encode_value(name, value) for name, value in sorted(values.items())}


def canonical(values: Mapping[str, Value]) -> str:
    """
    Convert parameter values to a canonical JSON string.

    The same mapping always produces the same string, regardless of
    insertion order.

    Raises:
        SerializationError: If any value is NaN or infinite.

    Example:
        >>> canonical({"b": Value.of(1), "a": Value.of(True)})
        '{"a":true,"b":1}'
    """
    encoded = encode(values)
    return json.dumps(encoded, sort_keys=True, separators=(",", ":"), allow_nan=False)


def _reject_constant(token: str) -> Any:
    raise SerializationError(f"Non-finite number {token} is not allowed")


def decode(text: str) -> dict[str, Value]:
    """
    Parse a JSON object of primitives into a name -> Value mapping.

    Raises:
        SerializationError: If the text is not a JSON object of primitives.
    """
    try:
        obj = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid parameter JSON: {e}") from e
    if not isinstance(obj, dict):
        raise SerializationError(f"Expected a JSON object, got {type(obj).__name__}")
    return {name: _decode_value(name, item) for name, item in obj.items()}


def fingerprint(values: Mapping[str, Value]) -> str:
    """
    Compute a stable fingerprint of parameter values.

    Uses SHA-256 of the canonical representation, truncated to 16 hex characters.

    Raises:
        SerializationError: If the values cannot be canonicalized.
    """
    canonical_str = canonical(values)
    hash_bytes = hashlib.sha256(canonical_str.encode("utf-8")).digest()
    return hash_bytes.hex()[:16]
