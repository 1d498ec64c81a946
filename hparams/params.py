"""
Params: a named store of hyper-parameter values.

Training code reads values through typed getters that fall back to a
caller-supplied default. A stored value of the wrong kind is logged and
treated like a missing one; use lookup() to tell the two cases apart.

Example:
    params = Params({LR: 0.007, N_EPOCHS: 100, N_FACTORS: 80, REG: 0.1})
    lr = params.get_float32(LR, 0.01)
    tuned = params.overwrite({LR: 0.05})
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping, MutableMapping

import numpy as np

from hparams import _canonical
from hparams.names import ParamName, as_name
from hparams.values import Kind, Lookup, LookupStatus, Value

logger = logging.getLogger(__name__)


class Params(MutableMapping[ParamName, Any]):
    """
    Mapping from parameter name to a single typed value.

    Items read back as plain scalars; value() and kind_of() expose the
    stored kind. copy() and overwrite() return new instances and never
    modify their inputs.
    """

    def __init__(
        self,
        values: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        """
        Initialize from a mapping or (name, value) pairs, plus keyword arguments.

        Raises:
            ParamKindError: If a value has an unsupported type.
        """
        self._values: dict[ParamName, Value] = {}
        if isinstance(values, Params):
            self._values.update(values._values)
        elif values is not None:
            items = values.items() if isinstance(values, Mapping) else values
            for name, value in items:
                self[name] = value
        for name, value in kwargs.items():
            self[name] = value

    @classmethod
    def _from_values(cls, values: Mapping[ParamName, Value]) -> Params:
        params = cls()
        params._values = dict(values)
        return params

    # Mapping protocol

    def __getitem__(self, name: str) -> Any:
        return self._values[as_name(name)].data

    def __setitem__(self, name: str, value: Any) -> None:
        self._values[as_name(name)] = Value.of(value)

    def __delitem__(self, name: str) -> None:
        del self._values[as_name(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._values

    def __iter__(self) -> Iterator[ParamName]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Params):
            return self._values == other._values
        if isinstance(other, Mapping):
            try:
                other = Params(other)
            except (TypeError, ValueError):
                return False
            return self._values == other._values
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        items = ", ".join(f"{str(k)!r}: {v.data!r}" for k, v in self._values.items())
        return f"Params({{{items}}})"

    # Raw access

    def value(self, name: str) -> Value | None:
        """Return the stored Value for *name*, or None if absent."""
        return self._values.get(as_name(name))

    def kind_of(self, name: str) -> Kind | None:
        """Return the stored kind for *name*, or None if absent."""
        value = self.value(name)
        return value.kind if value is not None else None

    def copy(self) -> Params:
        """Return a shallow copy; later changes to either side stay separate."""
        return self._from_values(self._values)

    def to_dict(self) -> dict[str, Any]:
        return {str(name): value.data for name, value in self._values.items()}

    # Typed reads

    def lookup(self, name: str, kind: Kind) -> Lookup[Any]:
        """
        Read *name* as *kind* without logging.

        Args:
            name: The parameter name.
            kind: The requested kind. Widening rules match the typed getters.

        Returns:
            A Lookup that is FOUND with the converted value, WRONG_KIND with
            the stored kind, or ABSENT.
        """
        value = self.value(name)
        if value is None:
            return Lookup(LookupStatus.ABSENT)
        if not value.accepts(kind):
            return Lookup(LookupStatus.WRONG_KIND, actual_kind=value.kind)
        return Lookup(LookupStatus.FOUND, value=value.coerce(kind))

    def _get(self, name: str, kind: Kind, default: Any) -> Any:
        result = self.lookup(name, kind)
        if result.status is LookupStatus.WRONG_KIND:
            logger.error(
                f"type mismatch: parameter {str(name)!r} is {result.actual_kind.value}, "
                f"expected {kind.value}",
                extra={
                    "param_name": str(name),
                    "expected_kind": kind.value,
                    "actual_kind": result.actual_kind.value,
                },
            )
        return result.unwrap_or(default)

    def get_bool(self, name: str, default: bool) -> bool:
        """Get a boolean parameter. Returns *default* if absent or not a bool."""
        return self._get(name, Kind.BOOL, default)

    def get_int(self, name: str, default: int) -> int:
        """Get an int32 parameter. Returns *default* if absent or not an int32."""
        return self._get(name, Kind.INT32, default)

    def get_int64(self, name: str, default: int) -> int:
        """
        Get an int64 parameter, widening a stored int32.

        Returns *default* if absent or of any other kind.
        """
        return self._get(name, Kind.INT64, default)

    def get_float32(self, name: str, default: float) -> np.float32:
        """
        Get a float32 parameter.

        Accepts stored float32, float64 and int32 values. float64 values are
        narrowed to the nearest float32. Returns *default* (unchanged) if
        absent or of any other kind.
        """
        return self._get(name, Kind.FLOAT32, default)

    def get_string(self, name: str, default: str) -> str:
        """Get a string parameter. Returns *default* if absent or not a string."""
        return self._get(name, Kind.STRING, default)

    # Merging and serialization

    def overwrite(self, other: Mapping[str, Any]) -> Params:
        """
        Merge *other* on top of these parameters.

        Keys present in both take the value from *other*. Neither input is
        modified.

        Args:
            other: Parameters (or any mapping of name to value) that win.

        Returns:
            A new Params with the merged values.
        """
        merged = self.copy()
        if isinstance(other, Params):
            merged._values.update(other._values)
        else:
            merged.update(other)
        return merged

    def to_string(self) -> str:
        """
        Serialize to a compact JSON object with sorted keys.

        Raises:
            SerializationError: If any value is NaN or infinite. Nothing is
                returned in that case.
        """
        return _canonical.canonical(self._values)

    @classmethod
    def from_string(cls, text: str) -> Params:
        """
        Parse the output of to_string().

        JSON integers become int32 (or int64 when they do not fit) and JSON
        floats become float64.

        Raises:
            SerializationError: If *text* is not a JSON object of primitives.
        """
        return cls._from_values(
            {as_name(name): value for name, value in _canonical.decode(text).items()}
        )

    def fingerprint(self) -> str:
        """Return a 16-character hash identifying these parameter values."""
        return _canonical.fingerprint(self._values)
