"""
ParamsGrid: candidate values for grid search.

Each dimension maps a parameter name to an ordered, non-empty sequence of
candidate values. The search space is the Cartesian product of all
dimensions.
"""

from __future__ import annotations

import itertools
import math
from typing import Any, Iterable, Iterator, Mapping, MutableMapping

from hparams.names import ParamName, as_name
from hparams.params import Params
from hparams.values import Value


class ParamsGrid(MutableMapping[ParamName, tuple]):
    """
    Mapping from parameter name to candidate values.

    len() is the number of dimensions; num_combinations() is the size of the
    search space.

    Example:
    ```python
    grid = ParamsGrid({LR: [0.01, 0.1], N_FACTORS: [8, 16, 32]})
    grid.num_combinations()  # 6
    for params in grid.combinations():
        ...
    ```
    """

    def __init__(
        self,
        candidates: Mapping[str, Iterable[Any]] | None = None,
        **kwargs: Iterable[Any],
    ) -> None:
        """
        Initialize with parameter names mapped to candidate values.

        Raises:
            ValueError: If a dimension has no candidates.
            TypeError: If candidates are given as a bare string.
            ParamKindError: If a candidate has an unsupported type.
        """
        self._dims: dict[ParamName, tuple[Value, ...]] = {}
        if isinstance(candidates, ParamsGrid):
            self._dims.update(candidates._dims)
        elif candidates is not None:
            for name, values in candidates.items():
                self[name] = values
        for name, values in kwargs.items():
            self[name] = values

    def __getitem__(self, name: str) -> tuple:
        return tuple(value.data for value in self._dims[as_name(name)])

    def __setitem__(self, name: str, values: Iterable[Any]) -> None:
        key = as_name(name)
        if isinstance(values, (str, bytes)):
            raise TypeError(f"Candidates for {str(key)!r} must be a sequence, not a string")
        wrapped = tuple(Value.of(value) for value in values)
        if not wrapped:
            raise ValueError(f"Candidates for {str(key)!r} must not be empty")
        self._dims[key] = wrapped

    def __delitem__(self, name: str) -> None:
        del self._dims[as_name(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._dims

    def __iter__(self) -> Iterator[ParamName]:
        return iter(self._dims)

    def __len__(self) -> int:
        """Return the number of dimensions."""
        return len(self._dims)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParamsGrid):
            return self._dims == other._dims
        if isinstance(other, Mapping):
            return self.to_dict() == {
                str(k): list(v) for k, v in other.items()
            }
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        dims = ", ".join(f"{k}={list(self[k])}" for k in sorted(self._dims))
        return f"ParamsGrid({dims})"

    def num_combinations(self) -> int:
        """Return the number of parameter combinations (1 for an empty grid)."""
        return math.prod(len(values) for values in self._dims.values())

    def fill(self, defaults: Mapping[str, Iterable[Any]]) -> None:
        """
        Add every dimension of *defaults* that this grid lacks.

        Dimensions already present are kept as they are. Modifies the grid
        in place.

        Args:
            defaults: A ParamsGrid or mapping of name to candidate values.
        """
        if not isinstance(defaults, ParamsGrid):
            defaults = ParamsGrid(defaults)
        for name, values in defaults._dims.items():
            if name not in self._dims:
                self._dims[name] = values

    def copy(self) -> ParamsGrid:
        grid = type(self)()
        grid._dims = dict(self._dims)
        return grid

    def to_dict(self) -> dict[str, list[Any]]:
        return {str(name): list(self[name]) for name in self._dims}

    def combinations(self) -> Iterator[Params]:
        """
        Yield one Params per combination.

        Names are taken in sorted order and the last name varies fastest.
        An empty grid yields a single empty Params.
        """
        keys = sorted(self._dims)
        for combo in itertools.product(*(self._dims[k] for k in keys)):
            yield Params(dict(zip(keys, combo)))

    def combination(self, index: int) -> Params:
        """
        Get a combination by index without enumerating the ones before it.

        The ordering matches combinations().

        Args:
            index: The index of the combination (0-based, negative from the end).

        Returns:
            The Params at the given index.

        Raises:
            IndexError: If index is out of range.
        """
        total = self.num_combinations()
        if index < 0:
            index = total + index
        if index < 0 or index >= total:
            raise IndexError(f"Index {index} out of range [0, {total})")

        keys = sorted(self._dims)
        # itertools.product iterates rightmost index fastest, so decode from the right
        picked: dict[ParamName, Value] = {}
        remaining = index
        for key in reversed(keys):
            values = self._dims[key]
            picked[key] = values[remaining % len(values)]
            remaining //= len(values)
        return Params({key: picked[key] for key in keys})
