from __future__ import annotations

from typing import Any, Iterator

import numpy as np
import numpy.typing as npt


class KdTreePoint:
    """Point in k-dimensional space.

    Number of dimensions is decided by the number of values at construction
    and never changes. Each coordinate can be overwritten via index.
    """

    def __init__(self, *values: Any):
        self.values: list = list(values)
        self._num_dims = len(self.values)

    @staticmethod
    def from_sequence(values) -> KdTreePoint:
        """Create point from any sequence, e.g. list or NDArray row."""
        # Convert NDArray to python values so that numpy scalar doesn't leak.
        if isinstance(values, np.ndarray):
            values = values.tolist()
        return KdTreePoint(*values)

    @property
    def num_dims(self) -> int:
        return self._num_dims

    def __getitem__(self, index: int) -> Any:
        return self.values[index]

    def __setitem__(self, index: int, value: Any):
        self.values[index] = value

    def __len__(self) -> int:
        return self._num_dims

    def __iter__(self) -> Iterator:
        return iter(self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KdTreePoint):
            return NotImplemented
        if self.num_dims != other.num_dims:
            return False
        return all(v0 == v1 for v0, v1 in zip(self.values, other.values))

    # Coordinates are mutable, so point can't be used as dict key.
    __hash__ = None

    def __str__(self) -> str:
        return " ".join(str(v) for v in self.values)

    def __repr__(self) -> str:
        return f"KdTreePoint({', '.join(repr(v) for v in self.values)})"

    def to_array(self) -> npt.NDArray:
        return np.array(self.values, dtype=np.float64)
