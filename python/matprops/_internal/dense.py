from __future__ import annotations

from typing import Any

import numpy as np
from numpy.lib.stride_tricks import as_strided

from .coercion import as_buffer
from .dtypes import require_dtype
from .properties import _PROPERTIES_ATTR, PropertyCell
from .property_types import BoolOrUnknown


def _freeze(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class DenseMatrix:
    """Row-major dense matrix over a flat, read-only value buffer.

    Row `i` starts at offset `i * row_skip` in `values`; `row_skip >= num_cols`.
    Row slices are views that share the parent's buffer. Only the data
    properties (see `properties`) may change after construction.
    """

    __slots__ = ("_num_rows", "_num_cols", "_row_skip", "_values", _PROPERTIES_ATTR)

    def __init__(self, num_rows: int, num_cols: int, dtype: Any = "float64"):
        num_rows = int(num_rows)
        num_cols = int(num_cols)
        if num_rows < 0 or num_cols < 0:
            raise ValueError("DenseMatrix dimensions must be non-negative")
        values = np.zeros(num_rows * num_cols, dtype=require_dtype(dtype))
        self._init(num_rows, num_cols, num_cols, values)

    def _init(self, num_rows: int, num_cols: int, row_skip: int, values: np.ndarray) -> None:
        self._num_rows = num_rows
        self._num_cols = num_cols
        self._row_skip = row_skip
        self._values = _freeze(values)
        setattr(self, _PROPERTIES_ATTR, PropertyCell())

    @classmethod
    def _from_buffer(cls, num_rows: int, num_cols: int, row_skip: int, values: np.ndarray) -> "DenseMatrix":
        obj = cls.__new__(cls)
        obj._init(num_rows, num_cols, row_skip, values)
        return obj

    @classmethod
    def from_numpy(cls, array: np.ndarray, dtype: Any | None = None) -> "DenseMatrix":
        buf = as_buffer(array, dtype)
        rows, cols = buf.shape
        return cls._from_buffer(rows, cols, cols, buf.reshape(-1))

    @classmethod
    def from_rows(cls, rows: Any, dtype: Any | None = None) -> "DenseMatrix":
        return cls.from_numpy(as_buffer(rows, dtype))

    # Structure

    def rows(self) -> int:
        return self._num_rows

    def cols(self) -> int:
        return self._num_cols

    @property
    def num_rows(self) -> int:
        return self._num_rows

    @property
    def num_cols(self) -> int:
        return self._num_cols

    @property
    def row_skip(self) -> int:
        return self._row_skip

    @property
    def shape(self) -> tuple[int, int]:
        return (self._num_rows, self._num_cols)

    @property
    def dtype(self) -> str:
        return self._values.dtype.name

    @property
    def values(self) -> np.ndarray:
        return self._values

    # Data properties

    @property
    def properties(self) -> PropertyCell:
        return getattr(self, _PROPERTIES_ATTR)

    @property
    def sparsity(self) -> float:
        return self.properties.sparsity

    @property
    def symmetric(self) -> BoolOrUnknown:
        return self.properties.symmetric

    def apply_properties(self, sparsity: float, symmetric: BoolOrUnknown) -> None:
        self.properties.assign(sparsity, symmetric)

    # Payload access

    def get(self, i: int, j: int) -> Any:
        if not (0 <= i < self._num_rows and 0 <= j < self._num_cols):
            raise IndexError(f"index ({i}, {j}) out of range for shape {self.shape}")
        return self._values[i * self._row_skip + j].item()

    def __getitem__(self, key: Any) -> Any:
        i, j = key
        return self.get(int(i), int(j))

    def to_numpy(self) -> np.ndarray:
        itemsize = self._values.itemsize
        strided = as_strided(
            self._values,
            shape=(self._num_rows, self._num_cols),
            strides=(self._row_skip * itemsize, itemsize),
            writeable=False,
        )
        return np.array(strided, copy=True)

    def slice_rows(self, rl: int, ru: int) -> "DenseMatrix":
        """Rows [rl, ru) as a view on this matrix's buffer."""
        if not (0 <= rl <= ru <= self._num_rows):
            raise IndexError(f"row range [{rl}, {ru}) out of bounds for {self._num_rows} rows")
        start = rl * self._row_skip
        stop = start + max(ru - rl - 1, 0) * self._row_skip + (self._num_cols if ru > rl else 0)
        return DenseMatrix._from_buffer(ru - rl, self._num_cols, self._row_skip, self._values[start:stop])

    def __repr__(self) -> str:
        return f"DenseMatrix(shape={self.shape}, dtype={self.dtype}, {self.properties!r})"
