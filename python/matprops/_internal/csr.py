from __future__ import annotations

from typing import Any

import numpy as np
import scipy.sparse as sp

from .coercion import as_buffer
from .dense import DenseMatrix, _freeze
from .dtypes import require_dtype
from .properties import _PROPERTIES_ATTR, PropertyCell
from .property_types import BoolOrUnknown

_INDEX_DTYPE = np.int64


def _rows_strictly_increasing(col_idxs: np.ndarray, row_offsets: np.ndarray) -> bool:
    base = int(row_offsets[0])
    used = col_idxs[base : int(row_offsets[-1])]
    if used.shape[0] < 2:
        return True
    ok = np.diff(used) > 0
    # A step into the first entry of a row compares across rows; those are exempt.
    starts = row_offsets[1:-1] - base
    starts = starts[(starts > 0) & (starts < used.shape[0])]
    ok[starts - 1] = True
    return bool(ok.all())


class CSRMatrix:
    """Compressed sparse-row matrix.

    Row `i` holds the entries `values[row_offsets[i]:row_offsets[i + 1]]` at
    columns `col_idxs[...]` (same range). `row_offsets` need not start at 0,
    which lets row slices share the parent's `values` and `col_idxs`.
    """

    __slots__ = (
        "_num_rows",
        "_num_cols",
        "_max_num_non_zeros",
        "_values",
        "_col_idxs",
        "_row_offsets",
        _PROPERTIES_ATTR,
    )

    def __init__(
        self,
        num_rows: int,
        num_cols: int,
        values: Any,
        col_idxs: Any,
        row_offsets: Any,
        *,
        dtype: Any | None = None,
    ):
        num_rows = int(num_rows)
        num_cols = int(num_cols)
        if num_rows < 0 or num_cols < 0:
            raise ValueError("CSRMatrix dimensions must be non-negative")

        # Buffers are copied so no caller-held alias can write to the payload.
        values = np.asarray(values)
        values = np.array(values, dtype=require_dtype(dtype if dtype is not None else values.dtype), order="C", copy=True)
        col_idxs = np.array(col_idxs, dtype=_INDEX_DTYPE, order="C", copy=True)
        row_offsets = np.array(row_offsets, dtype=_INDEX_DTYPE, order="C", copy=True)

        if values.ndim != 1 or col_idxs.ndim != 1 or row_offsets.ndim != 1:
            raise ValueError("CSR buffers must be one-dimensional")
        if values.shape != col_idxs.shape:
            raise ValueError("values and col_idxs must have the same length")
        if row_offsets.shape[0] != num_rows + 1:
            raise ValueError(f"row_offsets must have {num_rows + 1} entries, got {row_offsets.shape[0]}")
        if np.any(np.diff(row_offsets) < 0):
            raise ValueError("row_offsets must be non-decreasing")
        if row_offsets[0] < 0 or row_offsets[-1] > values.shape[0]:
            raise ValueError("row_offsets point outside the value buffer")
        if col_idxs.size and (col_idxs.min() < 0 or col_idxs.max() >= num_cols):
            raise ValueError("col_idxs out of range")
        if not _rows_strictly_increasing(col_idxs, row_offsets):
            raise ValueError("col_idxs must be strictly increasing within each row")

        self._init(num_rows, num_cols, int(values.shape[0]), values, col_idxs, row_offsets)

    def _init(
        self,
        num_rows: int,
        num_cols: int,
        max_num_non_zeros: int,
        values: np.ndarray,
        col_idxs: np.ndarray,
        row_offsets: np.ndarray,
    ) -> None:
        self._num_rows = num_rows
        self._num_cols = num_cols
        self._max_num_non_zeros = max_num_non_zeros
        self._values = _freeze(values)
        self._col_idxs = _freeze(col_idxs)
        self._row_offsets = _freeze(row_offsets)
        setattr(self, _PROPERTIES_ATTR, PropertyCell())

    @classmethod
    def from_dense(cls, dense: Any, dtype: Any | None = None) -> "CSRMatrix":
        if isinstance(dense, DenseMatrix):
            array = dense.to_numpy()
        else:
            array = as_buffer(dense, dtype)
        return cls.from_scipy(sp.csr_matrix(array), dtype=dtype)

    @classmethod
    def from_scipy(cls, matrix: Any, dtype: Any | None = None) -> "CSRMatrix":
        csr = sp.csr_matrix(matrix, copy=True)
        # Canonical form: sorted column indices, duplicates summed.
        csr.sum_duplicates()
        rows, cols = csr.shape
        return cls(rows, cols, csr.data, csr.indices, csr.indptr, dtype=dtype)

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
    def max_num_non_zeros(self) -> int:
        return self._max_num_non_zeros

    @property
    def shape(self) -> tuple[int, int]:
        return (self._num_rows, self._num_cols)

    @property
    def dtype(self) -> str:
        return self._values.dtype.name

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def col_idxs(self) -> np.ndarray:
        return self._col_idxs

    @property
    def row_offsets(self) -> np.ndarray:
        return self._row_offsets

    def num_non_zeros(self) -> int:
        return int(self._row_offsets[-1] - self._row_offsets[0])

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
        lo = int(self._row_offsets[i])
        hi = int(self._row_offsets[i + 1])
        row_cols = self._col_idxs[lo:hi]
        pos = int(np.searchsorted(row_cols, j))
        if pos < row_cols.shape[0] and row_cols[pos] == j:
            return self._values[lo + pos].item()
        return self._values.dtype.type(0).item()

    def __getitem__(self, key: Any) -> Any:
        i, j = key
        return self.get(int(i), int(j))

    def to_scipy(self) -> sp.csr_matrix:
        base = int(self._row_offsets[0])
        end = int(self._row_offsets[-1])
        return sp.csr_matrix(
            (
                np.array(self._values[base:end]),
                np.array(self._col_idxs[base:end]),
                np.array(self._row_offsets - base),
            ),
            shape=self.shape,
        )

    def to_numpy(self) -> np.ndarray:
        return self.to_scipy().toarray()

    def slice_rows(self, rl: int, ru: int) -> "CSRMatrix":
        """Rows [rl, ru) as a view sharing `values` and `col_idxs`."""
        if not (0 <= rl <= ru <= self._num_rows):
            raise IndexError(f"row range [{rl}, {ru}) out of bounds for {self._num_rows} rows")
        obj = CSRMatrix.__new__(CSRMatrix)
        obj._init(
            ru - rl,
            self._num_cols,
            self._max_num_non_zeros,
            self._values,
            self._col_idxs,
            self._row_offsets[rl : ru + 1],
        )
        return obj

    def __repr__(self) -> str:
        return (
            f"CSRMatrix(shape={self.shape}, nnz={self.num_non_zeros()}, "
            f"dtype={self.dtype}, {self.properties!r})"
        )
