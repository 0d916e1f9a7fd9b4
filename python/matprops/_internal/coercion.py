from __future__ import annotations

from collections.abc import Sequence as _SequenceABC
from typing import Any

import numpy as np

from .dtypes import normalize_dtype, require_dtype


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def coerce_rows(candidate: Any) -> list[list[Any]]:
    if not is_sequence_like(candidate):
        raise TypeError("Matrix data must be provided as a nested sequence or a NumPy array.")
    rows = [row for row in candidate]
    if not rows:
        raise ValueError("Matrix data must not be empty.")
    for row in rows:
        if not is_sequence_like(row):
            raise TypeError("Each matrix row must be a sequence of entries.")
    cols = len(rows[0])
    if any(len(row) != cols for row in rows):
        raise ValueError("Matrix data must be rectangular (all rows the same length).")
    return [list(row) for row in rows]


def as_buffer(candidate: Any, dtype: Any | None = None) -> np.ndarray:
    """Return a C-contiguous 2-D array copy of `candidate` in a supported value type."""

    if isinstance(candidate, np.ndarray):
        if candidate.ndim != 2:
            raise ValueError("Matrix input must be a 2D structure.")
        array = candidate
    else:
        array = np.asarray(coerce_rows(candidate))

    if dtype is None:
        norm = normalize_dtype(array.dtype)
        if norm is None:
            raise TypeError(f"Unsupported matrix value type: {array.dtype}")
    else:
        norm = require_dtype(dtype)

    return np.array(array, dtype=norm, order="C", copy=True)
