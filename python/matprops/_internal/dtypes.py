from __future__ import annotations

from typing import Any

import numpy as np

SUPPORTED_DTYPES: tuple[str, ...] = (
    "float64",
    "float32",
    "int64",
    "int32",
    "int8",
    "uint64",
    "uint32",
    "uint8",
)

_ALIASES: dict[str, str] = {
    "float": "float64",
    "f64": "float64",
    "double": "float64",
    "f32": "float32",
    "single": "float32",
    "int": "int64",
    "i64": "int64",
    "i32": "int32",
    "i8": "int8",
    "u64": "uint64",
    "uint": "uint64",
    "u32": "uint32",
    "u8": "uint8",
}


def normalize_dtype(dtype: Any) -> str | None:
    """Normalize user-provided dtype tokens into value-type strings.

    Returns one of SUPPORTED_DTYPES or None.

    Accepted inputs include:
    - Case-insensitive strings: "float64", "F32", "double", "i8", ...
    - Python builtins: int, float
    - NumPy dtypes/scalar types: np.int32, np.dtype("uint8"), ...
    """

    if dtype is None:
        return None

    if dtype is int:
        return "int64"
    if dtype is float:
        return "float64"
    if dtype is bool:
        # No bit-packed representation; booleans are not a value type here.
        return None

    if isinstance(dtype, str):
        s = dtype.strip().lower()
        s = _ALIASES.get(s, s)
        return s if s in SUPPORTED_DTYPES else None

    try:
        np_dtype = np.dtype(dtype)
    except TypeError:
        return None

    name = np_dtype.name
    if name in SUPPORTED_DTYPES:
        return name

    # Other float widths widen to float64.
    if np_dtype.kind == "f":
        return "float64"
    if np_dtype.kind == "i":
        return "int64"
    if np_dtype.kind == "u":
        return "uint64"
    return None


def require_dtype(dtype: Any) -> str:
    norm = normalize_dtype(dtype)
    if norm is None:
        raise TypeError(f"Unsupported matrix value type: {dtype!r}")
    return norm
