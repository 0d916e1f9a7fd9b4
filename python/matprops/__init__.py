"""Matrix representations with transferable data properties."""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _dist_version

try:
    __version__ = _dist_version("matprops")
except PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "unknown"

from ._internal.context import ExecutionContext, UserConfig
from ._internal.csr import CSRMatrix
from ._internal.dense import DenseMatrix
from ._internal.dtypes import SUPPORTED_DTYPES, normalize_dtype
from ._internal.properties import PropertyCell, get_properties
from ._internal.property_types import (
    SPARSITY_UNKNOWN,
    BoolOrUnknown,
    DataProperties,
    decode_symmetry,
    encode_symmetry,
)
from ._internal.transfer import (
    HasTransferableProperties,
    UnsupportedRepresentationError,
    bind_transfer,
    supports_transfer,
    transfer_properties,
)
from ._internal.warnings import MatPropsConfigWarning, MatPropsWarning

# Public dtype tokens (NumPy-like), accepted wherever a dtype is.
float64 = "float64"
float32 = "float32"
int64 = "int64"
int32 = "int32"
int8 = "int8"
uint64 = "uint64"
uint32 = "uint32"
uint8 = "uint8"

__all__ = [
    "BoolOrUnknown",
    "CSRMatrix",
    "DataProperties",
    "DenseMatrix",
    "ExecutionContext",
    "HasTransferableProperties",
    "MatPropsConfigWarning",
    "MatPropsWarning",
    "PropertyCell",
    "SPARSITY_UNKNOWN",
    "SUPPORTED_DTYPES",
    "UnsupportedRepresentationError",
    "UserConfig",
    "bind_transfer",
    "decode_symmetry",
    "encode_symmetry",
    "get_properties",
    "normalize_dtype",
    "supports_transfer",
    "transfer_properties",
]
