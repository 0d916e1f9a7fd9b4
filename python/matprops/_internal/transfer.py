"""Transfer of inferred data properties onto matrix metadata.

A representation takes part by implementing `HasTransferableProperties`: it
owns a `PropertyCell` and an `apply_properties` handler that writes into it.
The entry points below are written once against that capability, so adding a
representation never touches this module.

Preconditions (not checked): `sparsity` lies in [0, 1] and the symmetry code
is one of 0 (false), 1 (true) or the unknown sentinel. Values outside those
ranges are stored as given.
"""

from __future__ import annotations

import logging
import weakref
from typing import Callable, Optional, Protocol, Type, TypeVar, Union, runtime_checkable

from .context import ExecutionContext
from .properties import PropertyCell
from .property_types import BoolOrUnknown, decode_symmetry

logger = logging.getLogger(__name__)

SymmetryCode = Union[int, BoolOrUnknown]


class UnsupportedRepresentationError(TypeError):
    """Raised when a matrix type has no property-transfer handler."""


@runtime_checkable
class HasTransferableProperties(Protocol):
    @property
    def properties(self) -> PropertyCell: ...

    def apply_properties(self, sparsity: float, symmetric: BoolOrUnknown) -> None: ...


DT = TypeVar("DT", bound=HasTransferableProperties)

TransferKernel = Callable[[DT, float, SymmetryCode, Optional[ExecutionContext]], None]

# Keyed weakly so classes created at runtime can still be collected.
_BOUND_KERNELS: "weakref.WeakKeyDictionary[type, Callable[..., None]]" = weakref.WeakKeyDictionary()


def supports_transfer(representation_type: type) -> bool:
    return callable(getattr(representation_type, "apply_properties", None))


def transfer_properties(
    arg: HasTransferableProperties,
    sparsity: float,
    symmetric: SymmetryCode,
    ctx: Optional[ExecutionContext] = None,
) -> None:
    """Overwrite `arg`'s sparsity and symmetry properties in place.

    The data buffer is never read or written. `ctx` is accepted for kernel
    signature compatibility and passed through unread.
    """

    try:
        handler = arg.apply_properties
    except AttributeError:
        raise UnsupportedRepresentationError(
            f"{type(arg).__name__} does not implement property transfer"
        ) from None
    handler(sparsity, decode_symmetry(symmetric))


def bind_transfer(representation_type: Type[DT]) -> TransferKernel[DT]:
    """Resolve the transfer kernel for one representation type.

    Resolution happens here, once, rather than per call: binding an unsupported
    type raises UnsupportedRepresentationError immediately, so kernel wiring
    fails before any matrix is processed.
    """

    if not isinstance(representation_type, type):
        raise TypeError(f"bind_transfer expects a class, got {representation_type!r}")
    kernel = _BOUND_KERNELS.get(representation_type)
    if kernel is not None:
        return kernel
    if not supports_transfer(representation_type):
        raise UnsupportedRepresentationError(
            f"No property-transfer handler for {representation_type.__qualname__}"
        )

    handler = representation_type.apply_properties

    def _kernel(
        arg: DT,
        sparsity: float,
        symmetric: SymmetryCode,
        ctx: Optional[ExecutionContext] = None,
    ) -> None:
        handler(arg, sparsity, decode_symmetry(symmetric))

    _kernel.__name__ = f"transfer_properties__{representation_type.__name__}"
    _kernel.__qualname__ = _kernel.__name__
    _BOUND_KERNELS[representation_type] = _kernel
    logger.debug("bound %s", _kernel.__name__)
    return _kernel
