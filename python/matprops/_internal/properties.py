from __future__ import annotations

from typing import Any

from .property_types import SPARSITY_UNKNOWN, BoolOrUnknown, DataProperties

# Attribute under which representations keep their cell.
_PROPERTIES_ATTR = "_matprops_properties"


class PropertyCell:
    """Mutable metadata slot owned by an otherwise read-only matrix.

    A matrix's structure and payload are immutable once built, but its data
    properties are cache-like and may be rewritten at any time through
    `assign()`. That method is the only way to change them.
    """

    __slots__ = ("_sparsity", "_symmetric")

    def __init__(self) -> None:
        object.__setattr__(self, "_sparsity", SPARSITY_UNKNOWN)
        object.__setattr__(self, "_symmetric", BoolOrUnknown.UNKNOWN)

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"PropertyCell is not assignable; use assign() instead of setting {key!r}")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"PropertyCell attribute {key!r} cannot be deleted")

    @property
    def sparsity(self) -> float:
        return self._sparsity

    @property
    def symmetric(self) -> BoolOrUnknown:
        return self._symmetric

    def assign(self, sparsity: float, symmetric: BoolOrUnknown) -> None:
        # Both fields are overwritten together; prior values never leak through.
        object.__setattr__(self, "_sparsity", sparsity)
        object.__setattr__(self, "_symmetric", symmetric)

    def reset(self) -> None:
        self.assign(SPARSITY_UNKNOWN, BoolOrUnknown.UNKNOWN)

    def snapshot(self) -> DataProperties:
        return DataProperties(sparsity=self._sparsity, symmetric=self._symmetric)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyCell):
            return NotImplemented
        return self.snapshot() == other.snapshot()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"PropertyCell(sparsity={self._sparsity!r}, symmetric={self._symmetric.name})"


def _ensure_cell(obj: Any) -> PropertyCell:
    cell = getattr(obj, _PROPERTIES_ATTR, None)
    if not isinstance(cell, PropertyCell):
        raise TypeError(f"{type(obj).__name__} does not own a PropertyCell")
    return cell


def get_properties(obj: Any) -> DataProperties:
    """Return a snapshot of the data properties stored on a representation."""
    return _ensure_cell(obj).snapshot()
