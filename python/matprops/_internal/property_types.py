from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

# Sparsity of a matrix whose fraction of non-zeros has not been estimated.
SPARSITY_UNKNOWN: float = -1.0


class BoolOrUnknown(IntEnum):
    """Tri-state data property. Integer values double as the call-boundary codes."""

    UNKNOWN = -1
    FALSE = 0
    TRUE = 1


def decode_symmetry(code: Any) -> BoolOrUnknown:
    """Map a boundary symmetry code to its tri-state value.

    0 -> FALSE, 1 -> TRUE, anything else -> UNKNOWN. Codes are not validated
    beyond this mapping; producing one of the three codes is the caller's job.
    """

    if isinstance(code, BoolOrUnknown):
        return code
    if code is True or code == 1:
        return BoolOrUnknown.TRUE
    if code is False or code == 0:
        return BoolOrUnknown.FALSE
    return BoolOrUnknown.UNKNOWN


def encode_symmetry(flag: BoolOrUnknown | bool | None) -> int:
    if flag is None:
        return int(BoolOrUnknown.UNKNOWN)
    return int(decode_symmetry(flag))


@dataclass(frozen=True)
class DataProperties:
    sparsity: float = SPARSITY_UNKNOWN
    symmetric: BoolOrUnknown = BoolOrUnknown.UNKNOWN

    @property
    def is_sparsity_known(self) -> bool:
        return self.sparsity != SPARSITY_UNKNOWN

    @property
    def is_symmetry_known(self) -> bool:
        return self.symmetric is not BoolOrUnknown.UNKNOWN
