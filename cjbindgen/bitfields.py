"""Bitfield Packer: collapses a run of bit-fields into opaque byte storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .c_ast import FieldNode
from .errors import MisalignedBitfield
from . import constants
from . import target_types as tt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BitfieldMember:
    """Informational record of one original bit-field."""

    name: str
    c_type: str
    width: int


@dataclass(frozen=True)
class BitfieldGroup:
    byte_size: int
    members: tuple[BitfieldMember, ...] = field(default_factory=tuple)
    storage_name: str = constants.BITFIELD_STORAGE_NAME

    @property
    def storage_type(self) -> tt.FixedArray:
        return tt.FixedArray(tt.UINT8, self.byte_size)


def storage_name_for(group_index: int) -> str:
    """Name of the *group_index*-th packed field of one struct."""
    if group_index == 0:
        return constants.BITFIELD_STORAGE_NAME
    return f"{constants.BITFIELD_STORAGE_NAME}_{group_index}"


def pack_bitfields(run: list[FieldNode], storage_name: str = "") -> BitfieldGroup:
    """Pack a run of consecutive bit-field members into one byte array.

    Raises ``MisalignedBitfield`` when the widths do not sum to whole bytes.
    """
    total_bits = sum(f.bit_width or 0 for f in run)
    if total_bits % constants.BITS_PER_BYTE != 0:
        raise MisalignedBitfield(total_bits)
    byte_size = total_bits // constants.BITS_PER_BYTE
    members = tuple(
        BitfieldMember(
            name=f.name or constants.UNNAMED_BITFIELD,
            c_type=f.type.display_name(),
            width=f.bit_width or 0,
        )
        for f in run
    )
    logger.debug("Packed %d bit-field(s) into %d byte(s)", len(members), byte_size)
    return BitfieldGroup(
        byte_size=byte_size,
        members=members,
        storage_name=storage_name or constants.BITFIELD_STORAGE_NAME,
    )
