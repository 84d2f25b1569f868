"""Cartridge image helpers: the 64-byte header and the IPL3 boot block.

Images are expected in native big-endian (.z64) order. Byte-swapped dumps
are reported but not converted.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import struct
from typing import Optional, Tuple

from .constants import (
    BOOTCODE_END,
    BOOTCODE_WORDS,
    ROM_HEADER_SIZE,
    Z64_MAGIC,
)
from .decoding.reader import iter_words

logger = logging.getLogger(__name__)

_HEADER = struct.Struct(">IIIIIIQ20sIIHH")
assert _HEADER.size == ROM_HEADER_SIZE


class RomError(ValueError):
    pass


@dataclass(frozen=True)
class RomHeader:
    pi_regs: int
    clock_rate: int
    entry_pc: int
    release: int
    crc1: int
    crc2: int
    reserved0: int
    image_name: bytes
    reserved1: int
    manufacturer_id: int
    cartridge_id: int
    country_code: int

    @classmethod
    def parse(cls, data: bytes) -> "RomHeader":
        if len(data) < ROM_HEADER_SIZE:
            raise RomError(
                f"Header needs {ROM_HEADER_SIZE} bytes, got {len(data)}"
            )
        return cls(*_HEADER.unpack_from(data, 0))

    def to_bytes(self) -> bytes:
        return _HEADER.pack(
            self.pi_regs,
            self.clock_rate,
            self.entry_pc,
            self.release,
            self.crc1,
            self.crc2,
            self.reserved0,
            self.image_name,
            self.reserved1,
            self.manufacturer_id,
            self.cartridge_id,
            self.country_code,
        )

    @property
    def name(self) -> str:
        return self.image_name.decode("shift_jis", errors="replace").rstrip("\x00 ")

    @property
    def is_big_endian(self) -> bool:
        return self.pi_regs == Z64_MAGIC

    def describe(self) -> str:
        return "\n".join(
            (
                f"name:            {self.name}",
                f"pi_regs:         0x{self.pi_regs:08X}",
                f"clock_rate:      0x{self.clock_rate:08X}",
                f"entry_pc:        0x{self.entry_pc:08X}",
                f"release:         0x{self.release:08X}",
                f"crc1:            0x{self.crc1:08X}",
                f"crc2:            0x{self.crc2:08X}",
                f"manufacturer_id: 0x{self.manufacturer_id:08X}",
                f"cartridge_id:    0x{self.cartridge_id:04X}",
                f"country_code:    0x{self.country_code:04X}",
            )
        )


@dataclass(frozen=True)
class Rom:
    header: RomHeader
    bootcode: Tuple[int, ...]
    data: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> "Rom":
        if len(data) < BOOTCODE_END:
            raise RomError(
                f"Image is {len(data)} bytes, shorter than the "
                f"0x{BOOTCODE_END:X}-byte header and boot block"
            )
        header = RomHeader.parse(data)
        if not header.is_big_endian:
            logger.warning(
                "Unexpected header magic 0x%08X; image may be byte-swapped",
                header.pi_regs,
            )
        logger.debug("Parsed header for %r, entry 0x%08X", header.name, header.entry_pc)
        bootcode = tuple(iter_words(data[ROM_HEADER_SIZE:BOOTCODE_END]))
        assert len(bootcode) == BOOTCODE_WORDS
        return cls(header=header, bootcode=bootcode, data=bytes(data))


def ipl3_bytes(data: bytes, with_header: bool = False) -> Tuple[bytes, int]:
    """Slice the boot block out of a cartridge image.

    Returns the bytes and the address of their first byte: ``0x40`` for the
    bare boot block, ``0`` when the header is kept in front of it.
    """
    if len(data) < BOOTCODE_END:
        raise RomError(
            f"Image is {len(data)} bytes, shorter than the "
            f"0x{BOOTCODE_END:X}-byte header and boot block"
        )
    if with_header:
        return bytes(data[:BOOTCODE_END]), 0
    return bytes(data[ROM_HEADER_SIZE:BOOTCODE_END]), ROM_HEADER_SIZE


def pif_bytes(data: bytes) -> Tuple[bytes, int]:
    """The PIF boot ROM is disassembled whole, starting at address 0."""
    return bytes(data), 0


def raw_bytes(data: bytes, offset: int, length: Optional[int] = None) -> Tuple[bytes, int]:
    """Slice ``length`` bytes at ``offset``; the base is the offset itself.

    A slice that does not lie inside the image is an error rather than a
    short read.
    """
    if not 0 <= offset <= len(data):
        raise RomError(f"Offset {offset:#x} is outside the {len(data)}-byte image")
    if length is None:
        length = len(data) - offset
    if length < 0 or offset + length > len(data):
        raise RomError(
            f"Slice of {length} bytes at {offset:#x} runs past the "
            f"{len(data)}-byte image"
        )
    return bytes(data[offset : offset + length]), offset


__all__ = ["Rom", "RomError", "RomHeader", "ipl3_bytes", "pif_bytes", "raw_bytes"]
