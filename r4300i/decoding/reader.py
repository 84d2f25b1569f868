from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from ..constants import (
    COP_PAYLOAD_MASK,
    FUNCT_MASK,
    IMM16_MASK,
    OP_SHIFT,
    RD_SHIFT,
    REG_MASK,
    RS_SHIFT,
    RT_SHIFT,
    SA_SHIFT,
    TARGET26_MASK,
    WORD_SIZE,
)


@dataclass(frozen=True, slots=True)
class WordFields:
    """
    Fixed-position bitfields of one instruction word.

    Every field is extracted up front; decoders pick the ones their encoding
    uses, so register indices are always 5-bit and therefore in range.
    """

    word: int
    op: int
    rs: int
    rt: int
    rd: int
    sa: int
    funct: int
    imm16: int
    target26: int

    @classmethod
    def from_word(cls, word: int) -> "WordFields":
        return cls(
            word=word,
            op=word >> OP_SHIFT,
            rs=(word >> RS_SHIFT) & REG_MASK,
            rt=(word >> RT_SHIFT) & REG_MASK,
            rd=(word >> RD_SHIFT) & REG_MASK,
            sa=(word >> SA_SHIFT) & REG_MASK,
            funct=word & FUNCT_MASK,
            imm16=word & IMM16_MASK,
            target26=word & TARGET26_MASK,
        )

    @property
    def cop_z(self) -> int:
        """Coprocessor number selected by a COP0..COP3 primary opcode."""
        return self.op & 0b11

    @property
    def cop_payload(self) -> int:
        return self.word & COP_PAYLOAD_MASK


def word_from_bytes(data: bytes) -> int:
    if len(data) != WORD_SIZE:
        raise ValueError(f"Expected {WORD_SIZE} bytes, got {len(data)}")
    return int.from_bytes(data, "big")


def iter_words(data: bytes) -> Iterator[int]:
    """Yield big-endian words; a trailing partial word is dropped."""
    usable = len(data) - (len(data) % WORD_SIZE)
    for offset in range(0, usable, WORD_SIZE):
        yield int.from_bytes(data[offset : offset + WORD_SIZE], "big")


def split_words(data: bytes) -> Tuple[Tuple[int, ...], int]:
    """Return the whole words in ``data`` and how many trailing bytes were dropped."""
    return tuple(iter_words(data)), len(data) % WORD_SIZE
