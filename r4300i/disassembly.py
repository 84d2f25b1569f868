"""Decoded view of a contiguous run of instruction words."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable, Iterator, List, TextIO, Tuple

from .constants import WORD_SIZE
from .decoding import Instruction, Operation, decode_word
from .decoding.reader import split_words

logger = logging.getLogger(__name__)


def format_address(address: int) -> str:
    return f"[0x{address:08X}]"


@dataclass(frozen=True)
class Disassembly:
    """
    Parallel sequences of raw words and their decoded instructions.

    ``instructions[i]`` is always ``decode_word(words[i])`` and sits at
    ``base + i * 4``; the base address is supplied when rendering. Two
    disassemblies compare equal when their words do, since decoding is a
    pure function of the word.
    """

    words: Tuple[int, ...]
    instructions: Tuple[Instruction, ...] = field(compare=False)
    dropped_bytes: int = field(default=0, compare=False)

    @classmethod
    def from_words(cls, words: Iterable[int]) -> "Disassembly":
        words = tuple(words)
        return cls._build(words, dropped=0)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Disassembly":
        """Decode big-endian words; a trailing partial word is dropped silently."""
        words, dropped = split_words(bytes(data))
        return cls._build(words, dropped=dropped)

    @classmethod
    def _build(cls, words: Tuple[int, ...], dropped: int) -> "Disassembly":
        instructions = tuple(decode_word(word) for word in words)
        disasm = cls(words=words, instructions=instructions, dropped_bytes=dropped)
        logger.debug(
            "Decoded %d words (%d unknown, %d trailing bytes dropped)",
            len(words),
            disasm.unknown_count,
            dropped,
        )
        return disasm

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    @property
    def unknown_count(self) -> int:
        return sum(1 for instr in self.instructions if instr.operation is Operation.Unknown)

    @staticmethod
    def address_of(index: int, base: int = 0) -> int:
        return base + index * WORD_SIZE

    def find(self, operation: Operation, limit: int | None = None) -> List[Tuple[int, Instruction]]:
        """Return ``(index, instruction)`` pairs for every use of ``operation``."""
        results: List[Tuple[int, Instruction]] = []
        for i, instr in enumerate(self.instructions):
            if instr.operation is operation:
                results.append((i, instr))
                if limit is not None and len(results) >= limit:
                    break
        return results

    def lines(self, base: int = 0, skip_unknown: bool = False) -> Iterator[str]:
        for i, instr in enumerate(self.instructions):
            if skip_unknown and instr.operation is Operation.Unknown:
                continue
            yield f"{format_address(self.address_of(i, base))}{instr}"

    def write(self, sink: TextIO, base: int = 0, skip_unknown: bool = False) -> int:
        """Write one line per instruction to ``sink``; returns the line count."""
        count = 0
        for line in self.lines(base, skip_unknown=skip_unknown):
            sink.write(line + "\n")
            count += 1
        return count
