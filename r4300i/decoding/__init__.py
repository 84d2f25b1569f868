"""
Word-level decoding for R4300i machine code.

`decode_word` classifies one 32-bit word through the nested dispatch tables
in `decode_map`; the operand types and the `Instruction` record live in
`bind`.
"""

from .bind import (  # noqa: F401
    MAX_OPERANDS,
    Cp0Reg,
    Imm8,
    Imm16,
    Imm32,
    Instruction,
    Operand,
    Operation,
    Reg,
)
from .reader import WordFields, iter_words, word_from_bytes  # noqa: F401
from .decode_map import decode_bytes, decode_word  # noqa: F401
from . import decode_map  # noqa: F401

__all__ = [
    "MAX_OPERANDS",
    "Cp0Reg",
    "Imm8",
    "Imm16",
    "Imm32",
    "Instruction",
    "Operand",
    "Operation",
    "Reg",
    "WordFields",
    "iter_words",
    "word_from_bytes",
    "decode_bytes",
    "decode_word",
    "decode_map",
]
