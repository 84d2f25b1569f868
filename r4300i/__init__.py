"""
R4300i (N64 CPU) instruction decoding.

Turns big-endian instruction words into `Instruction` records with a fixed
text form such as ``[0x8C820000][LW v0, a0, 0x0000]``.
"""

from .decoding import (  # noqa: F401
    Cp0Reg,
    Imm8,
    Imm16,
    Imm32,
    Instruction,
    Operand,
    Operation,
    Reg,
    decode_bytes,
    decode_word,
)
from .disassembly import Disassembly, format_address  # noqa: F401
from .rom import Rom, RomError, RomHeader, ipl3_bytes, pif_bytes, raw_bytes  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "Cp0Reg",
    "Imm8",
    "Imm16",
    "Imm32",
    "Instruction",
    "Operand",
    "Operation",
    "Reg",
    "decode_bytes",
    "decode_word",
    "Disassembly",
    "format_address",
    "Rom",
    "RomError",
    "RomHeader",
    "ipl3_bytes",
    "pif_bytes",
    "raw_bytes",
]
