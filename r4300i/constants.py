"""Shared architecture constants for the R4300i disassembler.

This module centralizes the fixed bitfield layout of a MIPS instruction word,
the register name tables and the cartridge image layout used by the ROM
helpers.
"""

from typing import Tuple

# Every instruction is one big-endian 32-bit word.
WORD_SIZE = 4
WORD_MASK = 0xFFFFFFFF

# Bitfield positions (MIPS convention).
OP_SHIFT = 26
RS_SHIFT = 21
RT_SHIFT = 16
RD_SHIFT = 11
SA_SHIFT = 6

REG_MASK = 0x1F
FUNCT_MASK = 0x3F
IMM16_MASK = 0xFFFF
TARGET26_MASK = 0x3FFFFFF

# COPz "CO" payload: everything below the primary opcode except the CO bit.
COP_PAYLOAD_MASK = 0x1FFFFFF

CPU_REG_NAMES: Tuple[str, ...] = (
    "zr", "at", "v0", "v1", "a0", "a1", "a2", "a3",
    "t0", "t1", "t2", "t3", "t4", "t5", "t6", "t7",
    "s0", "s1", "s2", "s3", "s4", "s5", "s6", "s7",
    "t8", "t9", "k0", "k1", "gp", "sp", "fp", "ra",
)

# Reserved slots are literally named UnusedN.
CP0_REG_NAMES: Tuple[str, ...] = (
    "Index", "Random", "EntryLo0", "EntryLo1",
    "Context", "PageMask", "Wired", "Unused7",
    "BadVAddr", "Count", "EntryHi", "Compare",
    "SR", "Cause", "EPC", "PRId",
    "Config", "LLAddr", "WatchLo", "WatchHi",
    "XContext", "Unused21", "Unused22", "Unused23",
    "Unused24", "Unused25", "PErr", "Unused27",
    "TagLo", "TagHi", "ErrorEPC", "Unused31",
)

# Cartridge image layout (.z64, big-endian).
ROM_HEADER_SIZE = 0x40
# The IPL3 boot block follows the header and ends at 0x1000.
BOOTCODE_END = 0x1000
BOOTCODE_WORDS = (BOOTCODE_END - ROM_HEADER_SIZE) // WORD_SIZE  # 1008
Z64_MAGIC = 0x80371240
