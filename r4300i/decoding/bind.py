from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..constants import CP0_REG_NAMES, CPU_REG_NAMES, WORD_MASK
from ..tokens import TInstr, TInt, TReg, TSep, TText, Token, asm_str

MAX_OPERANDS = 4


@dataclass(frozen=True, slots=True)
class Reg:
    """General-purpose register operand."""

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index <= 31:
            raise ValueError(f"Reg index out of range: {self.index}")

    @property
    def name(self) -> str:
        return CPU_REG_NAMES[self.index]

    def render(self) -> List[Token]:
        return [TReg(self.name)]

    def __str__(self) -> str:
        return asm_str(self.render())


@dataclass(frozen=True, slots=True)
class Cp0Reg:
    """Coprocessor-0 control register operand."""

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index <= 31:
            raise ValueError(f"Cp0Reg index out of range: {self.index}")

    @property
    def name(self) -> str:
        return CP0_REG_NAMES[self.index]

    def render(self) -> List[Token]:
        return [TReg(self.name)]

    def __str__(self) -> str:
        return asm_str(self.render())


@dataclass(frozen=True, slots=True)
class Imm8:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFF:
            raise ValueError(f"Imm8 out of range: {self.value:#x}")

    def render(self) -> List[Token]:
        return [TInt(self.value, 2)]

    def __str__(self) -> str:
        return asm_str(self.render())


@dataclass(frozen=True, slots=True)
class Imm16:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFF:
            raise ValueError(f"Imm16 out of range: {self.value:#x}")

    def render(self) -> List[Token]:
        return [TInt(self.value, 4)]

    def __str__(self) -> str:
        return asm_str(self.render())


@dataclass(frozen=True, slots=True)
class Imm32:
    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 0xFFFFFFFF:
            raise ValueError(f"Imm32 out of range: {self.value:#x}")

    def render(self) -> List[Token]:
        return [TInt(self.value, 8)]

    def __str__(self) -> str:
        return asm_str(self.render())


Operand = Union[Reg, Cp0Reg, Imm8, Imm16, Imm32]


class Operation(str, Enum):
    """Closed set of R4300i operations; the value is the printed mnemonic."""

    ADD = "ADD"
    ADDI = "ADDI"
    ADDIU = "ADDIU"
    ADDU = "ADDU"
    AND = "AND"
    ANDI = "ANDI"

    BCzF = "BCzF"
    BCzFL = "BCzFL"
    BCzT = "BCzT"
    BCzTL = "BCzTL"

    BEQ = "BEQ"
    BEQL = "BEQL"
    BGEZ = "BGEZ"
    BGEZAL = "BGEZAL"
    BGEZALL = "BGEZALL"
    BGEZL = "BGEZL"
    BGTZ = "BGTZ"
    BGTZL = "BGTZL"
    BLEZ = "BLEZ"
    BLEZL = "BLEZL"
    BLTZ = "BLTZ"
    BLTZAL = "BLTZAL"
    BLTZALL = "BLTZALL"
    BLTZL = "BLTZL"
    BNE = "BNE"
    BNEL = "BNEL"

    BREAK = "BREAK"
    CACHE = "CACHE"

    CFCz = "CFCz"
    COPz = "COPz"
    CTCz = "CTCz"

    DADD = "DADD"
    DADDI = "DADDI"
    DADDIU = "DADDIU"
    DADDU = "DADDU"
    DDIV = "DDIV"
    DDIVU = "DDIVU"
    DIV = "DIV"
    DIVU = "DIVU"

    DMFC0 = "DMFC0"
    DMTC0 = "DMTC0"
    DMULT = "DMULT"
    DMULTU = "DMULTU"

    DSLL = "DSLL"
    DSLLV = "DSLLV"
    DSLL32 = "DSLL32"
    DSRA = "DSRA"
    DSRAV = "DSRAV"
    DSRA32 = "DSRA32"
    DSRL = "DSRL"
    DSRLV = "DSRLV"
    DSRL32 = "DSRL32"
    DSUB = "DSUB"
    DSUBU = "DSUBU"

    ERET = "ERET"
    J = "J"
    JAL = "JAL"
    JALR = "JALR"
    JR = "JR"

    LB = "LB"
    LBU = "LBU"
    LD = "LD"
    LDCz = "LDCz"
    LDL = "LDL"
    LDR = "LDR"
    LH = "LH"
    LHU = "LHU"
    LL = "LL"
    LLD = "LLD"
    LUI = "LUI"
    LW = "LW"
    LWCz = "LWCz"
    LWL = "LWL"
    LWR = "LWR"
    LWU = "LWU"

    MFC0 = "MFC0"
    MFCz = "MFCz"
    MFHI = "MFHI"
    MFLO = "MFLO"
    MTC0 = "MTC0"
    MTCz = "MTCz"
    MTHI = "MTHI"
    MTLO = "MTLO"
    MULT = "MULT"
    MULTU = "MULTU"

    NOR = "NOR"
    OR = "OR"
    ORI = "ORI"

    SB = "SB"
    SC = "SC"
    SCD = "SCD"
    SD = "SD"
    SDCz = "SDCz"
    SDL = "SDL"
    SDR = "SDR"
    SH = "SH"
    SLL = "SLL"
    SLLV = "SLLV"
    SLT = "SLT"
    SLTI = "SLTI"
    SLTIU = "SLTIU"
    SLTU = "SLTU"
    SRA = "SRA"
    SRAV = "SRAV"
    SRL = "SRL"
    SRLV = "SRLV"
    SUB = "SUB"
    SUBU = "SUBU"
    SW = "SW"
    SWCz = "SWCz"
    SWL = "SWL"
    SWR = "SWR"

    SYNC = "SYNC"
    SYSCALL = "SYSCALL"

    TEQ = "TEQ"
    TEQI = "TEQI"
    TGE = "TGE"
    TGEI = "TGEI"
    TGEIU = "TGEIU"
    TGEU = "TGEU"
    TLT = "TLT"
    TLTI = "TLTI"
    TLTIU = "TLTIU"
    TLTU = "TLTU"
    TNE = "TNE"
    TNEI = "TNEI"

    TLBP = "TLBP"
    TLBR = "TLBR"
    TLBWI = "TLBWI"
    TLBWR = "TLBWR"

    XOR = "XOR"
    XORI = "XORI"

    NOP = "NOP"
    Unknown = "Unknown"

    @property
    def mnemonic(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Instruction:
    """One decoded word: the raw bits, the operation and its ordered operands.

    Operands are kept in assembly order (destination first where there is
    one), which does not always match the physical field order.
    """

    raw: int
    operation: Operation
    operands: Tuple[Operand, ...] = ()

    def __post_init__(self) -> None:
        if not 0 <= self.raw <= WORD_MASK:
            raise ValueError(f"Instruction word out of range: {self.raw:#x}")
        if len(self.operands) > MAX_OPERANDS:
            raise ValueError(
                f"{self.operation.mnemonic} has {len(self.operands)} operands, "
                f"at most {MAX_OPERANDS} allowed"
            )

    @property
    def mnemonic(self) -> str:
        return self.operation.mnemonic

    @property
    def slots(self) -> Tuple[Optional[Operand], ...]:
        """Operands padded with ``None`` to the fixed four-slot layout."""
        return self.operands + (None,) * (MAX_OPERANDS - len(self.operands))

    def render(self) -> List[Token]:
        # Zero operands still leave the space after the mnemonic: "[NOP ]".
        tokens: List[Token] = [
            TText("["),
            TInt(self.raw, 8),
            TText("]["),
            TInstr(self.mnemonic),
            TText(" "),
        ]
        for i, operand in enumerate(op for op in self.operands if op is not None):
            if i:
                tokens.append(TSep(", "))
            tokens.extend(operand.render())
        tokens.append(TText("]"))
        return tokens

    def __str__(self) -> str:
        return asm_str(self.render())
