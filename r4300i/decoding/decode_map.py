from __future__ import annotations

from typing import Callable, Dict, Optional

from ..constants import WORD_MASK
from .bind import Cp0Reg, Imm8, Imm16, Imm32, Instruction, Operation as Op, Reg
from .reader import WordFields, word_from_bytes

DecoderFunc = Callable[[WordFields], Instruction]


def _dec_unknown(f: WordFields) -> Instruction:
    return Instruction(f.word, Op.Unknown)


def _dec_simple(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op)


def _dec_alu_reg(f: WordFields, op: Op) -> Instruction:
    # Destination first, then the sources in reverse field order.
    return Instruction(f.word, op, (Reg(f.rd), Reg(f.rt), Reg(f.rs)))


def _dec_shift_imm(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Reg(f.rd), Reg(f.rt), Imm8(f.sa)))


def _dec_shift_var(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Reg(f.rd), Reg(f.rt), Reg(f.rs)))


def _dec_rs_rt(f: WordFields, op: Op) -> Instruction:
    # hi/lo or the trap itself is the implicit destination
    return Instruction(f.word, op, (Reg(f.rs), Reg(f.rt)))


def _dec_rs(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Reg(f.rs),))


def _dec_rd(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Reg(f.rd),))


def _dec_alu_imm(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Reg(f.rt), Reg(f.rs), Imm16(f.imm16)))


def _dec_mem(f: WordFields, op: Op) -> Instruction:
    # rt, base, offset
    return Instruction(f.word, op, (Reg(f.rt), Reg(f.rs), Imm16(f.imm16)))


def _dec_branch_rs_rt(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Reg(f.rs), Reg(f.rt), Imm16(f.imm16)))


def _dec_branch_rs(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Reg(f.rs), Imm16(f.imm16)))


def _dec_jump(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Imm32(f.target26),))


def _dec_lui(f: WordFields) -> Instruction:
    return Instruction(f.word, Op.LUI, (Reg(f.rt), Imm16(f.imm16)))


def _dec_cop_move(
    f: WordFields, cop0_op: Optional[Op], generic_op: Optional[Op]
) -> Instruction:
    if f.cop_z == 0:
        if cop0_op is None:
            return _dec_unknown(f)
        return Instruction(f.word, cop0_op, (Reg(f.rt), Cp0Reg(f.rd)))
    if generic_op is None:
        return _dec_unknown(f)
    return Instruction(f.word, generic_op, (Reg(f.rt), Reg(f.rd)))


def _dec_cop_control(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Reg(f.rt), Reg(f.rd)))


def _dec_cop_branch(f: WordFields, op: Op) -> Instruction:
    return Instruction(f.word, op, (Imm16(f.imm16),))


SPECIAL_DECODERS: Dict[int, DecoderFunc] = {
    0x00: lambda f: _dec_shift_imm(f, Op.SLL),
    0x02: lambda f: _dec_shift_imm(f, Op.SRL),
    0x03: lambda f: _dec_shift_imm(f, Op.SRA),
    0x04: lambda f: _dec_shift_var(f, Op.SLLV),
    0x06: lambda f: _dec_shift_var(f, Op.SRLV),
    0x07: lambda f: _dec_shift_var(f, Op.SRAV),
    0x08: lambda f: _dec_rs(f, Op.JR),
    0x09: lambda f: _dec_rs(f, Op.JALR),
    0x0C: lambda f: _dec_simple(f, Op.SYSCALL),
    0x0D: lambda f: _dec_simple(f, Op.BREAK),
    0x0F: lambda f: _dec_simple(f, Op.SYNC),
    0x10: lambda f: _dec_rd(f, Op.MFHI),
    0x11: lambda f: _dec_rs(f, Op.MTHI),
    0x12: lambda f: _dec_rd(f, Op.MFLO),
    0x13: lambda f: _dec_rs(f, Op.MTLO),
    0x14: lambda f: _dec_shift_var(f, Op.DSLLV),
    0x16: lambda f: _dec_shift_var(f, Op.DSRLV),
    0x17: lambda f: _dec_shift_var(f, Op.DSRAV),
    0x18: lambda f: _dec_rs_rt(f, Op.MULT),
    0x19: lambda f: _dec_rs_rt(f, Op.MULTU),
    0x1A: lambda f: _dec_rs_rt(f, Op.DIV),
    0x1B: lambda f: _dec_rs_rt(f, Op.DIVU),
    0x1C: lambda f: _dec_rs_rt(f, Op.DMULT),
    0x1D: lambda f: _dec_rs_rt(f, Op.DMULTU),
    0x1E: lambda f: _dec_rs_rt(f, Op.DDIV),
    0x1F: lambda f: _dec_rs_rt(f, Op.DDIVU),
    0x20: lambda f: _dec_alu_reg(f, Op.ADD),
    0x21: lambda f: _dec_alu_reg(f, Op.ADDU),
    0x22: lambda f: _dec_alu_reg(f, Op.SUB),
    0x23: lambda f: _dec_alu_reg(f, Op.SUBU),
    0x24: lambda f: _dec_alu_reg(f, Op.AND),
    0x25: lambda f: _dec_alu_reg(f, Op.OR),
    0x26: lambda f: _dec_alu_reg(f, Op.XOR),
    0x27: lambda f: _dec_alu_reg(f, Op.NOR),
    0x2A: lambda f: _dec_alu_reg(f, Op.SLT),
    0x2B: lambda f: _dec_alu_reg(f, Op.SLTU),
    0x2C: lambda f: _dec_alu_reg(f, Op.DADD),
    0x2D: lambda f: _dec_alu_reg(f, Op.DADDU),
    0x2E: lambda f: _dec_alu_reg(f, Op.DSUB),
    0x2F: lambda f: _dec_alu_reg(f, Op.DSUBU),
    0x30: lambda f: _dec_rs_rt(f, Op.TGE),
    0x31: lambda f: _dec_rs_rt(f, Op.TGEU),
    0x32: lambda f: _dec_rs_rt(f, Op.TLT),
    0x33: lambda f: _dec_rs_rt(f, Op.TLTU),
    0x34: lambda f: _dec_rs_rt(f, Op.TEQ),
    0x36: lambda f: _dec_rs_rt(f, Op.TNE),
    0x38: lambda f: _dec_shift_imm(f, Op.DSLL),
    0x3A: lambda f: _dec_shift_imm(f, Op.DSRL),
    0x3B: lambda f: _dec_shift_imm(f, Op.DSRA),
    0x3C: lambda f: _dec_shift_imm(f, Op.DSLL32),
    0x3E: lambda f: _dec_shift_imm(f, Op.DSRL32),
    0x3F: lambda f: _dec_shift_imm(f, Op.DSRA32),
}

# REGIMM: rt is a sub-opcode, not a register.
REGIMM_DECODERS: Dict[int, DecoderFunc] = {
    0x00: lambda f: _dec_branch_rs(f, Op.BLTZ),
    0x01: lambda f: _dec_branch_rs(f, Op.BGEZ),
    0x02: lambda f: _dec_branch_rs(f, Op.BLTZL),
    0x03: lambda f: _dec_branch_rs(f, Op.BGEZL),
    0x08: lambda f: _dec_branch_rs(f, Op.TGEI),
    0x09: lambda f: _dec_branch_rs(f, Op.TGEIU),
    0x0A: lambda f: _dec_branch_rs(f, Op.TLTI),
    0x0B: lambda f: _dec_branch_rs(f, Op.TLTIU),
    0x0C: lambda f: _dec_branch_rs(f, Op.TEQI),
    0x0E: lambda f: _dec_branch_rs(f, Op.TNEI),
    0x10: lambda f: _dec_branch_rs(f, Op.BLTZAL),
    0x11: lambda f: _dec_branch_rs(f, Op.BGEZAL),
    0x12: lambda f: _dec_branch_rs(f, Op.BLTZALL),
    0x13: lambda f: _dec_branch_rs(f, Op.BGEZALL),
}

# BCz (rs == 0x08), condition in rt. Order matches existing IPL3 listings.
BC_DECODERS: Dict[int, DecoderFunc] = {
    0x00: lambda f: _dec_cop_branch(f, Op.BCzF),
    0x01: lambda f: _dec_cop_branch(f, Op.BCzFL),
    0x02: lambda f: _dec_cop_branch(f, Op.BCzT),
    0x03: lambda f: _dec_cop_branch(f, Op.BCzTL),
}

# rs == 0x10, keyed by the function field.
TLB_DECODERS: Dict[int, DecoderFunc] = {
    0x01: lambda f: _dec_simple(f, Op.TLBR),
    0x02: lambda f: _dec_simple(f, Op.TLBWI),
    0x06: lambda f: _dec_simple(f, Op.TLBWR),
    0x08: lambda f: _dec_simple(f, Op.TLBP),
    0x18: lambda f: _dec_simple(f, Op.ERET),
}


def _dec_cop_bc(f: WordFields) -> Instruction:
    return BC_DECODERS.get(f.rt, _dec_unknown)(f)


def _dec_cop_co(f: WordFields) -> Instruction:
    if f.rs == 0x10 and f.funct in TLB_DECODERS:
        return TLB_DECODERS[f.funct](f)
    return Instruction(f.word, Op.COPz, (Imm32(f.cop_payload),))


# COP0..COP3: rs is a sub-opcode.
COP_DECODERS: Dict[int, DecoderFunc] = {
    0x00: lambda f: _dec_cop_move(f, Op.MFC0, Op.MFCz),
    0x01: lambda f: _dec_cop_move(f, Op.DMFC0, None),
    0x02: lambda f: _dec_cop_control(f, Op.CFCz),
    0x04: lambda f: _dec_cop_move(f, Op.MTC0, Op.MTCz),
    0x05: lambda f: _dec_cop_move(f, Op.DMTC0, None),
    0x06: lambda f: _dec_cop_control(f, Op.CTCz),
    0x08: _dec_cop_bc,
    **{rs: _dec_cop_co for rs in range(0x10, 0x20)},
}


def _dec_special(f: WordFields) -> Instruction:
    return SPECIAL_DECODERS.get(f.funct, _dec_unknown)(f)


def _dec_regimm(f: WordFields) -> Instruction:
    return REGIMM_DECODERS.get(f.rt, _dec_unknown)(f)


def _dec_cop(f: WordFields) -> Instruction:
    return COP_DECODERS.get(f.rs, _dec_unknown)(f)


PRIMARY_DECODERS: Dict[int, DecoderFunc] = {
    0x00: _dec_special,
    0x01: _dec_regimm,
    0x02: lambda f: _dec_jump(f, Op.J),
    0x03: lambda f: _dec_jump(f, Op.JAL),
    0x04: lambda f: _dec_branch_rs_rt(f, Op.BEQ),
    0x05: lambda f: _dec_branch_rs_rt(f, Op.BNE),
    0x06: lambda f: _dec_branch_rs(f, Op.BLEZ),
    0x07: lambda f: _dec_branch_rs(f, Op.BGTZ),
    0x08: lambda f: _dec_alu_imm(f, Op.ADDI),
    0x09: lambda f: _dec_alu_imm(f, Op.ADDIU),
    0x0A: lambda f: _dec_alu_imm(f, Op.SLTI),
    0x0B: lambda f: _dec_alu_imm(f, Op.SLTIU),
    0x0C: lambda f: _dec_alu_imm(f, Op.ANDI),
    0x0D: lambda f: _dec_alu_imm(f, Op.ORI),
    0x0E: lambda f: _dec_alu_imm(f, Op.XORI),
    0x0F: _dec_lui,
    0x10: _dec_cop,
    0x11: _dec_cop,
    0x12: _dec_cop,
    0x13: _dec_cop,
    0x14: lambda f: _dec_branch_rs_rt(f, Op.BEQL),
    0x15: lambda f: _dec_branch_rs_rt(f, Op.BNEL),
    0x16: lambda f: _dec_branch_rs(f, Op.BLEZL),
    0x17: lambda f: _dec_branch_rs(f, Op.BGTZL),
    0x18: lambda f: _dec_alu_imm(f, Op.DADDI),
    0x19: lambda f: _dec_alu_imm(f, Op.DADDIU),
    0x1A: lambda f: _dec_mem(f, Op.LDL),
    0x1B: lambda f: _dec_mem(f, Op.LDR),
    0x20: lambda f: _dec_mem(f, Op.LB),
    0x21: lambda f: _dec_mem(f, Op.LH),
    0x22: lambda f: _dec_mem(f, Op.LWL),
    0x23: lambda f: _dec_mem(f, Op.LW),
    0x24: lambda f: _dec_mem(f, Op.LBU),
    0x25: lambda f: _dec_mem(f, Op.LHU),
    0x26: lambda f: _dec_mem(f, Op.LWR),
    0x27: lambda f: _dec_mem(f, Op.LWU),
    0x28: lambda f: _dec_mem(f, Op.SB),
    0x29: lambda f: _dec_mem(f, Op.SH),
    0x2A: lambda f: _dec_mem(f, Op.SWL),
    0x2B: lambda f: _dec_mem(f, Op.SW),
    0x2C: lambda f: _dec_mem(f, Op.SDL),
    0x2D: lambda f: _dec_mem(f, Op.SDR),
    0x2E: lambda f: _dec_mem(f, Op.SWR),
    0x2F: lambda f: _dec_simple(f, Op.CACHE),
    0x30: lambda f: _dec_mem(f, Op.LL),
    # LWCz/LDCz/SWCz/SDCz drop the coprocessor number.
    0x31: lambda f: _dec_mem(f, Op.LWCz),
    0x32: lambda f: _dec_mem(f, Op.LWCz),
    0x34: lambda f: _dec_mem(f, Op.LLD),
    0x35: lambda f: _dec_mem(f, Op.LDCz),
    0x36: lambda f: _dec_mem(f, Op.LDCz),
    0x37: lambda f: _dec_mem(f, Op.LD),
    0x38: lambda f: _dec_mem(f, Op.SC),
    0x39: lambda f: _dec_mem(f, Op.SWCz),
    0x3A: lambda f: _dec_mem(f, Op.SWCz),
    0x3B: lambda f: _dec_mem(f, Op.SCD),
    0x3C: lambda f: _dec_mem(f, Op.SDCz),
    0x3D: lambda f: _dec_mem(f, Op.SDCz),
    0x3F: lambda f: _dec_mem(f, Op.SD),
}


def decode_word(word: int) -> Instruction:
    """Decode one 32-bit word. Never fails: unmatched patterns become ``Unknown``."""
    if not 0 <= word <= WORD_MASK:
        raise ValueError(f"Not a 32-bit word: {word:#x}")
    # Also a valid SLL zr, zr, 0; the alias wins.
    if word == 0:
        return Instruction(0, Op.NOP)
    f = WordFields.from_word(word)
    return PRIMARY_DECODERS.get(f.op, _dec_unknown)(f)


def decode_bytes(data: bytes) -> Instruction:
    return decode_word(word_from_bytes(data))
