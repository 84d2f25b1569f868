from __future__ import annotations

import os

import pytest
from hypothesis import HealthCheck, given, settings

from r4300i import Disassembly, Operation, decode_word
from r4300i.decoding import MAX_OPERANDS, WordFields

from .strategies import byte_buffers, cop_words, special_words, word_lists, words

FAST_MAX_EXAMPLES = int(os.getenv("R4300I_PROP_EXAMPLES", "500"))
NIGHTLY_MAX_EXAMPLES = int(os.getenv("R4300I_PROP_NIGHTLY_EXAMPLES", "20000"))

_fast = settings(
    max_examples=FAST_MAX_EXAMPLES,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)


@given(word=words)
@_fast
def test_decode_is_total_and_keeps_raw(word: int) -> None:
    di = decode_word(word)
    assert di.raw == word
    assert len(di.operands) <= MAX_OPERANDS
    assert str(di).startswith(f"[0x{word:08X}][{di.operation.value} ")
    assert str(di).endswith("]")


@given(word=cop_words())
@_fast
def test_cop_range_never_fails(word: int) -> None:
    di = decode_word(word)
    assert di.raw == word
    if di.operation in (Operation.MFC0, Operation.MTC0, Operation.DMFC0, Operation.DMTC0):
        assert WordFields.from_word(word).cop_z == 0


@given(word=special_words)
@_fast
def test_special_range_never_fails(word: int) -> None:
    di = decode_word(word)
    assert di.raw == word
    if di.operation is Operation.Unknown:
        assert di.operands == ()
    if word == 0:
        assert di.operation is Operation.NOP
    else:
        assert di.operation is not Operation.NOP


@given(word=words)
@_fast
def test_unknown_has_no_operands(word: int) -> None:
    di = decode_word(word)
    if di.operation is Operation.Unknown:
        assert di.operands == ()


@given(word=words)
@_fast
def test_decode_is_deterministic(word: int) -> None:
    assert decode_word(word) == decode_word(word)


@given(data=byte_buffers)
@_fast
def test_length_invariant(data: bytes) -> None:
    disasm = Disassembly.from_bytes(data)
    assert len(disasm) == len(data) // 4
    assert disasm.dropped_bytes == len(data) % 4
    for i, instr in enumerate(disasm):
        assert instr.raw == int.from_bytes(data[4 * i : 4 * i + 4], "big")


@given(a=word_lists, b=word_lists)
@_fast
def test_disassembly_equality_follows_words(a, b) -> None:
    assert (Disassembly.from_words(a) == Disassembly.from_words(b)) == (a == b)


@pytest.mark.nightly
@given(word=words)
@settings(
    max_examples=NIGHTLY_MAX_EXAMPLES,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
def test_decode_nightly_sweep(word: int) -> None:
    if not os.getenv("R4300I_PROP_RUN_NIGHTLY"):
        pytest.skip("Nightly sweep disabled (set R4300I_PROP_RUN_NIGHTLY=1 to enable)")
    di = decode_word(word)
    assert di.raw == word
    assert str(di)
