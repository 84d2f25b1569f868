from __future__ import annotations

import logging

import pytest

from r4300i import Disassembly, Operation, Rom, RomError, RomHeader, ipl3_bytes, pif_bytes, raw_bytes
from r4300i.constants import BOOTCODE_WORDS, Z64_MAGIC


def _header(**overrides) -> RomHeader:
    fields = dict(
        pi_regs=Z64_MAGIC,
        clock_rate=0x0000000F,
        entry_pc=0x80000400,
        release=0x00001449,
        crc1=0x12345678,
        crc2=0x9ABCDEF0,
        reserved0=0,
        image_name=b"TEST IMAGE".ljust(20, b" "),
        reserved1=0,
        manufacturer_id=0x0000004E,
        cartridge_id=0x4641,
        country_code=0x4500,
    )
    fields.update(overrides)
    return RomHeader(**fields)


def _image(header: RomHeader, boot_first_word: int = 0x3C010000) -> bytes:
    boot = boot_first_word.to_bytes(4, "big") + bytes(0x1000 - 0x44)
    return header.to_bytes() + boot + b"\xFF" * 0x100


def test_header_layout() -> None:
    raw = _header().to_bytes()
    assert len(raw) == 64
    assert raw[0:4] == Z64_MAGIC.to_bytes(4, "big")
    assert raw[8:12] == bytes([0x80, 0x00, 0x04, 0x00])
    assert raw[32:52] == b"TEST IMAGE".ljust(20, b" ")
    assert raw[60:62] == b"FA"
    assert raw[62:64] == b"E\x00"


def test_header_parse_inverts_to_bytes() -> None:
    header = _header()
    assert RomHeader.parse(header.to_bytes()) == header
    assert header.name == "TEST IMAGE"
    assert header.is_big_endian


def test_header_requires_64_bytes() -> None:
    with pytest.raises(RomError):
        RomHeader.parse(bytes(63))


def test_describe_lists_fields() -> None:
    text = _header().describe()
    assert "name:            TEST IMAGE" in text
    assert "entry_pc:        0x80000400" in text
    assert "cartridge_id:    0x4641" in text


def test_rom_bootcode_words() -> None:
    rom = Rom.from_bytes(_image(_header()))
    assert len(rom.bootcode) == BOOTCODE_WORDS
    assert rom.bootcode[0] == 0x3C010000
    assert Disassembly.from_words(rom.bootcode)[0].operation is Operation.LUI


def test_rom_too_short() -> None:
    with pytest.raises(RomError):
        Rom.from_bytes(bytes(0xFFF))


def test_byte_swapped_image_warns(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="r4300i.rom"):
        Rom.from_bytes(_image(_header(pi_regs=0x37804012)))
    assert "byte-swapped" in caplog.text


def test_ipl3_slices() -> None:
    image = _image(_header())
    boot, base = ipl3_bytes(image)
    assert (len(boot), base) == (0xFC0, 0x40)
    assert boot[:4] == bytes([0x3C, 0x01, 0x00, 0x00])

    with_header, base = ipl3_bytes(image, with_header=True)
    assert (len(with_header), base) == (0x1000, 0)
    assert Disassembly.from_bytes(with_header).words[16] == 0x3C010000


def test_ipl3_requires_full_boot_block() -> None:
    with pytest.raises(RomError):
        ipl3_bytes(bytes(0x800))


def test_pif_is_whole_file() -> None:
    assert pif_bytes(b"\x01\x02\x03\x04\x05") == (b"\x01\x02\x03\x04\x05", 0)


def test_header_name_shift_jis() -> None:
    header = _header(image_name="テスト".encode("shift_jis").ljust(20, b"\x00"))
    assert header.name == "テスト"


def test_raw_bytes_slice() -> None:
    data = bytes(range(16))
    assert raw_bytes(data, 4, 8) == (bytes(range(4, 12)), 4)
    assert raw_bytes(data, 12) == (bytes(range(12, 16)), 12)
    assert raw_bytes(data, 16) == (b"", 16)


@pytest.mark.parametrize("offset, length", [(-4, None), (17, None), (12, 8), (0, -1)])
def test_raw_bytes_out_of_range(offset: int, length) -> None:
    with pytest.raises(RomError):
        raw_bytes(bytes(16), offset, length)
