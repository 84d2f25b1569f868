#!/usr/bin/env python3
"""Disassemble the boot code of an N64 cartridge image or PIF ROM dump."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
from typing import List, Optional, Sequence, Tuple

from .config import ConfigError, load_config
from .disassembly import Disassembly
from .rom import Rom, RomError, RomHeader, ipl3_bytes, pif_bytes, raw_bytes

logger = logging.getLogger(__name__)

MODES = ("ipl3", "ipl3-header", "pif", "raw")


def _int_literal(raw: str) -> int:
    try:
        return int(raw, 0)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not an integer: {raw!r}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="r4300i-disasm", description=__doc__)
    parser.add_argument("path", type=Path, help="Cartridge image (.z64) or raw dump")
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="ipl3",
        help="ipl3: boot block at 0x40..0x1000 (default); ipl3-header: include "
        "the 64-byte header; pif: whole file; raw: --offset/--length slice",
    )
    parser.add_argument(
        "--base",
        type=_int_literal,
        default=None,
        help="Address of the first decoded word (default depends on --mode)",
    )
    parser.add_argument(
        "--offset", type=_int_literal, default=0, help="Start offset for --mode raw"
    )
    parser.add_argument(
        "--length",
        type=_int_literal,
        default=None,
        help="Byte count for --mode raw (default: to end of file)",
    )
    parser.add_argument(
        "-o", "--output", type=Path, default=None, help="Output file (default stdout)"
    )
    parser.add_argument(
        "--skip-unknown",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Omit words that do not decode to a known instruction",
    )
    parser.add_argument(
        "--header", action="store_true", help="Print the ROM header fields and exit"
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="More logging (repeatable)"
    )
    return parser


def _select(data: bytes, args: argparse.Namespace) -> Tuple[bytes, int]:
    if args.mode in ("ipl3", "ipl3-header"):
        # header checks and byte-order warning
        Rom.from_bytes(data)
        return ipl3_bytes(data, with_header=args.mode == "ipl3-header")
    if args.mode == "pif":
        return pif_bytes(data)
    return raw_bytes(data, args.offset, args.length)


def _configure_logging(verbose: int, default_level: int) -> None:
    level = default_level
    if verbose == 1:
        level = min(level, logging.INFO)
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
    except ConfigError as exc:
        print(f"r4300i-disasm: {exc}", file=sys.stderr)
        return 1
    _configure_logging(args.verbose, config.log_level)

    try:
        data = args.path.read_bytes()
    except OSError as exc:
        print(f"r4300i-disasm: cannot read {args.path}: {exc}", file=sys.stderr)
        return 1

    try:
        if args.header:
            print(RomHeader.parse(data).describe())
            return 0
        chunk, mode_base = _select(data, args)
    except RomError as exc:
        print(f"r4300i-disasm: {args.path}: {exc}", file=sys.stderr)
        return 1

    base = args.base
    if base is None:
        base = config.base if config.base is not None else mode_base
    skip_unknown = config.skip_unknown if args.skip_unknown is None else args.skip_unknown

    disasm = Disassembly.from_bytes(chunk)
    if disasm.dropped_bytes:
        logger.info("Ignored %d trailing bytes", disasm.dropped_bytes)

    try:
        if args.output is None:
            count = disasm.write(sys.stdout, base, skip_unknown=skip_unknown)
        else:
            with open(args.output, "w", encoding="utf-8") as sink:
                count = disasm.write(sink, base, skip_unknown=skip_unknown)
    except OSError as exc:
        print(f"r4300i-disasm: cannot write {args.output}: {exc}", file=sys.stderr)
        return 1

    logger.info("Wrote %d lines (%d unknown words)", count, disasm.unknown_count)
    return 0


def run(argv: Optional[List[str]] = None) -> None:
    sys.exit(main(argv))


if __name__ == "__main__":
    run()
