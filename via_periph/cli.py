#!/usr/bin/env python3
"""
via-periph — drive the emulated SD card from the command line
===============================================================

Wires an SdCard onto a ParallelPort, bit-bangs bytes through it the same
way 6502 firmware would, and prints what came back.

Usage:
    via-periph --send "FF FF 40 FF FF FF FF"
    via-periph --sd-image card.img --send 40 FF FF FF FF -v
    via-periph --pins 0,1,7,2 --via-dump-binary --send 40

Exit status: 0 on success, 1 on any error, 130 on Ctrl-C.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from . import __version__, config
from .log_setup import setup_logging
from .periph import ParallelPort, PinMap, SdCard, SpiHost

log = logging.getLogger(__name__)

# three idle bytes, the CMD0 token, then enough clocks to read the reply back
DEFAULT_SEND = "FF " * 3 + "40" + " FF" * 8


@dataclass
class Options:
    """Values of command line options after they're parsed."""
    sd_image: Optional[Path] = None
    pins: PinMap = field(default_factory=PinMap.default)
    send: bytes = b""
    via_dump_binary: bool = False
    verbose: int = 0
    quiet: bool = False
    log_file: Optional[Path] = None


def parse_hex_bytes(text: str) -> bytes:
    """Parse "40 FF $0A 0x7f" into bytes. Raises ValueError on bad input."""
    values = []
    for token in text.replace(",", " ").split():
        token = token.strip()
        if token.startswith("$"):
            token = token[1:]
        value = int(token, 16)
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte out of range: {token}")
        values.append(value)
    return bytes(values)


def parse_pins(text: str) -> PinMap:
    """Parse "SCLK,MOSI,MISO,SS" bit numbers into a PinMap."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(
            f"expected SCLK,MOSI,MISO,SS (4 pin numbers), got {text!r}")
    pins = [int(p, 0) for p in parts]
    for pin in pins:
        if not 0 <= pin <= 7:
            raise argparse.ArgumentTypeError(f"pin {pin} out of range 0-7")
    return PinMap(*pins)


def _hex_arg(text: str) -> bytes:
    try:
        return parse_hex_bytes(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="via-periph",
        description="Emulated SD card on a VIA parallel port (SPI mode)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"via-periph {__version__}")

    # SD card
    parser.add_argument("--sd-image", type=Path, help="Card image file to insert")
    parser.add_argument("--pins", type=parse_pins, default=None,
                        help="Pin numbers SCLK,MOSI,MISO,SS (default %d,%d,%d,%d)" % (
                            config.PIN_SCLK, config.PIN_MOSI, config.PIN_MISO, config.PIN_SS))
    parser.add_argument("--send", type=_hex_arg, nargs="+", default=None,
                        help="Hex bytes to clock through the card")

    # VIA
    parser.add_argument("--via-dump-binary", action="store_true",
                        help="Print every port change in binary")

    # Logging
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase verbosity (-v shows every exchange)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only show errors")
    parser.add_argument("--log-file", type=Path, help="Write log to this file")
    return parser


def parse_flags(argv: Optional[List[str]] = None) -> Options:
    args = build_parser().parse_args(argv)
    send = b"".join(args.send) if args.send else parse_hex_bytes(DEFAULT_SEND)
    return Options(
        sd_image=args.sd_image,
        pins=args.pins or PinMap.default(),
        send=send,
        via_dump_binary=args.via_dump_binary,
        verbose=args.verbose,
        quiet=args.quiet,
        log_file=args.log_file,
    )


def _console_level(opt: Options) -> int:
    if opt.quiet:
        return logging.ERROR
    if opt.verbose == 0:
        return logging.WARNING
    if opt.verbose == 1:
        return logging.INFO
    return logging.DEBUG


def run(opt: Options, console: Console) -> int:
    """Build the port + card, send the bytes, print the exchange table."""
    card = SdCard(opt.pins)
    if opt.sd_image:
        card.load_file(opt.sd_image)

    port = ParallelPort()
    port.attach(card, input_mask=opt.pins.miso_mask)
    if opt.via_dump_binary:
        port.on_change(lambda old, new: console.print(f"PORT {new:08b}", highlight=False))

    exchanges = []
    card.on_exchange(exchanges.append)

    host = SpiHost(port, opt.pins)
    received = host.transfer(opt.send)
    card.shutdown()

    table = Table(title=f"SD card on {opt.pins}")
    table.add_column("#", justify="right")
    table.add_column("MOSI")
    table.add_column("MISO")
    table.add_column("next")
    for n, (sent, got, ex) in enumerate(zip(opt.send, received, exchanges)):
        table.add_row(str(n), f"${sent:02X} {sent:08b}", f"${got:02X} {got:08b}",
                      f"${ex.miso:02X}")
    console.print(table)
    console.print(f"{len(exchanges)} bytes exchanged in {host.writes} port writes, "
                  f"{card.stats['commands']} commands, image {card.size} bytes",
                  highlight=False)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    opt = parse_flags(argv)
    setup_logging(console_level=_console_level(opt), log_file=opt.log_file)
    console = Console()

    try:
        return run(opt, console)
    except KeyboardInterrupt:
        log.warning("Interrupted by user")
        return 130
    except Exception as e:
        log.error("Error: %s", e, exc_info=opt.verbose > 1)
        return 1


if __name__ == "__main__":
    sys.exit(main())
