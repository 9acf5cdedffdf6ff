"""
via_periph — SD/MMC Card on a Parallel Port (SPI mode)

Emulates an SD card wired to four pins of the VIA port, bit-banged by
the host CPU. The card only ever sees full port snapshots: every time
the host writes the port, write() gets the new 8-bit value and works out
what happened on SCLK since the previous write.

Timing (SPI mode 0, MSB first):

    SCLK ___/‾‾‾\\___/‾‾‾\\___ ...
            ^   ^
            |   falling: card samples MOSI into bit[index], index--
            rising: card drives MISO = bit[index] of the byte going out

    One byte = 8 rising + 8 falling edges = 16 port writes (at least).
    After the 8th falling edge the byte boundary handler runs:
      1. received MOSI byte looked up in the command table
      2. next MISO byte dequeued from the response queue (0x00 if empty)
      3. Exchange(mosi, miso) reported to listeners and the log

SS high deselects the card: the write is ignored and nothing changes,
not even the remembered clock level.

Command set: only the first CMD0 byte (0x40) is recognized. It queues a
fixed four byte reply so firmware can see something come back. New
tokens go in through register_command() without touching the shift logic.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Union

from .. import config
from ..mem.memory import Rom
from .pinmap import PinMap
from .response_queue import ResponseQueue

log = logging.getLogger(__name__)


class Exchange(NamedTuple):
    """One completed byte: what the host sent, what the card sends next."""
    mosi: int
    miso: int

    def __str__(self) -> str:
        return (f"SD MOSI ${self.mosi:02X} {self.mosi:08b} <-> "
                f"${self.miso:02X} {self.miso:08b} MISO")


CommandHandler = Callable[[int], Sequence[int]]


@dataclass
class SpiState:
    """Mutable SPI shift state. Only SdCard.write() changes it."""
    clock: bool = False           # SCLK level seen on the previous write
    index: int = 7                # bit of the current byte, 7 → 0
    miso_buffer: int = 0x00       # byte being shifted out
    miso_queue: ResponseQueue = field(default_factory=ResponseQueue)
    miso_line: bool = False       # MISO level latched on the last rising edge
    mosi_buffer: int = 0x00       # byte being assembled from MOSI


class SdCard:
    """SD card in SPI mode, attached to an 8-bit parallel port.

    Usage:
        sd = SdCard(PinMap(sclk=0, mosi=1, miso=7, ss=2))
        sd.load_file('card.img')         # optional; commands don't read it
        sd.on_exchange(lambda ex: print(ex))
        port.attach(sd, input_mask=sd.pins.miso_mask)
        ...
        sd.write(port_value)             # every host write to the port
        value = sd.read()                # MISO bit in port position
    """

    def __init__(self, pins: Optional[PinMap] = None):
        self.pins = pins or PinMap.default()

        self.mask_sclk = self.pins.sclk_mask
        self.mask_mosi = self.pins.mosi_mask
        self.mask_miso = self.pins.miso_mask
        self.mask_ss = self.pins.ss_mask

        self.storage: Optional[Rom] = None
        self.spi = SpiState()

        self._commands: Dict[int, CommandHandler] = {
            config.CMD_TOKEN_GO_IDLE: self._cmd_go_idle,
        }
        self._exchange_callbacks: List[Callable[[Exchange], None]] = []

        self.stats = {
            'exchanges': 0,
            'commands': 0,
        }

        # two busy bytes, then ready
        self.queue_miso(*config.POWER_ON_SEQUENCE)
        # so the very first rising edge has a real byte to sample
        self._next_miso_byte()

        log.debug("SD card initialized on %s", self.pins)

    # ── Card image ──

    def load_file(self, path: Union[str, Path]):
        """Insert a card: the image file becomes read-only storage."""
        self.storage = Rom.from_file(path)
        log.info("SD card image %s loaded (%d bytes)", path, self.size)

    def load_bytes(self, data: bytes, name: str = "<bytes>"):
        self.storage = Rom(name, data)

    @property
    def size(self) -> int:
        """Card image size in bytes, 0 with no card inserted."""
        return self.storage.size if self.storage is not None else 0

    def shutdown(self):
        log.debug("SD card shutdown after %d exchanges", self.stats['exchanges'])

    # ── Port interface ──

    def read(self) -> int:
        """Port value with the MISO bit as last driven by the card."""
        return self.mask_miso if self.spi.miso_line else 0x00

    def write(self, data: int):
        """Take an updated parallel port state."""
        if data & self.mask_ss:  # high = inactive
            return

        spi = self.spi
        mosi = bool(data & self.mask_mosi)
        clock = bool(data & self.mask_sclk)

        rising = not spi.clock and clock
        falling = spi.clock and not clock
        spi.clock = clock

        if rising:
            spi.miso_line = bool(spi.miso_buffer & (1 << spi.index))

        if falling:
            if mosi:
                spi.mosi_buffer |= 1 << spi.index

            # after the eighth bit
            if spi.index == 0:
                self._byte_boundary()
                spi.index = 7
            else:
                spi.index -= 1

    # ── Commands / responses ──

    def register_command(self, value: int, handler: CommandHandler):
        """Map a received byte to a handler returning the bytes to queue."""
        self._commands[value & 0xFF] = handler

    def queue_miso(self, *values: int):
        self.spi.miso_queue.enqueue(*values)

    def on_exchange(self, callback: Callable[[Exchange], None]):
        """Register callback(Exchange), called once per completed byte."""
        self._exchange_callbacks.append(callback)

    # ── Internals ──

    def _byte_boundary(self):
        mosi_byte = self._handle_mosi_byte()
        miso_byte = self._next_miso_byte()
        self._log_exchange(Exchange(mosi_byte, miso_byte))

    def _handle_mosi_byte(self) -> int:
        data = self.spi.mosi_buffer
        self.spi.mosi_buffer = 0x00

        handler = self._commands.get(data)
        if handler is not None:
            self.stats['commands'] += 1
            self.queue_miso(*handler(data))
        return data

    def _next_miso_byte(self) -> int:
        self.spi.miso_buffer = self.spi.miso_queue.dequeue_or_default()
        return self.spi.miso_buffer

    def _log_exchange(self, exchange: Exchange):
        self.stats['exchanges'] += 1
        log.debug("%s", exchange)
        for cb in self._exchange_callbacks:
            cb(exchange)

    def _cmd_go_idle(self, data: int) -> Sequence[int]:
        log.info("SD: Got $%02X; queueing response bytes.", data)
        return config.GO_IDLE_RESPONSE

    def __repr__(self) -> str:
        return (f"SdCard({self.pins}, index={self.spi.index}, "
                f"miso=${self.spi.miso_buffer:02X}, queued={len(self.spi.miso_queue)}, "
                f"image={self.size} bytes)")
