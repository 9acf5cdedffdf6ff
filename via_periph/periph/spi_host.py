"""
via_periph — Host-side SPI Bit-Bang Driver

Plays the part of the 6502 firmware: toggles SCLK/MOSI/SS on the port
and reads MISO back, one port write per pin change, mode 0, MSB first.

Per bit:
    write  MOSI=bit, SCLK=1    rising edge, card drives MISO
    read   MISO
    write  MOSI=bit, SCLK=0    falling edge, card samples MOSI

The device is anything with write(int) and read() -> int: an SdCard
directly, or a ParallelPort with the card attached.
"""

from typing import Iterable, Iterator

from .pinmap import PinMap


class SpiHost:
    """SPI master driving a port one snapshot at a time."""

    def __init__(self, device, pins: PinMap):
        self.device = device
        self.pins = pins
        self._port = pins.ss_mask   # deselected, clock low
        self.writes = 0

    # ── Pin control ──

    def _put(self, value: int):
        self._port = value & 0xFF
        self.writes += 1
        self.device.write(self._port)

    def select(self):
        """Drive SS low with the clock idle low."""
        self._put(self._port & ~(self.pins.ss_mask | self.pins.sclk_mask))

    def deselect(self):
        self._put((self._port | self.pins.ss_mask) & ~self.pins.sclk_mask)

    @property
    def selected(self) -> bool:
        return not self._port & self.pins.ss_mask

    def snapshots(self, value: int, base: int = 0x00) -> Iterator[int]:
        """Port values written to clock one byte out, MSB first."""
        base &= ~(self.pins.sclk_mask | self.pins.mosi_mask)
        for bit in range(7, -1, -1):
            level = self.pins.mosi_mask if value & (1 << bit) else 0
            yield base | level | self.pins.sclk_mask
            yield base | level

    # ── Transfers ──

    def transfer_byte(self, value: int) -> int:
        """Clock one byte out on MOSI; return the byte read on MISO.

        The card must already be selected.
        """
        received = 0
        for n, snapshot in enumerate(self.snapshots(value, self._port)):
            self._put(snapshot)
            if n % 2 == 0:  # after rising edge
                received <<= 1
                if self.device.read() & self.pins.miso_mask:
                    received |= 1
        return received

    def transfer(self, data: Iterable[int]) -> bytes:
        """Select, exchange every byte in ``data``, deselect."""
        self.select()
        try:
            return bytes(self.transfer_byte(b) for b in data)
        finally:
            self.deselect()
