"""
via_periph — Parallel I/O Port

Stands in for VIA port B as seen by attached peripherals. The CPU side
(the VIA register model of the host emulator) calls write() every time
it stores to the port and read() every time it loads from it.

Each attached device gets every write. On read, each device supplies the
bits it drives (its input mask); every other bit reads back as the last
value written.

    port = ParallelPort()
    port.attach(sd, input_mask=sd.pins.miso_mask)
    port.on_change(lambda old, new: print(f"PORTB: {new:08b}"))
"""

import logging
from typing import Callable, List, Tuple

log = logging.getLogger(__name__)


class ParallelPort:
    """8-bit port with peripherals hanging off its pins."""

    def __init__(self):
        self._value = 0x00
        self._devices: List[Tuple[object, int]] = []
        self._change_callbacks: List[Callable[[int, int], None]] = []

    def attach(self, device, input_mask: int = 0x00):
        """Attach a device with write(int) and read() -> int.

        input_mask: port bits the device drives back toward the host.
        """
        self._devices.append((device, input_mask & 0xFF))
        log.debug("Attached %r, drives %s", device, format(input_mask & 0xFF, "08b"))

    def on_change(self, callback: Callable[[int, int], None]):
        """callback(old, new) is called on any write that changes the value."""
        self._change_callbacks.append(callback)

    def write(self, value: int):
        old = self._value
        self._value = value & 0xFF

        if old != self._value:
            for cb in self._change_callbacks:
                cb(old, self._value)

        for device, _ in self._devices:
            device.write(self._value)

    def read(self) -> int:
        """Latched output bits, with input bits as driven by devices."""
        value = self._value
        for device, input_mask in self._devices:
            value = (value & ~input_mask) | (device.read() & input_mask)
        return value & 0xFF

    @property
    def value(self) -> int:
        return self._value

    def reset(self):
        self._value = 0x00
