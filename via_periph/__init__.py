"""
via_periph — Peripherals for a VIA Parallel Port
================================================
Hardware models that hang off the 8-bit parallel port of an emulated
6502 machine. The headline device is an SD/MMC card in SPI mode,
bit-banged by the CPU through four port pins.

Architecture:
    ┌────────────┐  write(port)  ┌──────────────┐  write(port)  ┌────────────────────┐
    │ host CPU / │──────────────>│ ParallelPort │──────────────>│ SdCard             │
    │ VIA model  │<──────────────│ (ports.py)   │<──────────────│  PinMap            │
    └────────────┘  read()       └──────────────┘  read() MISO  │  SpiState          │
                                                                │  ResponseQueue     │
                                                                │  storage: Rom      │
                                                                └────────────────────┘

    - periph/pinmap.py:         SPI line → port bit numbers
    - periph/response_queue.py: bytes waiting to go out on MISO
    - periph/sd.py:             edge-triggered shift state machine + command table
    - periph/spi_host.py:       host-side bit-bang driver (tests, CLI)
    - periph/ports.py:          port fan-out to attached devices
    - mem/memory.py:            Rom / Ram / OffsetMemory
"""

__version__ = "0.1.0"

from .periph import (
    PinMap, ResponseQueue, SdCard, SpiState, Exchange, SpiHost, ParallelPort,
)
from .mem import Memory, Rom, Ram, OffsetMemory, ReadOnlyMemoryError
