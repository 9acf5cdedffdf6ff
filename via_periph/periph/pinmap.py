"""
via_periph — SPI Pin Map

Associates the four SPI lines with parallel port pin numbers (0..7).

    SCLK  clock, host → card
    MOSI  data out of host, host → card
    MISO  data into host, card → host
    SS    chip select, host → card, high = inactive

Pins are expected to be distinct and in range; that is the caller's
contract and is not checked here.
"""

from dataclasses import dataclass

from .. import config


@dataclass(frozen=True)
class PinMap:
    """Bit positions of the SPI lines on an 8-bit port."""
    sclk: int
    mosi: int
    miso: int
    ss: int

    @classmethod
    def default(cls) -> "PinMap":
        return cls(**config.DEFAULT_PINS)

    def pin_mask(self) -> int:
        """All four SPI lines OR'd into one port mask."""
        return 1 << self.sclk | 1 << self.mosi | 1 << self.miso | 1 << self.ss

    @property
    def sclk_mask(self) -> int:
        return 1 << self.sclk

    @property
    def mosi_mask(self) -> int:
        return 1 << self.mosi

    @property
    def miso_mask(self) -> int:
        return 1 << self.miso

    @property
    def ss_mask(self) -> int:
        return 1 << self.ss

    def __str__(self) -> str:
        return (f"PinMap(SCLK=P{self.sclk} MOSI=P{self.mosi} "
                f"MISO=P{self.miso} SS=P{self.ss})")
