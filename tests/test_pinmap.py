"""
Pin map tests — SPI line to port bit translation.
"""

import dataclasses

import pytest

from via_periph import config
from via_periph.periph import PinMap


class TestPinMap:

    def test_single_bit_masks(self):
        pins = PinMap(sclk=0, mosi=1, miso=7, ss=2)
        assert pins.sclk_mask == 0x01
        assert pins.mosi_mask == 0x02
        assert pins.miso_mask == 0x80
        assert pins.ss_mask == 0x04

    def test_pin_mask(self):
        assert PinMap(sclk=0, mosi=1, miso=7, ss=2).pin_mask() == 0x87
        assert PinMap(sclk=4, mosi=5, miso=6, ss=3).pin_mask() == 0x78

    def test_default_matches_config(self):
        pins = PinMap.default()
        assert pins.sclk == config.PIN_SCLK
        assert pins.mosi == config.PIN_MOSI
        assert pins.miso == config.PIN_MISO
        assert pins.ss == config.PIN_SS

    def test_immutable(self):
        pins = PinMap.default()
        with pytest.raises(dataclasses.FrozenInstanceError):
            pins.sclk = 3

    def test_equality_and_hash(self):
        assert PinMap(0, 1, 7, 2) == PinMap.default()
        assert len({PinMap(0, 1, 7, 2), PinMap.default()}) == 1

    def test_str(self):
        assert str(PinMap(0, 1, 7, 2)) == "PinMap(SCLK=P0 MOSI=P1 MISO=P7 SS=P2)"
