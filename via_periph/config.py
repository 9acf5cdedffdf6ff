"""
via_periph — Default Configuration
==================================

Pin assignments and protocol constants for the SD card on the VIA port.

The pin numbers are bit positions (0-7) of the VIA port B data register.
MISO sits on PB7 so 6502 firmware can test it with BIT and branch on N.
Override at runtime with ``via-periph --pins SCLK,MOSI,MISO,SS``.
"""


# =============================================================================
#  VIA PORT B PIN ASSIGNMENT (bit numbers)
# =============================================================================
PIN_SCLK = 0    # clock, driven by host
PIN_MOSI = 1    # data out of host
PIN_SS   = 2    # chip select, active low
PIN_MISO = 7    # data into host, driven by card

DEFAULT_PINS = {
    "sclk": PIN_SCLK,
    "mosi": PIN_MOSI,
    "miso": PIN_MISO,
    "ss":   PIN_SS,
}


# =============================================================================
#  SD CARD PROTOCOL
# =============================================================================

# Two busy bytes, then the "ready for command" token.
POWER_ON_SEQUENCE = (0x00, 0x00, 0xFF)

# First byte of CMD0 (GO_IDLE_STATE): start bit 0, transmission bit 1, index 0.
CMD_TOKEN_GO_IDLE = 0x40
GO_IDLE_RESPONSE = (0xAA, 0xAB, 0xAC, 0xAD)

# Card holds MISO low when it has nothing queued.
MISO_IDLE_BYTE = 0x00


# =============================================================================
#  LOGGING
# =============================================================================
# Relative to the working directory at setup_logging() time.
LOG_DIR_NAME = "logs"
LOG_NAME = "via_periph"
