"""
via_periph — ROM & RAM Models

16-bit address, 8-bit data memory objects for the host machine, and the
read-only image that backs an inserted SD card.

  Memory        interface: read / write / size / shutdown
  Rom           read-only, contents loaded from a file; writes are fatal
  Ram           32 KiB read/write
  OffsetMemory  mounts a Memory at a base address in a larger space

Writing to a Rom raises ReadOnlyMemoryError. That is a wiring mistake
in the machine configuration, not something to retry, so nothing in
this package catches it.
"""

import logging
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)


class ReadOnlyMemoryError(RuntimeError):
    """Raised on any write to a Rom."""


class Memory:
    """Byte-addressable memory. Subclasses override read/write/size."""

    def shutdown(self):
        """Release resources. Nothing to do for in-memory models."""

    def read(self, addr: int) -> int:
        raise NotImplementedError

    def write(self, addr: int, value: int):
        raise NotImplementedError

    @property
    def size(self) -> int:
        raise NotImplementedError


class Rom(Memory):
    """Read-only memory, generally pre-loaded from a file.

    The size of the ROM is the size of its data.
    """

    def __init__(self, name: str, data: bytes):
        self.name = name
        self._data = bytes(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Rom":
        """Create a ROM from a file. Missing files raise FileNotFoundError."""
        data = Path(path).read_bytes()
        log.debug("ROM loaded from %s (%d bytes)", path, len(data))
        return cls(str(path), data)

    def read(self, addr: int) -> int:
        return self._data[addr]

    def write(self, addr: int, value: int):
        raise ReadOnlyMemoryError(f"{self} is read-only")

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __str__(self) -> str:
        return (f"ROM[{self.size // 1024}k:{self.name}:"
                f"{self._data[:2].hex()}..{self._data[-2:].hex()}]")


class Ram(Memory):
    """32 KiB of read/write memory."""

    SIZE = 0x8000

    def __init__(self):
        self._mem = bytearray(self.SIZE)

    def read(self, addr: int) -> int:
        return self._mem[addr]

    def write(self, addr: int, value: int):
        self._mem[addr] = value & 0xFF

    @property
    def size(self) -> int:
        return self.SIZE

    def dump(self, path: Union[str, Path]):
        """Write the RAM contents to a file."""
        Path(path).write_bytes(bytes(self._mem))
        log.info("RAM dumped to %s", path)

    def __str__(self) -> str:
        return "(RAM 32K)"


class OffsetMemory(Memory):
    """Wraps a Memory, rewriting addresses by the mount offset.

    Lets a 0-based memory object sit at a base address in the 64K map:
        rom = OffsetMemory(0xC000, Rom.from_file('kernal.rom'))
        rom.read(0xC000)   # byte 0 of the image
    """

    def __init__(self, offset: int, memory: Memory):
        self.offset = offset
        self.memory = memory

    def read(self, addr: int) -> int:
        return self.memory.read((addr - self.offset) & 0xFFFF)

    def write(self, addr: int, value: int):
        self.memory.write((addr - self.offset) & 0xFFFF, value)

    def shutdown(self):
        self.memory.shutdown()

    @property
    def size(self) -> int:
        return self.memory.size

    def __str__(self) -> str:
        return f"OffsetMemory({self.memory})"
