"""
via_periph — MISO Response Queue

Bytes the card will shift out on future clock cycles: busy tokens, the
ready token, command responses. Append at the tail, consume from the
head. An empty queue is not an error: the card just holds MISO low, so
a dequeue from empty yields the idle byte (0x00).
"""

from collections import deque
from typing import Iterator

from .. import config


class ResponseQueue:
    """FIFO of pending MISO bytes.

    Usage:
        q = ResponseQueue()
        q.enqueue(0xAA, 0xAB)
        q.dequeue_or_default()   # 0xAA
        q.dequeue_or_default()   # 0xAB
        q.dequeue_or_default()   # 0x00 (empty → idle byte)
    """

    def __init__(self, *initial: int):
        self._queue: deque = deque()
        self.underruns = 0
        self.enqueue(*initial)

    def enqueue(self, *values: int):
        """Append bytes to the tail, in argument order."""
        for value in values:
            self._queue.append(value & 0xFF)

    def dequeue_or_default(self, default: int = config.MISO_IDLE_BYTE) -> int:
        """Pop the head byte, or return ``default`` when nothing is queued."""
        if self._queue:
            return self._queue.popleft()
        self.underruns += 1
        return default & 0xFF

    def clear(self):
        self._queue.clear()

    def snapshot(self) -> bytes:
        """Pending bytes in transmission order, without consuming them."""
        return bytes(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)

    def __iter__(self) -> Iterator[int]:
        return iter(self._queue)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResponseQueue):
            return NotImplemented
        return self._queue == other._queue

    def __repr__(self) -> str:
        pending = ' '.join(f'{b:02X}' for b in self._queue)
        return f"ResponseQueue([{pending}])"
