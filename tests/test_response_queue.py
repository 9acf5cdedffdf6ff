"""
MISO response queue tests.
"""

from via_periph.periph import ResponseQueue


class TestResponseQueue:

    def test_fifo_order(self):
        q = ResponseQueue()
        q.enqueue(0x00, 0x00, 0xFF)
        q.enqueue(0xAA, 0xAB)
        assert [q.dequeue_or_default() for _ in range(5)] == [0x00, 0x00, 0xFF, 0xAA, 0xAB]

    def test_initial_contents(self):
        q = ResponseQueue(0x01, 0x02)
        assert q.snapshot() == b"\x01\x02"
        assert len(q) == 2

    def test_empty_yields_idle_byte(self):
        q = ResponseQueue()
        assert q.dequeue_or_default() == 0x00
        assert q.dequeue_or_default() == 0x00
        assert q.underruns == 2

    def test_custom_default(self):
        q = ResponseQueue()
        assert q.dequeue_or_default(0xFF) == 0xFF

    def test_underruns_only_when_empty(self):
        q = ResponseQueue(0x10)
        q.dequeue_or_default()
        assert q.underruns == 0

    def test_values_masked_to_byte(self):
        q = ResponseQueue()
        q.enqueue(0x1AB, -1)
        assert q.snapshot() == b"\xAB\xFF"

    def test_snapshot_does_not_consume(self):
        q = ResponseQueue(0x42)
        q.snapshot()
        assert q.dequeue_or_default() == 0x42

    def test_bool_len_iter(self):
        q = ResponseQueue()
        assert not q
        q.enqueue(0x01, 0x02)
        assert q
        assert len(q) == 2
        assert list(q) == [0x01, 0x02]

    def test_clear(self):
        q = ResponseQueue(0x01, 0x02)
        q.clear()
        assert len(q) == 0

    def test_equality(self):
        assert ResponseQueue(0x01) == ResponseQueue(0x01)
        assert ResponseQueue(0x01) != ResponseQueue(0x02)

    def test_repr(self):
        assert repr(ResponseQueue(0xAA, 0x0B)) == "ResponseQueue([AA 0B])"
