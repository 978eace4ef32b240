import io
import logging

from handwave.transmit import AngleTransmitter, encode_angle_line, format_angle


class BrokenPort(io.RawIOBase):
    def writable(self):
        return True

    def write(self, b):
        raise OSError("device disconnected")


class TestEncoding:
    def test_default_offset(self):
        assert encode_angle_line(-90.0) == b"90.0\n"

    def test_precision(self):
        assert encode_angle_line(-87.654, precision=1) == b"92.3\n"

    def test_custom_offset(self):
        assert format_angle(-90.0, offset=0.0) == "-90.0"


class TestAngleTransmitter:
    def test_writes_one_line_per_send(self):
        buf = io.BytesIO()
        tx = AngleTransmitter(buf, precision=0)
        assert tx.send(-80.0)
        assert tx.send(-110.0)
        assert buf.getvalue() == b"100\n70\n"
        assert tx.sent == 2

    def test_disabled_without_stream(self):
        tx = AngleTransmitter(None)
        assert not tx.enabled
        assert tx.send(-90.0) is False

    def test_none_angle_skipped(self):
        buf = io.BytesIO()
        assert AngleTransmitter(buf).send(None) is False
        assert buf.getvalue() == b""

    def test_write_failure_is_logged_not_raised(self, caplog):
        tx = AngleTransmitter(BrokenPort())
        with caplog.at_level(logging.WARNING, logger="handwave.transmit"):
            assert tx.send(-90.0) is False
        assert tx.failed == 1
        assert "device disconnected" in caplog.text

    def test_closed_stream_is_a_drop(self):
        buf = io.BytesIO()
        buf.close()
        tx = AngleTransmitter(buf)
        assert tx.send(-90.0) is False
        assert tx.failed == 1

    def test_context_manager_closes(self):
        buf = io.BytesIO()
        with AngleTransmitter(buf) as tx:
            tx.send(-90.0)
        assert buf.closed
        assert not tx.enabled
