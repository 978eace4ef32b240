"""
Line-delimited output of the hand heading for byte-oriented channels.

Each frame is sent as ASCII text, ``"<angle + offset>\\n"``. With the default
offset of 180 the usual upright-hand headings (around -90) arrive as small
positive numbers, which is easier to parse on a microcontroller.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Optional


logger = logging.getLogger(__name__)

DEFAULT_ANGLE_OFFSET = 180.0


def format_angle(angle: float, offset: float = DEFAULT_ANGLE_OFFSET, precision: Optional[int] = None) -> str:
    value = angle + offset
    if precision is None:
        return repr(float(value))
    return f"{value:.{precision}f}"


def encode_angle_line(angle: float, offset: float = DEFAULT_ANGLE_OFFSET, precision: Optional[int] = None) -> bytes:
    return (format_angle(angle, offset, precision) + "\n").encode("ascii")


class AngleTransmitter:
    """
    Fire-and-forget writer of heading lines.

    `stream` is any binary writable (an opened serial device, a file, a socket
    file). Failed writes are logged and counted, never raised.
    """

    def __init__(
        self,
        stream: Optional[BinaryIO],
        offset: float = DEFAULT_ANGLE_OFFSET,
        precision: Optional[int] = None,
    ) -> None:
        self._stream = stream
        self.offset = offset
        self.precision = precision
        self.sent = 0
        self.failed = 0

    @property
    def enabled(self) -> bool:
        return self._stream is not None

    def send(self, angle: Optional[float]) -> bool:
        if self._stream is None or angle is None:
            return False
        line = encode_angle_line(angle, self.offset, self.precision)
        try:
            self._stream.write(line)
            self._stream.flush()
        except (OSError, ValueError) as e:
            self.failed += 1
            logger.warning("dropping angle frame %r: %s", line, e)
            return False
        self.sent += 1
        return True

    def close(self) -> None:
        if self._stream is not None:
            self._stream.close()
            self._stream = None

    def __enter__(self) -> "AngleTransmitter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
