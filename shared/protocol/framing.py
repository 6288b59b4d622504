"""Length-prefixed response framing.

Frame layout::

    +--------------------------+---------------------+
    | Size (4 bytes, signed BE)|  Body (Size bytes)  |
    +--------------------------+---------------------+
"""

from __future__ import annotations

import struct
from typing import Protocol

from .constants import FRAME_SIZE_BYTES
from .errors import FramingSizeError, ShortReadError

_SIZE = struct.Struct(">i")


class Reader(Protocol):
    def read(self, size: int) -> bytes: ...


def read_exact(reader: Reader, size: int) -> bytes:
    """Read exactly ``size`` bytes, retrying short reads until filled."""
    buf = bytearray()
    while len(buf) < size:
        chunk = reader.read(size - len(buf))
        if not chunk:
            raise ShortReadError(f"stream ended after {len(buf)} of {size} bytes")
        buf.extend(chunk)
    return bytes(buf)


def read_response_bounded(reader: Reader, limit: int) -> bytes:
    """Read one framed response, refusing declared sizes outside ``0..limit``.

    The body is not consumed when the size is rejected; the stream is unusable
    afterwards and the caller must discard the connection.
    """
    (msg_size,) = _SIZE.unpack(read_exact(reader, FRAME_SIZE_BYTES))

    if msg_size < 0:
        raise FramingSizeError(f"response body size ({msg_size}) is negative")
    if msg_size > limit:
        raise FramingSizeError(f"response body size ({msg_size}) is greater than limit ({limit})")

    return read_exact(reader, msg_size)


def encode_response(body: bytes) -> bytes:
    """Frame ``body`` the way the registry does."""
    return _SIZE.pack(len(body)) + body


__all__ = ["Reader", "read_exact", "read_response_bounded", "encode_response"]
