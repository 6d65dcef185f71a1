"""Length-prefixed frames: ``[4-byte big-endian length][payload]``.

Any failure at this level leaves the stream position untrustworthy, so
callers treat :class:`FramingError` as fatal to the connection.
"""

from __future__ import annotations

import struct
from typing import BinaryIO

from gitport.config import LENGTH_PREFIX_SIZE, MAX_ENCODABLE_FRAME

_PREFIX = struct.Struct(">I")


class FramingError(Exception):
    """The byte stream can no longer be interpreted as frames."""


class StreamClosed(FramingError):
    """The peer closed the stream cleanly at a frame boundary."""


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read up to *size* bytes, stopping early only at end of stream."""
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_frame(stream: BinaryIO, max_size: int = MAX_ENCODABLE_FRAME) -> bytes:
    """Read one frame and return its payload.

    Raises
    ------
    StreamClosed
        End of stream before any byte of a new frame.
    FramingError
        Truncated prefix or payload, oversized length, or a read error.
    """
    try:
        prefix = _read_exact(stream, LENGTH_PREFIX_SIZE)
        if not prefix:
            raise StreamClosed("stream closed")
        if len(prefix) < LENGTH_PREFIX_SIZE:
            raise FramingError(f"truncated length prefix ({len(prefix)} of {LENGTH_PREFIX_SIZE} bytes)")

        (length,) = _PREFIX.unpack(prefix)
        if length > max_size:
            raise FramingError(f"frame of {length} bytes exceeds limit of {max_size}")

        payload = _read_exact(stream, length)
    except OSError as exc:
        raise FramingError(f"read failed: {exc}") from exc

    if len(payload) < length:
        raise FramingError(f"truncated payload ({len(payload)} of {length} bytes)")
    return payload


def write_frame(stream: BinaryIO, payload: bytes) -> None:
    """Write *payload* with its length prefix and flush."""
    if len(payload) > MAX_ENCODABLE_FRAME:
        raise FramingError(f"payload of {len(payload)} bytes cannot be framed")
    try:
        stream.write(_PREFIX.pack(len(payload)) + payload)
        stream.flush()
    except OSError as exc:
        raise FramingError(f"write failed: {exc}") from exc
