"""
Duplex byte channel carrying the ACP wire format.

A channel pairs a readable and a writable binary stream. It owns no protocol
state; it only guarantees two things the codec relies on:

    1. Reads run to completion. A stream may hand back fewer bytes than
       asked for, so reads loop until the field is complete, the stream
       ends, or the stream fails.
    2. Writes are flushed. The peer must observe each protocol step before
       we block waiting for its reply.

Conventionally the channel is bound to the process's standard streams:

    channel = Channel.stdio()
"""

from __future__ import annotations

import sys
from typing import Protocol

from .types import StreamError


class ReadableStream(Protocol):
    """Blocking binary input, e.g. ``sys.stdin.buffer`` or a socket file."""

    def read(self, size: int = -1, /) -> bytes | None:
        """Read up to `size` bytes. An empty result signals end of stream."""
        ...


class WritableStream(Protocol):
    """Buffered binary output, e.g. ``sys.stdout.buffer``."""

    def write(self, data: bytes, /) -> int | None:
        """Buffer data for writing."""
        ...

    def flush(self) -> None:
        """Push buffered data to the peer."""
        ...


class Channel:
    """Duplex byte stream with read-to-completion and flushed writes."""

    __slots__ = ("_reader", "_writer")

    def __init__(self, reader: ReadableStream, writer: WritableStream) -> None:
        self._reader = reader
        self._writer = writer

    @classmethod
    def stdio(cls) -> Channel:
        """Create a channel on the process's binary standard input and output."""
        return cls(sys.stdin.buffer, sys.stdout.buffer)

    def read_exactly(self, size: int, field: str = "bytes") -> bytes:
        """
        Read exactly `size` bytes.

        Args:
            size: Number of bytes the field occupies.
            field: Wire field kind, used in error messages.

        Returns:
            The requested bytes.

        Raises:
            StreamError: If the stream ends or fails before `size` bytes arrive.
        """
        if size == 0:
            return b""

        buf = bytearray()
        while len(buf) < size:
            try:
                chunk = self._reader.read(size - len(buf))
            except (OSError, ValueError) as e:
                raise StreamError(
                    field,
                    "reading",
                    expected_bytes=size,
                    actual_bytes=len(buf),
                    detail=str(e),
                ) from e

            if not chunk:
                raise StreamError(field, "reading", expected_bytes=size, actual_bytes=len(buf))

            buf += chunk

        return bytes(buf)

    def write(self, data: bytes, field: str = "bytes") -> None:
        """
        Write all of `data` and flush it to the peer.

        Raises:
            StreamError: If the stream fails before every byte is flushed.
        """
        view = memoryview(data)
        written = 0
        while written < len(view):
            # Raw streams may accept only part of the buffer.
            try:
                count = self._writer.write(view[written:])
            except (OSError, ValueError) as e:
                raise StreamError(
                    field,
                    "writing",
                    expected_bytes=len(data),
                    actual_bytes=written,
                    detail=str(e),
                ) from e

            # None is how a non-blocking raw stream reports that it would block.
            if not count:
                raise StreamError(
                    field,
                    "writing",
                    expected_bytes=len(data),
                    actual_bytes=written,
                    detail="stream accepted no bytes",
                )
            written += count

        try:
            self._writer.flush()
        except (OSError, ValueError) as e:
            raise StreamError(
                field,
                "writing",
                expected_bytes=len(data),
                actual_bytes=written,
                detail=str(e),
            ) from e

    def flush(self) -> None:
        """
        Flush the write side.

        Raises:
            StreamError: If the stream fails while flushing.
        """
        try:
            self._writer.flush()
        except (OSError, ValueError) as e:
            raise StreamError("buffer", "flushing", expected_bytes=0, detail=str(e)) from e
