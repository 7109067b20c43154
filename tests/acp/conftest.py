"""
Shared fixtures for the ACP tests.

The handshake is synchronous, so a peer is simulated by preloading everything
it will send and recording everything we write back.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from acp import Channel, Codec


class ScriptedReader:
    """Reader over fixed bytes that hands out at most `chunk_size` bytes per call."""

    def __init__(self, data: bytes, chunk_size: int | None = None) -> None:
        self._data = data
        self._pos = 0
        self._chunk_size = chunk_size
        self.calls: list[int] = []

    def read(self, size: int = -1, /) -> bytes:
        """Return the next chunk, or b"" once exhausted."""
        self.calls.append(size)
        if size < 0:
            size = len(self._data) - self._pos
        if self._chunk_size is not None:
            size = min(size, self._chunk_size)
        chunk = self._data[self._pos : self._pos + size]
        self._pos += len(chunk)
        return chunk

    @property
    def remaining(self) -> bytes:
        """Bytes the code under test never consumed."""
        return self._data[self._pos :]


class RecordingWriter:
    """Writer that logs every write and flush in order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, bytes]] = []
        self._pending = bytearray()
        self.flushed = bytearray()

    def write(self, data: bytes, /) -> int:
        """Buffer the data until the next flush."""
        chunk = bytes(data)
        self.events.append(("write", chunk))
        self._pending += chunk
        return len(chunk)

    def flush(self) -> None:
        """Move pending bytes to the flushed buffer."""
        self.events.append(("flush", bytes(self._pending)))
        self.flushed += self._pending
        self._pending.clear()

    @property
    def pending(self) -> bytes:
        """Bytes written but not yet flushed."""
        return bytes(self._pending)

    @property
    def flushes(self) -> list[bytes]:
        """Bytes delivered by each flush, in order."""
        return [data for kind, data in self.events if kind == "flush"]


class FailingReader:
    """Reader that returns some bytes, then raises."""

    def __init__(self, prefix: bytes = b"") -> None:
        self._prefix = prefix

    def read(self, size: int = -1, /) -> bytes:
        if self._prefix:
            chunk, self._prefix = self._prefix[:size], self._prefix[size:]
            return chunk
        raise OSError("read failed")


class FailingWriter:
    """Writer whose flush always raises."""

    def write(self, data: bytes, /) -> int:
        return len(data)

    def flush(self) -> None:
        raise BrokenPipeError("broken pipe")


Peer = tuple[Channel, ScriptedReader, RecordingWriter]


@pytest.fixture
def make_peer() -> Callable[..., Peer]:
    """Factory for a channel wired to a scripted peer."""

    def _create(data: bytes = b"", chunk_size: int | None = None) -> Peer:
        reader = ScriptedReader(data, chunk_size)
        writer = RecordingWriter()
        return Channel(reader, writer), reader, writer

    return _create


@pytest.fixture
def make_codec(make_peer: Callable[..., Peer]) -> Callable[..., tuple[Codec, RecordingWriter]]:
    """Factory for a codec over a scripted peer."""

    def _create(data: bytes = b"", chunk_size: int | None = None) -> tuple[Codec, RecordingWriter]:
        channel, _, writer = make_peer(data, chunk_size)
        return Codec(channel), writer

    return _create


@pytest.fixture
def failing_reader() -> type[FailingReader]:
    """The failing reader class."""
    return FailingReader


@pytest.fixture
def failing_writer() -> FailingWriter:
    """A writer whose flush fails."""
    return FailingWriter()


@pytest.fixture(autouse=True)
def _clean_acp_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's ACP_* variables out of the tests."""
    for name in ("ACP_NAME", "ACP_PROTOCOL_MIN", "ACP_PROTOCOL_MAX"):
        monkeypatch.delenv(name, raising=False)
