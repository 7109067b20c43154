r"""
Primitive value codec for the ACP wire format.

Wire format (all multi-byte integers little-endian):

    Bool    1 byte      0x00 = true, 0x01 = false
    UInt16  2 bytes     unsigned
    Int16   2 bytes     signed two's-complement
    UInt32  4 bytes     unsigned
    String  2 + N bytes UInt16 byte count N, then N raw bytes

The boolean mapping is the reverse of the usual convention. Existing peers
depend on it, so it must not be "fixed".

Every ``put_*`` call flushes before returning, so the peer can observe the
value immediately. Every ``get_*`` call blocks until the whole field has
arrived.

Example:
    codec = Codec(Channel.stdio())
    name = codec.get_string()       # b"SWAPP"
    codec.put_bool(True)            # -> 00
    version = codec.get_uint16()    # Uint16(2)
"""

from __future__ import annotations

from typing import Final

from .channel import Channel
from .types import DecodeError, EncodingConstraintError, Int16, Uint16, Uint32

TRUE_BYTE: Final[bytes] = b"\x00"
"""Wire encoding of a true Bool."""

FALSE_BYTE: Final[bytes] = b"\x01"
"""Wire encoding of a false Bool."""

MAX_STRING_LENGTH: Final[int] = Uint16.max_value()
"""Largest byte count a length-prefixed string can carry."""


class Codec:
    """Encodes and decodes primitive values over a channel."""

    __slots__ = ("channel",)

    def __init__(self, channel: Channel) -> None:
        self.channel = channel

    def flush(self) -> None:
        """Flush the underlying channel."""
        self.channel.flush()

    def write(self, data: bytes) -> None:
        """Write raw bytes and flush."""
        self.channel.write(data)

    def put_bool(self, value: bool) -> None:
        """Write a Bool using the inverted mapping (true -> 0x00, false -> 0x01)."""
        self.channel.write(TRUE_BYTE if value else FALSE_BYTE, "Bool")

    def get_bool(self) -> bool:
        """
        Read a Bool using the inverted mapping.

        Raises:
            DecodeError: If the byte is neither 0x00 nor 0x01.
        """
        data = self.channel.read_exactly(1, "Bool")
        if data == TRUE_BYTE:
            return True
        if data == FALSE_BYTE:
            return False
        raise DecodeError("Bool", f"invalid byte 0x{data[0]:02x}")

    def put_uint16(self, value: int) -> None:
        """
        Write an unsigned 16-bit integer.

        Raises:
            EncodingConstraintError: If `value` is not an integer or is outside
                [0, 65535]. Nothing is written in that case.
        """
        # bool is an int subclass, but it is a different wire type.
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodingConstraintError("UInt16", value, limit=Uint16.max_value())
        try:
            encoded = Uint16(value).to_bytes()
        except OverflowError:
            raise EncodingConstraintError("UInt16", int(value), limit=Uint16.max_value()) from None
        self.channel.write(encoded, "UInt16")

    def get_uint16(self) -> Uint16:
        """Read an unsigned 16-bit integer."""
        return Uint16.decode_bytes(self.channel.read_exactly(Uint16.get_byte_length(), "UInt16"))

    def get_int16(self) -> Int16:
        """Read a signed 16-bit integer."""
        return Int16.decode_bytes(self.channel.read_exactly(Int16.get_byte_length(), "Int16"))

    def get_uint32(self) -> Uint32:
        """Read an unsigned 32-bit integer."""
        return Uint32.decode_bytes(self.channel.read_exactly(Uint32.get_byte_length(), "UInt32"))

    def put_string(self, value: str | bytes) -> None:
        """
        Write a length-prefixed string.

        Text is encoded as UTF-8; the prefix counts bytes, not characters.
        The prefix and the payload are written and flushed separately.

        Args:
            value: Text or raw bytes to send.

        Raises:
            EncodingConstraintError: If the payload exceeds 65535 bytes.
                Nothing is written in that case.
        """
        data = value.encode("utf-8") if isinstance(value, str) else bytes(value)
        if len(data) > MAX_STRING_LENGTH:
            raise EncodingConstraintError("String", len(data), limit=MAX_STRING_LENGTH)

        self.put_uint16(len(data))
        self.channel.write(data, "String")

    def get_string(self) -> bytes:
        """
        Read a length-prefixed string.

        Returns:
            The raw payload bytes. No text decoding or validation is applied.
        """
        length = self.get_uint16()
        return self.channel.read_exactly(int(length), "String")
