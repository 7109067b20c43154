"""Tests for the fixed-width integer types."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from acp.types import DecodeError, Int16, Uint16, Uint32


class TestRanges:
    """Construction enforces each type's range."""

    @pytest.mark.parametrize(
        ("cls", "low", "high"),
        [
            (Uint16, 0, 65535),
            (Uint32, 0, 2**32 - 1),
            (Int16, -32768, 32767),
        ],
    )
    def test_bounds_accepted(self, cls: type[Uint16 | Uint32 | Int16], low: int, high: int) -> None:
        """Both range endpoints are representable."""
        assert cls(low) == low
        assert cls(high) == high
        assert cls.min_value() == low
        assert cls.max_value() == high

    @pytest.mark.parametrize(
        ("cls", "value"),
        [
            (Uint16, -1),
            (Uint16, 65536),
            (Uint32, 2**32),
            (Int16, -32769),
            (Int16, 32768),
        ],
    )
    def test_out_of_range_raises(self, cls: type[Uint16 | Uint32 | Int16], value: int) -> None:
        """Values past either end raise OverflowError."""
        with pytest.raises(OverflowError, match="out of range"):
            cls(value)

    def test_byte_lengths(self) -> None:
        """Byte widths follow BITS."""
        assert Uint16.get_byte_length() == 2
        assert Int16.get_byte_length() == 2
        assert Uint32.get_byte_length() == 4


class TestBytes:
    """Little-endian conversion at the natural width."""

    def test_uint16_to_bytes(self) -> None:
        assert Uint16(0x1234).to_bytes() == b"\x34\x12"

    def test_int16_to_bytes_is_signed(self) -> None:
        assert Int16(-2).to_bytes() == b"\xfe\xff"

    def test_uint32_to_bytes(self) -> None:
        assert Uint32(1).to_bytes() == b"\x01\x00\x00\x00"

    def test_decode_bytes(self) -> None:
        assert Uint16.decode_bytes(b"\xff\xff") == 65535
        assert Int16.decode_bytes(b"\xff\xff") == -1
        assert Uint32.decode_bytes(b"\x00\x00\x00\x80") == 2**31

    def test_decode_returns_typed_value(self) -> None:
        assert type(Uint16.decode_bytes(b"\x01\x00")) is Uint16

    def test_decode_wrong_width_raises(self) -> None:
        with pytest.raises(DecodeError, match="expected 2 bytes, got 3"):
            Uint16.decode_bytes(b"\x00\x00\x00")

    def test_repr(self) -> None:
        assert repr(Uint16(7)) == "Uint16(7)"
        assert str(Int16(-7)) == "-7"


class TestPydantic:
    """The types validate as model fields."""

    class _Model(BaseModel):
        version: Uint16

    def test_int_is_coerced(self) -> None:
        model = self._Model(version=3)
        assert type(model.version) is Uint16

    def test_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            self._Model(version=70000)

    def test_bool_rejected(self) -> None:
        with pytest.raises(ValidationError):
            self._Model(version=True)

    def test_serializes_as_int(self) -> None:
        assert self._Model(version=3).model_dump() == {"version": 3}
