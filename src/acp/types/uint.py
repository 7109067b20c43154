"""Fixed-width integer types used on the ACP wire."""

from __future__ import annotations

from typing import Any, ClassVar, Literal, SupportsIndex, SupportsInt

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from typing_extensions import Self

from .exceptions import DecodeError


class _FixedWidthInt(int):
    """Shared behaviour for integers with a statically known byte width."""

    BITS: ClassVar[int]
    """The number of bits in the integer (overridden by subclasses)."""

    SIGNED: ClassVar[bool] = False
    """Whether the wire representation is two's-complement signed."""

    @classmethod
    def min_value(cls) -> int:
        """Smallest representable value."""
        return -(2 ** (cls.BITS - 1)) if cls.SIGNED else 0

    @classmethod
    def max_value(cls) -> int:
        """Largest representable value."""
        return 2 ** (cls.BITS - 1) - 1 if cls.SIGNED else 2**cls.BITS - 1

    @classmethod
    def get_byte_length(cls) -> int:
        """Number of bytes this type occupies on the wire."""
        return cls.BITS // 8

    def __new__(cls, value: SupportsInt) -> Self:
        """
        Create and validate a new instance.

        Raises:
            OverflowError: If `value` does not fit in `BITS` bits.
        """
        int_value = int(value)
        if not (cls.min_value() <= int_value <= cls.max_value()):
            raise OverflowError(f"{int_value} is out of range for {cls.__name__}")
        return super().__new__(cls, int_value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Hook into Pydantic's validation system."""

        def validate(value: Any) -> _FixedWidthInt:
            """Pydantic validation function that calls the class constructor."""
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{cls.__name__} requires an int, got {type(value).__name__}")
            try:
                return cls(value)
            except OverflowError as e:
                raise ValueError(str(e)) from e

        return core_schema.json_or_python_schema(
            json_schema=core_schema.int_schema(ge=cls.min_value(), le=cls.max_value()),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda instance: int(instance)
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        """Hook into Pydantic's JSON Schema generation system."""
        json_schema = handler(core_schema)
        prefix = "int" if cls.SIGNED else "uint"
        json_schema.update(format=f"{prefix}{cls.BITS}")
        return json_schema

    def to_bytes(
        self,
        length: SupportsIndex | None = None,
        byteorder: Literal["little", "big"] = "little",
        *,
        signed: bool | None = None,
    ) -> bytes:
        """
        Return an array of bytes representing the integer.

        Defaults to little-endian at the type's natural width and signedness.
        """
        actual_length = self.get_byte_length() if length is None else int(length)
        actual_signed = self.SIGNED if signed is None else signed
        return super().to_bytes(length=actual_length, byteorder=byteorder, signed=actual_signed)

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        """
        Decode a little-endian value of exactly the type's width.

        Raises:
            DecodeError: If `data` is not exactly `get_byte_length()` bytes.
        """
        if len(data) != cls.get_byte_length():
            raise DecodeError(
                cls.__name__,
                f"expected {cls.get_byte_length()} bytes, got {len(data)}",
            )
        return cls(int.from_bytes(data, "little", signed=cls.SIGNED))

    def __repr__(self) -> str:
        """Return the official string representation of the object."""
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))


class BaseUint(_FixedWidthInt):
    """A base class for unsigned fixed-width integers."""


class BaseInt(_FixedWidthInt):
    """A base class for signed (two's-complement) fixed-width integers."""

    SIGNED = True


class Uint16(BaseUint):
    """A 16-bit unsigned integer (uint16)."""

    BITS = 16


class Uint32(BaseUint):
    """A 32-bit unsigned integer (uint32)."""

    BITS = 32


class Int16(BaseInt):
    """A 16-bit signed integer (int16)."""

    BITS = 16
