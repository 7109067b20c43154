"""Reusable type definitions for the ACP client."""

from .base import StrictBaseModel
from .exceptions import (
    AcpError,
    DecodeError,
    EncodingConstraintError,
    HandshakeError,
    NameMismatchError,
    ProtocolOutOfRangeError,
    StreamError,
)
from .uint import BaseInt, BaseUint, Int16, Uint16, Uint32

__all__ = [
    # Core types
    "BaseInt",
    "BaseUint",
    "Int16",
    "Uint16",
    "Uint32",
    "StrictBaseModel",
    # Exceptions
    "AcpError",
    "DecodeError",
    "EncodingConstraintError",
    "HandshakeError",
    "NameMismatchError",
    "ProtocolOutOfRangeError",
    "StreamError",
]
