"""Exception hierarchy for the ACP codec and handshake."""

from __future__ import annotations


class AcpError(Exception):
    """
    Base exception for all ACP errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class StreamError(AcpError, OSError):
    """
    Raised when the underlying stream fails or ends before a field is complete.

    This is an I/O failure, so it is also an ``OSError``: callers may catch it
    with the rest of their I/O errors or together with the other ``AcpError``s.
    The ``errno`` and ``strerror`` attributes are always None.

    Attributes:
        field: The wire field kind being transferred (e.g. "UInt16").
        operation: Either "reading" or "writing".
        expected_bytes: Number of bytes the field requires.
        actual_bytes: Number of bytes transferred before the failure.
        detail: Description of the underlying failure, if any.
    """

    def __init__(
        self,
        field: str,
        operation: str,
        *,
        expected_bytes: int,
        actual_bytes: int = 0,
        detail: str | None = None,
    ) -> None:
        self.field = field
        self.operation = operation
        self.expected_bytes = expected_bytes
        self.actual_bytes = actual_bytes
        self.detail = detail

        if detail is not None:
            msg = (
                f"Stream error while {operation} {field} "
                f"({actual_bytes} of {expected_bytes} bytes): {detail}"
            )
        else:
            msg = (
                f"Stream ended prematurely while {operation} {field}: "
                f"needed {expected_bytes} bytes, got {actual_bytes}"
            )

        super().__init__(msg)


class DecodeError(AcpError):
    """
    Raised when bytes read from the wire do not form a valid value.

    Attributes:
        field: The wire field kind being decoded.
        detail: Description of what went wrong.
    """

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"Failed to decode {field}: {detail}")


class EncodingConstraintError(AcpError):
    """
    Raised when a value cannot be represented on the wire.

    Attributes:
        field: The wire field kind being encoded.
        value: The offending value, or its length for strings.
        limit: The largest representable value.
    """

    def __init__(self, field: str, value: object, *, limit: int) -> None:
        self.field = field
        self.value = value
        self.limit = limit
        super().__init__(f"{field} cannot encode {value!r} (limit: {limit})")


class HandshakeError(AcpError):
    """Base class for handshake failures."""


class NameMismatchError(HandshakeError):
    """
    Raised when the peer asserts a different connection name.

    Attributes:
        expected: The name this process expects, as raw bytes.
        received: The name the peer sent, as raw bytes.
    """

    def __init__(self, expected: bytes, received: bytes) -> None:
        self.expected = expected
        self.received = received
        super().__init__(f"Connection name mismatch: expected {expected!r}, got {received!r}")


class ProtocolOutOfRangeError(HandshakeError):
    """
    Raised when the peer proposes an unsupported protocol version.

    The supported range has already been sent to the peer when this is raised.

    Attributes:
        proposed: The version proposed by the peer.
        protocol_min: Lowest supported version (inclusive).
        protocol_max: Highest supported version (inclusive).
    """

    def __init__(self, proposed: int, protocol_min: int, protocol_max: int) -> None:
        self.proposed = proposed
        self.protocol_min = protocol_min
        self.protocol_max = protocol_max
        super().__init__(
            f"Protocol {proposed} is out of range "
            f"(supported range: [{protocol_min}, {protocol_max}])"
        )
