"""
ACP connection handshake.

The host process opens the conversation. We verify its identity, then agree
on a protocol version:

    Host                            Client
    ----                            ------
    String name           ->
                          <-        Bool (name matches)
    UInt16 proposed       ->                      only if the name matched
                          <-        Bool (version accepted)
                          <-        UInt16 min, UInt16 max   only if rejected

State machine:

    INIT -> VERIFYING_NAME -> NEGOTIATING_PROTOCOL -> CONNECTED
                  |                    |
                  +------> FAILED <----+

CONNECTED and FAILED are terminal. A handshake object runs exactly once.
"""

from __future__ import annotations

import logging
from enum import IntEnum, auto

from .channel import Channel
from .codec import Codec
from .config import Connection
from .types import (
    AcpError,
    HandshakeError,
    NameMismatchError,
    ProtocolOutOfRangeError,
    Uint16,
)

logger = logging.getLogger(__name__)


class HandshakeState(IntEnum):
    """State machine states for the connection handshake."""

    INIT = auto()
    """Initial state, nothing exchanged yet."""

    VERIFYING_NAME = auto()
    """Waiting for or checking the peer's asserted name."""

    NEGOTIATING_PROTOCOL = auto()
    """Name verified, waiting for or checking the proposed version."""

    CONNECTED = auto()
    """Handshake finished successfully."""

    FAILED = auto()
    """Handshake aborted. The channel must not be reused for this connection."""


class Handshake:
    """
    Client side of the ACP handshake.

    Usage:
        connection = Connection(name="SWAPP", protocol_min=Uint16(1), protocol_max=Uint16(3))
        handshake = Handshake(Channel.stdio(), connection)
        version = handshake.connect()

    The logger is injected so callers and tests control where diagnostics go.
    """

    def __init__(
        self,
        channel: Channel,
        connection: Connection,
        log: logging.Logger | None = None,
    ) -> None:
        self.codec = Codec(channel)
        self.connection = connection
        self._log = log if log is not None else logger
        self._state = HandshakeState.INIT

    @property
    def state(self) -> HandshakeState:
        """Current state machine state."""
        return self._state

    @property
    def connected(self) -> bool:
        """Whether the handshake completed successfully."""
        return self._state == HandshakeState.CONNECTED

    def connect(self) -> Uint16:
        """
        Run the full handshake.

        Returns:
            The protocol version the peer proposed and we accepted.

        Raises:
            HandshakeError: If called more than once.
            NameMismatchError: If the peer asserts a different name.
                No protocol bytes are exchanged afterwards.
            ProtocolOutOfRangeError: If the proposed version is unsupported.
                The supported range has been sent to the peer.
            StreamError: If the channel fails or closes mid-handshake.
        """
        if self._state != HandshakeState.INIT:
            raise HandshakeError(f"Invalid state for connect: {self._state.name}")

        self._log.info("ACP started name: %s", self.connection.name)
        try:
            self._verify_name()
            self._log.info("Connection verified")

            version = self._negotiate_protocol()
            self._log.info("Protocol established")
        except AcpError:
            self._state = HandshakeState.FAILED
            raise

        self._log.info("Connected")
        return version

    def _verify_name(self) -> None:
        """Read the peer's name and report whether it matches ours."""
        self._state = HandshakeState.VERIFYING_NAME

        expected = self.connection.encoded_name
        received = self.codec.get_string()
        match = received == expected
        self._log.debug("Received name (%d bytes)", len(received))
        self._log.info(
            "Name: %s; From peer: %s; Match: %s",
            self.connection.name,
            received.decode("utf-8", errors="replace"),
            match,
        )

        self.codec.put_bool(match)
        if not match:
            self._state = HandshakeState.FAILED
            raise NameMismatchError(expected, received)

        self._state = HandshakeState.NEGOTIATING_PROTOCOL

    def _negotiate_protocol(self) -> Uint16:
        """Read the proposed version; accept it or send back our range."""
        proposed = self.codec.get_uint16()
        self._log.info("Protocol from peer: %d", proposed)

        if not self.connection.supports(proposed):
            self.codec.put_bool(False)
            self.codec.put_uint16(self.connection.protocol_min)
            self.codec.put_uint16(self.connection.protocol_max)
            self._state = HandshakeState.FAILED
            raise ProtocolOutOfRangeError(
                int(proposed),
                int(self.connection.protocol_min),
                int(self.connection.protocol_max),
            )

        self.codec.put_bool(True)
        self._state = HandshakeState.CONNECTED
        return proposed
