"""
Client for the ACP handshake protocol.

A process started by an ACP host talks to it over its standard streams. Before
anything else, the host asserts its process name and proposes a protocol
version; this package answers that handshake.
"""

from .channel import Channel
from .codec import Codec
from .config import Connection
from .handshake import Handshake, HandshakeState

__all__ = [
    "Channel",
    "Codec",
    "Connection",
    "Handshake",
    "HandshakeState",
]
