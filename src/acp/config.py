"""
Connection configuration for the ACP client.

The host process starts us with a fixed process name and expects us to
support some contiguous range of protocol versions. Both come from process
configuration: command-line flags, or the environment variables below.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from pydantic import field_validator, model_validator
from typing_extensions import Self

from .codec import MAX_STRING_LENGTH
from .types import StrictBaseModel, Uint16

ENV_NAME: Final = "ACP_NAME"
"""Environment variable holding the expected connection name."""

ENV_PROTOCOL_MIN: Final = "ACP_PROTOCOL_MIN"
"""Environment variable holding the lowest supported protocol version."""

ENV_PROTOCOL_MAX: Final = "ACP_PROTOCOL_MAX"
"""Environment variable holding the highest supported protocol version."""

DEFAULT_PROTOCOL_MIN: Final = 0
"""Lowest supported protocol version when none is configured."""

DEFAULT_PROTOCOL_MAX: Final = 0
"""Highest supported protocol version when none is configured."""


class Connection(StrictBaseModel):
    """A named endpoint and the protocol versions it accepts."""

    name: str
    """Process name the peer must assert during the handshake."""

    protocol_min: Uint16 = Uint16(DEFAULT_PROTOCOL_MIN)
    """Lowest supported protocol version (inclusive)."""

    protocol_max: Uint16 = Uint16(DEFAULT_PROTOCOL_MAX)
    """Highest supported protocol version (inclusive)."""

    @field_validator("name")
    @classmethod
    def _name_fits_wire(cls, value: str) -> str:
        size = len(value.encode("utf-8"))
        if size > MAX_STRING_LENGTH:
            raise ValueError(f"name is {size} bytes, limit is {MAX_STRING_LENGTH}")
        return value

    @model_validator(mode="after")
    def _range_is_ordered(self) -> Self:
        if self.protocol_min > self.protocol_max:
            raise ValueError(
                f"protocol_min ({self.protocol_min}) exceeds protocol_max ({self.protocol_max})"
            )
        return self

    @property
    def encoded_name(self) -> bytes:
        """The name as it appears on the wire."""
        return self.name.encode("utf-8")

    def supports(self, version: int) -> bool:
        """Check whether `version` lies in the supported range."""
        return self.protocol_min <= version <= self.protocol_max

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        name: str | None = None,
        protocol_min: int | None = None,
        protocol_max: int | None = None,
    ) -> Self:
        """
        Build a connection from environment variables.

        Explicit arguments take precedence over the environment; anything left
        as None is read from `environ`, then falls back to the defaults.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.
            name: Connection name overriding ``$ACP_NAME``.
            protocol_min: Version overriding ``$ACP_PROTOCOL_MIN``.
            protocol_max: Version overriding ``$ACP_PROTOCOL_MAX``.

        Raises:
            ValueError: If the name is unset or a version is not an integer.
            pydantic.ValidationError: If the values are out of range.
        """
        env = os.environ if environ is None else environ

        if name is None:
            name = env.get(ENV_NAME)
        if not name:
            raise ValueError(f"{ENV_NAME} is not set")

        if protocol_min is None:
            protocol_min = int(env.get(ENV_PROTOCOL_MIN, DEFAULT_PROTOCOL_MIN))
        if protocol_max is None:
            protocol_max = int(env.get(ENV_PROTOCOL_MAX, DEFAULT_PROTOCOL_MAX))

        return cls(name=name, protocol_min=protocol_min, protocol_max=protocol_max)
