"""Strict base model shared by the ACP configuration types."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictBaseModel(BaseModel):
    """
    A strict, immutable pydantic base model.

    Field names are serialized in camel case (`protocol_min` becomes
    `protocolMin`) while still accepting the Python names on construction.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )
