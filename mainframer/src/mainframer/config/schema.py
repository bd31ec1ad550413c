"""Pydantic models describing the intermediate mainframer configuration."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


MIN_COMPRESSION_LEVEL = 1
MAX_COMPRESSION_LEVEL = 9


class IntermediateRemoteMachine(BaseModel):
    """Settings of the ``remoteMachine`` section."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    host: Optional[str] = None


class IntermediateCompression(BaseModel):
    """Settings of the ``compression`` section; each level is optional."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    local: Optional[int] = Field(default=None, ge=MIN_COMPRESSION_LEVEL, le=MAX_COMPRESSION_LEVEL)
    remote: Optional[int] = Field(default=None, ge=MIN_COMPRESSION_LEVEL, le=MAX_COMPRESSION_LEVEL)


class IntermediateConfig(BaseModel):
    """Root of the validated configuration.

    Field names follow Python conventions; the serialisation aliases keep the
    key spelling used in configuration files.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    remote_machine: Optional[IntermediateRemoteMachine] = Field(
        default=None, serialization_alias="remoteMachine"
    )
    compression: Optional[IntermediateCompression] = None
