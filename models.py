"""Request model for a command-line distance computation.

argparse only splits the command line; this model owns the validation
of what it produced, in particular the optional read limit, which must
be a plain decimal string that fits ``size_t``.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bounds import SIZE
from checked import SIZE_ARITH
from engine import Mode


class DistanceRequest(BaseModel):
    """One comparison of two files."""

    model_config = ConfigDict(frozen=True)

    mode: Mode
    first: Path
    second: Path
    read_limit: int = Field(
        default=SIZE.hi,
        ge=SIZE.lo,
        le=SIZE.hi,
        description="Maximum number of bytes read from each file",
    )

    @field_validator("read_limit", mode="before")
    @classmethod
    def parse_read_limit(cls, v: object) -> object:
        if v is None:
            return SIZE.hi
        if isinstance(v, str):
            return SIZE_ARITH.parse(v)
        return v
