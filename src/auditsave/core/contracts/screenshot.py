"""Pydantic v2 models for filmstrip frames and result identity records.

Notes
-----
- `Screenshot.timestamp` keeps ints as ints so a frame taken at ``1000`` is
  rendered as ``1000`` and not ``1000.0``.
- `datauri` is embedded as-is; no re-encoding or validation of the payload.
- Falsy `generatedTime` values fall back to the current time.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Screenshot(BaseModel):
    """A single filmstrip frame captured during a page load."""

    # Extra keys from a provider are kept and embedded with the frame.
    model_config = ConfigDict(frozen=True, extra="allow")

    timestamp: int | float = Field(description="Capture time in milliseconds")
    datauri: str = Field(description="Image payload as a data: URI")


class ResultIdentity(BaseModel):
    """The part of an audit result used to derive output filenames."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    url: str = Field(description="Audited page URL; must be absolute")
    generated_time: datetime | None = Field(
        default=None,
        alias="generatedTime",
        description="When the result was produced; defaults to now",
    )

    @field_validator("generated_time", mode="before")
    @classmethod
    def _empty_means_now(cls, v: Any) -> Any:
        """Treat falsy times (``""``, ``0``, ``None``) as absent."""
        return v or None


__all__ = ["Screenshot", "ResultIdentity"]
