"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ConvertParams(BaseModel):
    """Raw form/query fields of a convert request.

    Checkbox fields are kept as strings: presence with a non-false value means on.
    """

    url: str | None = Field(default=None, description="URL of an image to fetch")
    mode: str | None = Field(default=None, description="markup, structured or plain")
    trim: str | None = None
    normalize: str | None = None
    negate: str | None = None
    resize: str | None = None
    cols: str | None = Field(default=None, description="Target width in braille cells")
    lang: str | None = Field(default=None, description="Document language")
