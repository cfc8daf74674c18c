"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0
    converter: str = "builtin"


class ImageFormat(BaseModel):
    name: str
    description: str = ""
    extensions: list[str] = Field(default_factory=list)


class FormatsResponse(BaseModel):
    formats: list[ImageFormat] = Field(default_factory=list)


# ── Structured (JSON) rendering ──


class Runtime(BaseModel):
    seconds: float


class SourceSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str | None = None
    url: str | None = None
    content_type: str = Field(..., alias="content-type")
    format: str
    label: str | None = None
    comment: str | None = None
    width: int
    height: int


class StructuredResult(BaseModel):
    src: SourceSummary
    width: int
    height: int
    braille: str
    runtime: Runtime


class StructuredFailure(BaseModel):
    exception: str
    message: str
    runtime: Runtime


class StructuredLanding(BaseModel):
    runtime: Runtime
