"""JSON rendering.

All string fields go through pydantic's JSON encoder, so quotes and control
characters in labels, comments and identifiers are escaped.
"""

from __future__ import annotations

from img2brl.models.failures import ConversionFailure
from img2brl.models.responses import (
    Runtime,
    SourceSummary,
    StructuredFailure,
    StructuredLanding,
    StructuredResult,
)
from img2brl.models.results import ConversionResult
from img2brl.rendering.base import ResultRenderer


class StructuredRenderer(ResultRenderer):
    mode = "structured"
    media_type = "application/json; charset=UTF-8"

    def render_result(self, result: ConversionResult, elapsed: float) -> str:
        src = result.source
        summary = SourceSummary(
            **{src.identifier_key: src.identifier},
            content_type=src.content_type,
            format=result.format,
            label=result.label or None,
            comment=result.comment or None,
            width=result.base_width,
            height=result.base_height,
        )
        doc = StructuredResult(
            src=summary,
            width=result.tactile.width_cells,
            height=result.tactile.height_cells,
            braille=result.tactile.text,
            runtime=Runtime(seconds=elapsed),
        )
        return doc.model_dump_json(by_alias=True, exclude_none=True)

    def render_failure(self, failure: ConversionFailure, elapsed: float) -> str:
        doc = StructuredFailure(
            exception=failure.kind,
            message=failure.message,
            runtime=Runtime(seconds=elapsed),
        )
        return doc.model_dump_json()

    def render_landing(self, elapsed: float) -> str:
        return StructuredLanding(runtime=Runtime(seconds=elapsed)).model_dump_json()
