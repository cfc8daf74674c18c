"""Plain-text rendering: the braille payload and nothing else."""

from __future__ import annotations

from img2brl.models.failures import ConversionFailure, FetchFailed, UnsupportedFormat
from img2brl.models.results import ConversionResult
from img2brl.rendering.base import ResultRenderer


class PlainRenderer(ResultRenderer):
    mode = "plain"
    media_type = "text/plain; charset=UTF-8"

    def render_result(self, result: ConversionResult, elapsed: float) -> bytes:
        return result.tactile.payload

    def render_failure(self, failure: ConversionFailure, elapsed: float) -> str:
        if isinstance(failure, FetchFailed):
            prefix = "Error while fetching URL"
        elif isinstance(failure, UnsupportedFormat):
            prefix = "Unsupported image format"
        else:
            prefix = "Error"
        message = " ".join(failure.message.split())
        return f"{prefix}: {message}\n"

    def render_landing(self, elapsed: float) -> str:
        return ""
