"""Renderer interface shared by every output mode."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from img2brl.models.failures import ConversionFailure, HttpFetchFailed, reason_phrase
from img2brl.models.results import ConversionResult

Outcome = ConversionResult | ConversionFailure | None


@dataclass
class Rendered:
    body: bytes
    media_type: str
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)


class ResultRenderer(ABC):
    """Turns a result, a failure, or "no input" into a response body.

    ``None`` stands for the landing view: the request carried no image.
    """

    mode = "abstract"
    media_type = "application/octet-stream"

    def __init__(self, language: str = "en") -> None:
        self.language = language

    def render(self, outcome: Outcome, elapsed: float) -> Rendered:
        headers = {"X-Processing-Time": f"{elapsed:.6f}"}
        status = 200
        if outcome is None:
            body = self.render_landing(elapsed)
        elif isinstance(outcome, ConversionFailure):
            body = self.render_failure(outcome, elapsed)
            status = outcome.status_code
            if isinstance(outcome, HttpFetchFailed):
                code = outcome.upstream_status
                headers["X-Upstream-Status"] = f"{code} {reason_phrase(code)}"
        else:
            body = self.render_result(outcome, elapsed)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return Rendered(body=body, media_type=self.media_type, status_code=status, headers=headers)

    @abstractmethod
    def render_result(self, result: ConversionResult, elapsed: float) -> str | bytes: ...

    @abstractmethod
    def render_failure(self, failure: ConversionFailure, elapsed: float) -> str | bytes: ...

    @abstractmethod
    def render_landing(self, elapsed: float) -> str | bytes: ...
