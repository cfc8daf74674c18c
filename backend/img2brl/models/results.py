"""Conversion results."""

from __future__ import annotations

from dataclasses import dataclass

from img2brl.models.source import AcquiredImage


@dataclass(frozen=True)
class TactileResult:
    """Parsed converter output. ``payload`` is kept verbatim."""

    width_cells: int
    height_cells: int
    payload: bytes

    @property
    def text(self) -> str:
        return self.payload.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class ConversionResult:
    source: AcquiredImage
    format: str
    # Base pixel size of the decoded image, before any transform
    base_width: int
    base_height: int
    tactile: TactileResult
    label: str = ""
    comment: str = ""
