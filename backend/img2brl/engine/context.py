"""ImageContext: the single mutable state object flowing through all transforms."""

from __future__ import annotations

from dataclasses import dataclass, field

from PIL import Image

from img2brl.models.options import TransformOptions


@dataclass
class ImageContext:
    """Shared state for one image while it passes through the pipeline."""

    image: Image.Image
    options: TransformOptions = field(default_factory=TransformOptions)
    # Transform IDs in the order they ran
    completed_transforms: list[str] = field(default_factory=list)
    # Per-transform wall time in milliseconds
    timings: dict[str, float] = field(default_factory=dict)

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size
