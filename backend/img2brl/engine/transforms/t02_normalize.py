"""Normalize: stretch contrast to the full intensity range."""

from __future__ import annotations

from PIL import ImageOps

from img2brl.engine.context import ImageContext
from img2brl.engine.registry import Stage, transform
from img2brl.utils.imaging import merge_alpha, split_alpha

# Percent of darkest / brightest pixels clipped before stretching
_BLACK_CUTOFF_PCT = 2
_WHITE_CUTOFF_PCT = 1


@transform(
    id="normalize",
    stage=Stage.NORMALIZE,
    enabled=lambda o: o.normalize,
    description="Stretch contrast range",
)
def normalize(ctx: ImageContext) -> None:
    base, alpha = split_alpha(ctx.image)
    base = ImageOps.autocontrast(base, cutoff=(_BLACK_CUTOFF_PCT, _WHITE_CUTOFF_PCT))
    ctx.image = merge_alpha(base, alpha)
