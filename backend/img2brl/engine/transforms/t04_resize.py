"""Resize: shrink to the requested number of braille columns.

Each braille cell is two pixels wide, so the target width is ``columns * 2``.
Height follows the aspect ratio. Images already at or below the target width
are never scaled up.
"""

from __future__ import annotations

import logging

from PIL import Image

from img2brl.engine.context import ImageContext
from img2brl.engine.registry import Stage, transform

logger = logging.getLogger(__name__)


@transform(
    id="resize",
    stage=Stage.RESIZE,
    enabled=lambda o: o.resize_columns is not None and o.resize_columns > 0,
    description="Shrink to target braille columns",
)
def resize(ctx: ImageContext) -> None:
    target_w = ctx.options.resize_width_px
    new_size = shrink_size(ctx.size, target_w)
    if new_size == ctx.size:
        logger.debug("  resize: %s already fits %dpx", ctx.size, target_w)
        return
    ctx.image = ctx.image.resize(new_size, Image.Resampling.LANCZOS)


def shrink_size(size: tuple[int, int], target_w: int) -> tuple[int, int]:
    """Size after a shrink-only fit to ``target_w``; unchanged unless wider."""
    w, h = size
    if w <= target_w:
        return size
    return (target_w, max(1, round(h * target_w / w)))
