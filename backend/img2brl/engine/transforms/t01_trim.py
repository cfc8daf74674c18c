"""Trim: crop away the uniform border.

The border colour is taken from the top-left pixel. An image that is entirely
border colour is left as it is.
"""

from __future__ import annotations

import numpy as np

from img2brl.engine.context import ImageContext
from img2brl.engine.registry import Stage, transform
from img2brl.utils.imaging import as_rgba


@transform(
    id="trim",
    stage=Stage.TRIM,
    enabled=lambda o: o.trim,
    description="Remove uniform-colour border",
)
def trim(ctx: ImageContext) -> None:
    box = content_bbox(ctx.image)
    if box is None or box == (0, 0, *ctx.size):
        return
    ctx.image = ctx.image.crop(box)


def content_bbox(image) -> tuple[int, int, int, int] | None:
    """Bounding box (left, upper, right, lower) of pixels differing from the corner."""
    arr = np.asarray(as_rgba(image))
    if arr.size == 0:
        return None
    mask = np.any(arr != arr[0, 0], axis=-1)
    rows = np.flatnonzero(mask.any(axis=1))
    cols = np.flatnonzero(mask.any(axis=0))
    if len(rows) == 0:
        return None
    return (int(cols[0]), int(rows[0]), int(cols[-1]) + 1, int(rows[-1]) + 1)
