"""Negate: invert grey pixels, keeping alpha.

Only pixels whose colour channels are equal are inverted; coloured pixels
pass through unchanged (ImageMagick ``-negate`` with ``grayscale``).
"""

from __future__ import annotations

import numpy as np
from PIL import Image, ImageOps

from img2brl.engine.context import ImageContext
from img2brl.engine.registry import Stage, transform
from img2brl.utils.imaging import merge_alpha, split_alpha


def invert_grey(image: Image.Image) -> Image.Image:
    inverted = ImageOps.invert(image)
    if image.mode != "RGB":
        return inverted
    rgb = np.asarray(image)
    grey = (rgb[..., 0] == rgb[..., 1]) & (rgb[..., 1] == rgb[..., 2])
    return Image.fromarray(np.where(grey[..., None], np.asarray(inverted), rgb).astype(np.uint8))


@transform(
    id="negate",
    stage=Stage.NEGATE,
    enabled=lambda o: o.negate,
    description="Invert grey pixel intensities",
)
def negate(ctx: ImageContext) -> None:
    base, alpha = split_alpha(ctx.image)
    ctx.image = merge_alpha(invert_grey(base), alpha)
