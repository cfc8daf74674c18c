"""Pillow helpers shared by the transforms and the builtin converter."""

from __future__ import annotations

from PIL import Image

# Modes Pillow's ImageOps point operations accept directly
_POINT_MODES = ("L", "RGB")
# Integer/float modes Pillow will not turn into RGB(A) in one step
_WIDE_MODES = ("I", "I;16", "I;16B", "I;16L", "F")


def as_rgba(image: Image.Image) -> Image.Image:
    if image.mode in _WIDE_MODES:
        image = image.convert("L")
    return image.convert("RGBA")


def split_alpha(image: Image.Image) -> tuple[Image.Image, Image.Image | None]:
    """Return (colour image in L or RGB, alpha band or None)."""
    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("RGBA")

    alpha = None
    if image.mode in ("LA", "RGBA", "PA"):
        alpha = image.getchannel("A")

    if image.mode in _POINT_MODES:
        base = image
    elif image.mode in ("1", "LA") or image.mode in _WIDE_MODES:
        base = image.convert("L")
    else:
        base = image.convert("RGB")
    return base, alpha


def merge_alpha(base: Image.Image, alpha: Image.Image | None) -> Image.Image:
    if alpha is None:
        return base
    out = base.convert("LA" if base.mode == "L" else "RGBA")
    out.putalpha(alpha)
    return out
