"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest
from PIL import Image, ImageDraw, PngImagePlugin

from img2brl.models.results import ConversionResult, TactileResult
from img2brl.models.source import AcquiredImage, Origin


def make_png(
    size: tuple[int, int] = (200, 100),
    background: str = "white",
    box: tuple[int, int, int, int] | None = None,
    fill: str = "black",
    text: dict[str, str] | None = None,
) -> bytes:
    """Encode a PNG with an optional filled rectangle and tEXt chunks."""
    image = Image.new("RGB", size, background)
    if box is not None:
        ImageDraw.Draw(image).rectangle(box, fill=fill)
    pnginfo = None
    if text:
        pnginfo = PngImagePlugin.PngInfo()
        for key, value in text.items():
            pnginfo.add_text(key, value)
    buf = io.BytesIO()
    image.save(buf, format="PNG", pnginfo=pnginfo)
    return buf.getvalue()


# 200×100, white with a black square in the middle
SAMPLE_PNG = make_png(box=(80, 30, 119, 69))

# Same picture surrounded by a 20px uniform grey border
BORDERED_PNG = make_png(size=(240, 140), background="#808080", box=(20, 20, 219, 119), fill="white")

SAMPLE_PAYLOAD = "⠁⠃⠉\n⠙⠑⠋\n"
SAMPLE_OUTPUT = f"Width: 3\nHeight: 2\n\n{SAMPLE_PAYLOAD}".encode("utf-8")


def make_result(
    origin: Origin = Origin.UPLOAD,
    identifier: str = "cat.png",
    label: str = "",
    comment: str = "",
    payload: str = SAMPLE_PAYLOAD,
) -> ConversionResult:
    return ConversionResult(
        source=AcquiredImage(
            origin=origin,
            identifier=identifier,
            content_type="image/png",
            data=SAMPLE_PNG,
        ),
        format="PNG",
        base_width=200,
        base_height=100,
        tactile=TactileResult(width_cells=3, height_cells=2, payload=payload.encode("utf-8")),
        label=label,
        comment=comment,
    )


@pytest.fixture
def sample_png() -> bytes:
    return SAMPLE_PNG


@pytest.fixture
def bordered_png() -> bytes:
    return BORDERED_PNG


@pytest.fixture
def sample_image() -> Image.Image:
    return Image.open(io.BytesIO(SAMPLE_PNG))


@pytest.fixture
def upload_image() -> AcquiredImage:
    return AcquiredImage(
        origin=Origin.UPLOAD,
        identifier="sample.png",
        content_type="image/png",
        data=SAMPLE_PNG,
    )
