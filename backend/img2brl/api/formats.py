"""GET /api/formats: image formats the decoder can read."""

from __future__ import annotations

from fastapi import APIRouter
from PIL import Image

from img2brl.models.responses import FormatsResponse, ImageFormat

router = APIRouter()


def supported_formats() -> list[ImageFormat]:
    Image.init()
    extensions: dict[str, list[str]] = {}
    for ext, name in Image.registered_extensions().items():
        extensions.setdefault(name, []).append(ext)
    return [
        ImageFormat(
            name=name,
            description=Image.MIME.get(name, ""),
            extensions=sorted(extensions.get(name, [])),
        )
        for name in sorted(Image.OPEN)
    ]


@router.get("/formats", response_model=FormatsResponse)
async def formats() -> FormatsResponse:
    return FormatsResponse(formats=supported_formats())
