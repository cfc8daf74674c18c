"""Conversion service: one image from raw bytes to parsed braille."""

from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from img2brl.engine.context import ImageContext
from img2brl.engine.pipeline import TransformPipeline, create_pipeline
from img2brl.models.failures import UnsupportedFormat
from img2brl.models.options import TransformOptions
from img2brl.models.results import ConversionResult
from img2brl.models.source import AcquiredImage
from img2brl.models.state import RequestState, RequestTrace
from img2brl.tactile.converter import BuiltinConverter, TactileConverter
from img2brl.tactile.parser import parse_tactile

logger = logging.getLogger(__name__)


class ConversionService:
    def __init__(
        self,
        converter: TactileConverter | None = None,
        pipeline: TransformPipeline | None = None,
    ) -> None:
        self.converter = converter or BuiltinConverter()
        self.pipeline = pipeline or create_pipeline()

    def convert(
        self,
        acquired: AcquiredImage,
        options: TransformOptions,
        trace: RequestTrace | None = None,
    ) -> ConversionResult:
        """Run one image through the whole pipeline.

        Raises:
            UnsupportedFormat: the bytes are not a decodable image.
            MalformedTactileOutput: converter output broke the protocol.
            ConverterFailed: the converter could not run.
        """
        trace = trace or RequestTrace(state=RequestState.ACQUIRING)

        trace.advance(RequestState.DECODING)
        image = decode_image(acquired.data)
        base_width, base_height = image.size
        label = _text_meta(image.info, "label", "Label", "Title")
        comment = _text_meta(image.info, "comment", "Comment")
        fmt = image.format or "unknown"

        trace.advance(RequestState.TRANSFORMING)
        ctx = self.pipeline.run(ImageContext(image=image, options=options))

        trace.advance(RequestState.CONVERTING)
        raw = self.converter.convert(ctx.image)

        trace.advance(RequestState.PARSING)
        tactile = parse_tactile(raw)

        logger.info(
            "Converted %s %s %dx%d -> %dx%d cells (%s)",
            fmt,
            acquired.identifier,
            base_width,
            base_height,
            tactile.width_cells,
            tactile.height_cells,
            ", ".join(ctx.completed_transforms) or "no transforms",
        )
        return ConversionResult(
            source=acquired,
            format=fmt,
            base_width=base_width,
            base_height=base_height,
            tactile=tactile,
            label=label,
            comment=comment,
        )


def decode_image(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except UnidentifiedImageError as e:
        raise UnsupportedFormat(str(e)) from e
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        raise UnsupportedFormat(f"cannot decode image: {e}") from e
    return image


def _text_meta(info: dict, *keys: str) -> str:
    for key in keys:
        value = info.get(key)
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""
