"""Tactile converters: image → braille text protocol.

The core only sees ``TactileConverter.convert(image) -> bytes``; the output is
parsed by ``img2brl.tactile.parser``. Two backends:

  * ``BuiltinConverter`` packs 2×4 pixel blocks into Unicode braille cells.
  * ``MagickConverter`` shells out to ImageMagick's ``ubrl`` coder.
"""

from __future__ import annotations

import io
import logging
import subprocess
from abc import ABC, abstractmethod

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from img2brl.models.failures import ConverterFailed
from img2brl.utils.imaging import as_rgba

logger = logging.getLogger(__name__)

# Each braille character (U+2800–U+28FF) encodes a 2×4 dot matrix.
_BRAILLE_BASE = 0x2800
_BRAILLE_DOT_MAP = [
    [0x01, 0x08],
    [0x02, 0x10],
    [0x04, 0x20],
    [0x40, 0x80],
]

# Luma below half range raises a dot; pixels less than half opaque never do.
_DOT_THRESHOLD = 128


class TactileConverter(ABC):
    name = "abstract"

    @abstractmethod
    def convert(self, image: Image.Image) -> bytes:
        """Render ``image`` as ``Width:``/``Height:`` header + braille payload."""


class BuiltinConverter(TactileConverter):
    name = "builtin"

    def convert(self, image: Image.Image) -> bytes:
        grid = dot_grid(image)
        lines = grid_to_braille(grid)
        height = len(lines)
        width = len(lines[0]) if lines else 0
        header = f"Width: {width}\nHeight: {height}\n\n"
        body = "".join(line + "\n" for line in lines)
        return (header + body).encode("utf-8")


class MagickConverter(TactileConverter):
    name = "magick"

    def __init__(self, binary: str = "magick", timeout: float = 30.0) -> None:
        self.binary = binary
        self.timeout = timeout

    def convert(self, image: Image.Image) -> bytes:
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        cmd = [self.binary, "png:-", "ubrl:-"]
        try:
            proc = subprocess.run(
                cmd,
                input=buf.getvalue(),
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ConverterFailed(f"converter not found: {self.binary}") from e
        except subprocess.TimeoutExpired as e:
            raise ConverterFailed(f"converter timed out after {self.timeout:g}s") from e

        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace").strip()
            logger.warning("%s exited with %d: %s", self.binary, proc.returncode, stderr)
            raise ConverterFailed(stderr or f"converter exited with status {proc.returncode}")
        return proc.stdout


def dot_grid(image: Image.Image) -> NDArray[np.bool_]:
    """Binary dot matrix: True where the pixel is dark and opaque."""
    rgba = np.asarray(as_rgba(image), dtype=np.float64)
    if rgba.ndim != 3 or rgba.size == 0:
        return np.zeros((0, 0), dtype=bool)
    luma = 0.299 * rgba[..., 0] + 0.587 * rgba[..., 1] + 0.114 * rgba[..., 2]
    return (luma < _DOT_THRESHOLD) & (rgba[..., 3] >= _DOT_THRESHOLD)


def grid_to_braille(grid: NDArray[np.bool_]) -> list[str]:
    """Render a binary grid as rows of Unicode braille.

    Each character represents a 2-wide × 4-tall pixel block; partial blocks at
    the right and bottom edges are padded with empty dots.
    """
    rows, cols = grid.shape
    if rows == 0 or cols == 0:
        return []
    pad_r = (4 - rows % 4) % 4
    pad_c = (2 - cols % 2) % 2
    if pad_r or pad_c:
        grid = np.pad(grid, ((0, pad_r), (0, pad_c)), constant_values=False)
    rows, cols = grid.shape

    lines = []
    for br in range(0, rows, 4):
        line = []
        for bc in range(0, cols, 2):
            cp = _BRAILLE_BASE
            for dr in range(4):
                for dc in range(2):
                    if grid[br + dr, bc + dc]:
                        cp |= _BRAILLE_DOT_MAP[dr][dc]
            line.append(chr(cp))
        lines.append("".join(line))
    return lines


def create_converter(backend: str, *, magick_binary: str = "magick", timeout: float = 30.0) -> TactileConverter:
    if backend == "magick":
        return MagickConverter(binary=magick_binary, timeout=timeout)
    if backend != "builtin":
        logger.warning("Unknown converter backend %r, using builtin", backend)
    return BuiltinConverter()
