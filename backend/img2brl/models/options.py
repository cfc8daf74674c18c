"""Transform options requested for one conversion."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from img2brl.models.failures import InvalidOption

logger = logging.getLogger(__name__)

_DIGITS_RE = re.compile(r"[0-9]+")

# Browsers submit a checked box as "on"; anything else leaves it unchecked
_CHECKED = "on"


@dataclass(frozen=True)
class TransformOptions:
    trim: bool = False
    normalize: bool = False
    negate: bool = False
    # Target width in braille cells, not pixels
    resize_columns: int | None = None

    @property
    def resize_width_px(self) -> int | None:
        if self.resize_columns is None:
            return None
        return self.resize_columns * 2

    @classmethod
    def from_form(
        cls,
        *,
        trim: str | None = None,
        normalize: str | None = None,
        negate: str | None = None,
        resize: str | None = None,
        cols: str | None = None,
        default_columns: int = 88,
    ) -> TransformOptions:
        """Build options from raw form fields.

        An unusable ``cols`` value only drops the resize step.
        """
        resize_columns = None
        if checkbox(resize):
            try:
                resize_columns = parse_columns(cols, default_columns)
            except InvalidOption as e:
                logger.debug("Skipping resize: %s", e)
        return cls(
            trim=checkbox(trim),
            normalize=checkbox(normalize),
            negate=checkbox(negate),
            resize_columns=resize_columns,
        )


def checkbox(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() == _CHECKED


def parse_columns(value: str | None, default: int = 88) -> int:
    """Parse a positive column count, falling back to ``default`` when absent."""
    if value is None:
        return default
    text = value.strip()
    if not _DIGITS_RE.fullmatch(text):
        raise InvalidOption("columns", value)
    columns = int(text)
    if columns <= 0:
        raise InvalidOption("columns", value)
    return columns
