"""Output modes."""

from __future__ import annotations

import logging

from img2brl.rendering.base import Rendered, ResultRenderer
from img2brl.rendering.markup import MarkupRenderer
from img2brl.rendering.plain import PlainRenderer
from img2brl.rendering.structured import StructuredRenderer

logger = logging.getLogger(__name__)

RENDERERS: dict[str, type[ResultRenderer]] = {
    "markup": MarkupRenderer,
    "structured": StructuredRenderer,
    "plain": PlainRenderer,
}

# Legacy mode names
_ALIASES = {"html": "markup", "json": "structured", "text": "plain"}


def resolve_mode(mode: str | None, default: str = "markup") -> str:
    if not mode:
        return default
    name = _ALIASES.get(mode, mode)
    if name not in RENDERERS:
        logger.warning("Invalid mode %r specified, falling back to %s", mode, default)
        return default
    return name


def get_renderer(mode: str | None, language: str = "en", default: str = "markup") -> ResultRenderer:
    return RENDERERS[resolve_mode(mode, default)](language=language)


__all__ = [
    "RENDERERS",
    "Rendered",
    "ResultRenderer",
    "get_renderer",
    "resolve_mode",
]
