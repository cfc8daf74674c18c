"""Transform pipeline: runs the enabled transforms in stage order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from img2brl.engine.context import ImageContext
from img2brl.engine.registry import TransformRegistry, get_registry

logger = logging.getLogger(__name__)


class TransformPipeline:
    """Orchestrates trim → normalize → negate → resize."""

    def __init__(self, registry: TransformRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: ImageContext) -> ImageContext:
        """Apply every transform enabled by ``ctx.options``.

        Transform errors are not caught here: a failing transform aborts the
        request rather than yielding a half-transformed image.
        """
        start = time.perf_counter()
        specs = self.registry.enabled_for(ctx.options)

        for spec in specs:
            t0 = time.perf_counter()
            before = ctx.size
            spec.fn(ctx)
            ctx.completed_transforms.append(spec.id)
            elapsed = (time.perf_counter() - t0) * 1000
            ctx.timings[spec.id] = round(elapsed, 2)
            logger.debug("  %s %s -> %s in %.1fms", spec.id, before, ctx.size, elapsed)

        logger.debug(
            "Transforms complete: %s in %.0fms",
            ", ".join(ctx.completed_transforms) or "none",
            (time.perf_counter() - start) * 1000,
        )
        return ctx


def load_transforms() -> None:
    """Import all transform modules so @transform decorators fire."""
    package = importlib.import_module("img2brl.engine.transforms")
    for _, module_name, _ in pkgutil.iter_modules(package.__path__):
        importlib.import_module(f"{package.__name__}.{module_name}")


def create_pipeline(registry: TransformRegistry | None = None) -> TransformPipeline:
    """Factory function for creating a pipeline instance."""
    if registry is None:
        load_transforms()
    return TransformPipeline(registry=registry)
