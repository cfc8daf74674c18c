"""img2brl image transform engine."""

from img2brl.engine.registry import transform, Stage, get_registry
from img2brl.engine.context import ImageContext
from img2brl.engine.pipeline import TransformPipeline, create_pipeline

__all__ = [
    "transform",
    "Stage",
    "get_registry",
    "ImageContext",
    "TransformPipeline",
    "create_pipeline",
]
