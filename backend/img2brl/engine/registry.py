"""Transform registry: every image transform is a function registered via decorator.

Usage:
    @transform(id="negate", stage=Stage.NEGATE, enabled=lambda o: o.negate)
    def negate(ctx: ImageContext) -> None:
        ctx.image = invert(ctx.image)

Transforms always run in ``Stage`` order, whatever order they were registered in.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from img2brl.engine.context import ImageContext
    from img2brl.models.options import TransformOptions

logger = logging.getLogger(__name__)


class Stage(enum.IntEnum):
    TRIM = 1
    NORMALIZE = 2
    NEGATE = 3
    RESIZE = 4


@dataclass
class TransformSpec:
    id: str
    stage: Stage
    fn: Callable[["ImageContext"], None]
    enabled: Callable[["TransformOptions"], bool]
    description: str = ""


class TransformRegistry:
    """Singleton registry of all transforms, at most one per stage."""

    def __init__(self) -> None:
        self._transforms: dict[str, TransformSpec] = {}

    def register(self, spec: TransformSpec) -> None:
        if spec.id in self._transforms:
            raise ValueError(f"Duplicate transform ID: {spec.id}")
        for other in self._transforms.values():
            if other.stage == spec.stage:
                raise ValueError(f"Stage {spec.stage.name} already taken by {other.id}")
        self._transforms[spec.id] = spec
        logger.debug("Registered transform %s (%s)", spec.id, spec.stage.name)

    def get(self, transform_id: str) -> TransformSpec:
        return self._transforms[transform_id]

    def all(self) -> list[TransformSpec]:
        return sorted(self._transforms.values(), key=lambda s: s.stage)

    def enabled_for(self, options: TransformOptions) -> list[TransformSpec]:
        return [s for s in self.all() if s.enabled(options)]

    @property
    def count(self) -> int:
        return len(self._transforms)


# Module-level singleton
_registry = TransformRegistry()


def get_registry() -> TransformRegistry:
    return _registry


def transform(
    *,
    id: str,
    stage: Stage,
    enabled: Callable[["TransformOptions"], bool],
    description: str = "",
):
    """Decorator to register a transform function."""

    def decorator(fn: Callable[["ImageContext"], None]):
        spec = TransformSpec(
            id=id,
            stage=stage,
            fn=fn,
            enabled=enabled,
            description=description,
        )
        _registry.register(spec)
        return fn

    return decorator
