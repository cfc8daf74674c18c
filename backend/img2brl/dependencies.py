"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Depends

from img2brl.acquisition.fetcher import SourceAcquirer
from img2brl.config import Settings, settings
from img2brl.engine.conversion import ConversionService
from img2brl.tactile.converter import create_converter


def get_settings() -> Settings:
    return settings


def get_acquirer(cfg: Settings = Depends(get_settings)) -> SourceAcquirer:
    return SourceAcquirer(
        timeout=cfg.fetch_timeout_seconds,
        max_redirects=cfg.fetch_max_redirects,
    )


def get_conversion_service(cfg: Settings = Depends(get_settings)) -> ConversionService:
    converter = create_converter(
        cfg.converter_backend,
        magick_binary=cfg.magick_binary,
        timeout=cfg.converter_timeout_seconds,
    )
    return ConversionService(converter=converter)
