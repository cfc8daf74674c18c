"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from img2brl.config import Settings
from img2brl.dependencies import get_settings
from img2brl.engine.registry import get_registry
from img2brl.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(cfg: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        transforms_registered=get_registry().count,
        converter=cfg.converter_backend,
    )
