"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from img2brl.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.img2brl_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="img2brl",
        description="Tactile image viewer: convert images to Unicode braille",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Processing-Time", "X-Upstream-Status"],
    )

    # Import all transform modules to trigger registration
    from img2brl.engine.pipeline import load_transforms

    load_transforms()

    from img2brl.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
