"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    img2brl_env: str = "development"
    img2brl_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Request defaults
    default_mode: str = "markup"
    default_columns: int = 88

    # Remote fetch
    fetch_timeout_seconds: float = 10.0
    fetch_max_redirects: int = 3

    # Tactile converter: "builtin" (Pillow) or "magick" (ImageMagick ubrl coder)
    converter_backend: str = "builtin"
    magick_binary: str = "magick"
    converter_timeout_seconds: float = 30.0

    # Document language
    default_language: str = "en"
    available_languages: list[str] = ["en", "de"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
