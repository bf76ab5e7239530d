"""Process configuration from environment variables."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Settings(BaseSettings):
    glyphshape_log_level: str = "info"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Root logging setup for applications embedding the engine."""
    name = (level or settings.glyphshape_log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
    )
