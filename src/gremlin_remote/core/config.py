"""Client configuration loaded from environment variables."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings


class StructureConfig(BaseSettings):
    """Graph structure formatting configuration."""

    model_config = {"env_prefix": "GREMLIN_REMOTE_STRUCTURE_"}

    summary_length: int = 20


class StrategyConfig(BaseSettings):
    """Traversal strategy defaults."""

    model_config = {"env_prefix": "GREMLIN_REMOTE_STRATEGY_"}

    reserved_keys: list[str] = Field(default_factory=lambda: ["id", "label"])


class Settings(BaseSettings):
    """Root client settings."""

    model_config = {"env_prefix": "GREMLIN_REMOTE_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    structure: StructureConfig = Field(default_factory=StructureConfig)
    strategy: StrategyConfig = Field(default_factory=StrategyConfig)


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    """Apply ``settings.log_level`` to the package logger and return it."""
    settings = settings or Settings()
    logger = logging.getLogger("gremlin_remote")
    logger.setLevel(logging.DEBUG if settings.debug else settings.log_level.upper())
    return logger
