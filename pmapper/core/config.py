#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Configuration management for pmapper using Pydantic Settings.
"""

import logging
import os
import threading
from pathlib import Path
from typing import Optional
from pydantic import Field, ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


def _available_cpus() -> int:
    return os.cpu_count() or 1


class PmapperConfig(BaseSettings):
    """
    Main configuration class for pmapper.

    Loads settings from environment variables and .env file.
    All settings can be overridden with PMAPPER_ prefix.

    Example:
        export PMAPPER_NUM_WORKERS=4
        export PMAPPER_BACKEND=thread
    """

    # Processing Settings
    num_workers: int = Field(
        default_factory=_available_cpus,
        ge=1,
        le=512,
        description="Size of the worker pool (defaults to the CPU count)"
    )
    backend: str = Field(
        default="process",
        pattern="^(process|thread)$",
        description="Worker pool backend: process or thread"
    )
    chunksize: Optional[int] = Field(
        default=None,
        ge=1,
        description="Items per dispatch (None uses the sqrt heuristic)"
    )
    show_progress: bool = Field(
        default=True,
        description="Render a progress bar while mapping"
    )

    # Logging Settings
    log_level: str = Field(
        default="INFO",
        description="Log level for the pmapper logger"
    )
    log_to_file: bool = Field(
        default=False,
        description="Also write logs to a file in log_dir"
    )
    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory for log files"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PMAPPER_",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs):
        """Initialize config and validate it."""
        # Load .env file manually to ensure it's loaded before pydantic processes it
        from dotenv import load_dotenv
        load_dotenv()

        try:
            super().__init__(**kwargs)
        except PydanticValidationError as e:
            from pmapper.core.exceptions import ConfigurationError
            problems = "\n".join(
                f"  - {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ConfigurationError(f"\n\nConfiguration Errors:\n{problems}") from e

        self._validate_config()

        if self.log_to_file:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    def _validate_config(self):
        """Validate configuration and provide helpful error messages."""
        errors = []

        level = logging.getLevelName(self.log_level.upper())
        if not isinstance(level, int):
            errors.append(
                f"Unknown log level '{self.log_level}'. "
                "Use DEBUG, INFO, WARNING, ERROR or CRITICAL."
            )

        if self.num_workers > _available_cpus() and self.backend == "process":
            from pmapper.core.logging import get_logger
            logger = get_logger(__name__)
            logger.warning(
                f"num_workers ({self.num_workers}) exceeds the CPU count "
                f"({_available_cpus()}). Processes will compete for cores."
            )

        if errors:
            from pmapper.core.exceptions import ConfigurationError
            error_msg = "\n\nConfiguration Errors:\n" + "\n".join(f"  - {err}" for err in errors)
            raise ConfigurationError(error_msg)


# Singleton instance with thread-safe initialization
_config_instance: Optional[PmapperConfig] = None
_config_lock = threading.Lock()


def get_config(**kwargs) -> PmapperConfig:
    """
    Get or create the global configuration instance.

    Thread-safe singleton pattern using double-checked locking.

    Args:
        **kwargs: Optional configuration overrides

    Returns:
        PmapperConfig instance
    """
    global _config_instance
    # First check without lock (fast path)
    if _config_instance is None:
        with _config_lock:
            # Second check with lock (thread-safe)
            if _config_instance is None:
                _config_instance = PmapperConfig(**kwargs)
    return _config_instance


def reset_config():
    """Reset the global configuration instance (mainly for testing)."""
    global _config_instance
    with _config_lock:
        _config_instance = None
