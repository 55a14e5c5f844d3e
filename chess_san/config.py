"""Configuration module for loading environment variables and parser settings."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self

# Track whether environment has been loaded
_ENV_LOADED = False

ENV_PREFIX = "CHESS_SAN_"


def load_env(filename: str | None = None, override: bool = False) -> Path | None:
    """Load environment variables from .env file.

    Once loaded, subsequent calls are skipped unless override=True.
    Tests should use override=True to reload different configs.

    Args:
        filename: Optional .env filename. Defaults to ENV_FILE env var or '.env'.
        override: Whether to override existing environment variables.

    Returns:
        Path to the .env file that was loaded, or None if not found.
    """
    global _ENV_LOADED

    if _ENV_LOADED and not override:
        return None

    env_file = filename or os.environ.get("ENV_FILE", ".env")
    dotenv_path = find_dotenv(env_file, usecwd=True)

    if dotenv_path:
        load_dotenv(dotenv_path, override=override)
        _ENV_LOADED = True
        logger.debug(f"Loaded environment from: {dotenv_path}")
        return Path(dotenv_path)
    else:
        logger.debug(f"No .env file found: {env_file}")
        return None


class ParserSettings(BaseModel):
    """Policy knobs of the SAN parser.

    The defaults accept every literal the grammar describes; the parser never
    reads the environment on its own, callers opt in through from_env().
    """

    min_literal_length: int = Field(default=2, ge=1)
    max_literal_length: int = Field(default=12, ge=1)
    # Classical usage treats '#' as implying '+'; set False to reject "Qh5+#".
    allow_check_with_checkmate: bool = True

    model_config = ConfigDict(frozen=True, extra="forbid")

    @model_validator(mode="after")
    def validate_length_bounds(self) -> Self:
        """Ensure the length bounds describe a non-empty range.

        Returns:
            Validated instance.

        Raises:
            ValueError: If the minimum exceeds the maximum.
        """
        if self.min_literal_length > self.max_literal_length:
            raise ValueError(
                "`min_literal_length` cannot exceed `max_literal_length` "
                f"({self.min_literal_length} > {self.max_literal_length})"
            )
        return self

    @classmethod
    def from_env(cls, load: bool = True) -> "ParserSettings":
        """Build settings from CHESS_SAN_* environment variables.

        Args:
            load: Whether to load a .env file first (see load_env).

        Returns:
            Settings with environment overrides applied over the defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        if load:
            load_env()

        overrides = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                overrides[name] = raw.strip()

        if overrides:
            logger.debug(f"Parser settings overridden from environment: {overrides}")
        return cls.model_validate(overrides)


DEFAULT_SETTINGS = ParserSettings()
