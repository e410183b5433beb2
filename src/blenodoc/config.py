"""Settings for the blenodoc command line."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Mapping

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

ENV_PREFIX = "BLENODOC_"


class Settings(BaseModel):
    """Options controlling discovery, validation and output."""

    patterns: list[str] = Field(default_factory=lambda: ["*.js"], min_length=1)
    output: Path | None = None
    format: Literal["markdown", "json"] = "markdown"
    strict: bool = False
    title: str = Field(default="API Reference", min_length=1, max_length=200)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, value):
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides
    ) -> Settings:
        """Build settings from ``BLENODOC_*`` variables, then explicit overrides.

        ``BLENODOC_PATTERNS`` is comma separated. Overrides that are None are
        ignored so unset command line flags keep the environment value.

        Raises:
            ConfigError: If any value fails validation.
        """
        environ = os.environ if environ is None else environ
        values: dict = {}
        for field in cls.model_fields:
            raw = environ.get(ENV_PREFIX + field.upper())
            if raw is None or raw == "":
                continue
            if field == "patterns":
                values[field] = [p.strip() for p in raw.split(",") if p.strip()]
            else:
                values[field] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings: {e}") from e
