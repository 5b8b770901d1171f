"""
Configuration for the rpg-resolver server.

Values come from environment variables, optionally loaded from a ``.env``
file by python-dotenv:

    RPG_RESOLVER_LOG_LEVEL         Logging level name (default: INFO)
    RPG_RESOLVER_SEED              Integer seed for reproducible rolls (default: unset)
    RPG_RESOLVER_DEFAULT_DC        DC used when a tool call gives none (default: 15)
    RPG_RESOLVER_ORACLE_FALLBACK   Likelihood used for unknown labels (default: 50/50)
"""

from __future__ import annotations

import logging
import os
import random
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

from .dice import DiceEngine
from .models import DifficultyClass, LikelihoodLevel

ENV_PREFIX = "RPG_RESOLVER_"


class ResolverConfig(BaseModel):
    """Runtime settings for the resolver server."""

    log_level: str = Field(
        default="INFO",
        description="Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the dice generator; unset means OS randomness"
    )
    default_dc: int = Field(
        default=int(DifficultyClass.MEDIUM),
        ge=1,
        le=30,
        description="Difficulty Class used when a check does not specify one"
    )
    oracle_fallback: LikelihoodLevel = Field(
        default=LikelihoodLevel.FIFTY_FIFTY,
        description="Likelihood substituted when the oracle gets an unknown label"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return level

    @field_validator("oracle_fallback", mode="before")
    @classmethod
    def validate_oracle_fallback(cls, v: str | LikelihoodLevel) -> LikelihoodLevel:
        return LikelihoodLevel.parse(v)

    def build_dice_engine(self) -> DiceEngine:
        """Create the dice engine for this configuration."""
        if self.seed is None:
            return DiceEngine()
        return DiceEngine(random.Random(self.seed))


def load_config(environ: Mapping[str, str] | None = None) -> ResolverConfig:
    """Build a ResolverConfig from environment variables.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    env = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for name in ResolverConfig.model_fields:
        raw = env.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw.strip() != "":
            values[name] = raw.strip()
    return ResolverConfig(**values)
