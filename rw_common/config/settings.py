"""Polling and retry settings for table models."""

from __future__ import annotations

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from rw_common.config.env import parse_duration_env, parse_float_env
from rw_common.errors import ConfigurationError

_ENV_FIELDS = {
    "refresh_rate": ("RW_REFRESH_RATE", parse_duration_env),
    "init_refresh_rate": ("RW_INIT_REFRESH_RATE", parse_duration_env),
    "max_retry_elapsed": ("RW_MAX_RETRY_ELAPSED", parse_duration_env),
    "backoff_multiplier": ("RW_BACKOFF_MULTIPLIER", parse_float_env),
}


class TableSettings(BaseModel):
    """Timing knobs for the background reconciler (all durations in seconds)."""

    refresh_rate: float = Field(default=2.0, gt=0)
    init_refresh_rate: float = Field(default=0.3, gt=0)
    max_retry_elapsed: float = Field(default=150.0, gt=0)
    backoff_multiplier: float = Field(default=1.5, ge=1.0)
    max_backoff_interval: float = Field(default=60.0, gt=0)
    backoff_jitter: float = Field(default=0.5, ge=0.0, le=1.0)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _check_intervals(self) -> "TableSettings":
        if self.max_backoff_interval < self.init_refresh_rate:
            raise ValueError("max_backoff_interval must be >= init_refresh_rate")
        return self

    @classmethod
    def build(cls, **overrides: Any) -> "TableSettings":
        """Validate settings, raising ConfigurationError instead of ValidationError."""
        try:
            return cls(**overrides)
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid table settings",
                context={"overrides": overrides},
                cause=exc,
            ) from exc

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> "TableSettings":
        """Build settings from ``RW_*`` variables.

        Priority: explicit overrides > environment variables > defaults.
        Unparseable environment values are rejected rather than ignored.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name, (var, parser) in _ENV_FIELDS.items():
            raw = env.get(var)
            if raw is None:
                continue
            parsed = parser(raw)
            if parsed is None:
                raise ConfigurationError(
                    f"Cannot parse {var}",
                    context={"variable": var, "value": raw},
                )
            values[name] = parsed
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls.build(**values)
