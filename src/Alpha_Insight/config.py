"""Application configuration read once from the process environment.

``AppConfig`` is frozen: it is built at start-up (CLI command or app
factory) and handed to the services that need it. Nothing else in the
package reads ``os.environ`` for analysis settings.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from Alpha_Insight.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_MODEL: Final[str] = "gemini-3-pro-preview"
DEFAULT_THINKING_BUDGET: Final[int] = 2000
DEFAULT_HISTORY_DAYS: Final[int] = 30
DEFAULT_SYMBOL: Final[str] = "NVDA"
POPULAR_SYMBOLS: Final[tuple[str, ...]] = ("AAPL", "TSLA", "NVDA", "MSFT", "GOOGL", "BTC")

ENV_API_KEY: Final[str] = "API_KEY"
ENV_MODEL: Final[str] = "ALPHA_INSIGHT_MODEL"
ENV_THINKING_BUDGET: Final[str] = "ALPHA_INSIGHT_THINKING_BUDGET"
ENV_HISTORY_DAYS: Final[str] = "ALPHA_INSIGHT_HISTORY_DAYS"


class AppConfig(BaseModel):
    """Immutable runtime settings for the analysis service and dashboard."""

    model_config = ConfigDict(frozen=True)

    api_key: SecretStr | None = None
    model: str = DEFAULT_MODEL
    thinking_budget: int = Field(default=DEFAULT_THINKING_BUDGET, ge=0)
    history_days: int = Field(default=DEFAULT_HISTORY_DAYS, ge=0)
    default_symbol: str = DEFAULT_SYMBOL
    popular_symbols: tuple[str, ...] = POPULAR_SYMBOLS

    @property
    def analysis_configured(self) -> bool:
        """True when an API key is available for the analysis provider."""
        return self.api_key is not None and bool(self.api_key.get_secret_value())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Build a config from *environ* (defaults to ``os.environ``).

        Raises:
            ConfigError: If a numeric setting is not a non-negative integer.
        """
        env = os.environ if environ is None else environ

        raw_key = env.get(ENV_API_KEY, "").strip()
        if not raw_key:
            logger.warning("%s is not set; AI analysis requests will fail", ENV_API_KEY)

        return cls(
            api_key=SecretStr(raw_key) if raw_key else None,
            model=env.get(ENV_MODEL, "").strip() or DEFAULT_MODEL,
            thinking_budget=_read_non_negative_int(
                env, ENV_THINKING_BUDGET, DEFAULT_THINKING_BUDGET
            ),
            history_days=_read_non_negative_int(env, ENV_HISTORY_DAYS, DEFAULT_HISTORY_DAYS),
        )


def _read_non_negative_int(env: Mapping[str, str], key: str, default: int) -> int:
    """Parse ``env[key]`` as an int >= 0, returning *default* when unset."""
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        msg = f"{key} must be an integer, got {raw!r}"
        raise ConfigError(msg) from exc
    if value < 0:
        msg = f"{key} must be >= 0, got {value}"
        raise ConfigError(msg)
    return value
