"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .square import (
    DEFAULT_SQUARE_API_VERSION,
    SQUARE_BASE_URLS,
    SquareAccountConfig,
    SquareConfig,
    get_square_config,
    square_resilience_config,
)

__all__ = [
    "DEFAULT_SQUARE_API_VERSION",
    "SQUARE_BASE_URLS",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SquareAccountConfig",
    "SquareConfig",
    "configure_logging",
    "get_square_config",
    "optional_env_var",
    "require_env_vars",
    "square_resilience_config",
]
