"""Square account configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

SQUARE_BASE_URLS: Final[dict[str, str]] = {
    "production": "https://connect.squareup.com",
    "sandbox": "https://connect.squareupsandbox.com",
}
DEFAULT_SQUARE_API_VERSION: Final[str] = "2024-10-17"
SQUARE_TIMEOUT_SECONDS: Final[float] = 30.0


@dataclass(frozen=True, slots=True)
class SquareAccountConfig:
    """Connection settings for one Square account."""

    name: str
    access_token: str
    resilience: ResilienceConfig


@dataclass(frozen=True, slots=True)
class SquareConfig:
    """The pair of accounts a clone run reads from and writes to."""

    source: SquareAccountConfig
    target: SquareAccountConfig


def square_resilience_config(
    name: str,
    *,
    access_token: str,
    environment: str = "production",
    api_version: str = DEFAULT_SQUARE_API_VERSION,
) -> ResilienceConfig:
    try:
        base_url = SQUARE_BASE_URLS[environment]
    except KeyError:
        known = ", ".join(sorted(SQUARE_BASE_URLS))
        raise ConfigurationError(
            f"Unknown Square environment {environment!r} (expected one of: {known})"
        ) from None

    return ResilienceConfig(
        name=name,
        base_url=base_url,
        timeout_seconds=SQUARE_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=4),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={
            "Authorization": f"Bearer {access_token}",
            "Square-Version": api_version,
            "Accept": "application/json",
        },
    )


def get_square_config() -> SquareConfig:
    values = require_env_vars(("SQUARE_SOURCE_ACCESS_TOKEN", "SQUARE_TARGET_ACCESS_TOKEN"))
    environment = (optional_env_var("SQUARE_ENVIRONMENT") or "production").lower()
    api_version = optional_env_var("SQUARE_API_VERSION") or DEFAULT_SQUARE_API_VERSION

    accounts: dict[str, SquareAccountConfig] = {}
    for name, variable in (
        ("source", "SQUARE_SOURCE_ACCESS_TOKEN"),
        ("target", "SQUARE_TARGET_ACCESS_TOKEN"),
    ):
        token = values[variable]
        accounts[name] = SquareAccountConfig(
            name=name,
            access_token=token,
            resilience=square_resilience_config(
                f"square-{name}",
                access_token=token,
                environment=environment,
                api_version=api_version,
            ),
        )

    return SquareConfig(source=accounts["source"], target=accounts["target"])
