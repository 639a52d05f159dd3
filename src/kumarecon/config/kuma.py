"""Kuma control-plane configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, optional_env_var, require_env_vars
from .errors import MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

KUMA_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True, slots=True)
class KumaConfig:
    """Holds the control-plane endpoint and credentials."""

    endpoint: str
    resilience: ResilienceConfig
    token: str | None = None


def build_kuma_resilience(
    endpoint: str,
    *,
    token: str | None = None,
    timeout_seconds: float = KUMA_TIMEOUT_SECONDS,
    max_retries: int = 0,
    requests_per_second: int = 0,
) -> ResilienceConfig:
    """HTTP behaviour for the control plane; ``requests_per_second=0`` disables throttling."""

    return ResilienceConfig(
        name="kuma",
        base_url=endpoint.rstrip("/"),
        timeout_seconds=timeout_seconds,
        retry=RetryPolicy(total=max_retries),
        ratelimit=(
            RateLimit(max_calls=requests_per_second, per_seconds=1.0)
            if requests_per_second
            else None
        ),
        default_headers={"Authorization": f"Bearer {token}"} if token else None,
    )


def get_kuma_config(
    *,
    endpoint: str | None = None,
    token: str | None = None,
    resilience: ResilienceConfig | None = None,
) -> KumaConfig:
    """Build the control-plane config; explicit arguments override the environment."""

    if endpoint is None:
        endpoint = require_env_vars(("KUMA_ENDPOINT",))["KUMA_ENDPOINT"]
    endpoint = endpoint.strip().rstrip("/")
    if not endpoint:
        raise MissingConfigurationError("Missing configuration for: KUMA_ENDPOINT")
    if token is None:
        token = optional_env_var("KUMA_TOKEN")

    return KumaConfig(
        endpoint=endpoint,
        token=token,
        resilience=resilience
        or build_kuma_resilience(
            endpoint,
            token=token,
            timeout_seconds=env_float("KUMA_TIMEOUT_SECONDS", KUMA_TIMEOUT_SECONDS),
            max_retries=env_int("KUMA_MAX_RETRIES", 0),
            requests_per_second=env_int("KUMA_RATE_LIMIT_PER_SECOND", 0),
        ),
    )
