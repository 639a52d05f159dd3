"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .kuma import KumaConfig, build_kuma_resilience, get_kuma_config
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "KumaConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "build_kuma_resilience",
    "configure_logging",
    "get_kuma_config",
    "require_env_vars",
]
