"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env, optional_int_env, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .github import GitHubConfig, get_github_config
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import StorageConfig, default_roster_path, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "GitHubConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "default_roster_path",
    "get_github_config",
    "get_storage_config",
    "optional_env",
    "optional_int_env",
    "require_env_vars",
]
