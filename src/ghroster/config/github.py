"""GitHub configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from ghroster.domain.model import Organization

from .env import optional_env, optional_int_env, require_env_vars
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .storage import get_storage_config

DEFAULT_GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_TIMEOUT_SECONDS = 30.0

_CACHE_MODES = ("memory", "sqlite", "off")


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Holds GitHub API access and organization settings."""

    token: str | None
    organization: Organization
    resilience: ResilienceConfig

    @property
    def authenticated(self) -> bool:
        return self.token is not None


def get_github_config(*, token: str | None = None, require_token: bool = False) -> GitHubConfig:
    token = token or _env_token()
    if require_token and token is None:
        token = require_env_vars(("GITHUB_TOKEN",))["GITHUB_TOKEN"]

    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
        "User-Agent": "ghroster",
    }
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"

    resilience = ResilienceConfig(
        name="github",
        base_url=optional_env("GITHUB_API_URL", DEFAULT_GITHUB_API_URL),
        timeout_seconds=GITHUB_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        retry=RetryPolicy(total=4),
        cache=_cache_config(),
        default_headers=headers,
    )
    return GitHubConfig(token=token, organization=_organization(), resilience=resilience)


def _env_token() -> str | None:
    value = os.getenv("GITHUB_TOKEN")
    if value is None or not value.strip():
        return None
    return value.strip()


def _organization() -> Organization:
    defaults = Organization()
    excludes = optional_env("GHROSTER_EXCLUDES", ",".join(sorted(defaults.excluded_repositories)))
    return Organization(
        login=optional_env("GHROSTER_ORG", defaults.login),
        company=optional_env("GHROSTER_COMPANY", defaults.company),
        email_domain=optional_env("GHROSTER_EMAIL_DOMAIN", defaults.email_domain).lstrip("@"),
        core_team_id=optional_int_env("GHROSTER_TEAM_ID", defaults.core_team_id),
        core_team_name=optional_env("GHROSTER_TEAM_NAME", defaults.core_team_name),
        excluded_repositories=frozenset(
            name.strip() for name in excludes.split(",") if name.strip()
        ),
    )


def _cache_config() -> CacheConfig | None:
    mode = optional_env("GHROSTER_HTTP_CACHE", "memory").lower()
    if mode not in _CACHE_MODES:
        raise ConfigurationError(
            f"GHROSTER_HTTP_CACHE must be one of {', '.join(_CACHE_MODES)}, got {mode!r}"
        )
    if mode == "off":
        return None
    if mode == "sqlite":
        path = get_storage_config().http_cache_path()
        return CacheConfig(backend="sqlite", sqlite_path=str(path))
    return CacheConfig(backend="memory")
