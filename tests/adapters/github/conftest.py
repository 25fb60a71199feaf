"""Shared fixtures for GitHub adapter tests."""

from __future__ import annotations

import pytest

from ghroster.config.github import GitHubConfig
from ghroster.config.http_resilience import ResilienceConfig
from ghroster.domain.model import Organization
from tests.helpers.http import API_URL


@pytest.fixture
def github_config() -> GitHubConfig:
    return GitHubConfig(
        token="secret",
        organization=Organization(),
        resilience=ResilienceConfig(name="github", base_url=API_URL, cache=None),
    )
