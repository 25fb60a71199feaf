from __future__ import annotations

import pytest

from ghroster.domain.model import Organization

_ENV_VARS = (
    "GITHUB_TOKEN",
    "GITHUB_API_URL",
    "GHROSTER_ORG",
    "GHROSTER_COMPANY",
    "GHROSTER_EMAIL_DOMAIN",
    "GHROSTER_TEAM_ID",
    "GHROSTER_TEAM_NAME",
    "GHROSTER_EXCLUDES",
    "GHROSTER_HTTP_CACHE",
    "GHROSTER_DATA_DIR",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def organization() -> Organization:
    return Organization()
