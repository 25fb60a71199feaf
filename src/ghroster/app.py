"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ghroster.adapters.github import GitHubClient
from ghroster.adapters.roster_file import RosterFile
from ghroster.config.github import get_github_config
from ghroster.config.storage import default_roster_path
from ghroster.domain.contributor_check import (
    CheckResult,
    check_contributors,
    select_repositories,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from ghroster.config.github import GitHubConfig
    from ghroster.domain.ports import ContributorSource, RosterStore


log = getLogger(__name__)


def run_contributor_check(
    *,
    repositories: Sequence[str] = (),
    exhaustive: bool = False,
    token: str | None = None,
    input_path: Path | None = None,
    output_path: Path | None = None,
    config: GitHubConfig | None = None,
    source: ContributorSource | None = None,
    store: RosterStore | None = None,
) -> CheckResult:
    """Check the selected repositories using the configured adapters."""

    effective_config = config or get_github_config(
        token=token, require_token=exhaustive and source is None
    )
    organization = effective_config.organization
    effective_source = source or GitHubClient(config=effective_config)
    effective_store = store or RosterFile(
        input_path or default_roster_path(),
        organization,
        output=output_path or default_roster_path(),
    )
    log.info(
        "Starting contributor check: org=%s, authenticated=%s, exhaustive=%s, repositories=%s",
        organization.login,
        effective_config.authenticated,
        exhaustive,
        list(repositories) or "all",
    )

    selected = select_repositories(effective_source, organization, repositories)
    result = check_contributors(
        source=effective_source,
        store=effective_store,
        organization=organization,
        repositories=selected,
        exhaustive=exhaustive,
    )

    log.info(
        "Finished contributor check: developers=%s, unresolved=%s, unsigned=%s",
        result.developers,
        len(result.unresolved),
        result.unsigned,
    )
    return result
