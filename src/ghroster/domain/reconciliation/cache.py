"""Per-run caches for data several reconciliation steps read."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ghroster.domain.ports.fetching import SourceError, UserNotFoundError

if TYPE_CHECKING:
    from ghroster.domain.model import Commit, Repository, UserProfile
    from ghroster.domain.ports import ContributorSource

log = getLogger(__name__)


class CommitCache:
    """Commit lists keyed by repository id, fetched on first access.

    Entries are never invalidated within a run. A repository whose commits
    cannot be listed counts as having none.
    """

    def __init__(self, source: ContributorSource) -> None:
        self._source = source
        self._commits_by_repository: dict[int, tuple[Commit, ...]] = {}

    def commits_for(self, repository: Repository) -> tuple[Commit, ...]:
        cached = self._commits_by_repository.get(repository.id)
        if cached is not None:
            return cached
        try:
            log.debug("Get commits from %s", repository.full_name)
            commits = tuple(self._source.list_commits(repository))
        except SourceError:
            log.exception("Failure with: %s", repository.html_url)
            commits = ()
        self._commits_by_repository[repository.id] = commits
        return commits


class ProfileCache:
    """User profile lookups by login; unknown logins are remembered as ``None``."""

    def __init__(self, source: ContributorSource) -> None:
        self._source = source
        self._profiles: dict[str, UserProfile | None] = {}

    def lookup(self, login: str) -> UserProfile | None:
        if login in self._profiles:
            return self._profiles[login]
        try:
            profile: UserProfile | None = self._source.get_user(login)
        except UserNotFoundError:
            log.debug("No profile for %s", login)
            profile = None
        self._profiles[login] = profile
        return profile
