"""Ports for reading contributor facts from a repository hosting service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ghroster.domain.model import Commit, Contributor, Repository, Team, UserProfile


class SourceError(RuntimeError):
    """Raised by a source when the service answered with an error."""


class UserNotFoundError(SourceError):
    """Raised when a user profile lookup names an unknown login."""

    def __init__(self, login: str) -> None:
        super().__init__(f"User not found: {login}")
        self.login = login


@runtime_checkable
class ContributorSource(Protocol):
    """Read-only access to an organization's repositories and people.

    Pagination, rate limiting and retries are the source's business.
    """

    def list_org_repositories(self, org: str) -> Sequence[Repository]: ...

    def get_repository(self, owner: str, name: str) -> Repository: ...

    def list_contributors(
        self,
        repository: Repository,
        *,
        include_anonymous: bool = True,
    ) -> Sequence[Contributor]: ...

    def list_commits(self, repository: Repository) -> Sequence[Commit]: ...

    def get_user(self, login: str) -> UserProfile: ...

    def get_team(self, team_id: int) -> Team: ...

    def get_team_members(self, team_id: int) -> Sequence[UserProfile]: ...


__all__ = ["ContributorSource", "SourceError", "UserNotFoundError"]
