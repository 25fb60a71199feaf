"""State shared by the reconciliation phases of one run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .cache import CommitCache, ProfileCache

if TYPE_CHECKING:
    from ghroster.domain.model import Organization, Repository, UserProfile
    from ghroster.domain.ports import ContributorSource
    from ghroster.domain.roster import Roster


@dataclass(slots=True)
class ReconciliationContext:
    roster: Roster
    source: ContributorSource
    organization: Organization
    repositories: tuple[Repository, ...] = ()
    core_team: dict[str, UserProfile] = field(default_factory=dict[str, "UserProfile"])
    commits: CommitCache = field(init=False, repr=False)
    profiles: ProfileCache = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.commits = CommitCache(self.source)
        self.profiles = ProfileCache(self.source)

    def is_core_member(self, login: str | None) -> bool:
        return login is not None and login in self.core_team
