"""Application service checking that every contributor signed the agreement."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from ghroster.domain.model import Affiliation
from ghroster.domain.reconciliation import ReconciliationContext, ReconciliationEngine

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ghroster.domain.model import Organization, Repository
    from ghroster.domain.ports import ContributorSource, RosterStore
    from ghroster.domain.roster import Roster

log = getLogger(__name__)

ALL_REPOSITORIES = "all"


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Outcome of a contributor check run."""

    unsigned: bool
    developers: int
    unresolved: tuple[str, ...]


def select_repositories(
    source: ContributorSource,
    organization: Organization,
    names: Sequence[str] = (),
) -> tuple[Repository, ...]:
    """Resolve command line repository arguments.

    No argument, or the single word ``all``, selects every public,
    non-fork, non-excluded repository of the organization. Otherwise each
    argument may hold several whitespace separated names, either
    ``owner/name`` or a bare name inside the organization.
    """

    if not names or list(names) == [ALL_REPOSITORIES]:
        return _organization_repositories(source, organization)

    selected: list[Repository] = []
    for argument in names:
        for name in argument.split():
            owner, _, repository_name = name.rpartition("/")
            repository = source.get_repository(owner or organization.login, repository_name)
            log.info("Added repository %s for analysis", repository.full_name)
            selected.append(repository)
    return tuple(selected)


def _organization_repositories(
    source: ContributorSource, organization: Organization
) -> tuple[Repository, ...]:
    selected: list[Repository] = []
    for repository in source.list_org_repositories(organization.login):
        if repository.private or repository.fork or organization.is_excluded(repository):
            log.debug("Skipped %s", repository.full_name)
            continue
        selected.append(repository)
    log.info("Added %s repositories of %s for analysis", len(selected), organization.login)
    return tuple(selected)


def check_contributors(
    *,
    source: ContributorSource,
    store: RosterStore,
    organization: Organization,
    repositories: Sequence[Repository],
    exhaustive: bool = False,
    engine: ReconciliationEngine | None = None,
) -> CheckResult:
    """Load the roster, reconcile it against ``repositories`` and save it back.

    Any error raised before saving leaves the stored roster untouched.
    """

    roster = store.load()
    log.info("Loaded %s developers", len(roster))
    context = ReconciliationContext(
        roster=roster,
        source=source,
        organization=organization,
        repositories=tuple(repositories),
    )
    summary = (engine or ReconciliationEngine()).run(context, exhaustive=exhaustive)
    unsigned = store.save(roster)
    return CheckResult(
        unsigned=unsigned,
        developers=summary.developers,
        unresolved=summary.unresolved,
    )


def has_unsigned_contributors(roster: Roster, organization: Organization) -> bool:
    """Whether anybody outside the company, not aliased elsewhere, has not signed."""

    owners = roster.alias_owners()
    for developer in roster.developers():
        if developer.signed or roster.is_aliased(developer, owners):
            continue
        if organization.affiliation_of(developer.company) is Affiliation.INTERNAL:
            continue
        log.debug("Unsigned contributor: %s", developer.describe())
        return True
    return False
