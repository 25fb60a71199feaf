"""Phase sequencing for one reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from .ingest import ingest_commits, ingest_contributors
from .reconcile import ReconcileReport, reconcile_roster
from .team import fetch_core_team

if TYPE_CHECKING:
    from ghroster.domain.model import Repository, UserProfile

    from .context import ReconciliationContext

log = getLogger(__name__)


class FetchTeam(Protocol):
    def __call__(self, context: ReconciliationContext) -> dict[str, UserProfile]: ...


class IngestRepository(Protocol):
    def __call__(self, context: ReconciliationContext, repository: Repository) -> int: ...


class Reconcile(Protocol):
    def __call__(self, context: ReconciliationContext) -> ReconcileReport: ...


@dataclass(frozen=True, slots=True)
class ReconciliationSummary:
    developers: int
    logged_in: int
    anonymous: int
    unresolved: tuple[str, ...]


@dataclass(slots=True)
class ReconciliationEngine:
    """FETCH_TEAM, contributor pass and reconcile; then, when exhaustive,
    commit pass and reconcile again."""

    fetch_team: FetchTeam = fetch_core_team
    contributors_pass: IngestRepository = ingest_contributors
    commits_pass: IngestRepository = ingest_commits
    reconcile: Reconcile = reconcile_roster

    def run(self, context: ReconciliationContext, *, exhaustive: bool = False) -> ReconciliationSummary:
        self.fetch_team(context)

        found = 0
        for repository in context.repositories:
            found += self.contributors_pass(context, repository)
        log.info("Found %s contributors in %s repositories", found, len(context.repositories))
        report = self.reconcile(context)

        if exhaustive:
            for repository in context.repositories:
                self.commits_pass(context, repository)
            report = self.reconcile(context)

        roster = context.roster
        return ReconciliationSummary(
            developers=len(roster),
            logged_in=len(roster.logged_in()),
            anonymous=len(roster.orphans()),
            unresolved=tuple(report.unresolved),
        )
