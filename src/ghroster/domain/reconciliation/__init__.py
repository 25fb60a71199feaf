"""Reconciliation of contributor facts into the developer roster.

Flow of one run:
1) fetch the core team
2) ingest every repository's contributor list
3) reconcile (gap-fill, absorb, infer, mine, merge, refresh)
4) in exhaustive mode, ingest every commit stream and reconcile again
"""

from __future__ import annotations

from .cache import CommitCache, ProfileCache
from .context import ReconciliationContext
from .engine import ReconciliationEngine, ReconciliationSummary
from .evidence import mine_email
from .ingest import ingest_commits, ingest_contributors
from .reconcile import ReconcileReport, reconcile_roster
from .team import TeamMismatchError, fetch_core_team

__all__ = [
    "CommitCache",
    "ProfileCache",
    "ReconcileReport",
    "ReconciliationContext",
    "ReconciliationEngine",
    "ReconciliationSummary",
    "TeamMismatchError",
    "fetch_core_team",
    "ingest_commits",
    "ingest_contributors",
    "mine_email",
    "reconcile_roster",
]
