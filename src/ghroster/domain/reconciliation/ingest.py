"""Ingestion passes: contributor lists (always) and commit streams (exhaustive)."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ghroster.domain.model import Developer

if TYPE_CHECKING:
    from ghroster.domain.model import Commit, GitSignature, Repository, UserProfile

    from .context import ReconciliationContext

log = getLogger(__name__)


def ingest_contributors(context: ReconciliationContext, repository: Repository) -> int:
    """Record every contributor of ``repository``; returns how many were listed.

    The repository itself is the evidence. Core team members are not tallied.
    """

    roster = context.roster
    contributors = context.source.list_contributors(repository, include_anonymous=True)
    for contributor in contributors:
        incoming = Developer.from_contributor(contributor)
        if contributor.login is None:
            if not contributor.name:
                log.debug("Skipping nameless anonymous contributor of %s", repository.full_name)
                continue
            developer = roster.get_by_name(contributor.name)
            developer = roster.add(incoming) if developer is None else developer.merge_from(incoming)
            developer.add_repository(repository)
            continue
        developer = roster.get_by_login(contributor.login)
        developer = roster.add(incoming) if developer is None else developer.merge_from(incoming)
        if not context.is_core_member(contributor.login):
            developer.add_repository(repository)
    log.debug("%s contributors in %s", len(contributors), repository.full_name)
    return len(contributors)


def ingest_commits(context: ReconciliationContext, repository: Repository) -> int:
    """Walk author and committer of every commit in ``repository``."""

    log.info("Parsing commits of %s", repository.name)
    commits = context.commits.commits_for(repository)
    for commit in commits:
        _ingest_identity(context, commit, commit.author, commit.author_signature)
        _ingest_identity(context, commit, commit.committer, commit.committer_signature)
    return len(commits)


def _ingest_identity(
    context: ReconciliationContext,
    commit: Commit,
    user: UserProfile | None,
    signature: GitSignature | None,
) -> None:
    roster = context.roster
    if user is None or user.login is None:
        if signature is None or not signature.name:
            return
        developer = roster.lookup_name(signature.name)
        if developer is None:
            incoming = Developer.anonymous_named(signature.name)
            incoming.add_email(signature.email)
            developer = roster.add(incoming)
            roster.remember_name(signature.name, developer)
        developer.add_commit(commit.url)
        return

    developer = roster.get_by_login(user.login)
    if developer is None:
        developer = roster.add(Developer.from_profile(user))
        roster.remember_name(developer.display_name, developer)
    if not context.is_core_member(user.login):
        developer.add_commit(commit.url)
