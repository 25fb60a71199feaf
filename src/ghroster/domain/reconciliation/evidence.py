"""Email mining over the cached commit history."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ghroster.domain.model import Developer

    from .context import ReconciliationContext

log = getLogger(__name__)


def mine_email(context: ReconciliationContext, developer: Developer) -> bool:
    """Attach the first email found in a commit signed with the developer's name.

    Repositories are scanned in order, author signature before committer
    signature, and scanning stops at the first hit. Returns whether the
    developer has an email afterwards.
    """

    if developer.emails:
        return True
    names = {name for name in (developer.display_name, developer.login) if name}
    if not names:
        return False
    log.debug("Looking for commits from %s", developer.key)
    for repository in context.repositories:
        for commit in context.commits.commits_for(repository):
            for signature in (commit.author_signature, commit.committer_signature):
                if signature is None or signature.name not in names or not signature.email:
                    continue
                developer.add_email(signature.email)
                log.debug("Found %s for %s in %s", signature.email, developer.key, commit.url)
                return True
    return False
