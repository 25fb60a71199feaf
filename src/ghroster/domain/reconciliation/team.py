"""Core team lookup: the authority on who is internal staff."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ghroster.domain.model import UserProfile

    from .context import ReconciliationContext

log = getLogger(__name__)


class TeamMismatchError(RuntimeError):
    """Raised when the configured team id does not point at the expected team."""

    def __init__(self, *, team_id: int, expected: str, actual: str) -> None:
        super().__init__(f"Wrong team ID {team_id}: expected {expected!r}, got {actual!r}")
        self.team_id = team_id
        self.expected = expected
        self.actual = actual


def fetch_core_team(context: ReconciliationContext) -> dict[str, UserProfile]:
    organization = context.organization
    team = context.source.get_team(organization.core_team_id)
    if team.name.casefold() != organization.core_team_name.casefold():
        raise TeamMismatchError(
            team_id=organization.core_team_id,
            expected=organization.core_team_name,
            actual=team.name,
        )
    members = context.source.get_team_members(organization.core_team_id)
    context.core_team = {member.login: member for member in members if member.login}
    log.info("Core team %r has %s members", team.name, len(context.core_team))
    return context.core_team
