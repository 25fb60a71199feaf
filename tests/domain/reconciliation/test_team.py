from __future__ import annotations

import pytest

from ghroster.domain.model import Team, UserProfile
from ghroster.domain.reconciliation import TeamMismatchError, fetch_core_team
from tests.helpers.sources import FakeContributorSource, make_context


def test_fetch_core_team_indexes_members_by_login() -> None:
    alice = UserProfile(login="alice")
    source = FakeContributorSource(team=Team(id=35421, name="developers"), team_members=[alice])
    context = make_context(source)

    members = fetch_core_team(context)

    assert members == {"alice": alice}
    assert context.is_core_member("alice")
    assert not context.is_core_member("bob")
    assert not context.is_core_member(None)


def test_fetch_core_team_rejects_unexpected_team() -> None:
    source = FakeContributorSource(team=Team(id=35421, name="Admins"))
    context = make_context(source)

    with pytest.raises(TeamMismatchError, match="Wrong team ID 35421") as excinfo:
        fetch_core_team(context)

    assert excinfo.value.actual == "Admins"
    assert source.calls["get_team_members"] == 0
