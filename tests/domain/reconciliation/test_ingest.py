from __future__ import annotations

from ghroster.domain.model import (
    Contributor,
    Developer,
    GitSignature,
    UserProfile,
)
from ghroster.domain.reconciliation import (
    ingest_commits,
    ingest_contributors,
)
from tests.helpers.sources import (
    FakeContributorSource,
    make_commit,
    make_context,
    make_repository,
)


def test_contributors_record_repository_as_evidence() -> None:
    repository = make_repository("nuxeo-core")
    source = FakeContributorSource(
        repositories=[repository],
        contributors={
            repository.full_name: [
                Contributor(login="alice", url="https://x/alice"),
                Contributor(login="carl", url="https://x/carl"),
                Contributor(name="Bob B", email="bob@x.com"),
            ]
        },
    )
    context = make_context(source, core_team={"alice": UserProfile(login="alice")})

    listed = ingest_contributors(context, repository)

    roster = context.roster
    assert listed == 3
    assert roster.get_by_login("alice").commits == set()  # type: ignore[union-attr]
    assert roster.get_by_login("carl").commits == {repository.html_url}  # type: ignore[union-attr]
    bob = roster.get_by_name("Bob B")
    assert bob is not None
    assert bob.commits == {repository.html_url}
    assert bob.emails == {"bob@x.com"}


def test_contributors_merge_into_existing_records() -> None:
    first = make_repository("a")
    second = make_repository("b")
    source = FakeContributorSource(
        repositories=[first, second],
        contributors={
            first.full_name: [Contributor(name="Bob B")],
            second.full_name: [Contributor(name="Bob B", email="bob@x.com")],
        },
    )
    context = make_context(source)

    ingest_contributors(context, first)
    ingest_contributors(context, second)

    bob = context.roster.get_by_name("Bob B")
    assert len(context.roster) == 1
    assert bob is not None
    assert bob.commits == {first.html_url, second.html_url}
    assert bob.emails == {"bob@x.com"}


def test_nameless_anonymous_contributors_are_skipped() -> None:
    repository = make_repository("a")
    source = FakeContributorSource(
        repositories=[repository],
        contributors={repository.full_name: [Contributor(email="ghost@x.com")]},
    )
    context = make_context(source)

    ingest_contributors(context, repository)

    assert len(context.roster) == 0


def test_commits_create_records_for_both_identities() -> None:
    repository = make_repository("a")
    commit = make_commit(
        repository,
        "1",
        author="Dan D",
        email="dan@x.com",
        committer=GitSignature(name="Eve E", email="eve@x.com"),
    )
    source = FakeContributorSource(repositories=[repository], commits={repository.full_name: [commit]})
    context = make_context(source)

    walked = ingest_commits(context, repository)

    assert walked == 1
    dan = context.roster.get_by_name("Dan D")
    eve = context.roster.get_by_name("Eve E")
    assert dan is not None
    assert eve is not None
    assert dan.emails == {"dan@x.com"}
    assert dan.commits == {commit.url}
    assert eve.commits == {commit.url}


def test_commits_reach_login_records_through_known_names() -> None:
    repository = make_repository("a")
    commit = make_commit(repository, "1", author="Ann A", email="ann@x.com")
    source = FakeContributorSource(repositories=[repository], commits={repository.full_name: [commit]})
    context = make_context(source)
    ann = context.roster.add(Developer(login="ann", display_name="Ann A"))
    context.roster.refresh_names()

    ingest_commits(context, repository)

    assert context.roster.orphans() == []
    assert ann.commits == {commit.url}


def test_commits_of_core_members_are_not_tallied() -> None:
    repository = make_repository("a")
    commit = make_commit(repository, "1", author="Alice", email="alice@nuxeo.com", login="alice")
    other = make_commit(repository, "2", author="Carl", email="carl@x.com", login="carl")
    source = FakeContributorSource(
        repositories=[repository], commits={repository.full_name: [commit, other]}
    )
    context = make_context(source, core_team={"alice": UserProfile(login="alice")})

    ingest_commits(context, repository)

    assert context.roster.get_by_login("alice").commits == set()  # type: ignore[union-attr]
    assert context.roster.get_by_login("carl").commits == {other.url}  # type: ignore[union-attr]
