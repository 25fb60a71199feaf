"""Translate GitHub payloads into domain records."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghroster.domain.model import (
    Commit,
    Contributor,
    GitSignature,
    Repository,
    Team,
    UserProfile,
)

if TYPE_CHECKING:
    from .schema import (
        CommitPayload,
        ContributorPayload,
        GitActorPayload,
        RepositoryPayload,
        SimpleUserPayload,
        TeamPayload,
        UserPayload,
    )


def translate_repository(payload: RepositoryPayload) -> Repository:
    return Repository(
        id=payload.id,
        name=payload.name,
        full_name=payload.full_name,
        html_url=payload.html_url,
        private=payload.private,
        fork=payload.fork,
    )


def translate_contributor(payload: ContributorPayload) -> Contributor:
    if payload.anonymous:
        return Contributor(name=payload.name, email=payload.email)
    return Contributor(login=payload.login, url=payload.html_url)


def translate_user(payload: UserPayload | SimpleUserPayload) -> UserProfile:
    return UserProfile(
        login=payload.login,
        name=getattr(payload, "name", None),
        email=getattr(payload, "email", None),
        company=getattr(payload, "company", None),
        url=payload.html_url,
    )


def translate_commit(payload: CommitPayload) -> Commit:
    return Commit(
        url=payload.html_url,
        author=_linked_user(payload.author),
        committer=_linked_user(payload.committer),
        author_signature=_signature(payload.commit.author),
        committer_signature=_signature(payload.commit.committer),
    )


def translate_team(payload: TeamPayload) -> Team:
    return Team(id=payload.id, name=payload.name)


def _linked_user(payload: SimpleUserPayload | None) -> UserProfile | None:
    if payload is None or payload.login is None:
        return None
    return translate_user(payload)


def _signature(payload: GitActorPayload | None) -> GitSignature | None:
    if payload is None:
        return None
    return GitSignature(name=payload.name, email=payload.email)
