"""Pydantic models describing the GitHub REST payloads we read."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class GitHubBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class RepositoryPayload(GitHubBaseModel):
    id: int
    name: str
    full_name: str
    html_url: str
    private: bool = False
    fork: bool = False


class ContributorPayload(GitHubBaseModel):
    """Entry of ``/repos/{owner}/{repo}/contributors``.

    With ``anon=true`` the list also holds ``type == "Anonymous"`` entries
    that only carry the git name and email.
    """

    type: str | None = None
    login: str | None = None
    html_url: str | None = None
    name: str | None = None
    email: str | None = None
    contributions: int = 0

    _normalize_text = field_validator("login", "name", "email", mode="before")(_blank_to_none)

    @property
    def anonymous(self) -> bool:
        return self.login is None or self.type == "Anonymous"


class SimpleUserPayload(GitHubBaseModel):
    # commit authors come back as {} when GitHub cannot map the git identity
    login: str | None = None
    html_url: str | None = None


class UserPayload(SimpleUserPayload):
    name: str | None = None
    email: str | None = None
    company: str | None = None

    _normalize_text = field_validator("name", "email", "company", mode="before")(_blank_to_none)


class GitActorPayload(GitHubBaseModel):
    name: str | None = None
    email: str | None = None


class CommitDetailPayload(GitHubBaseModel):
    author: GitActorPayload | None = None
    committer: GitActorPayload | None = None


class CommitPayload(GitHubBaseModel):
    sha: str
    html_url: str
    commit: CommitDetailPayload
    author: SimpleUserPayload | None = None
    committer: SimpleUserPayload | None = None


class TeamPayload(GitHubBaseModel):
    id: int
    name: str
    slug: str | None = None
