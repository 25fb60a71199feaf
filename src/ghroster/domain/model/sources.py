"""Records handed to the domain by a contributor source.

These are plain snapshots of what the hosting service reported. They are
folded into ``Developer`` records and never kept around afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Repository:
    id: int
    name: str
    full_name: str
    html_url: str
    private: bool = False
    fork: bool = False


@dataclass(frozen=True, slots=True)
class Contributor:
    """Entry of a repository contributor list; anonymous when ``login`` is unset."""

    login: str | None = None
    name: str | None = None
    url: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class UserProfile:
    login: str | None = None
    name: str | None = None
    email: str | None = None
    company: str | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class GitSignature:
    """Free-text author or committer identity recorded in the commit itself."""

    name: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class Commit:
    url: str
    author: UserProfile | None = None
    committer: UserProfile | None = None
    author_signature: GitSignature | None = None
    committer_signature: GitSignature | None = None


@dataclass(frozen=True, slots=True)
class Team:
    id: int
    name: str
