"""Canonical developer identity record."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any
from uuid import UUID, uuid4

if TYPE_CHECKING:
    from .sources import Contributor, Repository, UserProfile

type OptionalKey = tuple[bool, str]
type SortKey = tuple[
    OptionalKey,
    OptionalKey,
    bool,
    tuple[str, ...],
    OptionalKey,
    OptionalKey,
    tuple[str, ...],
    tuple[str, ...],
]


def new_id() -> UUID:
    return uuid4()


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _optional_key(value: str | None) -> OptionalKey:
    # unset values order first
    return (value is not None, value or "")


def _named_after(developer: Developer, login: str | None) -> bool:
    if login is None:
        return False
    return developer.display_name == login or login in developer.aliases


@dataclass(frozen=True, slots=True)
class DeveloperPatch:
    """Fields copied onto a developer by one enrichment call."""

    login: str | None = None
    display_name: str | None = None
    email: str | None = None
    company: str | None = None
    url: str | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, item.name) is None for item in fields(self))


@dataclass(eq=False, kw_only=True)
class Developer:
    """One person, keyed by ``login`` when known and by ``display_name`` otherwise.

    Evidence sets only grow. ``company`` and ``url`` keep their first value;
    ``signed`` never goes back to false once set.
    """

    id: UUID = field(default_factory=new_id)

    login: str | None = None
    display_name: str | None = None
    emails: set[str] = field(default_factory=set[str])
    company: str | None = None
    url: str | None = None
    aliases: set[str] = field(default_factory=set[str])
    commits: set[str] = field(default_factory=set[str])
    signed: bool = False

    @classmethod
    def anonymous_named(cls, name: str) -> Developer:
        return cls(display_name=name)

    @classmethod
    def from_contributor(cls, contributor: Contributor) -> Developer:
        developer = cls(display_name=contributor.name)
        if contributor.login is not None:
            developer.login = contributor.login
            developer.url = contributor.url
        developer.add_email(contributor.email)
        return developer

    @classmethod
    def from_profile(cls, profile: UserProfile) -> Developer:
        developer = cls(display_name=profile.name)
        if profile.login is not None:
            developer.login = profile.login
            developer.url = profile.url
            developer.company = profile.company
            developer.add_email(profile.email)
        return developer

    @property
    def anonymous(self) -> bool:
        return self.login is None

    @property
    def key(self) -> str | None:
        """Index key: the login, or the display name for anonymous records."""
        return self.login if self.login is not None else self.display_name

    def add_email(self, email: str | None) -> None:
        if email is not None and email.strip():
            self.emails.add(email.strip())

    def add_commit(self, url: str) -> None:
        self.commits.add(url)

    def add_repository(self, repository: Repository) -> None:
        self.commits.add(repository.html_url)

    def confirm_company(self, company: str) -> None:
        """Overwrite the company; only used once membership is confirmed."""
        self.company = company

    def is_complete(self) -> bool:
        return (
            self.login is not None
            and self.display_name is not None
            and bool(self.emails)
            and self.company is not None
        )

    def patch_from(self, profile: UserProfile | None) -> DeveloperPatch:
        """Compute which of ``profile``'s values would fill a gap on this record."""

        if profile is None:
            return DeveloperPatch()
        return DeveloperPatch(
            login=profile.login if self.login is None and not _blank(profile.login) else None,
            display_name=(
                profile.name if _blank(self.display_name) and not _blank(profile.name) else None
            ),
            email=(
                profile.email
                if not _blank(profile.email) and profile.email not in self.emails
                else None
            ),
            company=profile.company if _blank(self.company) and not _blank(profile.company) else None,
            url=profile.url if _blank(self.url) and not _blank(profile.url) else None,
        )

    def apply(self, patch: DeveloperPatch) -> None:
        if patch.login is not None:
            self.login = patch.login
        if patch.display_name is not None:
            self.display_name = patch.display_name
        self.add_email(patch.email)
        if patch.company is not None:
            self.company = patch.company
        if patch.url is not None:
            self.url = patch.url

    def fill_from(self, profile: UserProfile | None) -> DeveloperPatch:
        """Copy the profile values this record is missing; never overwrite.

        Filling a login turns an anonymous record into a keyed one, so callers
        holding the record in a ``Roster`` must reindex afterwards.
        """

        patch = self.patch_from(profile)
        self.apply(patch)
        return patch

    def merge_from(self, other: Developer | None) -> Developer:
        """Absorb ``other``'s fields into this record and return it.

        Commit evidence only flows into anonymous records: people with a login
        are tallied through the contributor and team paths instead.
        """

        if other is None or other is self:
            return self
        if _blank(self.display_name):
            self.display_name = other.display_name
        self.emails |= other.emails
        self.aliases |= other.aliases
        if _blank(self.company):
            self.company = other.company
        if _blank(self.url):
            self.url = other.url
        if self.anonymous:
            self.commits |= other.commits
        self.signed = self.signed or other.signed
        return self

    def same_person_as(self, other: Developer) -> bool:
        """Shared login or email, or a name (current or aliased) equal to the other's login."""
        if self.login is not None and self.login == other.login:
            return True
        if self.emails & other.emails:
            return True
        return _named_after(self, other.login) or _named_after(other, self.login)

    def sort_key(self) -> SortKey:
        return (
            _optional_key(self.login),
            _optional_key(self.display_name),
            self.signed,
            tuple(sorted(self.emails)),
            _optional_key(self.url),
            _optional_key(self.company),
            tuple(sorted(self.aliases)),
            tuple(sorted(self.commits)),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Developer):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Developer):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    __hash__ = None  # type: ignore[assignment]

    def describe(self) -> str:
        lines = [
            f"  login={self.login}",
            f"  name={self.display_name}",
            f"  signed={self.signed}",
            f"  emails={sorted(self.emails)}",
            f"  company={self.company}",
            f"  url={self.url}",
            f"  aliases={sorted(self.aliases)}",
            f"  commits={sorted(self.commits)}",
        ]
        return "[\n" + "\n".join(lines) + "\n]"
