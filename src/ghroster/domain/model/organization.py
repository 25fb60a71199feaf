"""The organization whose contributors are being reconciled."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import Affiliation

if TYPE_CHECKING:
    from .sources import Repository

DEFAULT_EXCLUDED_REPOSITORIES = frozenset(
    {"jboss-seam", "jodconverter.bak", "richfaces", "daisydiff", "h2database"}
)


@dataclass(frozen=True, slots=True)
class Organization:
    login: str = "nuxeo"
    company: str = "Nuxeo"
    email_domain: str = "nuxeo.com"
    core_team_id: int = 35421
    core_team_name: str = "Developers"
    excluded_repositories: frozenset[str] = field(
        default_factory=lambda: DEFAULT_EXCLUDED_REPOSITORIES
    )

    @property
    def unconfirmed_label(self) -> str:
        """Company value for people only known through an organization email."""
        return f"{self.company} (ex?)"

    def affiliation_of(self, company: str | None) -> Affiliation:
        if company is None or not company.strip():
            return Affiliation.UNKNOWN
        value = company.strip().casefold()
        if value == self.company.casefold():
            return Affiliation.INTERNAL
        if value == self.unconfirmed_label.casefold():
            return Affiliation.INTERNAL_UNCONFIRMED
        return Affiliation.EXTERNAL

    def is_internal_email(self, email: str | None) -> bool:
        return email is not None and email.casefold().endswith(f"@{self.email_domain.casefold()}")

    def is_excluded(self, repository: Repository) -> bool:
        return repository.name in self.excluded_repositories
