"""Public domain model surface."""

from __future__ import annotations

from .developer import Developer, DeveloperPatch
from .enums import Affiliation
from .organization import Organization
from .sources import Commit, Contributor, GitSignature, Repository, Team, UserProfile

__all__ = [
    "Affiliation",
    "Commit",
    "Contributor",
    "Developer",
    "DeveloperPatch",
    "GitSignature",
    "Organization",
    "Repository",
    "Team",
    "UserProfile",
]
