"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import ContributorSource, SourceError, UserNotFoundError
from .persistence import RosterStore

__all__ = [
    "ContributorSource",
    "RosterStore",
    "SourceError",
    "UserNotFoundError",
]
