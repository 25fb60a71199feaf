"""Ports for checkpointing the roster between runs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ghroster.domain.roster import Roster


@runtime_checkable
class RosterStore(Protocol):
    def load(self) -> Roster:
        """Return the previously saved roster, or an empty one."""
        ...

    def save(self, roster: Roster) -> bool:
        """Persist ``roster``; return whether unsigned external contributors remain."""
        ...


__all__ = ["RosterStore"]
