"""In-memory roster of developers with login and display-name indexes.

Every developer lives once in ``_developers`` under a stable id. The login
index and the display-name index only hold ids, so a record is reachable
through at most one of them:

- keyed records (login known) through ``_by_login``
- anonymous records through ``_by_name``

``_all_by_name`` is an append-only lookup over every display name seen so
far, keyed or not. When a record is absorbed into another one its id is
forwarded to the survivor, so stale entries in that lookup still land on a
live record.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from ghroster.domain.model import Developer

if TYPE_CHECKING:
    from uuid import UUID

log = getLogger(__name__)


class RosterKeyError(ValueError):
    """Raised when a developer has neither a login nor a display name."""


@dataclass(slots=True)
class Roster:
    _developers: dict[UUID, Developer] = field(default_factory=dict["UUID", Developer], repr=False)
    _by_login: dict[str, UUID] = field(default_factory=dict[str, "UUID"], repr=False)
    _by_name: dict[str, UUID] = field(default_factory=dict[str, "UUID"], repr=False)
    _all_by_name: dict[str, UUID] = field(default_factory=dict[str, "UUID"], repr=False)
    _merged_into: dict[UUID, UUID] = field(default_factory=dict["UUID", "UUID"], repr=False)

    def __len__(self) -> int:
        return len(self._developers)

    def add(self, developer: Developer) -> Developer:
        """Index ``developer``; if its key is taken, merge into the holder instead.

        Returns the record that ends up in the roster.
        """

        key = developer.key
        if key is None:
            raise RosterKeyError(f"Developer {developer.id} has neither login nor display name")
        index = self._index_for(developer)
        holder_id = index.get(key)
        if holder_id is not None and holder_id != developer.id:
            holder = self._developers[holder_id]
            holder.merge_from(developer)
            self._merged_into[developer.id] = holder.id
            return holder
        self._developers[developer.id] = developer
        index[key] = developer.id
        return developer

    def get_by_login(self, login: str | None) -> Developer | None:
        if login is None:
            return None
        developer_id = self._by_login.get(login)
        return self._developers.get(developer_id) if developer_id is not None else None

    def get_by_name(self, name: str | None) -> Developer | None:
        """Anonymous record keyed by ``name``, if any."""
        if name is None:
            return None
        developer_id = self._by_name.get(name)
        return self._developers.get(developer_id) if developer_id is not None else None

    def lookup_name(self, name: str | None) -> Developer | None:
        """Any live developer ever seen under ``name``, keyed or anonymous."""
        if name is None:
            return None
        developer_id = self._all_by_name.get(name)
        if developer_id is None:
            return None
        return self._developers.get(self._resolve(developer_id))

    def remember_name(self, name: str | None, developer: Developer) -> None:
        if name is not None and name.strip():
            self._all_by_name[name] = developer.id

    def absorb(self, target: Developer, absorbed: Developer, *, alias: bool = True) -> Developer:
        """Merge ``absorbed`` into ``target``, drop it from the store and reindex."""

        if absorbed is target:
            return target
        target.merge_from(absorbed)
        if alias and absorbed.key is not None:
            target.aliases.add(absorbed.key)
        if target.key is not None:
            target.aliases.discard(target.key)
        del self._developers[absorbed.id]
        self._merged_into[absorbed.id] = target.id
        self.reindex()
        return target

    def reindex(self) -> None:
        """Rebuild both key indexes from the store.

        Runs after every merge, and is needed after a record's key changed in
        place (an anonymous record that learned its login). Records colliding
        on a key are merged, the one ordering first surviving.
        """

        groups: dict[tuple[bool, str], list[Developer]] = {}
        for developer in self._developers.values():
            key = developer.key
            if key is None:
                raise RosterKeyError(f"Developer {developer.id} has neither login nor display name")
            groups.setdefault((developer.anonymous, key), []).append(developer)

        self._by_login.clear()
        self._by_name.clear()
        for (anonymous, key), members in groups.items():
            holder, *colliding = sorted(members)
            for developer in colliding:
                holder.merge_from(developer)
                del self._developers[developer.id]
                self._merged_into[developer.id] = holder.id
            index = self._by_name if anonymous else self._by_login
            index[key] = holder.id

    def refresh_names(self) -> None:
        for developer in self.orphans():
            self.remember_name(developer.display_name, developer)
        for developer in self.logged_in():
            self.remember_name(developer.display_name, developer)

    def resolve_aliases(self) -> None:
        """Fold every aliased record's fields into the record listing the alias."""

        for owner in self.developers():
            for alias in sorted(owner.aliases):
                aliased = self.get_by_login(alias) or self.get_by_name(alias)
                if aliased is None:
                    log.debug("Alias %r of %r matches no known developer", alias, owner.key)
                    continue
                if aliased is owner:
                    continue
                owner.merge_from(aliased)

    def alias_owners(self) -> dict[str, set[UUID]]:
        """Ids of the records listing each alias."""
        owners: dict[str, set[UUID]] = {}
        for developer in self._developers.values():
            for alias in developer.aliases:
                owners.setdefault(alias, set()).add(developer.id)
        return owners

    def is_aliased(
        self, developer: Developer, owners: dict[str, set[UUID]] | None = None
    ) -> bool:
        """Whether another record lists this developer's key as one of its aliases.

        Pass ``owners`` from :meth:`alias_owners` when checking many records.
        """

        key = developer.key
        if key is None:
            return False
        if owners is None:
            owners = self.alias_owners()
        return bool(owners.get(key, set()) - {developer.id})

    def logged_in(self) -> list[Developer]:
        return [self._developers[self._by_login[login]] for login in sorted(self._by_login)]

    def orphans(self) -> list[Developer]:
        return [self._developers[self._by_name[name]] for name in sorted(self._by_name)]

    def developers(self) -> list[Developer]:
        return sorted(self._developers.values())

    def _index_for(self, developer: Developer) -> dict[str, UUID]:
        return self._by_name if developer.anonymous else self._by_login

    def _resolve(self, developer_id: UUID) -> UUID:
        root = developer_id
        while root in self._merged_into:
            root = self._merged_into[root]
        # path compression
        while developer_id != root:
            parent = self._merged_into[developer_id]
            self._merged_into[developer_id] = root
            developer_id = parent
        return root
