from __future__ import annotations

import pytest

from ghroster.domain.model import Developer
from ghroster.domain.roster import Roster, RosterKeyError


def test_add_indexes_by_login_or_name() -> None:
    roster = Roster()
    ann = roster.add(Developer(login="ann"))
    bob = roster.add(Developer(display_name="Bob"))

    assert roster.get_by_login("ann") is ann
    assert roster.get_by_name("Bob") is bob
    assert roster.get_by_name("ann") is None
    assert roster.logged_in() == [ann]
    assert roster.orphans() == [bob]
    assert len(roster) == 2


def test_add_merges_into_existing_holder() -> None:
    roster = Roster()
    holder = roster.add(Developer(login="ann", emails={"a@x.com"}))

    result = roster.add(Developer(login="ann", emails={"b@x.com"}))

    assert result is holder
    assert holder.emails == {"a@x.com", "b@x.com"}
    assert len(roster) == 1


def test_add_rejects_keyless_developer() -> None:
    with pytest.raises(RosterKeyError):
        Roster().add(Developer())


def test_absorb_records_alias_and_forwards_name_lookups() -> None:
    roster = Roster()
    carol = roster.add(Developer(display_name="Carol", emails={"c@x.com"}))
    duplicate = roster.add(Developer(display_name="carol", emails={"c@x.com"}))
    roster.remember_name("carol", duplicate)

    roster.absorb(carol, duplicate)

    assert roster.get_by_name("carol") is None
    assert carol.aliases == {"carol"}
    assert roster.lookup_name("carol") is carol
    assert len(roster) == 1


def test_absorb_without_alias() -> None:
    roster = Roster()
    ann = roster.add(Developer(login="ann", display_name="Ann"))
    orphan = roster.add(Developer(display_name="Ann", emails={"a@x.com"}))

    roster.absorb(ann, orphan, alias=False)

    assert ann.aliases == set()
    assert ann.emails == {"a@x.com"}
    assert roster.orphans() == []


def test_forwarding_follows_chains() -> None:
    roster = Roster()
    first = roster.add(Developer(display_name="A"))
    second = roster.add(Developer(display_name="B"))
    third = roster.add(Developer(login="c"))
    roster.remember_name("A", first)

    roster.absorb(second, first)
    roster.absorb(third, second)

    assert roster.lookup_name("A") is third


def test_reindex_moves_records_that_learned_a_login() -> None:
    roster = Roster()
    developer = roster.add(Developer(display_name="Ann"))
    developer.login = "ann"

    roster.reindex()

    assert roster.get_by_login("ann") is developer
    assert roster.get_by_name("Ann") is None


def test_reindex_merges_key_collisions() -> None:
    roster = Roster()
    roster.add(Developer(login="ann", emails={"a@x.com"}))
    other = roster.add(Developer(display_name="Ann", emails={"b@x.com"}))
    other.login = "ann"

    roster.reindex()

    assert len(roster) == 1
    assert roster.get_by_login("ann").emails == {"a@x.com", "b@x.com"}  # type: ignore[union-attr]


def test_resolve_aliases_folds_aliased_record_into_owner() -> None:
    roster = Roster()
    owner = roster.add(Developer(login="ann", aliases={"Ann Old", "ann-old", "ghost"}))
    roster.add(Developer(display_name="Ann Old", emails={"old@x.com"}))
    roster.add(Developer(login="ann-old", company="Acme"))

    roster.resolve_aliases()

    assert owner.emails == {"old@x.com"}
    assert owner.company == "Acme"


def test_is_aliased() -> None:
    roster = Roster()
    roster.add(Developer(login="ann", aliases={"Ann Old"}))
    old = roster.add(Developer(display_name="Ann Old"))
    bob = roster.add(Developer(login="bob"))

    assert roster.is_aliased(old)
    assert not roster.is_aliased(bob)
    assert roster.alias_owners() == {"Ann Old": {roster.get_by_login("ann").id}}  # type: ignore[union-attr]


def test_refresh_names_prefers_login_records() -> None:
    roster = Roster()
    orphan = roster.add(Developer(display_name="Ann"))
    keyed = roster.add(Developer(login="ann", display_name="Ann"))

    roster.refresh_names()

    assert roster.lookup_name("Ann") is keyed
    assert orphan in roster.orphans()


def test_is_aliased_ignores_own_aliases() -> None:
    roster = Roster()
    ann = roster.add(Developer(login="ann", aliases={"ann"}))
    owners = roster.alias_owners()

    assert not roster.is_aliased(ann, owners)


def test_absorb_reindexes_and_drops_self_alias() -> None:
    roster = Roster()
    carol = roster.add(Developer(login="carol"))
    orphan = roster.add(Developer(display_name="Carol", aliases={"carol"}))

    roster.absorb(carol, orphan)

    assert roster.get_by_name("Carol") is None
    assert roster.orphans() == []
    assert roster.logged_in() == [carol]
    assert carol.aliases == {"Carol"}
