from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest

from ghroster.adapters.roster_file import (
    HEADER,
    RosterFile,
    compact_commits,
    expand_commits,
    parse_row,
)
from ghroster.domain.model import Developer, Organization
from ghroster.domain.roster import Roster

if TYPE_CHECKING:
    from pathlib import Path

COMMIT_BASE = "https://github.com/nuxeo/nuxeo-core/commit"


def _write(path: Path, rows: list[list[str]]) -> None:
    lines = ["\t".join(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_round_trip_preserves_records(tmp_path: Path, organization: Organization) -> None:
    roster = Roster()
    roster.add(
        Developer(
            login="bob",
            display_name="Bob B",
            emails={"bob@x.com", "bob@y.com"},
            company="Acme",
            url="https://github.com/bob",
            aliases={"Bobby"},
            commits={
                "https://github.com/nuxeo/tools",
                f"{COMMIT_BASE}/abc",
                f"{COMMIT_BASE}/def",
            },
            signed=True,
        )
    )
    roster.add(Developer(display_name="Zoe", emails={"zoe@x.com"}))
    store = RosterFile(tmp_path / "contributors.csv", organization)

    store.save(roster)
    loaded = store.load()

    assert loaded.developers() == roster.developers()


def test_internal_commits_are_not_written(tmp_path: Path, organization: Organization) -> None:
    roster = Roster()
    roster.add(Developer(login="alice", company="Nuxeo", commits={f"{COMMIT_BASE}/abc"}))
    store = RosterFile(tmp_path / "contributors.csv", organization)

    store.save(roster)

    alice = store.load().get_by_login("alice")
    assert alice is not None
    assert alice.commits == set()


def test_save_writes_header_and_returns_unsigned_flag(
    tmp_path: Path, organization: Organization
) -> None:
    roster = Roster()
    roster.add(Developer(login="dave"))
    path = tmp_path / "contributors.csv"

    unsigned = RosterFile(path, organization).save(roster)

    assert unsigned
    first_line = path.read_text(encoding="utf-8").splitlines()[0]
    assert first_line.split("\t") == list(HEADER)


def test_output_defaults_to_input(tmp_path: Path, organization: Organization) -> None:
    store = RosterFile(tmp_path / "in.csv", organization, output=tmp_path / "out" / "roster.csv")
    assert store.output == tmp_path / "out" / "roster.csv"

    store.save(Roster())

    assert (tmp_path / "out" / "roster.csv").exists()
    assert RosterFile(tmp_path / "in.csv", organization).output == tmp_path / "in.csv"


def test_missing_file_loads_empty_roster(tmp_path: Path, organization: Organization) -> None:
    assert len(RosterFile(tmp_path / "absent.csv", organization).load()) == 0


def test_header_mismatch_loads_empty_roster(
    tmp_path: Path, organization: Organization, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "contributors.csv"
    _write(path, [["Login", "Name"], ["bob", "Bob"]])

    with caplog.at_level(logging.WARNING):
        roster = RosterFile(path, organization).load()

    assert len(roster) == 0
    assert "Header mismatch" in caplog.text


def test_short_rows_are_padded(tmp_path: Path, organization: Organization) -> None:
    path = tmp_path / "contributors.csv"
    _write(path, [list(HEADER), ["bob", "Bob B", "TRUE"]])

    bob = RosterFile(path, organization).load().get_by_login("bob")

    assert bob is not None
    assert bob.display_name == "Bob B"
    assert bob.signed
    assert bob.emails == set()


def test_aliases_are_resolved_on_load(tmp_path: Path, organization: Organization) -> None:
    path = tmp_path / "contributors.csv"
    _write(
        path,
        [
            list(HEADER),
            ["bob", "Bob B", "true", "", "", "", "Bob Old", "", ""],
            ["", "Bob Old", "false", "bob@old.org", "", "", "", "", ""],
        ],
    )
    store = RosterFile(path, organization)

    roster = store.load()

    bob = roster.get_by_login("bob")
    assert bob is not None
    assert bob.emails == {"bob@old.org"}
    assert store.save(roster) is False


def test_parse_row_anonymous_and_multivalued_cells() -> None:
    developer = parse_row(
        ["", "Zoe", "false", os.linesep.join(["z@x.com", "zoe@y.com"]), "", "", "", "", ""]
    )

    assert developer.anonymous
    assert developer.emails == {"z@x.com", "zoe@y.com"}
    assert not developer.signed


def test_compact_commits_abbreviates_runs_under_a_commit_path() -> None:
    commits = {
        "https://github.com/nuxeo/tools",
        f"{COMMIT_BASE}/bbb",
        f"{COMMIT_BASE}/aaa",
        "https://github.com/nuxeo/other/commit/ccc",
    }

    compacted = compact_commits(commits)

    assert compacted == [
        f"{COMMIT_BASE}/aaa",
        "bbb",
        "https://github.com/nuxeo/other/commit/ccc",
        "https://github.com/nuxeo/tools",
    ]
    assert set(expand_commits(compacted)) == commits


def test_compact_commits_leaves_repository_urls_alone() -> None:
    commits = ["https://github.com/nuxeo/a", "https://github.com/nuxeo/b"]

    assert compact_commits(commits) == commits
    assert expand_commits(commits) == commits
