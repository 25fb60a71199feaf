"""Tab-separated roster file: the persisted form of the developer roster.

One row per developer. Multi-valued cells (emails, aliases, commits) hold one
value per line. Commit evidence is written compactly: within a run of commit
URLs sharing the same ``.../commit`` parent, only the first is written in full
and the following ones are reduced to the part after that parent.
"""

from __future__ import annotations

import csv
import os
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING, Final

from ghroster.domain.contributor_check import has_unsigned_contributors
from ghroster.domain.model import Affiliation, Developer
from ghroster.domain.roster import Roster, RosterKeyError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ghroster.domain.model import Organization

log = getLogger(__name__)

HEADER: Final[tuple[str, ...]] = (
    "Login",
    "Name",
    "Signed",
    "Emails",
    "Company",
    "URL",
    "Aliases",
    "Commits",
    "Trivial commits",
)
DELIMITER: Final[str] = "\t"
_COMMIT_SEGMENTS: Final[frozenset[str]] = frozenset({"commit", "commits"})


class RosterFile:
    """Roster store backed by a tab-separated file.

    ``output`` defaults to ``path`` so that a run reads back what the
    previous run wrote.
    """

    def __init__(self, path: Path, organization: Organization, *, output: Path | None = None) -> None:
        self.path = Path(path)
        self.output = Path(output) if output is not None else self.path
        self._organization = organization

    def load(self) -> Roster:
        roster = Roster()
        try:
            with self.path.open(encoding="utf-8", newline="") as handle:
                rows = list(csv.reader(handle, delimiter=DELIMITER))
        except FileNotFoundError:
            log.info("No roster at %s, starting from scratch", self.path)
            return roster
        except OSError:
            log.warning("Cannot read roster at %s, starting from scratch", self.path, exc_info=True)
            return roster

        if not rows:
            return roster
        header, *records = rows
        if tuple(header) != HEADER:
            log.warning("Header mismatch %s", header)
            return roster

        for row in records:
            if not any(cell.strip() for cell in row):
                continue
            try:
                roster.add(parse_row(row))
            except RosterKeyError:
                log.warning("Ignoring row without login or name: %s", row)
        roster.resolve_aliases()
        roster.refresh_names()
        log.info("Loaded %s developers from %s", len(roster), self.path)
        return roster

    def save(self, roster: Roster) -> bool:
        """Write ``roster`` and return whether an unsigned contributor remains."""

        self.output.parent.mkdir(parents=True, exist_ok=True)
        with self.output.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle, delimiter=DELIMITER, lineterminator="\n")
            writer.writerow(HEADER)
            for developer in _unique(roster.developers()):
                log.debug(developer.describe())
                writer.writerow(self.format_row(developer))
        log.info("Saved to file: %s", self.output)
        return has_unsigned_contributors(roster, self._organization)

    def format_row(self, developer: Developer) -> list[str]:
        internal = (
            self._organization.affiliation_of(developer.company) is Affiliation.INTERNAL
        )
        return [
            developer.login or "",
            developer.display_name or "",
            "true" if developer.signed else "false",
            _join(sorted(developer.emails)),
            developer.company or "",
            developer.url or "",
            _join(sorted(developer.aliases)),
            "" if internal else _join(compact_commits(developer.commits)),
            "",
        ]


def parse_row(row: Sequence[str]) -> Developer:
    cells = list(row) + [""] * (len(HEADER) - len(row))
    login, name, signed, emails, company, url, aliases, commits = cells[:8]
    return Developer(
        login=login.strip() or None,
        display_name=name.strip() or None,
        signed=signed.strip().lower() == "true",
        emails=set(_split(emails)),
        company=company.strip() or None,
        url=url.strip() or None,
        aliases=set(_split(aliases)),
        commits=set(expand_commits(_split(commits))),
    )


def compact_commits(commits: Iterable[str]) -> list[str]:
    compacted: list[str] = []
    parent: str | None = None
    for evidence in sorted(commits):
        if parent is not None and _is_commit_parent(parent) and evidence.startswith(parent + "/"):
            compacted.append(evidence[len(parent) + 1 :])
            continue
        compacted.append(evidence)
        parent = evidence.rpartition("/")[0] or None
    return compacted


def expand_commits(lines: Iterable[str]) -> list[str]:
    expanded: list[str] = []
    parent: str | None = None
    for line in lines:
        if "://" not in line and parent is not None and _is_commit_parent(parent):
            expanded.append(f"{parent}/{line}")
            continue
        expanded.append(line)
        parent = line.rpartition("/")[0] or None
    return expanded


def _is_commit_parent(path: str) -> bool:
    return path.rpartition("/")[2] in _COMMIT_SEGMENTS


def _unique(developers: Iterable[Developer]) -> list[Developer]:
    unique: list[Developer] = []
    for developer in developers:
        if unique and unique[-1] == developer:
            continue
        unique.append(developer)
    return unique


def _join(values: Iterable[str]) -> str:
    return os.linesep.join(values)


def _split(cell: str) -> list[str]:
    return [line.strip() for line in cell.splitlines() if line.strip()]
