"""Reconciliation pass run after each ingestion phase.

Steps, in order:

1. gap-fill each login record from the core team (confirming the company)
   and then from its user profile
2. absorb the anonymous record sharing that login record's display name
3. mine the commit history for an email when it has none, then infer an
   unconfirmed internal company from the email domain
4. the same mining and inference for anonymous records
5. fold anonymous records into each other and into login records until a
   round merges nothing; those still without email are reported
6. refresh the display-name lookup used by the commit pass
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .evidence import mine_email

if TYPE_CHECKING:
    from ghroster.domain.model import Developer, Organization
    from ghroster.domain.roster import Roster

    from .context import ReconciliationContext

log = getLogger(__name__)


@dataclass(slots=True)
class ReconcileReport:
    enriched: int = 0
    absorbed: int = 0
    inferred: int = 0
    merged: int = 0
    unresolved: list[str] = field(default_factory=list[str])


def reconcile_roster(context: ReconciliationContext) -> ReconcileReport:
    report = ReconcileReport()
    roster = context.roster
    log.info("Reconciling %s developers", len(roster))

    for developer in roster.logged_in():
        if _fill_gaps(context, developer):
            report.enriched += 1
        if _absorb_same_named_orphan(roster, developer):
            report.absorbed += 1
        if mine_email(context, developer) and _infer_company(context.organization, developer):
            report.inferred += 1

    for developer in roster.orphans():
        if mine_email(context, developer) and _infer_company(context.organization, developer):
            report.inferred += 1

    report.merged += _merge_until_stable(roster)
    for orphan in roster.orphans():
        if not orphan.emails:
            log.warning("Couldn't find email for %s", orphan.describe())
            report.unresolved.append(orphan.display_name or "")

    roster.refresh_names()
    log.info(
        "Reconciled: %s enriched, %s absorbed, %s merged, %s unresolved",
        report.enriched,
        report.absorbed,
        report.merged,
        len(report.unresolved),
    )
    return report


def _fill_gaps(context: ReconciliationContext, developer: Developer) -> bool:
    if developer.is_complete() or developer.login is None:
        return False
    filled = False
    member = context.core_team.get(developer.login)
    if member is not None:
        filled = not developer.fill_from(member).is_empty
        developer.confirm_company(context.organization.company)
    if not developer.is_complete():
        profile = context.profiles.lookup(developer.login)
        filled = not developer.fill_from(profile).is_empty or filled
    return filled


def _absorb_same_named_orphan(roster: Roster, developer: Developer) -> bool:
    orphan = roster.get_by_name(developer.display_name)
    if orphan is None:
        return False
    log.debug("Absorbing %r into %r", orphan.display_name, developer.login)
    roster.absorb(developer, orphan, alias=False)
    return True


def _infer_company(organization: Organization, developer: Developer) -> bool:
    if developer.company is not None:
        return False
    if not any(organization.is_internal_email(email) for email in developer.emails):
        return False
    developer.company = organization.unconfirmed_label
    return True


def _merge_until_stable(roster: Roster) -> int:
    """Fold orphans together and into login records until no merge applies.

    A fold can hand an orphan the alias or email linking it to a login record,
    and a login merge can hand a login record an email another orphan shares.
    """

    total = 0
    while merged := _fold_orphans_sharing_email(roster) + _merge_orphans_into_logins(roster):
        total += merged
    return total


def _fold_orphans_sharing_email(roster: Roster) -> int:
    folded = 0
    holders: dict[str, Developer] = {}
    for orphan in roster.orphans():
        sharing = {holders[email].id: holders[email] for email in orphan.emails if email in holders}
        if not sharing:
            for email in orphan.emails:
                holders[email] = orphan
            continue
        survivor, *others = sorted(sharing.values(), key=_display_name)
        for duplicate in (*others, orphan):
            log.debug("Merging %r into %r", duplicate.display_name, survivor.display_name)
            roster.absorb(survivor, duplicate)
            folded += 1
        for email in survivor.emails:
            holders[email] = survivor
    return folded


def _display_name(developer: Developer) -> str:
    return developer.display_name or ""


def _merge_orphans_into_logins(roster: Roster) -> int:
    merged = 0
    for orphan in roster.orphans():
        if not orphan.emails:
            continue
        for developer in roster.logged_in():
            if developer.same_person_as(orphan):
                log.debug("Merging %r into %r", orphan.display_name, developer.login)
                roster.absorb(developer, orphan)
                merged += 1
                break
    return merged
