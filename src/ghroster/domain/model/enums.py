"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Affiliation(StrEnum):
    """Relationship between a developer and the organization.

    ``INTERNAL`` is confirmed (core team membership or an explicit company
    value), ``INTERNAL_UNCONFIRMED`` only rests on an organization email
    address.
    """

    INTERNAL = "internal"
    INTERNAL_UNCONFIRMED = "internal_unconfirmed"
    EXTERNAL = "external"
    UNKNOWN = "unknown"
