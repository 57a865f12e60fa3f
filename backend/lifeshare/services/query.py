"""
query.py — Read-Only Donor Directory Queries

Purpose:
- Filtered donor directory (blood group, location, free-text search).
- "Latest donors" ranking used to highlight recent donors on the home page.

All functions read through EntityStore and never write.
"""

from __future__ import annotations

import re
from typing import Any, List, Optional

from lifeshare.models.user import User
from lifeshare.services.store import EntityStore

DEFAULT_LATEST_LIMIT = 3

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _contains(haystack: Optional[str], needle: str) -> bool:
    return needle in (haystack or "").lower()


def get_all_donors_filtered(
    store: EntityStore,
    blood_group: Optional[str] = None,
    location: Optional[str] = None,
    search_term: Optional[str] = None,
) -> List[User]:
    """
    Return donors matching every filter that is given.

    Filters are applied in this order, each one optional (None or "" passes
    everything through):
    1. blood_group — case-insensitive equality
    2. location — case-insensitive substring of city or state
    3. search_term — case-insensitive substring of full name, city or state

    Store order is preserved.
    """
    donors = store.get_all_users()

    if blood_group:
        wanted = blood_group.strip().lower()
        donors = [d for d in donors if d.blood_group.lower() == wanted]

    if location:
        needle = location.lower()
        donors = [d for d in donors if _contains(d.city, needle) or _contains(d.state, needle)]

    if search_term:
        needle = search_term.lower()
        donors = [
            d for d in donors
            if _contains(d.full_name, needle) or _contains(d.city, needle) or _contains(d.state, needle)
        ]

    return donors


def parse_limit(raw: Any, default: int = DEFAULT_LATEST_LIMIT) -> int:
    """
    Lenient limit parsing: strings use their leading integer ("5.5" and
    "5abc" both give 5), floats are truncated. Anything missing, without a
    leading integer, or <= 0 becomes `default`.

    Example:
        parse_limit("5") → 5
        parse_limit("5.5") → 5
        parse_limit("abc") → 3
        parse_limit(-1) → 3
    """
    if raw is None or isinstance(raw, bool):
        return default

    if isinstance(raw, str):
        match = _LEADING_INT.match(raw)
        if not match:
            return default
        limit = int(match.group(1))
    else:
        try:
            limit = int(raw)
        except (ValueError, TypeError, OverflowError):
            return default

    return limit if limit > 0 else default


def get_latest_donors(store: EntityStore, limit: Any = DEFAULT_LATEST_LIMIT) -> List[User]:
    """
    Donors ranked by most recent last_donation, newest first.

    Users who never donated are left out. Equal dates keep store order
    (sorted() is stable).
    """
    limit = parse_limit(limit)
    donors = [u for u in store.get_all_users() if u.last_donation is not None]
    donors.sort(key=lambda u: u.last_donation, reverse=True)
    return donors[:limit]
