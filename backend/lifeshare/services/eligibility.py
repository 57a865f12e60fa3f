"""
eligibility.py — Donation Eligibility Window

Purpose:
- Given a donor's last donation date, work out when they may donate again
  and how many days remain.
- Whole-blood donors must wait 56 calendar days (8 weeks) between donations.

All arithmetic is on naive calendar dates. A datetime argument is cut down to
its date first, so local-midnight and DST shifts cannot move the result by a
day. No store access.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Optional, Union

ELIGIBILITY_INTERVAL_DAYS = 56

DateLike = Union[datetime.date, datetime.datetime]


@dataclass(frozen=True)
class EligibilityStatus:
    last_donation: Optional[datetime.date]
    next_eligible_date: Optional[datetime.date]
    days_until_eligible: int
    eligible: bool


def _as_date(value: Optional[DateLike]) -> Optional[datetime.date]:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


def next_eligible_date(last_donation: Optional[DateLike]) -> Optional[datetime.date]:
    """
    Date from which the donor may give again, or None if they never donated
    (eligible now).
    """
    last = _as_date(last_donation)
    if last is None:
        return None
    return last + datetime.timedelta(days=ELIGIBILITY_INTERVAL_DAYS)


def days_until_eligible(
    last_donation: Optional[DateLike],
    today: Optional[DateLike] = None,
) -> int:
    """
    Days left until `next_eligible_date`, never negative.

    Example:
        days_until_eligible(date(2024, 1, 1), today=date(2024, 2, 20)) → 6
    """
    next_date = next_eligible_date(last_donation)
    if next_date is None:
        return 0
    today = _as_date(today) or datetime.date.today()
    return max((next_date - today).days, 0)


def is_eligible(last_donation: Optional[DateLike], today: Optional[DateLike] = None) -> bool:
    return days_until_eligible(last_donation, today) == 0


def eligibility_for(
    last_donation: Optional[DateLike],
    today: Optional[DateLike] = None,
) -> EligibilityStatus:
    """Bundle everything the profile page shows about the donation window."""
    remaining = days_until_eligible(last_donation, today)
    return EligibilityStatus(
        last_donation=_as_date(last_donation),
        next_eligible_date=next_eligible_date(last_donation),
        days_until_eligible=remaining,
        eligible=remaining == 0,
    )
