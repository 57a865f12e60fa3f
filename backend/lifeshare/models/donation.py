"""
donation.py — Record Types for Blood Donation Events

Purpose:
- One recorded blood donation, linked to its donor by `user_id`.
- A User owns its donations by reference only; the store keeps the two
  collections apart.

Key Points:
- `units` defaults to 1, `status` to "completed" (the only status the
  registry currently writes).
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass

DEFAULT_UNITS = 1
DEFAULT_STATUS = "completed"


@dataclass(frozen=True)
class NewDonation:
    user_id: int
    donation_date: datetime.date
    location: str
    units: int = DEFAULT_UNITS
    status: str = DEFAULT_STATUS


@dataclass(frozen=True)
class Donation:
    # Primary Key
    id: int

    # Owning user → User.id
    user_id: int

    donation_date: datetime.date
    location: str
    units: int = DEFAULT_UNITS
    status: str = DEFAULT_STATUS

    def __repr__(self):
        return f"<Donation {self.id} | user {self.user_id} | {self.donation_date}>"
