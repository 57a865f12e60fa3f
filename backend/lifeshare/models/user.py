"""
user.py — Record Types for Registered Donors

Purpose:
- Represent a registered account holder / potential blood donor.
- Stores hashed passwords only — never raw.
- `NewUser` is what callers hand to the store; `User` is what the store
  hands back (id and created_at filled in).

Used by:
- services/store.py (persistence)
- services/query.py (directory filters, latest donors)
- api/v1/auth.py (registration, login)
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class BloodGroup(str, Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


@dataclass(frozen=True)
class NewUser:
    """
    Registration data for a user, before the store assigns identity.

    Attributes:
        username: Login name, unique across users
        password_hash: bcrypt hash produced by core/security.py
        blood_group: One of the eight ABO/Rh groups, stored as its label ("O+")
        last_donation: Date of the most recent donation, if the donor knows it
    """
    username: str
    password_hash: str
    full_name: str
    age: int
    email: str
    phone: str
    blood_group: str
    address_line1: str
    city: str
    state: str
    postal_code: str
    address_line2: Optional[str] = None
    last_donation: Optional[datetime.date] = None


@dataclass(frozen=True)
class User:
    id: int

    # Authentication fields
    username: str
    password_hash: str

    # Profile
    full_name: str
    age: int
    email: str
    phone: str
    blood_group: str

    # Address
    address_line1: str
    address_line2: Optional[str]
    city: str
    state: str
    postal_code: str

    # Donation tracking (only field that changes after creation)
    last_donation: Optional[datetime.date]

    created_at: datetime.datetime

    def __repr__(self):
        return f"<User {self.id} {self.username}>"
