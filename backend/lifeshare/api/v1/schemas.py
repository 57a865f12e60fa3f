"""
schemas.py — Shared Response Schemas (API Layer)

Purpose:
- Response models that more than one router returns.
- `PublicUser` is the only shape in which a User leaves the API. It has no
  password field, so secrets are stripped on every path that uses it.

JSON field names are camelCase (`fullName`, `bloodGroup`, `lastDonation`),
as the browser client expects; Python attribute names stay snake_case.
"""

import datetime
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from lifeshare.models.user import User


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PublicUser(CamelModel):
    """User as shown to clients: everything except the password hash."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "username": "alice",
                "fullName": "Alice Moreau",
                "age": 29,
                "email": "alice@example.com",
                "phone": "+1 617 555 0101",
                "bloodGroup": "O+",
                "addressLine1": "12 Beacon St",
                "addressLine2": None,
                "city": "Boston",
                "state": "MA",
                "postalCode": "02108",
                "lastDonation": "2024-03-01",
                "createdAt": "2024-01-15T10:00:00Z",
            }
        }
    )

    id: int
    username: str
    full_name: str
    age: int
    email: str
    phone: str
    blood_group: str
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    state: str
    postal_code: str
    last_donation: Optional[datetime.date] = None
    created_at: datetime.datetime


class DonationOut(CamelModel):
    id: int
    user_id: int
    donation_date: datetime.date
    location: str
    units: int
    status: str


def to_public(user: User) -> PublicUser:
    return PublicUser.model_validate(user)


def to_public_list(users: Iterable[User]) -> List[PublicUser]:
    return [to_public(u) for u in users]
