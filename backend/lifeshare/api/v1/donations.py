"""
donations.py — Donation History & Eligibility Endpoints (API Layer)

Purpose:
- Let a logged-in donor record donations and read back their history.
- Report when the donor may give again (56-day window).

Key Interactions:
- services/store.py → `record_donation` writes the donation and moves the
  donor's last_donation together.
- services/eligibility.py → next eligible date / days remaining.
- core/security.py → current user from the bearer token.

All endpoints require authentication.
"""

import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field

from lifeshare.api.v1.schemas import CamelModel, DonationOut
from lifeshare.core.database import get_store
from lifeshare.core.logging import get_logger
from lifeshare.core.security import get_current_user, get_current_user_id
from lifeshare.models.donation import DEFAULT_STATUS, DEFAULT_UNITS, NewDonation
from lifeshare.models.user import User
from lifeshare.services.eligibility import eligibility_for
from lifeshare.services.store import EntityStore, InvalidDonationDateError, UnknownUserError

logger = get_logger(__name__)

router = APIRouter(
    prefix="/donations",
    tags=["donations"]
)

# -----------------------------------------------------------------------------
# Schemas
# -----------------------------------------------------------------------------

class DonationRequest(CamelModel):
    """
    Body of POST /donations. The owner is always the logged-in user; a
    `userId` in the body is ignored.
    """
    donation_date: datetime.date
    location: str = Field(..., min_length=1)
    units: int = Field(DEFAULT_UNITS, gt=0)
    status: str = Field(DEFAULT_STATUS, min_length=1)


class EligibilityOut(CamelModel):
    last_donation: Optional[datetime.date] = None
    next_eligible_date: Optional[datetime.date] = None
    days_until_eligible: int
    eligible: bool


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.get("", response_model=List[DonationOut])
async def list_my_donations(
    user_id: int = Depends(get_current_user_id),
    store: EntityStore = Depends(get_store),
):
    """
    GET /donations

    The current user's donations, oldest record first.
    """
    return [DonationOut.model_validate(d) for d in store.get_donations_by_user_id(user_id)]


@router.post("", response_model=DonationOut, status_code=status.HTTP_201_CREATED)
async def add_donation(
    payload: DonationRequest,
    user_id: int = Depends(get_current_user_id),
    store: EntityStore = Depends(get_store),
):
    """
    POST /donations

    Raises:
        404: If the token's user no longer exists
        422: If the donation date is in the future
    """
    new_donation = NewDonation(
        user_id=user_id,
        donation_date=payload.donation_date,
        location=payload.location,
        units=payload.units,
        status=payload.status,
    )
    try:
        donation = store.record_donation(new_donation)
    except UnknownUserError:
        raise HTTPException(status_code=404, detail="User not found")
    except InvalidDonationDateError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return DonationOut.model_validate(donation)


@router.get("/eligibility", response_model=EligibilityOut)
async def my_eligibility(user: User = Depends(get_current_user)):
    """
    GET /donations/eligibility

    Example response:
        {"lastDonation": "2024-01-01", "nextEligibleDate": "2024-02-26",
         "daysUntilEligible": 6, "eligible": false}
    """
    return EligibilityOut.model_validate(eligibility_for(user.last_donation, datetime.date.today()))
