"""
donors.py — Donor Directory API Endpoints

Purpose:
- Public, read-only views of registered donors.
- Every donor leaves through PublicUser, so password hashes never do.

Endpoints:
- GET /donors?bloodGroup=&location=&search= → filtered directory
- GET /donors/latest?limit= → most recent donors (default 3)
- GET /donors/{donor_id} → one donor
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from lifeshare.api.v1.schemas import PublicUser, to_public, to_public_list
from lifeshare.core.config import settings
from lifeshare.core.database import get_store
from lifeshare.core.logging import get_logger
from lifeshare.services.query import get_all_donors_filtered, get_latest_donors, parse_limit
from lifeshare.services.store import EntityStore

logger = get_logger(__name__)

router = APIRouter(
    prefix="/donors",
    tags=["donors"]
)

# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.get("", response_model=List[PublicUser])
async def list_donors(
    blood_group: Optional[str] = Query(None, alias="bloodGroup", description="Exact blood group, e.g. O+ (case-insensitive)"),
    location: Optional[str] = Query(None, description="Substring of city or state"),
    search: Optional[str] = Query(None, description="Substring of name, city or state"),
    store: EntityStore = Depends(get_store),
):
    """
    GET /donors

    All filters are optional and combine with AND.
    """
    donors = get_all_donors_filtered(
        store,
        blood_group=blood_group,
        location=location,
        search_term=search,
    )
    logger.debug(
        "Donor directory query bloodGroup=%r location=%r search=%r → %d results",
        blood_group, location, search, len(donors),
    )
    return to_public_list(donors)


@router.get("/latest", response_model=List[PublicUser])
async def latest_donors(
    limit: Optional[str] = Query(None, description="Maximum donors to return; invalid values fall back to the default"),
    store: EntityStore = Depends(get_store),
):
    """
    GET /donors/latest

    Donors ordered by most recent donation. Donors who never donated are not
    listed.
    """
    parsed = parse_limit(limit, default=settings.LATEST_DONORS_DEFAULT_LIMIT)
    return to_public_list(get_latest_donors(store, parsed))


@router.get("/{donor_id}", response_model=PublicUser)
async def get_donor(donor_id: int, store: EntityStore = Depends(get_store)):
    """
    GET /donors/{donor_id}

    Raises:
        404: If no donor has this id
    """
    user = store.get_user(donor_id)
    if user is None:
        raise HTTPException(status_code=404, detail="Donor not found")
    return to_public(user)
