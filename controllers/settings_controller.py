from fastapi import HTTPException
from typing import Optional
import logging

from config import AGENCY_DETAILS_KEY
from database import KeyValueStore, load_value, save_value
from models.onboarding import AgencyDetails

logger = logging.getLogger(__name__)


# ── Agency details ────────────────────────────────────────

async def get_agency_details(store: KeyValueStore) -> Optional[AgencyDetails]:
    doc = await load_value(store, AGENCY_DETAILS_KEY)
    return AgencyDetails(**doc) if doc else None


async def save_agency_details(store: KeyValueStore, details: AgencyDetails) -> AgencyDetails:
    if details.missing_required():
        raise HTTPException(status_code=400, detail="Agency name and email are required")
    if not details.has_valid_email():
        raise HTTPException(status_code=400, detail="Invalid email address")
    if not await save_value(store, AGENCY_DETAILS_KEY, details.model_dump()):
        raise HTTPException(status_code=503, detail="Could not save agency details, please try again")
    logger.info("Agency details saved for '%s'", details.name)
    return details


async def get_settings(store: KeyValueStore) -> dict:
    details = await get_agency_details(store)
    return {"agency_details": details, "is_configured": details is not None}
