from fastapi import APIRouter, Depends
from models.onboarding import AgencyDetails
from core.auth import get_store, check_permission
from core.permissions import Permission
from core.session import Session
from controllers import settings_controller
from database import KeyValueStore

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_settings(store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.SYSTEM_CONFIG))):
    return await settings_controller.get_settings(store)


@router.get("/agency-details", response_model=AgencyDetails)
async def get_agency_details(store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.SYSTEM_CONFIG))):
    details = await settings_controller.get_agency_details(store)
    return details or AgencyDetails()


@router.put("/agency-details", response_model=AgencyDetails)
async def save_agency_details(details: AgencyDetails, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.SYSTEM_CONFIG))):
    return await settings_controller.save_agency_details(store, details)
