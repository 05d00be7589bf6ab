from fastapi import APIRouter, Depends
from models.auth import Token
from models.onboarding import OnboardingComplete, OnboardingStatus
from core.auth import get_store, require_session
from core.session import Session
from controllers import onboarding_controller
from database import KeyValueStore

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.get("/status", response_model=OnboardingStatus)
async def get_status(store: KeyValueStore = Depends(get_store), session: Session = Depends(require_session)):
    return await onboarding_controller.get_status(store, session)


@router.post("/complete", response_model=Token)
async def complete_onboarding(data: OnboardingComplete, store: KeyValueStore = Depends(get_store), session: Session = Depends(require_session)):
    return await onboarding_controller.complete_onboarding(store, session, data)
