from fastapi import APIRouter, Depends
from core.auth import get_current_session, require_session
from core.session import Session
from controllers import navigation_controller

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get("")
async def get_navigation(session: Session = Depends(require_session)):
    return await navigation_controller.get_navigation(session)


# Anonymous callers get the decision too, so the client can follow the redirect
@router.get("/access")
async def check_access(path: str, session: Session = Depends(get_current_session)):
    return await navigation_controller.check_access(session, path)
