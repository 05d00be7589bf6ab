from fastapi import APIRouter, Depends
from typing import Optional
from models.approval import Approval, ApprovalDecision
from core.auth import get_store, check_permission
from core.permissions import Permission
from core.session import Session
from controllers import approval_controller
from database import KeyValueStore

router = APIRouter(prefix="/approvals", tags=["approvals"])


@router.get("")
async def get_approvals(status: Optional[str] = None, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.APPROVE_CONTENT))):
    return await approval_controller.get_approvals(store, session, status)


@router.post("/{approval_id}/approve", response_model=Approval)
async def approve(approval_id: int, decision: Optional[ApprovalDecision] = None, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.APPROVE_CONTENT))):
    return await approval_controller.decide(store, session, approval_id, "approve", decision)


@router.post("/{approval_id}/reject", response_model=Approval)
async def reject(approval_id: int, decision: ApprovalDecision, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.REJECT_CONTENT))):
    return await approval_controller.decide(store, session, approval_id, "reject", decision)


@router.post("/{approval_id}/request-revision", response_model=Approval)
async def request_revision(approval_id: int, decision: ApprovalDecision, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.APPROVE_CONTENT))):
    return await approval_controller.decide(store, session, approval_id, "request_revision", decision)


@router.post("/{approval_id}/resubmit", response_model=Approval)
async def resubmit(approval_id: int, store: KeyValueStore = Depends(get_store), session: Session = Depends(check_permission(Permission.EDIT_CONTENT))):
    return await approval_controller.decide(store, session, approval_id, "resubmit")
