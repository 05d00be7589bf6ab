from fastapi import HTTPException
from typing import Optional, List
import logging

from config import APPROVALS_KEY
from core.lifecycle import APPROVAL_LIFECYCLE, ApprovalStatus
from core.mock_data import DEFAULT_APPROVALS
from core.session import Session
from database import KeyValueStore, load_value, save_value
from models.approval import Approval, ApprovalDecision

logger = logging.getLogger(__name__)


async def load_approval_queue(store: KeyValueStore) -> List[dict]:
    """The review queue; the sample queue until a decision has been saved."""
    return await load_value(store, APPROVALS_KEY, DEFAULT_APPROVALS)


async def get_approvals(store: KeyValueStore, session: Session, status: Optional[str] = None) -> dict:
    approvals = session.visible(await load_approval_queue(store))
    counts = {s.value: len([a for a in approvals if a.get("status") == s.value]) for s in ApprovalStatus}
    if status and status != "all":
        approvals = [a for a in approvals if a.get("status") == status]
    return {"data": [Approval(**a) for a in approvals], "counts": counts, "pending_count": counts["pending"]}


async def decide(store: KeyValueStore, session: Session, approval_id: int, action: str,
                 decision: Optional[ApprovalDecision] = None) -> Approval:
    approvals = await load_approval_queue(store)
    visible_ids = {a.get("id") for a in session.visible(approvals)}
    doc = next((a for a in approvals if a.get("id") == approval_id and approval_id in visible_ids), None)
    if doc is None:
        raise HTTPException(status_code=404, detail="Approval item not found")

    current = ApprovalStatus(doc["status"])
    target = APPROVAL_LIFECYCLE.target_for_action(current, action)
    if target is None:
        raise HTTPException(
            status_code=409,
            detail=f"Cannot {action.replace('_', ' ')} an item that is {APPROVAL_LIFECYCLE.label(current).lower()}",
        )
    if action in ("reject", "request_revision") and not (decision and decision.feedback):
        raise HTTPException(status_code=400, detail="Feedback is required")

    doc["status"] = target.value
    doc["reviewed_by"] = session.user.name
    if decision and decision.feedback:
        doc["feedback"] = decision.feedback
    if target == ApprovalStatus.APPROVED:
        doc["approved_at"] = "Just now"
    if target == ApprovalStatus.PENDING:
        doc["submitted_at"] = "Just now"

    if not await save_value(store, APPROVALS_KEY, approvals):
        raise HTTPException(status_code=503, detail="Could not save decision, please try again")
    logger.info("Approval %d: %s -> %s by %s", approval_id, current.value, target.value, session.user.email)
    return Approval(**doc)
