from fastapi import APIRouter, Depends
from typing import Optional
from models.billing import Invoice
from core.auth import check_permission
from core.permissions import Permission
from core.session import Session
from controllers import billing_controller

router = APIRouter(prefix="/billing", tags=["billing"])


@router.get("/invoices")
async def get_invoices(status: Optional[str] = None, session: Session = Depends(check_permission(Permission.BILLING_MANAGEMENT))):
    return await billing_controller.get_invoices(session, status)


@router.get("/invoices/{invoice_id}", response_model=Invoice)
async def get_invoice(invoice_id: str, session: Session = Depends(check_permission(Permission.BILLING_MANAGEMENT))):
    return await billing_controller.get_invoice(session, invoice_id)
