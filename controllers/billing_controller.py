from fastapi import HTTPException
from typing import Optional, List

from core.mock_data import INVOICES
from core.session import Session
from models.billing import Invoice, BillingSummary

INVOICE_STATUSES = ("draft", "pending", "paid", "overdue")


def _summary(invoices: List[dict]) -> BillingSummary:
    return BillingSummary(
        total_revenue=sum(i["amount"] for i in invoices if i["status"] == "paid"),
        pending_amount=sum(i["amount"] for i in invoices if i["status"] in ("pending", "overdue")),
        overdue_amount=sum(i["amount"] for i in invoices if i["status"] == "overdue"),
        invoice_count=len(invoices),
    )


async def get_invoices(session: Session, status: Optional[str] = None) -> dict:
    if status and status != "all" and status not in INVOICE_STATUSES:
        raise HTTPException(status_code=400, detail=f"Unknown invoice status '{status}'")
    invoices = session.visible(INVOICES)
    summary = _summary(invoices)
    if status and status != "all":
        invoices = [i for i in invoices if i["status"] == status]
    return {"data": [Invoice(**i) for i in invoices], "summary": summary}


async def get_invoice(session: Session, invoice_id: str) -> Invoice:
    for invoice in session.visible(INVOICES):
        if invoice["id"] == invoice_id:
            return Invoice(**invoice)
    raise HTTPException(status_code=404, detail="Invoice not found")
