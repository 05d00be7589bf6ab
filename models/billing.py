from pydantic import BaseModel, ConfigDict
from typing import Optional, Literal


class Invoice(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str
    client: str
    client_id: Optional[str] = None
    amount: float
    status: Literal["paid", "pending", "overdue", "draft"]
    due_date: str
    paid_date: Optional[str] = None
    items: int = 1


class BillingSummary(BaseModel):
    total_revenue: float
    pending_amount: float
    overdue_amount: float
    invoice_count: int
