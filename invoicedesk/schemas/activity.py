from datetime import datetime

from pydantic import BaseModel


class ActivityRead(BaseModel):
    id: int
    action: str
    entity_type: str
    entity_id: int | None
    description: str
    user_name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class DashboardStats(BaseModel):
    pending_documents: int
    purchase_invoices: int
    sales_invoices: int
    companies: int
    categories: int
