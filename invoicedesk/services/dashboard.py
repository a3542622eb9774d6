from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import (
    Company,
    DocumentStatusEnum,
    Invoice,
    InvoiceKindEnum,
    ProductCategory,
    UploadedDocument,
)
from ..schemas import DashboardStats


def _count(db: Session, query) -> int:
    return db.execute(query).scalar() or 0


def collect_stats(db: Session) -> DashboardStats:
    return DashboardStats(
        pending_documents=_count(
            db,
            select(func.count(UploadedDocument.id)).where(
                UploadedDocument.status == DocumentStatusEnum.PENDING
            ),
        ),
        purchase_invoices=_count(
            db,
            select(func.count(Invoice.id)).where(
                Invoice.kind == InvoiceKindEnum.PURCHASE
            ),
        ),
        sales_invoices=_count(
            db,
            select(func.count(Invoice.id)).where(Invoice.kind == InvoiceKindEnum.SALES),
        ),
        companies=_count(db, select(func.count(Company.id))),
        categories=_count(db, select(func.count(ProductCategory.id))),
    )
