import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import settings
from ..models import (
    Company,
    DocumentItem,
    DocumentStatusEnum,
    Invoice,
    InvoiceKindEnum,
    InvoiceLine,
    InvoiceStatusEnum,
    LineStatusEnum,
    MatchTypeEnum,
    UploadedDocument,
)
from ..models.base import utcnow
from ..schemas import DocumentCreate, ItemUpdate
from . import activity
from .amounts import aggregate, recompute
from .base import ConflictError, NotFoundError, ServiceError, commit
from .invoices import check_line_inputs, line_changes, refresh_totals

logger = logging.getLogger(__name__)


def list_documents(
    db: Session, status: DocumentStatusEnum | None = None
) -> list[UploadedDocument]:
    query = select(UploadedDocument).order_by(
        UploadedDocument.created_at.desc(), UploadedDocument.id.desc()
    )
    if status:
        query = query.where(UploadedDocument.status == status)
    return list(db.scalars(query))


def get_document(db: Session, document_id: int) -> UploadedDocument:
    document = db.get(UploadedDocument, document_id)
    if not document:
        raise NotFoundError(f"Document {document_id} not found.")
    return document


def get_item(document: UploadedDocument, item_id: int) -> DocumentItem:
    for item in document.items:
        if item.id == item_id:
            return item
    raise NotFoundError(f"Item {item_id} not found on document {document.id}.")


def refresh_document_totals(document: UploadedDocument) -> None:
    totals = aggregate(document.items)
    document.amount_no_vat = totals.net_total
    document.vat_amount = totals.vat_total
    document.total_amount = totals.gross_total


def _is_duplicate(db: Session, company_id: int | None, invoice_number: str) -> bool:
    if company_id is None or not invoice_number:
        return False
    existing = db.execute(
        select(UploadedDocument.id).where(
            UploadedDocument.company_id == company_id,
            UploadedDocument.invoice_number == invoice_number,
        )
    ).first()
    return existing is not None


def create_document(db: Session, payload: DocumentCreate, actor: str) -> UploadedDocument:
    if payload.company_id is not None and db.get(Company, payload.company_id) is None:
        raise ServiceError("Company does not exist.")

    document = UploadedDocument(
        file_name=payload.file_name,
        file_url=payload.file_url,
        file_type=payload.file_type,
        status=DocumentStatusEnum.PENDING,
        company_id=payload.company_id,
        supplier_name=payload.supplier_name,
        supplier_code=payload.supplier_code,
        invoice_number=payload.invoice_number,
        invoice_date=payload.invoice_date,
        due_date=payload.due_date,
        currency=payload.currency or settings.default_currency,
        notes=payload.notes,
        uploaded_by=actor,
        is_duplicate=_is_duplicate(db, payload.company_id, payload.invoice_number),
    )
    for line_number, entry in enumerate(payload.items, start=1):
        check_line_inputs(db, entry.quantity, entry.vat_rate, entry.category_id)
        item = DocumentItem(
            line_number=line_number,
            description=entry.description,
            supplier_product_code=entry.supplier_product_code,
            quantity=entry.quantity,
            unit=entry.unit,
            unit_price=entry.unit_price,
            vat_rate=entry.vat_rate,
            category_id=entry.category_id,
            match_type=entry.match_type
            or (MatchTypeEnum.MANUAL if entry.category_id else MatchTypeEnum.NONE),
        )
        document.items.append(recompute(item))
    refresh_document_totals(document)

    db.add(document)
    db.flush()
    activity.record(
        db,
        "upload",
        "document",
        document.id,
        f"Document {document.file_name or document.invoice_number or document.id} uploaded",
        actor,
    )
    commit(db, "Document upload failed")
    db.refresh(document)
    if document.is_duplicate:
        logger.warning(
            "Document %s duplicates invoice %s of company %s",
            document.id,
            document.invoice_number,
            document.company_id,
        )
    return document


def _ensure_pending(document: UploadedDocument) -> None:
    if document.status != DocumentStatusEnum.PENDING:
        raise ConflictError(f"Document is already {document.status.value}.")


def update_item(
    db: Session,
    document: UploadedDocument,
    item: DocumentItem,
    payload: ItemUpdate,
    actor: str,
) -> UploadedDocument:
    _ensure_pending(document)
    changes = line_changes(payload)
    check_line_inputs(
        db,
        changes.get("quantity", item.quantity),
        changes.get("vat_rate", item.vat_rate),
        changes.get("category_id"),
    )
    for key, value in changes.items():
        if value is None and key in ("description", "unit"):
            continue
        setattr(item, key, value)
    if "category_id" in changes:
        item.match_type = MatchTypeEnum.MANUAL if item.category_id else MatchTypeEnum.NONE
    recompute(item)
    refresh_document_totals(document)
    activity.record(
        db, "update", "document", document.id, f"Item {item.line_number} edited", actor
    )
    commit(db, "Document item update failed")
    db.refresh(document)
    return document


def approve_document(db: Session, document: UploadedDocument, actor: str) -> Invoice:
    """Turn a pending document into a purchase invoice."""
    _ensure_pending(document)
    if (
        not document.invoice_number
        or document.company_id is None
        or document.invoice_date is None
        or not document.total_amount
        or document.total_amount <= Decimal("0")
    ):
        raise ServiceError(
            "Missing essential invoice details (number, company, date, total)."
        )

    invoice = Invoice(
        kind=InvoiceKindEnum.PURCHASE,
        invoice_number=document.invoice_number,
        company_id=document.company_id,
        invoice_date=document.invoice_date,
        due_date=document.due_date,
        status=InvoiceStatusEnum.UPLOADED,
        currency=document.currency,
        source_document_id=document.id,
        notes=document.notes,
    )
    for item in document.items:
        line = InvoiceLine(
            description=item.description,
            quantity=item.quantity,
            unit=item.unit,
            unit_price=item.unit_price,
            vat_rate=item.vat_rate,
            category_id=item.category_id,
            status=(
                LineStatusEnum.RECOGNIZED
                if item.category_id
                else LineStatusEnum.UNRECOGNIZED
            ),
        )
        invoice.lines.append(recompute(line))
    refresh_totals(invoice)
    db.add(invoice)

    document.status = DocumentStatusEnum.APPROVED
    document.reviewed_by = actor
    document.reviewed_at = utcnow()
    db.flush()
    activity.record(
        db,
        "approve",
        "document",
        document.id,
        f"Document approved as purchase invoice {invoice.invoice_number}",
        actor,
    )
    commit(db, "Document approval failed")
    db.refresh(invoice)
    logger.info("Document %s approved as invoice %s", document.id, invoice.id)
    return invoice


def reject_document(
    db: Session, document: UploadedDocument, actor: str
) -> UploadedDocument:
    _ensure_pending(document)
    document.status = DocumentStatusEnum.REJECTED
    document.reviewed_by = actor
    document.reviewed_at = utcnow()
    activity.record(db, "reject", "document", document.id, "Document rejected", actor)
    commit(db, "Document rejection failed")
    db.refresh(document)
    return document
