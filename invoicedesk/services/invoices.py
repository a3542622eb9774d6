import logging
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..config import settings
from ..models import (
    Company,
    Invoice,
    InvoiceKindEnum,
    InvoiceLine,
    InvoiceStatusEnum,
    LineStatusEnum,
    ProductCategory,
)
from ..schemas import InvoiceCreate, LineCreate, LineUpdate
from . import activity
from .amounts import aggregate, recompute, to_decimal
from .base import LockedError, NotFoundError, ServiceError, commit

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ("quantity", "unit_price", "vat_rate")


def list_invoices(
    db: Session,
    kind: InvoiceKindEnum | None = None,
    status: InvoiceStatusEnum | None = None,
    q: str | None = None,
) -> list[Invoice]:
    query = (
        select(Invoice)
        .outerjoin(Company, Invoice.company_id == Company.id)
        .order_by(Invoice.invoice_date.desc(), Invoice.id.desc())
    )
    if kind:
        query = query.where(Invoice.kind == kind)
    if status:
        query = query.where(Invoice.status == status)
    if q:
        like = f"%{q}%"
        query = query.where(
            or_(Invoice.invoice_number.ilike(like), Company.name.ilike(like))
        )
    return list(db.scalars(query))


def get_invoice(db: Session, invoice_id: int) -> Invoice:
    invoice = db.get(Invoice, invoice_id)
    if not invoice:
        raise NotFoundError(f"Invoice {invoice_id} not found.")
    return invoice


def get_line(invoice: Invoice, line_id: int) -> InvoiceLine:
    for line in invoice.lines:
        if line.id == line_id:
            return line
    raise NotFoundError(f"Line {line_id} not found on invoice {invoice.id}.")


def refresh_totals(invoice: Invoice) -> None:
    totals = aggregate(invoice.lines)
    invoice.net_total = totals.net_total
    invoice.vat_total = totals.vat_total
    invoice.gross_total = totals.gross_total


def check_line_inputs(
    db: Session, quantity: Decimal, vat_rate: Decimal, category_id: int | None
) -> None:
    if quantity < 0:
        raise ServiceError("Quantity cannot be negative.")
    if vat_rate not in {Decimal(rate) for rate in settings.vat_rates}:
        allowed = ", ".join(str(rate) for rate in settings.vat_rates)
        raise ServiceError(f"VAT rate must be one of: {allowed}.")
    if category_id is not None and db.get(ProductCategory, category_id) is None:
        raise ServiceError("Category does not exist.")


def line_changes(payload) -> dict:
    """Fields set on a line update. A null amount is read as zero."""
    changes = payload.model_dump(exclude_unset=True)
    for key in NUMERIC_FIELDS:
        if key in changes:
            changes[key] = to_decimal(changes[key])
    return changes


def _ensure_editable(invoice: Invoice) -> None:
    if invoice.status == InvoiceStatusEnum.EXPORTED:
        raise LockedError("Exported invoices are locked.")


def _build_line(db: Session, payload: LineCreate) -> InvoiceLine:
    check_line_inputs(db, payload.quantity, payload.vat_rate, payload.category_id)
    line = InvoiceLine(
        description=payload.description,
        quantity=payload.quantity,
        unit=payload.unit,
        unit_price=payload.unit_price,
        vat_rate=payload.vat_rate,
        category_id=payload.category_id,
        status=LineStatusEnum.MANUAL,
    )
    return recompute(line)


def create_invoice(db: Session, payload: InvoiceCreate, actor: str) -> Invoice:
    if payload.company_id is not None and db.get(Company, payload.company_id) is None:
        raise ServiceError("Company does not exist.")

    invoice = Invoice(
        kind=payload.kind,
        invoice_number=payload.invoice_number,
        company_id=payload.company_id,
        invoice_date=payload.invoice_date,
        due_date=payload.due_date,
        status=InvoiceStatusEnum.UPLOADED,
        currency=payload.currency or settings.default_currency,
        notes=payload.notes,
    )
    invoice.lines = [_build_line(db, line) for line in payload.lines]
    refresh_totals(invoice)
    db.add(invoice)
    db.flush()
    activity.record(
        db,
        "create",
        "invoice",
        invoice.id,
        f"{invoice.kind.value.capitalize()} invoice {invoice.invoice_number} created",
        actor,
    )
    commit(db, "Invoice create failed")
    db.refresh(invoice)
    logger.info("Invoice %s created by %s", invoice.id, actor)
    return invoice


def add_line(db: Session, invoice: Invoice, payload: LineCreate, actor: str) -> Invoice:
    _ensure_editable(invoice)
    invoice.lines.append(_build_line(db, payload))
    refresh_totals(invoice)
    activity.record(
        db, "update", "invoice", invoice.id, f"Line added to {invoice.invoice_number}", actor
    )
    commit(db, "Invoice line create failed")
    db.refresh(invoice)
    return invoice


def update_line(
    db: Session, invoice: Invoice, line: InvoiceLine, payload: LineUpdate, actor: str
) -> Invoice:
    _ensure_editable(invoice)
    changes = line_changes(payload)
    check_line_inputs(
        db,
        changes.get("quantity", line.quantity),
        changes.get("vat_rate", line.vat_rate),
        changes.get("category_id"),
    )
    for key, value in changes.items():
        if value is None and key in ("description", "unit"):
            continue
        setattr(line, key, value)
    recompute(line)
    refresh_totals(invoice)
    activity.record(
        db, "update", "invoice", invoice.id, f"Line updated on {invoice.invoice_number}", actor
    )
    commit(db, "Invoice line update failed")
    db.refresh(invoice)
    return invoice


def delete_line(db: Session, invoice: Invoice, line: InvoiceLine, actor: str) -> Invoice:
    _ensure_editable(invoice)
    invoice.lines.remove(line)
    refresh_totals(invoice)
    activity.record(
        db,
        "update",
        "invoice",
        invoice.id,
        f"Line removed from {invoice.invoice_number}",
        actor,
    )
    commit(db, "Invoice line delete failed")
    db.refresh(invoice)
    return invoice


def set_status(
    db: Session, invoice: Invoice, status: InvoiceStatusEnum, actor: str
) -> Invoice:
    _ensure_editable(invoice)
    if status == InvoiceStatusEnum.EXPORTED:
        raise ServiceError("Invoices are marked exported by running an export.")
    invoice.status = status
    activity.record(
        db,
        "update",
        "invoice",
        invoice.id,
        f"Invoice {invoice.invoice_number} marked {status.value}",
        actor,
    )
    commit(db, "Invoice status update failed")
    db.refresh(invoice)
    return invoice


def delete_invoice(db: Session, invoice: Invoice, actor: str) -> None:
    _ensure_editable(invoice)
    activity.record(
        db, "delete", "invoice", invoice.id, f"Invoice {invoice.invoice_number} deleted", actor
    )
    db.delete(invoice)
    commit(db, "Invoice delete failed")
