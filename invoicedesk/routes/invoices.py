from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_profile
from ..models import InvoiceKindEnum, InvoiceStatusEnum, Profile
from ..schemas import (
    InvoiceCreate,
    InvoiceRead,
    InvoiceStatusUpdate,
    LineCreate,
    LineUpdate,
)
from ..services import invoices as invoices_service

router = APIRouter()


@router.get("/invoices", response_model=list[InvoiceRead])
def invoices_list(
    kind: InvoiceKindEnum | None = None,
    status: InvoiceStatusEnum | None = None,
    q: str | None = None,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> list[InvoiceRead]:
    return invoices_service.list_invoices(db, kind=kind, status=status, q=q)


@router.post("/invoices", response_model=InvoiceRead, status_code=201)
def invoices_create(
    payload: InvoiceCreate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> InvoiceRead:
    return invoices_service.create_invoice(db, payload, profile.email)


@router.get("/invoices/{invoice_id}", response_model=InvoiceRead)
def invoices_detail(
    invoice_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> InvoiceRead:
    return invoices_service.get_invoice(db, invoice_id)


@router.post("/invoices/{invoice_id}/lines", response_model=InvoiceRead, status_code=201)
def invoices_add_line(
    invoice_id: int,
    payload: LineCreate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> InvoiceRead:
    invoice = invoices_service.get_invoice(db, invoice_id)
    return invoices_service.add_line(db, invoice, payload, profile.email)


@router.put("/invoices/{invoice_id}/lines/{line_id}", response_model=InvoiceRead)
def invoices_update_line(
    invoice_id: int,
    line_id: int,
    payload: LineUpdate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> InvoiceRead:
    invoice = invoices_service.get_invoice(db, invoice_id)
    line = invoices_service.get_line(invoice, line_id)
    return invoices_service.update_line(db, invoice, line, payload, profile.email)


@router.delete("/invoices/{invoice_id}/lines/{line_id}", response_model=InvoiceRead)
def invoices_delete_line(
    invoice_id: int,
    line_id: int,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> InvoiceRead:
    invoice = invoices_service.get_invoice(db, invoice_id)
    line = invoices_service.get_line(invoice, line_id)
    return invoices_service.delete_line(db, invoice, line, profile.email)


@router.post("/invoices/{invoice_id}/status", response_model=InvoiceRead)
def invoices_set_status(
    invoice_id: int,
    payload: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> InvoiceRead:
    invoice = invoices_service.get_invoice(db, invoice_id)
    return invoices_service.set_status(db, invoice, payload.status, profile.email)


@router.delete("/invoices/{invoice_id}")
def invoices_delete(
    invoice_id: int,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> dict:
    invoice = invoices_service.get_invoice(db, invoice_id)
    invoices_service.delete_invoice(db, invoice, profile.email)
    return {"deleted": invoice_id}
