from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from ..models import InvoiceKindEnum, InvoiceStatusEnum, LineStatusEnum
from .common import LenientDecimal, OptionalStr, Quantity, RequiredStr, UnitPrice


class LineCreate(BaseModel):
    description: RequiredStr
    quantity: Quantity = Decimal("1")
    unit: str = "vnt"
    unit_price: UnitPrice = Decimal("0")
    vat_rate: LenientDecimal = Decimal("21")
    category_id: int | None = None


class LineUpdate(BaseModel):
    description: RequiredStr | None = None
    quantity: Quantity | None = None
    unit: str | None = None
    unit_price: UnitPrice | None = None
    vat_rate: LenientDecimal | None = None
    category_id: int | None = None


class LineRead(BaseModel):
    id: int
    description: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    vat_rate: Decimal
    net: Decimal
    vat: Decimal
    gross: Decimal
    category_id: int | None
    status: LineStatusEnum

    model_config = {"from_attributes": True}


class InvoiceCreate(BaseModel):
    kind: InvoiceKindEnum
    invoice_number: RequiredStr
    company_id: int | None = None
    invoice_date: date
    due_date: date | None = None
    currency: str | None = None
    notes: OptionalStr = None
    lines: list[LineCreate] = Field(default_factory=list)


class InvoiceStatusUpdate(BaseModel):
    status: InvoiceStatusEnum


class InvoiceRead(BaseModel):
    id: int
    kind: InvoiceKindEnum
    invoice_number: str
    company_id: int | None
    invoice_date: date
    due_date: date | None
    status: InvoiceStatusEnum
    net_total: Decimal
    vat_total: Decimal
    gross_total: Decimal
    currency: str
    source_document_id: int | None
    notes: str | None
    lines: list[LineRead] = []

    model_config = {"from_attributes": True}
