from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from ..models import DocumentStatusEnum, MatchTypeEnum
from .common import LenientDecimal, OptionalStr, Quantity, RequiredStr, UnitPrice


class ItemCreate(BaseModel):
    description: RequiredStr
    supplier_product_code: OptionalStr = None
    quantity: Quantity = Decimal("1")
    unit: str = "vnt"
    unit_price: UnitPrice = Decimal("0")
    vat_rate: LenientDecimal = Decimal("21")
    category_id: int | None = None
    match_type: MatchTypeEnum | None = None


class ItemUpdate(BaseModel):
    description: RequiredStr | None = None
    quantity: Quantity | None = None
    unit: str | None = None
    unit_price: UnitPrice | None = None
    vat_rate: LenientDecimal | None = None
    category_id: int | None = None


class ItemRead(BaseModel):
    id: int
    line_number: int
    description: str
    supplier_product_code: str | None
    quantity: Decimal
    unit: str
    unit_price: Decimal
    vat_rate: Decimal
    net: Decimal
    vat: Decimal
    gross: Decimal
    category_id: int | None
    match_type: MatchTypeEnum | None

    model_config = {"from_attributes": True}


class DocumentCreate(BaseModel):
    file_name: str | None = None
    file_url: str | None = None
    file_type: str = "pdf"
    company_id: int | None = None
    supplier_name: OptionalStr = None
    supplier_code: OptionalStr = None
    invoice_number: str = ""
    invoice_date: date | None = None
    due_date: date | None = None
    currency: str | None = None
    notes: OptionalStr = None
    items: list[ItemCreate] = Field(default_factory=list)

    @field_validator("invoice_number")
    @classmethod
    def _number(cls, value: str) -> str:
        return value.strip()


class DocumentRead(BaseModel):
    id: int
    file_name: str | None
    file_url: str | None
    file_type: str
    status: DocumentStatusEnum
    company_id: int | None
    supplier_name: str | None
    supplier_code: str | None
    invoice_number: str
    invoice_date: date | None
    due_date: date | None
    amount_no_vat: Decimal
    vat_amount: Decimal
    total_amount: Decimal
    currency: str
    is_duplicate: bool
    notes: str | None
    uploaded_by: str
    reviewed_by: str | None
    reviewed_at: datetime | None
    items: list[ItemRead] = []

    model_config = {"from_attributes": True}
