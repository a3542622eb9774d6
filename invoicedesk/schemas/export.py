from datetime import datetime

from pydantic import BaseModel

from ..models import ExportFormatEnum, ExportStatusEnum, InvoiceKindEnum


class ExportCreate(BaseModel):
    export_type: InvoiceKindEnum
    export_format: ExportFormatEnum = ExportFormatEnum.CSV


class ExportRead(BaseModel):
    id: int
    export_type: InvoiceKindEnum
    export_format: ExportFormatEnum
    invoice_count: int
    file_name: str | None
    status: ExportStatusEnum
    created_by: str
    created_at: datetime

    model_config = {"from_attributes": True}
