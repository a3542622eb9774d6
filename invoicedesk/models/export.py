from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Enum as SAEnum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, utcnow
from .invoice import InvoiceKindEnum


class ExportFormatEnum(str, Enum):
    CSV = "csv"


class ExportStatusEnum(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


def _enum_values(enum) -> list[str]:
    return [member.value for member in enum]


class Export(Base):
    __tablename__ = "exports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    export_type: Mapped[InvoiceKindEnum] = mapped_column(
        SAEnum(
            InvoiceKindEnum,
            native_enum=False,
            create_constraint=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    export_format: Mapped[ExportFormatEnum] = mapped_column(
        SAEnum(
            ExportFormatEnum,
            native_enum=False,
            create_constraint=False,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    invoice_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    file_name: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[ExportStatusEnum] = mapped_column(
        SAEnum(
            ExportStatusEnum,
            native_enum=False,
            create_constraint=False,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=ExportStatusEnum.PROCESSING,
    )
    created_by: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
