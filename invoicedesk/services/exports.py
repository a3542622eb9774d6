"""CSV export of validated invoices for the accounting system."""

import csv
import io
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import (
    Company,
    Export,
    ExportFormatEnum,
    ExportStatusEnum,
    Invoice,
    InvoiceKindEnum,
    InvoiceStatusEnum,
    ProductCategory,
)
from ..models.base import utcnow
from . import activity
from .base import ServiceError, commit

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "invoice_number",
    "invoice_date",
    "due_date",
    "company_code",
    "company_name",
    "company_vat_code",
    "currency",
    "line_description",
    "quantity",
    "unit",
    "unit_price",
    "vat_rate",
    "net",
    "vat",
    "gross",
    "category",
]


def list_exports(db: Session) -> list[Export]:
    return list(db.scalars(select(Export).order_by(Export.created_at.desc(), Export.id.desc())))


def _write_csv(
    invoices: list[Invoice],
    companies: dict[int, Company],
    categories: dict[int, str],
) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_COLUMNS)
    for invoice in invoices:
        company = companies.get(invoice.company_id)
        for line in invoice.lines:
            writer.writerow(
                [
                    invoice.invoice_number,
                    invoice.invoice_date.isoformat(),
                    invoice.due_date.isoformat() if invoice.due_date else "",
                    company.code if company else "",
                    company.name if company else "",
                    (company.vat_code or "") if company else "",
                    invoice.currency,
                    line.description,
                    line.quantity,
                    line.unit,
                    line.unit_price,
                    line.vat_rate,
                    line.net,
                    line.vat,
                    line.gross,
                    categories.get(line.category_id, ""),
                ]
            )
    return buffer.getvalue()


def run_export(
    db: Session,
    export_type: InvoiceKindEnum,
    export_format: ExportFormatEnum,
    actor: str,
) -> tuple[Export, str]:
    """Export every validated invoice of ``export_type`` and lock them."""
    if export_format != ExportFormatEnum.CSV:
        raise ServiceError(f"Unsupported export format: {export_format.value}.")

    invoices = list(
        db.scalars(
            select(Invoice)
            .where(
                Invoice.kind == export_type,
                Invoice.status == InvoiceStatusEnum.VALIDATED,
            )
            .order_by(Invoice.invoice_date, Invoice.id)
        )
    )
    if not invoices:
        raise ServiceError("No validated invoices to export.")

    company_ids = {invoice.company_id for invoice in invoices if invoice.company_id}
    companies = {
        company.id: company
        for company in db.scalars(select(Company).where(Company.id.in_(company_ids)))
    }
    categories = dict(db.execute(select(ProductCategory.id, ProductCategory.name)).all())

    content = _write_csv(invoices, companies, categories)
    file_name = f"{export_type.value}-{utcnow():%Y%m%d-%H%M%S}.csv"

    for invoice in invoices:
        invoice.status = InvoiceStatusEnum.EXPORTED
    export = Export(
        export_type=export_type,
        export_format=export_format,
        invoice_count=len(invoices),
        file_name=file_name,
        status=ExportStatusEnum.COMPLETED,
        created_by=actor,
    )
    db.add(export)
    db.flush()
    activity.record(
        db,
        "export",
        "export",
        export.id,
        f"Exported {len(invoices)} {export_type.value} invoices",
        actor,
    )
    commit(db, "Export failed")
    db.refresh(export)
    logger.info("Export %s wrote %s invoices", export.id, len(invoices))
    return export, content
