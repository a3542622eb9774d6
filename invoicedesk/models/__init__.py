from .activity import ActivityLog
from .base import Base
from .category import ProductCategory
from .company import Company, CompanyTypeEnum
from .document import DocumentItem, DocumentStatusEnum, MatchTypeEnum, UploadedDocument
from .export import Export, ExportFormatEnum, ExportStatusEnum
from .invoice import (
    Invoice,
    InvoiceKindEnum,
    InvoiceLine,
    InvoiceStatusEnum,
    LineStatusEnum,
)
from .product import Product
from .profile import Profile

__all__ = [
    "ActivityLog",
    "Base",
    "ProductCategory",
    "Company",
    "CompanyTypeEnum",
    "DocumentItem",
    "DocumentStatusEnum",
    "MatchTypeEnum",
    "UploadedDocument",
    "Export",
    "ExportFormatEnum",
    "ExportStatusEnum",
    "Invoice",
    "InvoiceKindEnum",
    "InvoiceLine",
    "InvoiceStatusEnum",
    "LineStatusEnum",
    "Product",
    "Profile",
]
