from .activity import ActivityRead, DashboardStats
from .category import (
    CategoryCreate,
    CategoryNodeRead,
    CategoryOption,
    CategoryRead,
    CategoryUpdate,
)
from .company import CompanyCreate, CompanyRead
from .document import DocumentCreate, DocumentRead, ItemCreate, ItemRead, ItemUpdate
from .export import ExportCreate, ExportRead
from .invoice import (
    InvoiceCreate,
    InvoiceRead,
    InvoiceStatusUpdate,
    LineCreate,
    LineRead,
    LineUpdate,
)
from .profile import ProfileCreate, ProfileRead, RoleUpdate

__all__ = [
    "ActivityRead",
    "DashboardStats",
    "CategoryCreate",
    "CategoryNodeRead",
    "CategoryOption",
    "CategoryRead",
    "CategoryUpdate",
    "CompanyCreate",
    "CompanyRead",
    "DocumentCreate",
    "DocumentRead",
    "ItemCreate",
    "ItemRead",
    "ItemUpdate",
    "ExportCreate",
    "ExportRead",
    "InvoiceCreate",
    "InvoiceRead",
    "InvoiceStatusUpdate",
    "LineCreate",
    "LineRead",
    "LineUpdate",
    "ProfileCreate",
    "ProfileRead",
    "RoleUpdate",
]
