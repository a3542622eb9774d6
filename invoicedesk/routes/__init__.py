from fastapi import APIRouter

from .categories import router as categories_router
from .companies import router as companies_router
from .dashboard import router as dashboard_router
from .documents import router as documents_router
from .exports import router as exports_router
from .invoices import router as invoices_router
from .users import router as users_router

api_router = APIRouter(prefix="/api")
api_router.include_router(categories_router, tags=["categories"])
api_router.include_router(companies_router, tags=["companies"])
api_router.include_router(dashboard_router, tags=["dashboard"])
api_router.include_router(documents_router, tags=["documents"])
api_router.include_router(exports_router, tags=["exports"])
api_router.include_router(invoices_router, tags=["invoices"])
api_router.include_router(users_router, tags=["users"])
