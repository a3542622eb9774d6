from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_profile
from ..models import DocumentStatusEnum, Profile
from ..schemas import DocumentCreate, DocumentRead, InvoiceRead, ItemUpdate
from ..services import documents as documents_service

router = APIRouter()


@router.get("/documents", response_model=list[DocumentRead])
def documents_list(
    status: DocumentStatusEnum | None = None,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> list[DocumentRead]:
    return documents_service.list_documents(db, status=status)


@router.post("/documents", response_model=DocumentRead, status_code=201)
def documents_create(
    payload: DocumentCreate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> DocumentRead:
    return documents_service.create_document(db, payload, profile.email)


@router.get("/documents/{document_id}", response_model=DocumentRead)
def documents_detail(
    document_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> DocumentRead:
    return documents_service.get_document(db, document_id)


@router.put("/documents/{document_id}/items/{item_id}", response_model=DocumentRead)
def documents_update_item(
    document_id: int,
    item_id: int,
    payload: ItemUpdate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> DocumentRead:
    document = documents_service.get_document(db, document_id)
    item = documents_service.get_item(document, item_id)
    return documents_service.update_item(db, document, item, payload, profile.email)


@router.post("/documents/{document_id}/approve", response_model=InvoiceRead)
def documents_approve(
    document_id: int,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> InvoiceRead:
    document = documents_service.get_document(db, document_id)
    return documents_service.approve_document(db, document, profile.email)


@router.post("/documents/{document_id}/reject", response_model=DocumentRead)
def documents_reject(
    document_id: int,
    db: Session = Depends(get_db),
    profile: Profile = Depends(get_current_profile),
) -> DocumentRead:
    document = documents_service.get_document(db, document_id)
    return documents_service.reject_document(db, document, profile.email)
