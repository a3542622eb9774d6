from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_profile, require_admin
from ..models import Company, CompanyTypeEnum, Invoice, Profile, UploadedDocument
from ..schemas import CompanyCreate, CompanyRead
from ..services import activity
from ..services.base import commit

router = APIRouter()


@router.get("/companies", response_model=list[CompanyRead])
def companies_list(
    type_: CompanyTypeEnum | None = Query(None, alias="type"),
    q: str | None = None,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> list[CompanyRead]:
    query = select(Company).order_by(Company.name)
    if type_:
        query = query.where(Company.type == type_)
    if q:
        like = f"%{q}%"
        query = query.where(
            or_(
                Company.code.ilike(like),
                Company.name.ilike(like),
                Company.vat_code.ilike(like),
            )
        )
    return db.execute(query).scalars().all()


@router.get("/companies/{company_id}", response_model=CompanyRead)
def companies_detail(
    company_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> CompanyRead:
    return _get_company(db, company_id)


@router.post("/companies", response_model=CompanyRead, status_code=201)
def companies_create(
    payload: CompanyCreate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(require_admin),
) -> CompanyRead:
    _check_code_free(db, payload.code)
    company = Company(**payload.model_dump())
    db.add(company)
    db.flush()
    activity.record(
        db, "create", "company", company.id, f"Company {company.code} created", profile.email
    )
    commit(db, "Company create failed")
    db.refresh(company)
    return company


@router.put("/companies/{company_id}", response_model=CompanyRead)
def companies_update(
    company_id: int,
    payload: CompanyCreate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(require_admin),
) -> CompanyRead:
    company = _get_company(db, company_id)
    _check_code_free(db, payload.code, exclude_id=company.id)
    for key, value in payload.model_dump().items():
        setattr(company, key, value)
    activity.record(
        db, "update", "company", company.id, f"Company {company.code} updated", profile.email
    )
    commit(db, "Company update failed")
    db.refresh(company)
    return company


@router.delete("/companies/{company_id}")
def companies_delete(
    company_id: int,
    db: Session = Depends(get_db),
    profile: Profile = Depends(require_admin),
) -> dict:
    company = _get_company(db, company_id)
    invoices_in_use = db.execute(
        select(func.count(Invoice.id)).where(Invoice.company_id == company.id)
    ).scalar()
    documents_in_use = db.execute(
        select(func.count(UploadedDocument.id)).where(
            UploadedDocument.company_id == company.id
        )
    ).scalar()
    if invoices_in_use or documents_in_use:
        raise HTTPException(
            status_code=400,
            detail="Cannot delete company that is referenced by invoices or documents.",
        )
    activity.record(
        db, "delete", "company", company.id, f"Company {company.code} deleted", profile.email
    )
    db.delete(company)
    commit(db, "Company delete failed")
    return {"deleted": company_id}


def _get_company(db: Session, company_id: int) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise HTTPException(status_code=404, detail=f"Company {company_id} not found.")
    return company


def _check_code_free(db: Session, code: str, exclude_id: int | None = None) -> None:
    query = select(Company.id).where(Company.code == code)
    if exclude_id is not None:
        query = query.where(Company.id != exclude_id)
    if db.execute(query).first():
        raise HTTPException(status_code=400, detail="Company code already exists.")
