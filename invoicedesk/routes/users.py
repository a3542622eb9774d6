from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_profile, require_admin
from ..models import Profile
from ..schemas import ProfileCreate, ProfileRead, RoleUpdate
from ..services import activity
from ..services.base import commit

router = APIRouter()


@router.get("/me", response_model=ProfileRead)
def me(profile: Profile = Depends(get_current_profile)) -> ProfileRead:
    return profile


@router.get("/users", response_model=list[ProfileRead])
def users_list(
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> list[ProfileRead]:
    return db.execute(select(Profile).order_by(Profile.email)).scalars().all()


@router.post("/users", response_model=ProfileRead, status_code=201)
def users_create(
    payload: ProfileCreate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin),
) -> ProfileRead:
    exists = db.execute(
        select(Profile.id).where(Profile.email == payload.email)
    ).first()
    if exists:
        raise HTTPException(status_code=400, detail="User already exists.")
    profile = Profile(email=payload.email, role=payload.role.value)
    db.add(profile)
    db.flush()
    activity.record(
        db, "create", "user", profile.id, f"User {profile.email} added", admin.email
    )
    commit(db, "User create failed")
    db.refresh(profile)
    return profile


@router.put("/users/{user_id}/role", response_model=ProfileRead)
def users_update_role(
    user_id: int,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin),
) -> ProfileRead:
    profile = _get_profile(db, user_id)
    profile.role = payload.role.value
    activity.record(
        db,
        "update",
        "user",
        profile.id,
        f"User {profile.email} role set to {payload.role.value}",
        admin.email,
    )
    commit(db, "User role update failed")
    db.refresh(profile)
    return profile


@router.delete("/users/{user_id}")
def users_delete(
    user_id: int,
    db: Session = Depends(get_db),
    admin: Profile = Depends(require_admin),
) -> dict:
    profile = _get_profile(db, user_id)
    if profile.is_admin:
        raise HTTPException(status_code=400, detail="Administrators cannot be deleted.")
    activity.record(
        db, "delete", "user", profile.id, f"User {profile.email} deleted", admin.email
    )
    db.delete(profile)
    commit(db, "User delete failed")
    return {"deleted": user_id}


def _get_profile(db: Session, user_id: int) -> Profile:
    profile = db.get(Profile, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found.")
    return profile
