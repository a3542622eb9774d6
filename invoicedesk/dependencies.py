from fastapi import Depends, Header, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from .db import get_db
from .models import Profile


def get_current_profile(
    x_user_email: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> Profile:
    """Resolve the caller's profile from the identity forwarded by the gateway."""
    if not x_user_email:
        raise HTTPException(status_code=401, detail="Missing X-User-Email header.")
    profile = db.execute(
        select(Profile).where(Profile.email == x_user_email.strip().lower())
    ).scalar_one_or_none()
    if not profile:
        raise HTTPException(status_code=401, detail="Unknown user.")
    return profile


def require_admin(profile: Profile = Depends(get_current_profile)) -> Profile:
    if not profile.is_admin:
        raise HTTPException(
            status_code=403, detail="Only administrators can perform this action."
        )
    return profile
