from __future__ import annotations

from sqlalchemy import select

from .db import SessionLocal
from .models import ProductCategory, Profile
from .roles import Role


SEED_ADMIN_EMAIL = "admin@example.com"

SEED_CATEGORIES = [
    {"name": "Goods", "description": "Goods for resale"},
    {"name": "Services", "description": "Purchased services"},
    {"name": "Fixed assets", "description": "Long-term assets"},
    {"name": "Overheads", "description": "Rent, utilities and office costs"},
]


def seed_admin(email: str = SEED_ADMIN_EMAIL) -> int:
    with SessionLocal() as session:
        exists = session.execute(
            select(Profile).where(Profile.email == email)
        ).scalar_one_or_none()
        if exists:
            return 0
        session.add(Profile(email=email, role=Role.ADMIN.value))
        session.commit()
    return 1


def seed_categories() -> int:
    created = 0
    with SessionLocal() as session:
        for entry in SEED_CATEGORIES:
            exists = session.execute(
                select(ProductCategory).where(
                    ProductCategory.name == entry["name"],
                    ProductCategory.parent_id.is_(None),
                )
            ).scalar_one_or_none()
            if exists:
                continue
            session.add(
                ProductCategory(name=entry["name"], description=entry["description"])
            )
            created += 1
        if created:
            session.commit()
    return created


def main() -> None:
    admins = seed_admin()
    categories = seed_categories()
    print(f"Seeded admins: {admins}, categories: {categories}")


if __name__ == "__main__":
    main()
