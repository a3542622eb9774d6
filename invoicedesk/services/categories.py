import logging

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from ..models import DocumentItem, InvoiceLine, Product, ProductCategory
from ..schemas import CategoryCreate, CategoryUpdate
from . import activity
from .base import NotFoundError, ServiceError, commit
from .category_tree import descendant_ids, would_create_cycle

logger = logging.getLogger(__name__)


def list_categories(db: Session) -> list[ProductCategory]:
    return list(
        db.scalars(
            select(ProductCategory).order_by(ProductCategory.name, ProductCategory.id)
        )
    )


def get_category(db: Session, category_id: int) -> ProductCategory:
    category = db.get(ProductCategory, category_id)
    if not category:
        raise NotFoundError(f"Category {category_id} not found.")
    return category


def _check_parent(db: Session, parent_id: int | None) -> None:
    if parent_id is not None and db.get(ProductCategory, parent_id) is None:
        raise ServiceError("Parent category does not exist.")


def create_category(db: Session, payload: CategoryCreate, actor: str) -> ProductCategory:
    _check_parent(db, payload.parent_id)
    category = ProductCategory(
        name=payload.name,
        parent_id=payload.parent_id,
        description=payload.description,
    )
    db.add(category)
    db.flush()
    activity.record(
        db, "create", "category", category.id, f"Category '{category.name}' created", actor
    )
    commit(db, "Category create failed")
    db.refresh(category)
    logger.info("Category %s created by %s", category.id, actor)
    return category


def update_category(
    db: Session, category: ProductCategory, payload: CategoryUpdate, actor: str
) -> ProductCategory:
    _check_parent(db, payload.parent_id)
    if would_create_cycle(list_categories(db), category.id, payload.parent_id):
        raise ServiceError("A category cannot be moved under itself or its subcategories.")

    category.name = payload.name
    category.parent_id = payload.parent_id
    category.description = payload.description
    activity.record(
        db, "update", "category", category.id, f"Category '{category.name}' updated", actor
    )
    commit(db, "Category update failed")
    db.refresh(category)
    return category


def delete_category(db: Session, category: ProductCategory, actor: str) -> list[int]:
    """Delete a category with all of its subcategories.

    Items, lines and products pointing at a removed category are unlinked.
    Returns the removed ids.
    """
    ids = descendant_ids(list_categories(db), category.id) | {category.id}
    name = category.name

    for model in (DocumentItem, InvoiceLine, Product):
        db.execute(
            update(model).where(model.category_id.in_(ids)).values(category_id=None)
        )
    db.execute(delete(ProductCategory).where(ProductCategory.id.in_(ids)))
    activity.record(
        db,
        "delete",
        "category",
        category.id,
        f"Category '{name}' deleted with {len(ids) - 1} subcategories",
        actor,
    )
    commit(db, "Category delete failed")
    logger.info("Categories %s deleted by %s", sorted(ids), actor)
    return sorted(ids)
