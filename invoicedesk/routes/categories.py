from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_profile, require_admin
from ..models import Profile
from ..schemas import (
    CategoryCreate,
    CategoryNodeRead,
    CategoryOption,
    CategoryRead,
    CategoryUpdate,
)
from ..services import categories as categories_service
from ..services.category_tree import CategoryNode, build, parent_options, walk

router = APIRouter()


def _node_to_schema(node: CategoryNode) -> CategoryNodeRead:
    return CategoryNodeRead(
        id=node.category.id,
        name=node.category.name,
        parent_id=node.category.parent_id,
        description=node.category.description,
        children=[_node_to_schema(child) for child in node.children],
    )


@router.get("/categories", response_model=list[CategoryNodeRead])
def categories_tree(
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> list[CategoryNodeRead]:
    forest = build(categories_service.list_categories(db))
    return [_node_to_schema(node) for node in forest]


@router.get("/categories/flat", response_model=list[CategoryOption])
def categories_flat(
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> list[CategoryOption]:
    forest = build(categories_service.list_categories(db))
    return [_option(node.category, depth) for node, depth in walk(forest)]


@router.get("/categories/{category_id}/parent-options", response_model=list[CategoryOption])
def categories_parent_options(
    category_id: int,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> list[CategoryOption]:
    categories_service.get_category(db, category_id)
    records = categories_service.list_categories(db)
    return [
        _option(category, depth)
        for category, depth in parent_options(records, exclude_id=category_id)
    ]


@router.post("/categories", response_model=CategoryRead, status_code=201)
def categories_create(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(require_admin),
) -> CategoryRead:
    return categories_service.create_category(db, payload, profile.email)


@router.put("/categories/{category_id}", response_model=CategoryRead)
def categories_update(
    category_id: int,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(require_admin),
) -> CategoryRead:
    category = categories_service.get_category(db, category_id)
    return categories_service.update_category(db, category, payload, profile.email)


@router.delete("/categories/{category_id}")
def categories_delete(
    category_id: int,
    db: Session = Depends(get_db),
    profile: Profile = Depends(require_admin),
) -> dict:
    category = categories_service.get_category(db, category_id)
    deleted = categories_service.delete_category(db, category, profile.email)
    return {"deleted": deleted}


def _option(category, depth: int) -> CategoryOption:
    return CategoryOption(
        id=category.id,
        name=category.name,
        parent_id=category.parent_id,
        description=category.description,
        depth=depth,
    )
