from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_profile
from ..models import Profile
from ..services import activity
from ..services import categories as categories_service
from ..services.category_tree import build, toggle_expand, walk
from ..services.dashboard import collect_stats

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse)
def index(
    request: Request,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "request": request,
            "stats": collect_stats(db),
            "activity": activity.recent(db, limit=10),
        },
    )


@router.get("/categories/tree", response_class=HTMLResponse)
def categories_tree_page(
    request: Request,
    expanded: str | None = None,
    toggle: int | None = None,
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> HTMLResponse:
    expanded_ids = frozenset(_parse_ids(expanded))
    if toggle is not None:
        expanded_ids = toggle_expand(toggle, expanded_ids)

    rows = []
    hidden_below: int | None = None
    for node, depth in walk(build(categories_service.list_categories(db))):
        if hidden_below is not None:
            if depth > hidden_below:
                continue
            hidden_below = None
        is_expanded = node.id in expanded_ids
        if node.children and not is_expanded:
            hidden_below = depth
        rows.append(
            {
                "category": node.category,
                "depth": depth,
                "has_children": bool(node.children),
                "expanded": is_expanded,
            }
        )

    return templates.TemplateResponse(
        request,
        "categories/tree.html",
        {
            "request": request,
            "rows": rows,
            "expanded": ",".join(str(node_id) for node_id in sorted(expanded_ids)),
        },
    )


def _parse_ids(value: str | None) -> list[int]:
    if not value:
        return []
    ids: list[int] = []
    for part in value.split(","):
        part = part.strip()
        if part.isdigit():
            ids.append(int(part))
    return ids
