from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..dependencies import get_current_profile, require_admin
from ..models import Profile
from ..schemas import ExportCreate, ExportRead
from ..services import exports as exports_service

router = APIRouter()


@router.get("/exports", response_model=list[ExportRead])
def exports_list(
    db: Session = Depends(get_db),
    _: Profile = Depends(get_current_profile),
) -> list[ExportRead]:
    return exports_service.list_exports(db)


@router.post("/exports")
def exports_create(
    payload: ExportCreate,
    db: Session = Depends(get_db),
    profile: Profile = Depends(require_admin),
) -> Response:
    export, content = exports_service.run_export(
        db, payload.export_type, payload.export_format, profile.email
    )
    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{export.file_name}"',
            "X-Export-Id": str(export.id),
            "X-Invoice-Count": str(export.invoice_count),
        },
    )
