from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import ActivityLog


def record(
    db: Session,
    action: str,
    entity_type: str,
    entity_id: int | None,
    description: str,
    user_name: str,
) -> ActivityLog:
    entry = ActivityLog(
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        description=description,
        user_name=user_name,
    )
    db.add(entry)
    return entry


def recent(db: Session, limit: int = 50) -> list[ActivityLog]:
    return list(
        db.scalars(
            select(ActivityLog)
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
        )
    )
