from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from sqlalchemy import select
from finboard.api.deps import db, current_user
from finboard.models.audit_log import AuditLog
from finboard.models.user import User
from finboard.schemas.audit import AuditOut

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("", response_model=list[AuditOut])
def list_audit(
    s: Session = Depends(db),
    u: User = Depends(current_user),
    entity_type: str | None = Query(default=None),
    action: str | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=1000),
):
    q = select(AuditLog).where(AuditLog.user_id == u.id).order_by(AuditLog.created_at.desc(), AuditLog.id.desc())

    if entity_type:
        q = q.where(AuditLog.entity_type == entity_type)
    if action:
        q = q.where(AuditLog.action == action)

    q = q.limit(limit)
    return s.execute(q).scalars().all()
