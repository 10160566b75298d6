from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hopeclub.config import settings
from hopeclub.dependencies import get_db, require_capability
from hopeclub.policy import Identity, Operation
from hopeclub.schemas.report import ActivityEntryOut, AuditEntryOut
from hopeclub.services import recent_activity
from hopeclub.services.audit import audit_entries

router = APIRouter(tags=["reports"])


@router.get("/activity", response_model=list[ActivityEntryOut])
def activity_feed(
    limit: int = Query(settings.RECENT_ACTIVITY_LIMIT, ge=1, le=settings.RECENT_ACTIVITY_MAX),
    identity: Identity = Depends(require_capability(Operation.VIEW_ACTIVITY)),
    session: Session = Depends(get_db),
):
    return recent_activity(session, limit)


@router.get("/audit", response_model=list[AuditEntryOut])
def audit_log(
    action: Optional[str] = None,
    target_id: Optional[UUID] = None,
    limit: int = Query(100, ge=1, le=1000),
    identity: Identity = Depends(require_capability(Operation.VIEW_AUDIT)),
    session: Session = Depends(get_db),
):
    return audit_entries(session, action=action, target_id=target_id, limit=limit)
