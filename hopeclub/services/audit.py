from __future__ import annotations

import uuid
from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hopeclub.models import AuditLog
from hopeclub.services.orm_utils import jsonable


def record_audit(
    session: Session,
    *,
    actor: Optional[uuid.UUID],
    action: str,
    target_id: Optional[uuid.UUID],
    meta: Optional[Mapping[str, Any]] = None,
) -> AuditLog:
    """Stage an audit entry in the caller's transaction. The caller commits."""
    entry = AuditLog(actor=actor, action=action, target_id=target_id, meta=jsonable(dict(meta or {})))
    session.add(entry)
    return entry


def audit_entries(
    session: Session,
    *,
    action: str | None = None,
    target_id: uuid.UUID | None = None,
    limit: int | None = None,
) -> list[AuditLog]:
    query = select(AuditLog).order_by(AuditLog.at.desc())
    if action is not None:
        query = query.where(AuditLog.action == action)
    if target_id is not None:
        query = query.where(AuditLog.target_id == target_id)
    if limit is not None:
        query = query.limit(limit)
    return list(session.execute(query).scalars())
