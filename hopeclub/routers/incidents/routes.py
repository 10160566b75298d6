from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hopeclub.dependencies import get_db, require_capability
from hopeclub.policy import Identity, Operation
from hopeclub.schemas.incident import LogIncidentRequest, LogIncidentResponse
from hopeclub.services import log_incident

router = APIRouter(tags=["incidents"])


@router.post("/rpc/log_incident", response_model=LogIncidentResponse, status_code=status.HTTP_201_CREATED)
def log_incident_action(
    payload: LogIncidentRequest,
    identity: Identity = Depends(require_capability(Operation.LOG_INCIDENT)),
    session: Session = Depends(get_db),
):
    incident_id = log_incident(
        session,
        payload.student_id,
        identity.actor_id,
        category=payload.category,
        severity=payload.severity,
        note=payload.note,
        photo_url=payload.photo_url,
    )
    return LogIncidentResponse(incident_id=incident_id)
