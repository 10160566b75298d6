from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from hopeclub.exceptions import StudentNotFound
from hopeclub.models import Incident, Student
from hopeclub.services.audit import record_audit
from hopeclub.services.orm_utils import as_uuid

log = logging.getLogger(__name__)


def log_incident(
    session: Session,
    student_id: uuid.UUID,
    actor_id: Optional[uuid.UUID],
    *,
    category: Optional[str] = None,
    severity: Optional[str] = None,
    note: Optional[str] = None,
    photo_url: Optional[str] = None,
    commit: bool = True,
) -> uuid.UUID:
    """Record a behavioural incident. Incidents feed the activity list but never touch points."""
    try:
        student_id = as_uuid(student_id)
        if session.get(Student, student_id) is None:
            raise StudentNotFound(student_id)

        incident_id = uuid.uuid4()
        session.add(Incident(
            id=incident_id,
            student_id=student_id,
            category=category,
            severity=severity,
            note=note,
            photo_url=photo_url,
            created_by=actor_id,
        ))
        record_audit(
            session,
            actor=actor_id,
            action="log_incident",
            target_id=student_id,
            meta={"incident_id": incident_id, "category": category, "severity": severity},
        )
        session.flush()
        if commit:
            session.commit()
    except Exception:
        if commit:
            session.rollback()
        raise

    log.info("incident %s logged for student %s", incident_id, student_id)
    return incident_id
