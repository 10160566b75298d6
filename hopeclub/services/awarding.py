from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from hopeclub.exceptions import (
    AmountOutOfRange,
    CategoryInactive,
    CategoryNotFound,
    HopeClubError,
    StudentNotFound,
)
from hopeclub.models import PointCategory, PointEvent, Student
from hopeclub.services.audit import record_audit
from hopeclub.services.orm_utils import as_uuid

log = logging.getLogger(__name__)


def ensure_category_active(session: Session, category_id: uuid.UUID) -> PointCategory:
    """Application-level guard for awards; the ledger itself only checks bounds."""
    category = session.get(PointCategory, as_uuid(category_id))
    if category is None:
        raise CategoryNotFound(category_id)
    if not category.is_active:
        raise CategoryInactive(category_id)
    return category


def award_points(
    session: Session,
    student_id: uuid.UUID,
    category_id: uuid.UUID,
    amount: int,
    note: Optional[str],
    actor_id: Optional[uuid.UUID],
    *,
    require_active: bool = False,
    commit: bool = True,
) -> uuid.UUID:
    """
    Record a point event and its audit entry as one unit and return the event id.
    ``amount`` may be negative (a deduction) but must sit inside the category's
    inclusive bounds. If commit=True (default), commits or rolls back the session;
    otherwise the caller owns the transaction and must commit/roll back.
    With require_active=True a retired category is refused with CategoryInactive,
    checked after the student and category lookups.
    """
    try:
        student_id = as_uuid(student_id)
        category_id = as_uuid(category_id)

        if session.get(Student, student_id) is None:
            raise StudentNotFound(student_id)

        if require_active:
            category = ensure_category_active(session, category_id)
        else:
            category = session.get(PointCategory, category_id)
            if category is None:
                raise CategoryNotFound(category_id)
        if not category.allows(amount):
            raise AmountOutOfRange(amount, category.min_value, category.max_value)

        event_id = uuid.uuid4()
        event = PointEvent(
            id=event_id,
            student_id=student_id,
            category_id=category_id,
            delta=amount,
            note=note,
            created_by=actor_id,
        )
        session.add(event)
        record_audit(
            session,
            actor=actor_id,
            action="award_points",
            target_id=student_id,
            meta={"category_id": category_id, "amount": amount, "note": note, "event_id": event_id},
        )
        session.flush()
        if commit:
            session.commit()
    except Exception as exc:
        if commit:
            session.rollback()
        if isinstance(exc, HopeClubError):
            log.warning("award_points rejected: %s %s", exc.code, exc.details())
        raise

    log.info("awarded %s points to student %s (event %s)", amount, student_id, event_id)
    return event_id
