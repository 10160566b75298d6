from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hopeclub.models import PointEvent, Redemption
from hopeclub.services.orm_utils import as_uuid


def compute_balance(session: Session, student_id: uuid.UUID) -> int:
    """Points earned minus points spent for ``student_id``.

    Runs on the caller's session, so inside a transaction it sees that
    transaction's own writes and whatever rows it has locked. Pending
    objects are flushed first because sessions are created with
    ``autoflush=False``. A student with no history (or no row at all) has a
    balance of 0.
    """
    student_id = as_uuid(student_id)
    session.flush()
    earned = (
        select(func.coalesce(func.sum(PointEvent.delta), 0))
        .where(PointEvent.student_id == student_id)
        .scalar_subquery()
    )
    spent = (
        select(func.coalesce(func.sum(Redemption.cost_at_tx), 0))
        .where(Redemption.student_id == student_id)
        .scalar_subquery()
    )
    return int(session.execute(select(earned - spent)).scalar_one())
