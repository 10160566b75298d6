"""Store redemptions.

Lock order is always item row, then student row. Every redemption takes
exactly one of each, so no transaction holding a student lock ever waits on
another lock and the order cannot deadlock.

- The item lock serializes redemptions of the same item, so stock never goes
  below zero.
- The student lock serializes one student's redemptions across different
  items, so two purchases cannot both pass the balance check against the same
  points.
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from hopeclub.exceptions import (
    HopeClubError,
    InsufficientPoints,
    ItemNotFound,
    OutOfStock,
    StudentNotFound,
)
from hopeclub.models import Redemption, StoreItem, Student
from hopeclub.services.audit import record_audit
from hopeclub.services.balance import compute_balance
from hopeclub.services.orm_utils import as_uuid

log = logging.getLogger(__name__)


def _lock(session: Session, model: type, row_id: uuid.UUID):
    # populate_existing: a row cached in the identity map must be re-read under the lock
    return session.execute(
        select(model)
        .where(model.id == row_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()


def redeem_item(
    session: Session,
    student_id: uuid.UUID,
    item_id: uuid.UUID,
    actor_id: Optional[uuid.UUID],
    *,
    commit: bool = True,
) -> uuid.UUID:
    """Spend ``item.cost`` points of ``student_id`` on one unit of ``item_id``.

    Returns the redemption id. Raises ``ItemNotFound``, ``OutOfStock``,
    ``StudentNotFound`` or ``InsufficientPoints``; nothing is written when it
    raises. Not idempotent: a retry after success redeems a second unit.
    """
    try:
        student_id = as_uuid(student_id)
        item_id = as_uuid(item_id)

        item = _lock(session, StoreItem, item_id)
        if item is None:
            raise ItemNotFound(item_id)
        if item.stock <= 0:
            raise OutOfStock(item_id)
        cost = item.cost

        if _lock(session, Student, student_id) is None:
            raise StudentNotFound(student_id)

        balance = compute_balance(session, student_id)
        if balance < cost:
            raise InsufficientPoints(balance, cost)

        item.stock = StoreItem.stock - 1
        redemption_id = uuid.uuid4()
        session.add(Redemption(
            id=redemption_id,
            student_id=student_id,
            item_id=item_id,
            cost_at_tx=cost,
            created_by=actor_id,
        ))
        record_audit(
            session,
            actor=actor_id,
            action="redeem_item",
            target_id=item_id,
            meta={"student_id": student_id, "cost": cost, "redemption_id": redemption_id},
        )
        session.flush()
        if commit:
            session.commit()
    except Exception as exc:
        if commit:
            session.rollback()
        if isinstance(exc, HopeClubError):
            log.warning("redeem_item rejected: %s %s", exc.code, exc.details())
        raise

    log.info("student %s redeemed item %s for %s points (redemption %s)", student_id, item_id, cost, redemption_id)
    return redemption_id
