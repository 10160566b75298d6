from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from hopeclub.dependencies import get_db, require_capability
from hopeclub.policy import Identity, Operation
from hopeclub.schemas.point import (
    AwardPointsRequest,
    AwardPointsResponse,
    BalanceResponse,
    CalendarDayOut,
)
from hopeclub.services import award_points, compute_balance, points_calendar

router = APIRouter(tags=["points"])


@router.post("/rpc/award_points", response_model=AwardPointsResponse, status_code=status.HTTP_201_CREATED)
def award_points_action(
    payload: AwardPointsRequest,
    identity: Identity = Depends(require_capability(Operation.AWARD_POINTS)),
    session: Session = Depends(get_db),
):
    event_id = award_points(
        session,
        payload.student_id,
        payload.category_id,
        payload.amount,
        payload.note.strip() if payload.note else None,
        identity.actor_id,
        require_active=True,
    )
    return AwardPointsResponse(event_id=event_id)


@router.get("/students/{student_id}/balance", response_model=BalanceResponse)
def student_balance(
    student_id: UUID,
    identity: Identity = Depends(require_capability(Operation.VIEW_BALANCE)),
    session: Session = Depends(get_db),
):
    return BalanceResponse(student_id=student_id, balance=compute_balance(session, student_id))


@router.get("/students/{student_id}/calendar", response_model=list[CalendarDayOut])
def student_calendar(
    student_id: UUID,
    start: date = Query(...),
    end: date = Query(...),
    identity: Identity = Depends(require_capability(Operation.VIEW_CALENDAR)),
    session: Session = Depends(get_db),
):
    return [CalendarDayOut(day=row.day, total=row.total) for row in points_calendar(session, student_id, start, end)]
