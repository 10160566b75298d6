from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class AwardPointsRequest(BaseModel):
    student_id: UUID
    category_id: UUID
    amount: int
    note: Optional[str] = None


class AwardPointsResponse(BaseModel):
    event_id: UUID


class BalanceResponse(BaseModel):
    student_id: UUID
    balance: int


class CalendarDayOut(BaseModel):
    day: date
    total: int
