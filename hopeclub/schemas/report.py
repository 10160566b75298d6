from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ActivityEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str
    ts: datetime
    payload: dict[str, Any]


class AuditEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    actor: Optional[UUID] = None
    action: str
    target_id: Optional[UUID] = None
    meta: Optional[dict[str, Any]] = None
    at: datetime
