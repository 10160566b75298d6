from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class LogIncidentRequest(BaseModel):
    student_id: UUID
    category: Optional[str] = None
    severity: Optional[str] = None
    note: Optional[str] = None
    photo_url: Optional[str] = None


class LogIncidentResponse(BaseModel):
    incident_id: UUID
