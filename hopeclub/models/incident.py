import uuid
from datetime import datetime, timezone

from hopeclub.extensions import db
from hopeclub.models.immutable import append_only


@append_only
class Incident(db.Model):
    __tablename__ = "incidents"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    student_id = db.Column(db.Uuid, db.ForeignKey("students.id"), nullable=False, index=True)
    category = db.Column(db.String(100), nullable=True)
    severity = db.Column(db.String(50), nullable=True)
    note = db.Column(db.Text, nullable=True)
    photo_url = db.Column(db.String(500), nullable=True)
    created_by = db.Column(db.Uuid, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)

    student = db.relationship("Student")
