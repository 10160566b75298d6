import uuid
from datetime import datetime, timezone

from hopeclub.extensions import db
from hopeclub.models.immutable import append_only


class PointCategory(db.Model):
    __tablename__ = "point_categories"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(100), unique=True, nullable=False)
    min_value = db.Column(db.Integer, nullable=False, default=-10)
    max_value = db.Column(db.Integer, nullable=False, default=20)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    created_by = db.Column(db.Uuid, nullable=True)

    __table_args__ = (
        db.CheckConstraint("min_value <= max_value", name="ck_category_bounds"),
    )

    def allows(self, amount: int) -> bool:
        return self.min_value <= amount <= self.max_value


@append_only
class PointEvent(db.Model):
    __tablename__ = "point_events"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    student_id = db.Column(db.Uuid, db.ForeignKey("students.id"), nullable=False)
    category_id = db.Column(db.Uuid, db.ForeignKey("point_categories.id"), nullable=False)
    delta = db.Column(db.Integer, nullable=False)  # negative for deductions
    note = db.Column(db.Text, nullable=True)
    event_time = db.Column(db.DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    created_by = db.Column(db.Uuid, nullable=True)

    student = db.relationship("Student")
    category = db.relationship("PointCategory")

    __table_args__ = (
        db.Index("idx_point_events_student_event_time", "student_id", "event_time"),
        db.Index("idx_point_events_event_time", "event_time"),
    )
