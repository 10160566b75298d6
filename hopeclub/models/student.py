import uuid
from datetime import datetime, timezone

from hopeclub.extensions import db

# Association table between guardians and the students they may see
guardian_student = db.Table(
    "guardian_student",
    db.metadata,
    db.Column("guardian_id", db.Uuid, db.ForeignKey("guardians.id", ondelete="CASCADE"), primary_key=True),
    db.Column("student_id", db.Uuid, db.ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
)


class Student(db.Model):
    __tablename__ = "students"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    grade = db.Column(db.String(20), nullable=True)
    dob = db.Column(db.Date, nullable=True)
    cohort = db.Column(db.String(100), nullable=True)
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    guardians = db.relationship("Guardian", secondary=guardian_student, back_populates="students")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Student id={self.id} {self.full_name}>"


class Guardian(db.Model):
    __tablename__ = "guardians"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(200), nullable=True)
    email = db.Column(db.String(255), unique=True, nullable=True)

    students = db.relationship("Student", secondary=guardian_student, back_populates="guardians")
