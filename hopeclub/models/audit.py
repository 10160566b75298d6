import uuid
from datetime import datetime, timezone

from hopeclub.extensions import db
from hopeclub.models.immutable import append_only


@append_only
class AuditLog(db.Model):
    __tablename__ = "audit_logs"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    actor = db.Column(db.Uuid, nullable=True)
    action = db.Column(db.String(50), nullable=False, index=True)  # award_points|redeem_item|log_incident
    target_id = db.Column(db.Uuid, nullable=True, index=True)
    meta = db.Column(db.JSON, nullable=True)
    at = db.Column(db.DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
